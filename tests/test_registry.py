"""LocaleRegistry definition handles, presets and change notification."""

import threading
import warnings

import pytest

from pathlexengine import DefinitionHandle, LocaleRegistry, PresetNotFoundError
from pathlexengine.diagnostics import Diagnostic, DiagnosticCode
from pathlexengine.templates import PlainTemplate, PresetTemplate


class TestDefine:
    """define() creates stores and returns handles."""

    def test_define_creates_store(self) -> None:
        """First define() for a locale creates its store."""
        registry = LocaleRegistry()
        handle = registry.define("en-US", {"greet": "Hello"})

        assert registry.locales == ("en-US",)
        assert registry.lookup("en-US", "greet") == PlainTemplate("Hello")
        assert handle.locale == "en-US"
        assert handle.paths == ("greet",)

    def test_define_single_path(self) -> None:
        registry = LocaleRegistry()
        handle = registry.define("en-US", "a.b", "x")
        assert handle.paths == ("a.b",)
        assert registry.get_store("en-US") is not None

    def test_lookup_unknown_locale(self) -> None:
        registry = LocaleRegistry()
        assert registry.lookup("fr-FR", "greet") is None
        assert registry.get_store("fr-FR") is None

    def test_entries_in_insertion_order(self) -> None:
        """entries() walks locales in creation order, paths in insertion order."""
        registry = LocaleRegistry()
        registry.define("en-US", {"b": "1", "a": "2"})
        registry.define("$en-US", {"c": "3"})
        assert [(locale, path) for locale, path, _ in registry.entries()] == [
            ("en-US", "b"),
            ("en-US", "a"),
            ("$en-US", "c"),
        ]

    def test_override_delivered_to_sink(self) -> None:
        """Store diagnostics reach the registry sink after define() returns."""
        received: list[Diagnostic] = []
        registry = LocaleRegistry(on_diagnostic=received.append)
        registry.define("en-US", "greet", "Hello")
        registry.define("en-US", "greet", "Hi")
        assert [d.code for d in received] == [DiagnosticCode.OVERRIDE]

    def test_sink_may_call_back_into_registry(self) -> None:
        """The sink runs outside the write lock."""
        registry: LocaleRegistry

        def sink(diagnostic: Diagnostic) -> None:
            registry.define("$en-US", "last-override", diagnostic.path or "")

        registry = LocaleRegistry(on_diagnostic=sink)
        registry.define("en-US", "greet", "Hello")
        registry.define("en-US", "greet", "Hi")
        assert registry.lookup("$en-US", "last-override") == PlainTemplate("greet")


class TestNotification:
    """Listeners fire once per define() and once per revert."""

    def test_define_fires_once_regardless_of_path_count(self) -> None:
        registry = LocaleRegistry()
        calls: list[None] = []
        registry.add_listener(lambda: calls.append(None))

        registry.define("en-US", {"a": "1", "b": {"c": "2", "d": "3"}})
        assert len(calls) == 1

    def test_revert_fires_once(self) -> None:
        registry = LocaleRegistry()
        handle = registry.define("en-US", {"a": "1", "b": "2"})
        calls: list[None] = []
        registry.add_listener(lambda: calls.append(None))

        handle.revert()
        handle.revert()
        assert len(calls) == 1

    def test_remove_listener(self) -> None:
        registry = LocaleRegistry()
        calls: list[None] = []
        remove = registry.add_listener(lambda: calls.append(None))
        remove()
        remove()
        registry.define("en-US", "a", "1")
        assert calls == []

    def test_listener_may_read_registry(self) -> None:
        """Listeners run after the write lock is released."""
        registry = LocaleRegistry()
        seen: list[object] = []
        registry.add_listener(lambda: seen.append(registry.lookup("en-US", "a")))
        registry.define("en-US", "a", "1")
        assert seen == [PlainTemplate("1")]

    def test_failed_define_changes_nothing(self) -> None:
        """A define() that raises writes no path, drops its new store and notifies no one."""
        registry = LocaleRegistry()
        calls: list[None] = []
        registry.add_listener(lambda: calls.append(None))

        with warnings.catch_warnings():
            warnings.simplefilter("error")
            with pytest.raises(DeprecationWarning):
                registry.define("en-US", {"a": "1", "b@t": "2"})

        assert registry.lookup("en-US", "a") is None
        assert registry.get_store("en-US") is None
        assert calls == []

    def test_failed_define_keeps_existing_store(self) -> None:
        registry = LocaleRegistry()
        registry.define("en-US", "a", "1")
        cyclic: dict[str, object] = {}
        cyclic["self"] = cyclic
        with pytest.raises(ValueError, match="nested deeper"):
            registry.define("en-US", {"a": "2", "loop": cyclic})
        assert registry.lookup("en-US", "a") == PlainTemplate("1")


class TestDefinitionHandle:
    """Reverting a handle removes exactly the paths its define() wrote."""

    def test_revert_removes_paths(self) -> None:
        registry = LocaleRegistry()
        registry.define("en-US", {"keep": "k"})
        handle = registry.define("en-US", {"plugin": {"a": "1", "b": "2"}})

        handle.revert()

        assert handle.reverted
        assert registry.lookup("en-US", "plugin.a") is None
        assert registry.lookup("en-US", "plugin.b") is None
        assert registry.lookup("en-US", "keep") == PlainTemplate("k")

    def test_revert_removes_later_overwrites(self) -> None:
        """Paths are deleted even if a later define() overwrote them."""
        registry = LocaleRegistry()
        first = registry.define("en-US", "a", "1")
        registry.define("en-US", "a", "2")
        first.revert()
        assert registry.lookup("en-US", "a") is None

    def test_context_manager_reverts(self) -> None:
        registry = LocaleRegistry()
        with registry.define("en-US", "scoped", "x") as handle:
            assert isinstance(handle, DefinitionHandle)
            assert registry.lookup("en-US", "scoped") == PlainTemplate("x")
        assert registry.lookup("en-US", "scoped") is None

    def test_repr(self) -> None:
        registry = LocaleRegistry()
        handle = registry.define("en-US", {"a": "1", "b": "2"})
        assert repr(handle) == "DefinitionHandle(locale='en-US', paths=2, reverted=False)"


class TestPresets:
    """Preset renderer table."""

    def test_register_and_get(self) -> None:
        registry = LocaleRegistry()

        def render(template: PresetTemplate, params: object, locale: str) -> str:
            return locale

        registry.register_preset("time", render)
        assert registry.get_preset("time") is render

    def test_last_registration_wins(self) -> None:
        registry = LocaleRegistry()
        registry.register_preset("time", lambda template, params, locale: "first")
        registry.register_preset("time", lambda template, params, locale: "second")
        assert registry.get_preset("time")(PresetTemplate("", "time"), None, "en") == "second"

    def test_unregistered_tag_raises(self) -> None:
        registry = LocaleRegistry()
        with pytest.raises(PresetNotFoundError, match='Preset "time" not found') as exc_info:
            registry.get_preset("time")
        assert exc_info.value.tag == "time"
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.PRESET_NOT_FOUND


class TestConcurrency:
    """Concurrent defines and lookups do not corrupt stores."""

    def test_concurrent_defines(self) -> None:
        registry = LocaleRegistry()

        def worker(index: int) -> None:
            for n in range(50):
                registry.define("en-US", f"w{index}.k{n}", str(n))
                registry.lookup("en-US", f"w{index}.k{n}")

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        store = registry.get_store("en-US")
        assert store is not None
        assert len(store) == 200
