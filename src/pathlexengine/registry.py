"""Locale registry: per-locale stores, preset renderers, change notification.

LocaleRegistry owns one PathStore per locale code, including internal
variants ("$en-US"), and the preset renderer table. Every define() returns a
DefinitionHandle; reverting the handle deletes the paths that call wrote, so a
plugin can withdraw its translations when it is unloaded:

    handle = registry.define("en-US", {"plugin": {"greeting": "Hi"}})
    ...
    handle.revert()

    # or, scoped
    with registry.define("en-US", "plugin.greeting", "Hi"):
        ...

Listeners registered with add_listener() are called, without arguments, once
per define() and once per revert, so dependent caches can re-read the stores.

Thread Safety:
    Stores are guarded by an RWLock. Listeners and the diagnostics sink are
    invoked after the lock is released and may call back into the registry.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from contextlib import AbstractContextManager
from typing import TYPE_CHECKING, Any

from pathlexengine.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    DiagnosticSink,
    PresetNotFoundError,
)
from pathlexengine.rwlock import RWLock
from pathlexengine.store import PathStore
from pathlexengine.templates import PresetTemplate, Template
from pathlexengine.types import KeyPath, LocaleCode, Node, Params

if TYPE_CHECKING:
    from types import TracebackType

__all__ = [
    "ChangeListener",
    "DefinitionHandle",
    "LocaleRegistry",
    "PresetRenderer",
]

logger = logging.getLogger(__name__)

_MISSING: Any = object()

type PresetRenderer = Callable[[PresetTemplate, Params, LocaleCode], str]
"""Renders a preset template for a locale: (template, params, locale) -> text."""

type ChangeListener = Callable[[], None]
"""Called with no payload after the stores change."""


class DefinitionHandle:
    """Reverts one define() call.

    Attributes:
        locale: Locale code the paths were written to
        paths: Key paths written by the call
        reverted: True once revert() has run
    """

    __slots__ = ("_registry", "_reverted", "locale", "paths")

    def __init__(
        self, registry: LocaleRegistry, locale: LocaleCode, paths: tuple[KeyPath, ...]
    ) -> None:
        self._registry = registry
        self._reverted = False
        self.locale = locale
        self.paths = paths

    @property
    def reverted(self) -> bool:
        return self._reverted

    def revert(self) -> None:
        """Delete every path written by the define() call.

        Paths are deleted even if a later define() overwrote them. Calling
        revert() again does nothing.
        """
        if self._reverted:
            return
        self._reverted = True
        self._registry._revert(self.locale, self.paths)

    def __enter__(self) -> DefinitionHandle:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.revert()

    def __repr__(self) -> str:
        return (
            f"DefinitionHandle(locale={self.locale!r}, paths={len(self.paths)}, "
            f"reverted={self._reverted})"
        )


class LocaleRegistry:
    """Per-locale PathStores plus the preset renderer table.

    Example:
        >>> registry = LocaleRegistry()
        >>> registry.define("en-US", {"greet": "Hello, {name}!"})
        DefinitionHandle(locale='en-US', paths=1, reverted=False)
        >>> registry.lookup("en-US", "greet")
        PlainTemplate(text='Hello, {name}!')
    """

    __slots__ = ("_listeners", "_lock", "_on_diagnostic", "_pending", "_presets", "_stores")

    def __init__(self, *, on_diagnostic: DiagnosticSink | None = None) -> None:
        """Initialize an empty registry.

        Args:
            on_diagnostic: Receives every diagnostic (overrides, missing
                translations, deprecated syntax) in addition to logging
        """
        self._stores: dict[LocaleCode, PathStore] = {}
        self._presets: dict[str, PresetRenderer] = {}
        self._listeners: list[ChangeListener] = []
        self._on_diagnostic = on_diagnostic
        self._lock = RWLock()
        # Diagnostics raised by stores while the write lock is held.
        self._pending: list[Diagnostic] = []

    # ------------------------------------------------------------------
    # Definition
    # ------------------------------------------------------------------

    def define(
        self,
        locale: LocaleCode,
        key_or_mapping: KeyPath | Mapping[str, Node],
        value: Node = _MISSING,
    ) -> DefinitionHandle:
        """Write a nested dictionary, or one value at a key path, for a locale.

        Args:
            locale: Locale code; "$"-prefixed codes address internal variants
            key_or_mapping: Whole dictionary, or a key path
            value: Node for the key path (None deletes the path)

        Returns:
            Handle that reverts this call

        Raises:
            TypeError: If the argument combination is invalid
            ValueError: If the dictionary nests too deeply
        """
        with self._lock.write():
            store = self._stores.get(locale)
            created = store is None
            if store is None:
                store = PathStore(locale, report=self._defer)
                self._stores[locale] = store
                logger.debug("Created store for locale: %r", locale)
            try:
                if value is _MISSING:
                    paths = store.define(key_or_mapping)
                else:
                    paths = store.define(key_or_mapping, value)
            except Exception:
                # A failed define writes nothing; drop the store it created.
                if created:
                    del self._stores[locale]
                raise
            finally:
                pending, self._pending = self._pending, []

        for diagnostic in pending:
            self.report(diagnostic)
        logger.debug("Defined %d path(s) for locale %r", len(paths), locale)
        self._notify()
        return DefinitionHandle(self, locale, paths)

    def _defer(self, diagnostic: Diagnostic) -> None:
        self._pending.append(diagnostic)

    def _revert(self, locale: LocaleCode, paths: tuple[KeyPath, ...]) -> None:
        with self._lock.write():
            store = self._stores.get(locale)
            if store is not None:
                for path in paths:
                    store.delete(path)
        logger.debug("Reverted %d path(s) for locale %r", len(paths), locale)
        self._notify()

    # ------------------------------------------------------------------
    # Presets
    # ------------------------------------------------------------------

    def register_preset(self, tag: str, renderer: PresetRenderer) -> None:
        """Register the renderer for a preset tag. The last registration wins."""
        with self._lock.write():
            if tag in self._presets:
                logger.debug("Replacing preset renderer: %s", tag)
            self._presets[tag] = renderer

    def get_preset(self, tag: str) -> PresetRenderer:
        """Return the renderer for a preset tag.

        Raises:
            PresetNotFoundError: If no renderer is registered for the tag
        """
        with self._lock.read():
            renderer = self._presets.get(tag)
        if renderer is None:
            diagnostic = Diagnostic(
                code=DiagnosticCode.PRESET_NOT_FOUND,
                message=f'Preset "{tag}" not found',
                hint="Register the renderer with register_preset() before rendering",
                severity="error",
            )
            raise PresetNotFoundError(diagnostic, tag=tag)
        return renderer

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def reading(self) -> AbstractContextManager[None]:
        """Hold the shared lock across several lookups."""
        return self._lock.read()

    def lookup(self, locale: LocaleCode, path: KeyPath) -> Template | None:
        """Return the template at (locale, path), or None."""
        with self._lock.read():
            store = self._stores.get(locale)
            return store.get(path) if store is not None else None

    def get_store(self, locale: LocaleCode) -> PathStore | None:
        return self._stores.get(locale)

    @property
    def locales(self) -> tuple[LocaleCode, ...]:
        """Locale codes with a store, in creation order."""
        with self._lock.read():
            return tuple(self._stores)

    def entries(self) -> list[tuple[LocaleCode, KeyPath, Template]]:
        """Snapshot of every (locale, path, template), in insertion order."""
        with self._lock.read():
            return [
                (locale, path, template)
                for locale, store in self._stores.items()
                for path, template in store.items()
            ]

    # ------------------------------------------------------------------
    # Notification
    # ------------------------------------------------------------------

    def add_listener(self, listener: ChangeListener) -> Callable[[], None]:
        """Subscribe to change notifications.

        Returns:
            Callable that unsubscribes the listener
        """
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def _notify(self) -> None:
        for listener in tuple(self._listeners):
            listener()

    def report(self, diagnostic: Diagnostic) -> None:
        """Log a diagnostic and forward it to the diagnostics sink."""
        if diagnostic.severity == "error":
            logger.error("%s", diagnostic.format_error())
        else:
            logger.warning("%s", diagnostic.format_error())
        if self._on_diagnostic is not None:
            self._on_diagnostic(diagnostic)

    def __repr__(self) -> str:
        return f"LocaleRegistry(locales={len(self._stores)}, presets={len(self._presets)})"
