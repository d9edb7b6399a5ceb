"""Localization facade.

Wires the engine together for one running instance:

    LocaleRegistry   - per-locale stores, presets, change notification
    LocaleTree       - built once from the configured locales
    FallbackResolver - ranks requested locales into the search order
    Renderer         - first-match lookup and rendering
    SimilarityMatcher - fuzzy reverse lookup

At construction the root entry ("" -> "") is defined, then the bundled
dictionaries, then any dictionaries supplied through a DictionaryLoader.
Dictionary load failures are recorded in a LoadSummary instead of raised:

    l10n = Localization(loader=PathDictionaryLoader("locales"))
    summary = l10n.get_load_summary()
    if summary.has_errors:
        raise RuntimeError(summary.get_errors())

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from pathlexengine.config import LocalizationConfig
from pathlexengine.constants import BUILTIN_LOCALES, ROOT_LOCALE
from pathlexengine.deprecation import deprecated
from pathlexengine.diagnostics import Diagnostic, DiagnosticCode, DiagnosticSink
from pathlexengine.enums import LoadStatus
from pathlexengine.fallback import FallbackResolver, LocaleTree
from pathlexengine.loading import (
    DictionaryLoader,
    DictionaryLoadResult,
    LoadSummary,
    PackageDictionaryLoader,
)
from pathlexengine.markup import Element, MarkupExpander, expand, to_text
from pathlexengine.registry import ChangeListener, DefinitionHandle, LocaleRegistry, PresetRenderer
from pathlexengine.renderer import Renderer
from pathlexengine.similarity import FindResult, SimilarityMatcher
from pathlexengine.types import KeyPath, LocaleCode, Node, Params

__all__ = ["Localization"]

logger = logging.getLogger(__name__)

_MISSING: Any = object()


class Localization:
    """Key-path localization for one running instance.

    Example:
        >>> l10n = Localization(LocalizationConfig(locales=("en-US", "de-DE")))
        >>> _ = l10n.define("de-DE", {"greet": "Hallo, {name}!"})
        >>> _ = l10n.define("en-US", "greet", "Hello, {name}!")
        >>> to_text(l10n.render(["de-DE"], ["greet"], {"name": "Anna"}))
        'Hallo, Anna!'
        >>> l10n.find("greet", "Hello, Anna!")[0].locale
        'en-US'
    """

    __slots__ = (
        "_config",
        "_load_results",
        "_matcher",
        "_registry",
        "_renderer",
        "_resolver",
    )

    def __init__(
        self,
        config: LocalizationConfig | None = None,
        *,
        loader: DictionaryLoader | None = None,
        expander: MarkupExpander = expand,
        on_diagnostic: DiagnosticSink | None = None,
    ) -> None:
        """Initialize localization.

        Args:
            config: Options (default: LocalizationConfig())
            loader: Loads a dictionary for each configured locale, after the
                bundled dictionaries
            expander: Markup expander for plain templates
            on_diagnostic: Receives every diagnostic in addition to logging
        """
        self._config = config if config is not None else LocalizationConfig()
        self._registry = LocaleRegistry(on_diagnostic=on_diagnostic)
        self._resolver = FallbackResolver(LocaleTree.from_locales(self._config.locales))
        self._renderer = Renderer(self._registry, self._resolver, expander=expander)
        self._matcher = SimilarityMatcher(
            self._registry, min_similarity=self._config.min_similarity
        )
        self._load_results: list[DictionaryLoadResult] = []

        self._registry.define(ROOT_LOCALE, {ROOT_LOCALE: ""})

        if self._config.load_builtin:
            package_loader = PackageDictionaryLoader()
            for locale in BUILTIN_LOCALES:
                self.load(locale, package_loader)

        if loader is not None:
            for locale in self._config.locales:
                self.load(locale, loader)

        logger.info(
            "Localization initialized (locales=%s, dictionaries=%d)",
            ",".join(self._config.locales),
            sum(1 for r in self._load_results if r.is_success),
        )

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def config(self) -> LocalizationConfig:
        return self._config

    @property
    def locales(self) -> tuple[LocaleCode, ...]:
        """Configured locales in fallback order."""
        return self._config.locales

    @property
    def tree(self) -> LocaleTree:
        return self._resolver.tree

    @property
    def registry(self) -> LocaleRegistry:
        return self._registry

    def __repr__(self) -> str:
        return f"Localization(locales={self._config.locales!r}, registry={self._registry!r})"

    # ------------------------------------------------------------------
    # Dictionaries
    # ------------------------------------------------------------------

    def define(
        self,
        locale: LocaleCode,
        key_or_mapping: KeyPath | Mapping[str, Node],
        value: Node = _MISSING,
    ) -> DefinitionHandle:
        """Define templates for a locale. See LocaleRegistry.define()."""
        if value is _MISSING:
            return self._registry.define(locale, key_or_mapping)
        return self._registry.define(locale, key_or_mapping, value)

    def load(self, locale: LocaleCode, loader: DictionaryLoader) -> DictionaryLoadResult:
        """Load and define one locale's dictionary, recording the outcome.

        Missing and unreadable dictionaries are recorded in the result
        (and in get_load_summary()) rather than raised.
        """
        source_path = loader.describe_path(locale)
        try:
            handle = self._registry.define(locale, loader.load(locale))
        except FileNotFoundError:
            logger.debug("No dictionary for locale %r at %s", locale, source_path)
            result = DictionaryLoadResult(
                locale=locale, status=LoadStatus.NOT_FOUND, source_path=source_path
            )
        except (OSError, ValueError) as e:
            self._registry.report(
                Diagnostic(
                    code=DiagnosticCode.DICTIONARY_INVALID,
                    message=f"Failed to load dictionary {source_path}: {e}",
                    locale=locale,
                    severity="error",
                )
            )
            result = DictionaryLoadResult(
                locale=locale, status=LoadStatus.ERROR, source_path=source_path, error=e
            )
        else:
            result = DictionaryLoadResult(
                locale=locale,
                status=LoadStatus.SUCCESS,
                source_path=source_path,
                paths=len(handle.paths),
            )
        self._load_results.append(result)
        return result

    def get_load_summary(self) -> LoadSummary:
        """Summary of every dictionary load attempted so far."""
        return LoadSummary(results=tuple(self._load_results))

    def register_preset(self, tag: str, renderer: PresetRenderer) -> None:
        """Register a preset renderer. See LocaleRegistry.register_preset()."""
        self._registry.register_preset(tag, renderer)

    def add_listener(self, listener: ChangeListener) -> Callable[[], None]:
        """Subscribe to change notifications. Returns an unsubscribe callable."""
        return self._registry.add_listener(listener)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def fallback(self, locales: Iterable[LocaleCode]) -> tuple[LocaleCode, ...]:
        """Rank requested locales into the full search order."""
        return self._resolver.resolve(locales)

    def render(
        self,
        locales: Iterable[LocaleCode],
        paths: Iterable[KeyPath],
        params: Params = None,
    ) -> list[Element]:
        """Render the first defined template. See Renderer.render()."""
        return self._renderer.render(locales, paths, params)

    @deprecated(removal_version="1.0.0", alternative="Localization.render")
    def text(
        self,
        locales: Iterable[LocaleCode],
        paths: Iterable[KeyPath],
        params: Params = None,
    ) -> str:
        """Render and join the output as a string."""
        return to_text(self._renderer.render(locales, paths, params))

    # ------------------------------------------------------------------
    # Reverse lookup
    # ------------------------------------------------------------------

    def compare(self, expect: str, actual: str, *, min_similarity: float | None = None) -> float:
        """Normalized similarity of two strings, or 0.0 below the threshold."""
        return self._matcher.compare(expect, actual, min_similarity=min_similarity)

    def find(
        self,
        pattern: str,
        actual: str,
        *,
        min_similarity: float | None = None,
    ) -> list[FindResult]:
        """Find templates that may have rendered ``actual``. See SimilarityMatcher.find()."""
        return self._matcher.find(pattern, actual, min_similarity=min_similarity)
