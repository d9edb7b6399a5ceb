"""Template lookup and rendering.

Renderer walks (path x resolved locale x {internal, plain}) and renders the
first defined template it meets. Path order dominates locale order: every
locale is tried for the first path before the second path is considered.

    >>> renderer.render(["en-US"], ["commands.help.description", "help"], {})
    [Element(type='text', attrs={'content': 'Show help'}, children=())]

When nothing matches, the first path itself is returned as text and a
TRANSLATION_MISSING diagnostic is reported, so callers always receive
non-empty output.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pathlexengine.constants import ROOT_LOCALE
from pathlexengine.deprecation import deprecated
from pathlexengine.diagnostics import Diagnostic, DiagnosticCode
from pathlexengine.fallback import FallbackResolver
from pathlexengine.locale_utils import internal_locale
from pathlexengine.markup import Element, MarkupExpander, expand, to_text
from pathlexengine.markup import text as text_node
from pathlexengine.registry import LocaleRegistry
from pathlexengine.templates import PlainTemplate, PresetTemplate, Template
from pathlexengine.types import KeyPath, LocaleCode, Params

__all__ = ["Renderer"]

logger = logging.getLogger(__name__)

_EMPTY = PlainTemplate("")


class Renderer:
    """Resolves and renders templates from a LocaleRegistry."""

    __slots__ = ("_expander", "_registry", "_resolver")

    def __init__(
        self,
        registry: LocaleRegistry,
        resolver: FallbackResolver,
        *,
        expander: MarkupExpander = expand,
    ) -> None:
        """Initialize renderer.

        Args:
            registry: Source of templates and preset renderers
            resolver: Ranks requested locales into the search order
            expander: Expands plain templates (default: markup.expand)
        """
        self._registry = registry
        self._resolver = resolver
        self._expander = expander

    def lookup(
        self, locales: Iterable[LocaleCode], paths: Iterable[KeyPath]
    ) -> tuple[Template, LocaleCode] | None:
        """Find the first defined template without rendering it.

        Args:
            locales: Requested locales, most preferred first
            paths: Candidate key paths, most specific first

        Returns:
            (template, locale) with the plain locale code, or None
        """
        candidates = self._resolver.resolve(locales)
        paths = tuple(paths)
        with self._registry.reading():
            for path in paths:
                for locale in candidates:
                    for key in (internal_locale(locale), locale):
                        value = self._registry.lookup(key, path)
                        if value is None:
                            continue
                        # The root entry {"": ""} only answers the empty path.
                        if value == _EMPTY and locale == ROOT_LOCALE and path != "":
                            continue
                        logger.debug("Resolved %r from locale %r", path, key)
                        return value, locale
        return None

    def render(
        self,
        locales: Iterable[LocaleCode],
        paths: Iterable[KeyPath],
        params: Params = None,
    ) -> list[Element]:
        """Render the first defined template for the request.

        Args:
            locales: Requested locales, most preferred first
            paths: Candidate key paths, most specific first
            params: Parameters for the markup expander or preset renderer

        Returns:
            Output elements; [text(paths[0])] when no template is defined

        Raises:
            ValueError: If paths is empty
            PresetNotFoundError: If the template names an unregistered preset
        """
        paths = tuple(paths)
        if not paths:
            msg = "At least one key path is required"
            raise ValueError(msg)

        found = self.lookup(locales, paths)
        if found is None:
            self._registry.report(
                Diagnostic(
                    code=DiagnosticCode.TRANSLATION_MISSING,
                    message=f"Missing translation: '{paths[0]}'",
                    path=paths[0],
                )
            )
            return [text_node(paths[0])]

        template, locale = found
        return self._render(template, params, locale)

    def _render(self, template: Template, params: Params, locale: LocaleCode) -> list[Element]:
        match template:
            case PlainTemplate(text=source):
                return self._expander(source, params)
            case PresetTemplate(tag=tag):
                renderer = self._registry.get_preset(tag)
                return [text_node(renderer(template, params, locale))]

    @deprecated(removal_version="1.0.0", alternative="Renderer.render")
    def text(
        self,
        locales: Iterable[LocaleCode],
        paths: Iterable[KeyPath],
        params: Params = None,
    ) -> str:
        """Render and join the output as a string."""
        return to_text(self.render(locales, paths, params))
