"""Per-locale dictionary of flattened key paths.

PathStore maps dot-separated key paths to templates for one locale code.
Nested dictionaries are flattened on write:

    store.define({"commands": {"help": {"description": "Show help"}}})
    store.get("commands.help.description")  # PlainTemplate("Show help")

Flattening stops at the first key containing the preset separator ("@"):
the value under "time@relative" is stored whole as a PresetTemplate at
"time" with tag "relative". This key syntax is deprecated but supported.
A key with an empty tag ("greet@") stores a plain template at "greet".

Writing a value that is neither a mapping nor a string deletes the path.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import ItemsView, Iterator, Mapping
from typing import Any

from pathlexengine.constants import MAX_DEPTH, PATH_SEPARATOR, PRESET_SEPARATOR
from pathlexengine.deprecation import warn_deprecated
from pathlexengine.diagnostics import Diagnostic, DiagnosticCode, DiagnosticSink
from pathlexengine.locale_utils import is_internal_locale
from pathlexengine.templates import PlainTemplate, PresetTemplate, Template
from pathlexengine.types import KeyPath, LocaleCode, Node

__all__ = ["PathStore"]

logger = logging.getLogger(__name__)

_MISSING: Any = object()

# Pending write: a template to store, or None to delete the path.
type _Write = tuple[KeyPath, Template | None]


def _log_diagnostic(diagnostic: Diagnostic) -> None:
    logger.warning("%s", diagnostic.format_error())


class PathStore:
    """Flat key-path dictionary for a single locale.

    Not thread-safe on its own; LocaleRegistry serializes writers.

    Attributes:
        locale: Locale code this store belongs to
        is_internal: True for internal variants ("$en-US"), which never
            report overrides
    """

    __slots__ = ("_entries", "_locale", "_report")

    def __init__(self, locale: LocaleCode, *, report: DiagnosticSink | None = None) -> None:
        """Initialize an empty store.

        Args:
            locale: Locale code (internal variants keep their "$" prefix)
            report: Receives override and deprecation diagnostics.
                Defaults to logging them as warnings.
        """
        self._locale = locale
        self._entries: dict[KeyPath, Template] = {}
        self._report: DiagnosticSink = report if report is not None else _log_diagnostic

    @property
    def locale(self) -> LocaleCode:
        return self._locale

    @property
    def is_internal(self) -> bool:
        return is_internal_locale(self._locale)

    def define(
        self,
        key_or_mapping: KeyPath | Mapping[str, Node],
        value: Node = _MISSING,
    ) -> tuple[KeyPath, ...]:
        """Write a nested mapping, or a single value at a key path.

        The input is flattened completely before anything is written, so a
        call that raises leaves the store unchanged.

        Args:
            key_or_mapping: Whole (possibly nested) dictionary, or a key path
            value: Node to write at the key path; required with a key path,
                forbidden with a mapping

        Returns:
            Key paths that now hold a value written by this call, in
            traversal order. Deleted paths are not included.

        Raises:
            TypeError: If the argument combination is invalid
            ValueError: If mappings nest deeper than MAX_DEPTH
        """
        if isinstance(key_or_mapping, str):
            if value is _MISSING:
                msg = "define() with a key path requires a value"
                raise TypeError(msg)
            return self._apply(self._flatten(key_or_mapping + PATH_SEPARATOR, value, 0))

        if value is not _MISSING:
            msg = "define() with a mapping takes no value"
            raise TypeError(msg)
        if not isinstance(key_or_mapping, Mapping):
            msg = f"Expected a mapping or key path, got {type(key_or_mapping).__name__}"
            raise TypeError(msg)
        return self._apply(self._flatten("", key_or_mapping, 0))

    def _flatten(self, prefix: str, node: Any, depth: int) -> list[_Write]:
        # prefix always ends with PATH_SEPARATOR except at the mapping root.
        if isinstance(node, Mapping) and PRESET_SEPARATOR not in prefix:
            if depth >= MAX_DEPTH:
                msg = f"Dictionary nested deeper than {MAX_DEPTH} levels below '{prefix[:40]}...'"
                raise ValueError(msg)
            writes: list[_Write] = []
            for key, child in node.items():
                writes.extend(self._flatten(f"{prefix}{key}{PATH_SEPARATOR}", child, depth + 1))
            return writes

        # An empty tag ("greet@") is no preset: the key names "greet".
        path, _, tag = prefix[:-1].partition(PRESET_SEPARATOR)

        if tag and isinstance(node, (str, Mapping)):
            warn_deprecated(
                f"Preset key '{path}{PRESET_SEPARATOR}{tag}'",
                removal_version="1.0.0",
                alternative="a preset renderer invoked by the caller",
                stacklevel=3,
            )
            return [(path, PresetTemplate(node, tag))]
        if isinstance(node, str):
            return [(path, PlainTemplate(node))]
        return [(path, None)]

    def _apply(self, writes: list[_Write]) -> tuple[KeyPath, ...]:
        stored: list[KeyPath] = []
        for path, template in writes:
            if template is None:
                self.delete(path)
                continue

            if isinstance(template, PresetTemplate):
                self._report(
                    Diagnostic(
                        code=DiagnosticCode.PRESET_SYNTAX_DEPRECATED,
                        message=(
                            "Preset key syntax is deprecated: "
                            f"'{path}{PRESET_SEPARATOR}{template.tag}'"
                        ),
                        locale=self._locale,
                        path=path,
                    )
                )

            previous = self._entries.get(path)
            if previous is not None and previous != template and not self.is_internal:
                self._report(
                    Diagnostic(
                        code=DiagnosticCode.OVERRIDE,
                        message=f"Path '{path}' redefined in locale '{self._locale}'",
                        locale=self._locale,
                        path=path,
                        hint="Define the path once, or define it in an internal locale",
                    )
                )

            self._entries[path] = template
            stored.append(path)
        return tuple(stored)

    def get(self, path: KeyPath) -> Template | None:
        """Return the template stored at a path, or None."""
        return self._entries.get(path)

    def delete(self, path: KeyPath) -> bool:
        """Delete a path.

        Returns:
            True if the path held a value
        """
        return self._entries.pop(path, None) is not None

    def items(self) -> ItemsView[KeyPath, Template]:
        return self._entries.items()

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def __iter__(self) -> Iterator[KeyPath]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"PathStore(locale={self._locale!r}, paths={len(self._entries)})"
