"""Dictionary loading for Localization.

Dictionaries are YAML documents whose top level is a nested mapping of key
path segments to templates:

    commands:
      help:
        description: Show help

Components:
    DictionaryLoader - Protocol for loading one locale's dictionary
    PackageDictionaryLoader - Reads dictionaries bundled as package data
    PathDictionaryLoader - Reads <locale>.yml files from a directory
    DictionaryLoadResult - Immutable result of one load attempt
    LoadSummary - Immutable aggregate of load results

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Any, Protocol

import yaml

from pathlexengine.enums import LoadStatus
from pathlexengine.types import LocaleCode

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "DictionaryLoader",
    # Concrete loaders
    "PackageDictionaryLoader",
    "PathDictionaryLoader",
    # Parsing
    "parse_dictionary",
    # Load result types
    "DictionaryLoadResult",
    "LoadSummary",
]

DICTIONARY_SUFFIX = ".yml"


class DictionaryLoader(Protocol):
    """Protocol for loading the dictionary of a locale.

    This is a Protocol (structural typing) rather than ABC so any object with
    matching methods can be passed to Localization.

    Example:
        >>> class MemoryLoader:
        ...     def load(self, locale: str) -> Mapping[str, Any]:
        ...         return {"greet": "Hello"}
        ...     def describe_path(self, locale: str) -> str:
        ...         return f"memory:{locale}"
    """

    def load(self, locale: LocaleCode) -> Mapping[str, Any]:
        """Load the dictionary for a locale.

        Raises:
            FileNotFoundError: If no dictionary exists for the locale
            OSError: If the dictionary cannot be read
            ValueError: If the dictionary is not a mapping
        """

    def describe_path(self, locale: LocaleCode) -> str:
        """Return a human-readable location for diagnostics."""
        return f"{locale}{DICTIONARY_SUFFIX}"


def _validate_locale(locale: LocaleCode) -> None:
    if not locale:
        msg = "Locale code cannot be empty"
        raise ValueError(msg)
    if ".." in locale:
        msg = f"Path traversal sequences not allowed in locale: '{locale}'"
        raise ValueError(msg)
    if "/" in locale or "\\" in locale:
        msg = f"Path separators not allowed in locale: '{locale}'"
        raise ValueError(msg)


def parse_dictionary(source: str, origin: str = "<string>") -> Mapping[str, Any]:
    """Parse YAML dictionary source.

    Args:
        source: YAML text
        origin: Location used in error messages

    Returns:
        Top-level mapping; an empty document yields an empty mapping

    Raises:
        ValueError: If the document is not a mapping or is not valid YAML
    """
    try:
        data = yaml.safe_load(source)
    except yaml.YAMLError as e:
        msg = f"Invalid YAML in {origin}: {e}"
        raise ValueError(msg) from e

    if data is None:
        return {}
    if not isinstance(data, Mapping):
        msg = f"Dictionary {origin} must be a mapping, got {type(data).__name__}"
        raise ValueError(msg)
    return data


@dataclass(frozen=True, slots=True)
class PackageDictionaryLoader:
    """Loads dictionaries shipped as package data.

    Attributes:
        package: Package holding <locale>.yml files
    """

    package: str = "pathlexengine.locales"

    def describe_path(self, locale: LocaleCode) -> str:
        return f"{self.package}:{locale}{DICTIONARY_SUFFIX}"

    def load(self, locale: LocaleCode) -> Mapping[str, Any]:
        _validate_locale(locale)
        resource = resources.files(self.package).joinpath(f"{locale}{DICTIONARY_SUFFIX}")
        if not resource.is_file():
            msg = f"No bundled dictionary for locale '{locale}'"
            raise FileNotFoundError(msg)
        return parse_dictionary(resource.read_text(encoding="utf-8"), self.describe_path(locale))


@dataclass(frozen=True, slots=True)
class PathDictionaryLoader:
    """Loads <locale>.yml files from a directory.

    Security:
        Locale codes containing path separators or ".." are rejected, and
        the resolved file must stay inside base_dir.

    Attributes:
        base_dir: Directory holding the dictionaries
    """

    base_dir: str | Path
    _resolved_root: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_resolved_root", Path(self.base_dir).resolve())

    def describe_path(self, locale: LocaleCode) -> str:
        return str(Path(self.base_dir) / f"{locale}{DICTIONARY_SUFFIX}")

    def load(self, locale: LocaleCode) -> Mapping[str, Any]:
        """Load and parse <base_dir>/<locale>.yml.

        Raises:
            ValueError: If the locale is unsafe or the file is not a mapping
            FileNotFoundError: If the file does not exist
            OSError: If the file cannot be read
        """
        _validate_locale(locale)
        full_path = (self._resolved_root / f"{locale}{DICTIONARY_SUFFIX}").resolve()
        if not full_path.is_relative_to(self._resolved_root):
            msg = f"Path traversal detected: locale='{locale}' escapes {self._resolved_root}"
            raise ValueError(msg)
        return parse_dictionary(full_path.read_text(encoding="utf-8"), str(full_path))


@dataclass(frozen=True, slots=True)
class DictionaryLoadResult:
    """Result of loading one locale's dictionary.

    Attributes:
        locale: Locale code
        status: Load status (success, not_found, error)
        source_path: Human-readable location of the dictionary
        error: Exception if status is ERROR, None otherwise
        paths: Number of key paths defined from the dictionary
    """

    locale: LocaleCode
    status: LoadStatus
    source_path: str | None = None
    error: Exception | None = None
    paths: int = 0

    @property
    def is_success(self) -> bool:
        return self.status == LoadStatus.SUCCESS

    @property
    def is_not_found(self) -> bool:
        return self.status == LoadStatus.NOT_FOUND

    @property
    def is_error(self) -> bool:
        return self.status == LoadStatus.ERROR


@dataclass(frozen=True, slots=True)
class LoadSummary:
    """Aggregate of dictionary load results.

    Attributes:
        results: Individual load results, in load order
    """

    results: tuple[DictionaryLoadResult, ...] = ()

    def __repr__(self) -> str:
        return (
            f"LoadSummary(total={len(self.results)}, ok={self.successful}, "
            f"not_found={self.not_found}, errors={self.errors})"
        )

    @property
    def successful(self) -> int:
        return sum(1 for r in self.results if r.is_success)

    @property
    def not_found(self) -> int:
        return sum(1 for r in self.results if r.is_not_found)

    @property
    def errors(self) -> int:
        return sum(1 for r in self.results if r.is_error)

    @property
    def has_errors(self) -> bool:
        return self.errors > 0

    def get_errors(self) -> tuple[DictionaryLoadResult, ...]:
        return tuple(r for r in self.results if r.is_error)

    def get_by_locale(self, locale: LocaleCode) -> tuple[DictionaryLoadResult, ...]:
        return tuple(r for r in self.results if r.locale == locale)
