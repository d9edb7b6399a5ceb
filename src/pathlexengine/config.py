"""Configuration for Localization.

A single frozen dataclass carries every option. ``LocalizationConfig()``
with no arguments is a usable configuration; from_mapping() builds one from
plain data such as a parsed settings file.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from pathlexengine.constants import DEFAULT_LOCALES, DEFAULT_MIN_SIMILARITY
from pathlexengine.enums import MatchMode, OutputPreference
from pathlexengine.types import LocaleCode

__all__ = ["LocalizationConfig"]


@dataclass(frozen=True, slots=True)
class LocalizationConfig:
    """Immutable configuration for Localization.

    Attributes:
        locales: Available locales in fallback order. Duplicates are dropped.
        output: Output locale preference, for callers ranking user and
            channel locales (not interpreted by the engine)
        match: Input matching mode, for callers of reverse lookup
            (not interpreted by the engine)
        min_similarity: Default threshold for find(), in [0, 1]
        load_builtin: Define the bundled dictionaries at construction

    Example:
        >>> config = LocalizationConfig(locales=("en-US", "fr-FR"), min_similarity=0.6)
        >>> config.locales
        ('en-US', 'fr-FR')
        >>> LocalizationConfig.from_mapping({"output": "prefer-user"}).output
        <OutputPreference.PREFER_USER: 'prefer-user'>
    """

    locales: tuple[LocaleCode, ...] = DEFAULT_LOCALES
    output: OutputPreference = OutputPreference.PREFER_CHANNEL
    match: MatchMode = MatchMode.STRICT
    min_similarity: float = DEFAULT_MIN_SIMILARITY
    load_builtin: bool = True

    def __post_init__(self) -> None:
        """Normalize and validate values.

        Raises:
            ValueError: If locales is empty, min_similarity is outside [0, 1],
                or output/match is not a known option
        """
        locales = tuple(dict.fromkeys(self.locales))
        if not locales:
            msg = "At least one locale is required"
            raise ValueError(msg)
        object.__setattr__(self, "locales", locales)

        # StrEnum conversion raises ValueError for unknown options.
        object.__setattr__(self, "output", OutputPreference(self.output))
        object.__setattr__(self, "match", MatchMode(self.match))

        if not 0.0 <= self.min_similarity <= 1.0:
            msg = f"min_similarity must be between 0 and 1, got {self.min_similarity}"
            raise ValueError(msg)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> LocalizationConfig:
        """Build a configuration from plain data.

        Unknown keys are rejected so that typos do not pass silently.

        Args:
            data: Mapping with any of the dataclass field names

        Raises:
            ValueError: If a key is unknown or a value is invalid
        """
        known = {"locales", "output", "match", "min_similarity", "load_builtin"}
        unknown = sorted(set(data) - known)
        if unknown:
            msg = f"Unknown configuration option(s): {', '.join(unknown)}"
            raise ValueError(msg)

        options = dict(data)
        if "locales" in options:
            locales = options["locales"]
            if isinstance(locales, str) or not isinstance(locales, Iterable):
                msg = "locales must be a list of locale codes"
                raise ValueError(msg)
            options["locales"] = tuple(locales)
        if "min_similarity" in options:
            options["min_similarity"] = float(options["min_similarity"])
        return cls(**options)
