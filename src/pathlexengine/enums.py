"""Enumerations for PathLexEngine type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, so configuration values read from
files compare equal to enum members without conversion.

Python 3.13+.
"""

from enum import StrEnum


class OutputPreference(StrEnum):
    """Which locale wins when the user and the channel disagree.

    Consumed by callers that build the requested locale list; the engine
    itself carries the value without interpreting it.
    """

    PREFER_USER = "prefer-user"
    """Rank the user's locale ahead of the channel's."""

    PREFER_CHANNEL = "prefer-channel"
    """Rank the channel's locale ahead of the user's."""


class MatchMode(StrEnum):
    """How input text is matched against locales during reverse lookup.

    Consumed by callers; carried by LocalizationConfig.
    """

    STRICT = "strict"
    """Only match templates of the requested locales."""

    PREFER_INPUT = "prefer-input"
    """Match any locale, ranking the input locale first."""

    PREFER_OUTPUT = "prefer-output"
    """Match any locale, ranking the output locale first."""


class LoadStatus(StrEnum):
    """Outcome of loading one bundled or on-disk dictionary."""

    SUCCESS = "success"
    """Dictionary loaded and defined."""

    NOT_FOUND = "not_found"
    """No dictionary file exists for the locale."""

    ERROR = "error"
    """Dictionary exists but could not be read or parsed."""


__all__ = [
    "LoadStatus",
    "MatchMode",
    "OutputPreference",
]
