"""Diagnostic codes and data structures.

Defines diagnostic codes and the structured Diagnostic record delivered to
diagnostics sinks and carried by exceptions.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticSink",
]


class DiagnosticCode(Enum):
    """Diagnostic codes with unique identifiers.

    Organized by category:
        1000-1999: Lookup (missing translations)
        2000-2999: Rendering (preset wiring)
        3000-3999: Definition (overrides, deprecated syntax)
        4000-4999: Loading (bundled and on-disk dictionaries)
    """

    # Lookup (1000-1999)
    TRANSLATION_MISSING = 1001

    # Rendering (2000-2999)
    PRESET_NOT_FOUND = 2001

    # Definition (3000-3999)
    OVERRIDE = 3001
    PRESET_SYNTAX_DEPRECATED = 3002

    # Loading (4000-4999)
    DICTIONARY_INVALID = 4001


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique diagnostic code
        message: Human-readable description
        locale: Locale code the diagnostic concerns (None if not applicable)
        path: Key path the diagnostic concerns (None if not applicable)
        hint: Suggestion for fixing the problem
        severity: Diagnostic severity level
    """

    code: DiagnosticCode
    message: str
    locale: str | None = None
    path: str | None = None
    hint: str | None = None
    severity: Literal["error", "warning"] = "warning"

    def __str__(self) -> str:
        """Return human-readable description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic in compiler style.

        Example output:
            warning[OVERRIDE]: Path 'greeting' redefined in locale 'en-US'
              --> en-US:greeting
              = help: Define the path once, or use an internal locale

        Returns:
            Formatted diagnostic
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)


type DiagnosticSink = Callable[[Diagnostic], None]
"""Callback receiving every diagnostic reported by the engine."""
