"""Diagnostic formatting service.

Centralizes diagnostic output formatting with configurable options.
Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from .codes import Diagnostic

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]

# Control characters in locale codes or key paths would forge extra log lines.
_ESCAPES = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x1b": "\\x1b"})


class OutputFormat(StrEnum):
    """Output format options for diagnostic formatting."""

    RUST = "rust"  # Rust compiler-style output (default)
    SIMPLE = "simple"  # Single-line format
    JSON = "json"  # JSON format for tooling integration


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Diagnostic formatting service.

    Attributes:
        output_format: Output style (rust, simple, json)

    Example:
        >>> diagnostic = Diagnostic(DiagnosticCode.TRANSLATION_MISSING, "Missing 'a.b'")
        >>> DiagnosticFormatter(output_format=OutputFormat.SIMPLE).format(diagnostic)
        "TRANSLATION_MISSING: Missing 'a.b'"
    """

    output_format: OutputFormat = OutputFormat.RUST

    def format(self, diagnostic: Diagnostic) -> str:
        """Format a single diagnostic.

        Args:
            diagnostic: Diagnostic to format

        Returns:
            Formatted diagnostic string
        """
        match self.output_format:
            case OutputFormat.RUST:
                return self._format_rust(diagnostic)
            case OutputFormat.SIMPLE:
                return self._format_simple(diagnostic)
            case OutputFormat.JSON:
                return self._format_json(diagnostic)

    def format_all(self, diagnostics: Iterable[Diagnostic]) -> str:
        """Format multiple diagnostics separated by blank lines."""
        return "\n\n".join(self.format(d) for d in diagnostics)

    @staticmethod
    def _escape(value: str) -> str:
        return value.translate(_ESCAPES)

    def _format_rust(self, diagnostic: Diagnostic) -> str:
        parts = [
            f"{diagnostic.severity}[{diagnostic.code.name}]: "
            f"{self._escape(diagnostic.message)}"
        ]

        if diagnostic.locale is not None or diagnostic.path is not None:
            locale = self._escape(diagnostic.locale or "")
            path = self._escape(diagnostic.path or "")
            parts.append(f"  --> {locale}:{path}")

        if diagnostic.hint:
            parts.append(f"  = help: {self._escape(diagnostic.hint)}")

        return "\n".join(parts)

    def _format_simple(self, diagnostic: Diagnostic) -> str:
        return f"{diagnostic.code.name}: {self._escape(diagnostic.message)}"

    @staticmethod
    def _format_json(diagnostic: Diagnostic) -> str:
        data = {
            "code": diagnostic.code.name,
            "message": diagnostic.message,
            "locale": diagnostic.locale,
            "path": diagnostic.path,
            "hint": diagnostic.hint,
            "severity": diagnostic.severity,
        }
        return json.dumps(data, ensure_ascii=False)
