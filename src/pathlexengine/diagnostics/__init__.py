"""Diagnostic system for localization events.

Provides structured diagnostics with codes, locations and hints, a formatter,
and the exception hierarchy.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, DiagnosticSink
from .errors import LocalizationError, PresetNotFoundError
from .formatter import DiagnosticFormatter, OutputFormat

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "DiagnosticSink",
    "LocalizationError",
    "OutputFormat",
    "PresetNotFoundError",
]
