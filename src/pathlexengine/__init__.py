"""PathLexEngine - key-path localization with locale fallback and reverse lookup.

Stores translation templates addressed by dot-separated key paths per locale,
resolves a ranked locale request through a locale tree into a fallback order,
renders the first defined template, and finds which templates may have
produced a piece of text.

Public API:
    Localization - Facade wiring registry, fallback, renderer and matcher
    LocalizationConfig - Immutable configuration
    LocaleRegistry - Per-locale stores, preset renderers, change notification
    DefinitionHandle - Reverts one define() call
    PathStore - Flat key-path dictionary for one locale
    PlainTemplate, PresetTemplate - Stored template variants
    LocaleTree, fallback, FallbackResolver - Locale fallback ranking
    Renderer - First-match lookup and rendering
    SimilarityMatcher, FindResult - Fuzzy reverse lookup
    Element, text, to_text, expand - Output nodes and the default markup expander

Exceptions:
    LocalizationError - Base exception class
    PresetNotFoundError - Preset template names an unregistered renderer

Submodules:
    pathlexengine.diagnostics - Diagnostic codes, records and formatting
    pathlexengine.loading - Dictionary loaders and load summaries
    pathlexengine.locale_utils - Locale code parsing (Babel)
"""

from .config import LocalizationConfig
from .diagnostics import (
    Diagnostic,
    DiagnosticCode,
    LocalizationError,
    PresetNotFoundError,
)
from .enums import MatchMode, OutputPreference
from .fallback import FallbackResolver, LocaleTree, fallback
from .localization import Localization
from .markup import Element, expand, text, to_text
from .registry import DefinitionHandle, LocaleRegistry
from .renderer import Renderer
from .similarity import FindResult, SimilarityMatcher
from .store import PathStore
from .templates import PlainTemplate, PresetTemplate

# Version information - Auto-populated from package metadata
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("pathlexengine")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "DefinitionHandle",
    "Diagnostic",
    "DiagnosticCode",
    "Element",
    "FallbackResolver",
    "FindResult",
    "LocaleRegistry",
    "LocaleTree",
    "Localization",
    "LocalizationConfig",
    "LocalizationError",
    "MatchMode",
    "OutputPreference",
    "PathStore",
    "PlainTemplate",
    "PresetNotFoundError",
    "PresetTemplate",
    "Renderer",
    "SimilarityMatcher",
    "__version__",
    "expand",
    "fallback",
    "text",
    "to_text",
]
