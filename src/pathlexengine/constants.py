"""Shared constants for PathLexEngine.

Centralizes the reserved characters of the key-path addressing scheme and the
configuration defaults used by the registry, renderer and similarity matcher.
Placing constants here avoids circular imports between those modules.

Constants are grouped by domain:
- Key-path syntax: separators and reserved prefixes
- Locale defaults: configured fallback list and bundled dictionaries
- Similarity: default threshold for reverse lookup

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Key-path syntax
    "PATH_SEPARATOR",
    "PRESET_SEPARATOR",
    "INTERNAL_PREFIX",
    "ROOT_LOCALE",
    "MAX_DEPTH",
    # Locale defaults
    "DEFAULT_LOCALES",
    "BUILTIN_LOCALES",
    "MAX_FALLBACK_CACHE_SIZE",
    # Similarity
    "DEFAULT_MIN_SIMILARITY",
]

# ============================================================================
# KEY-PATH SYNTAX
# ============================================================================

# Joins nested dictionary keys into a flat key path: {"a": {"b": ...}} -> "a.b".
PATH_SEPARATOR: str = "."

# Marks a preset key: "greeting@time" stores "greeting" rendered by preset "time".
# Flattening never descends below a key containing this character.
PRESET_SEPARATOR: str = "@"

# Prefix of internal locale variants ("$en-US"). Internal stores hold system and
# fallback templates and are consulted before their plain counterpart.
INTERNAL_PREFIX: str = "$"

# Locale-agnostic root of the locale tree. Always tried last.
ROOT_LOCALE: str = ""

# Deepest mapping nesting define() flattens. Deeper input (including YAML
# dictionaries whose anchors refer back to themselves) is rejected with ValueError.
MAX_DEPTH: int = 100

# ============================================================================
# LOCALE DEFAULTS
# ============================================================================

# Configured locale list, in fallback order, when none is supplied.
DEFAULT_LOCALES: tuple[str, ...] = ("zh-CN", "en-US", "fr-FR", "ja-JP", "de-DE", "ru-RU")

# Locales with a dictionary shipped under pathlexengine/locales/<code>.yml.
BUILTIN_LOCALES: tuple[str, ...] = ("zh-CN", "en-US", "ja-JP", "fr-FR", "zh-TW")

# Distinct requested-locale tuples memoized by FallbackResolver.
MAX_FALLBACK_CACHE_SIZE: int = 256

# ============================================================================
# SIMILARITY
# ============================================================================

# Minimum normalized similarity for SimilarityMatcher.find() results.
# 1.0 means identical; 0.4 tolerates moderate edits of a short template.
DEFAULT_MIN_SIMILARITY: float = 0.4
