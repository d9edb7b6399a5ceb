"""Locale code utilities.

Locale codes are opaque dictionary keys everywhere except when the locale
tree is built: there the code is split into subtags with Babel's parser to
derive its general-purpose ancestors (zh-Hant-TW -> zh-Hant -> zh).

Also owns the internal-variant naming convention ("$" prefix).

Python 3.13+.
"""

from __future__ import annotations

import functools

from babel.core import parse_locale

from pathlexengine.constants import INTERNAL_PREFIX

__all__ = [
    "internal_locale",
    "is_internal_locale",
    "locale_ancestors",
    "normalize_locale",
    "plain_locale",
]


def normalize_locale(locale_code: str) -> str:
    """Convert a BCP-47 locale code to the POSIX form Babel parses.

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("en")
        'en'
    """
    return locale_code.replace("-", "_")


@functools.lru_cache(maxsize=256)
def locale_ancestors(locale_code: str) -> tuple[str, ...]:
    """Return the general-purpose ancestors of a locale, nearest first.

    Ancestors are built from the subtags Babel recognizes, joined with the
    separator style of the input:

        >>> locale_ancestors("zh-Hant-TW")
        ('zh-Hant', 'zh')
        >>> locale_ancestors("en_US")
        ('en',)
        >>> locale_ancestors("en")
        ()

    Codes Babel cannot parse (private-use tags, custom identifiers) fall back
    to dropping trailing subtags one at a time. The root locale ("") is never
    included.

    Args:
        locale_code: Locale code (BCP-47 or POSIX separators)

    Returns:
        Tuple of ancestor codes, most specific first
    """
    if not locale_code:
        return ()

    sep = "_" if "_" in locale_code and "-" not in locale_code else "-"
    try:
        language, territory, script, variant = parse_locale(
            normalize_locale(locale_code), sep="_"
        )[:4]
    except ValueError:
        parts = locale_code.split(sep)
        return tuple(sep.join(parts[:i]) for i in range(len(parts) - 1, 0, -1))

    # Subtags in specificity order; each ancestor drops the most specific one.
    subtags = [tag for tag in (language, script, territory, variant) if tag]
    return tuple(sep.join(subtags[:i]) for i in range(len(subtags) - 1, 0, -1))


def internal_locale(locale_code: str) -> str:
    """Return the internal variant of a locale ("en-US" -> "$en-US")."""
    return INTERNAL_PREFIX + locale_code


def is_internal_locale(locale_code: str) -> bool:
    """Check whether a locale code names an internal variant."""
    return locale_code.startswith(INTERNAL_PREFIX)


def plain_locale(locale_code: str) -> str:
    """Strip the internal prefix ("$en-US" -> "en-US")."""
    return locale_code.removeprefix(INTERNAL_PREFIX)
