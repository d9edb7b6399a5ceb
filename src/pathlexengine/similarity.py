"""Fuzzy reverse lookup from rendered text to templates.

Given a key-path pattern and a piece of text, SimilarityMatcher scans every
plain template whose path matches the pattern, in every locale, and keeps
those whose normalized edit-distance similarity clears a threshold.

Patterns are regular expressions over whole key paths in which each
``(name)`` group captures one path segment:

    >>> matcher.find("commands.(name).description", "Show help")
    [FindResult(locale='en-US', data={'name': 'help'}, similarity=1.0)]

Similarity is ``1 - levenshtein(template, text) / len(template)``, so it is
1.0 for identical strings and falls below 0 for very different ones. Edit
distance is computed by RapidFuzz, character-level and case-sensitive.

Python 3.13+.
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass, field

from rapidfuzz.distance import Levenshtein

from pathlexengine.constants import DEFAULT_MIN_SIMILARITY
from pathlexengine.registry import LocaleRegistry
from pathlexengine.templates import PlainTemplate
from pathlexengine.types import LocaleCode

__all__ = [
    "FindResult",
    "SimilarityMatcher",
    "compare",
]

_GROUP = re.compile(r"\(([^)]+)\)")
_SEGMENT = r"([^.]+)"


@dataclass(frozen=True, slots=True)
class FindResult:
    """One template that may have produced the searched text.

    Attributes:
        locale: Locale code of the matching store (internal variants keep "$")
        data: Captured path segments by group name
        similarity: Normalized similarity in (0, 1]
    """

    locale: LocaleCode
    data: dict[str, str] = field(default_factory=dict)
    similarity: float = 0.0


def compare(expect: str, actual: str, min_similarity: float = DEFAULT_MIN_SIMILARITY) -> float:
    """Return the normalized similarity of two strings, or 0.0 below the threshold.

    Args:
        expect: Stored template text
        actual: Text to compare against the template
        min_similarity: Threshold the similarity must reach

    Returns:
        Similarity if it is >= min_similarity, else 0.0. An empty template
        compares as 0.0.
    """
    if not expect:
        return 0.0
    value = 1 - Levenshtein.distance(expect, actual) / len(expect)
    return value if value >= min_similarity else 0.0


@functools.lru_cache(maxsize=128)
def _compile(pattern: str) -> tuple[re.Pattern[str], tuple[str, ...]]:
    groups: list[str] = []

    def capture(match: re.Match[str]) -> str:
        groups.append(match.group(1))
        return _SEGMENT

    # re.error on malformed patterns is left to propagate.
    return re.compile(_GROUP.sub(capture, pattern)), tuple(groups)


class SimilarityMatcher:
    """Reverse lookup over the templates in a LocaleRegistry."""

    __slots__ = ("_min_similarity", "_registry")

    def __init__(
        self, registry: LocaleRegistry, *, min_similarity: float = DEFAULT_MIN_SIMILARITY
    ) -> None:
        """Initialize matcher.

        Args:
            registry: Templates to search
            min_similarity: Default threshold for find()
        """
        self._registry = registry
        self._min_similarity = min_similarity

    @property
    def min_similarity(self) -> float:
        return self._min_similarity

    def compare(self, expect: str, actual: str, *, min_similarity: float | None = None) -> float:
        """compare() with this matcher's default threshold."""
        threshold = self._min_similarity if min_similarity is None else min_similarity
        return compare(expect, actual, threshold)

    def find(
        self,
        pattern: str,
        actual: str,
        *,
        min_similarity: float | None = None,
    ) -> list[FindResult]:
        """Find templates that may have rendered ``actual``.

        Args:
            pattern: Key-path pattern; "(name)" captures one path segment
            actual: Rendered text to look up
            min_similarity: Threshold for this call (default: matcher default)

        Returns:
            Matches in store order (locale creation, then path insertion).
            Preset templates are never matched.

        Raises:
            re.error: If the pattern is not a valid regular expression
        """
        if not actual:
            return []

        compiled, groups = _compile(pattern)
        results: list[FindResult] = []
        for locale, path, template in self._registry.entries():
            capture = compiled.fullmatch(path)
            if capture is None or not isinstance(template, PlainTemplate):
                continue
            similarity = self.compare(template.text, actual, min_similarity=min_similarity)
            if not similarity > 0:
                continue
            data = {name: capture.group(index) for index, name in enumerate(groups, start=1)}
            results.append(FindResult(locale=locale, data=data, similarity=similarity))
        return results
