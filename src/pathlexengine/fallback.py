"""Locale tree and fallback ranking.

The locale tree is built once from the configured locale list. Each code is
linked under its general-purpose ancestors, and every top-level language
hangs off the root locale (""):

    ""
    ├── zh
    │   ├── zh-CN
    │   └── zh-TW
    └── en
        └── en-US

fallback() turns a ranked request into the ordered, duplicate-free list of
locales the renderer tries:

    >>> tree = LocaleTree.from_locales(["zh-CN", "en-US"])
    >>> fallback(tree, ["en-US"])
    ('en-US', 'en', 'zh-CN', 'zh', '')

Python 3.13+.
"""

from __future__ import annotations

import functools
from collections.abc import Iterable, Iterator

from pathlexengine.constants import MAX_FALLBACK_CACHE_SIZE, ROOT_LOCALE
from pathlexengine.locale_utils import locale_ancestors
from pathlexengine.types import LocaleCode

__all__ = [
    "FallbackResolver",
    "LocaleTree",
    "fallback",
]


class LocaleTree:
    """Parent/child relationships between configured locales.

    Attributes:
        defaults: Configured locale codes, in configured order
    """

    __slots__ = ("_children", "_defaults", "_parents")

    def __init__(self) -> None:
        self._parents: dict[LocaleCode, LocaleCode | None] = {ROOT_LOCALE: None}
        self._children: dict[LocaleCode, list[LocaleCode]] = {ROOT_LOCALE: []}
        self._defaults: list[LocaleCode] = []

    @classmethod
    def from_locales(cls, locales: Iterable[LocaleCode]) -> LocaleTree:
        """Build a tree from a configured locale list.

        Args:
            locales: Locale codes in fallback order; duplicates are ignored

        Returns:
            New LocaleTree
        """
        tree = cls()
        for locale in locales:
            tree._insert(locale)
        return tree

    def _insert(self, locale: LocaleCode) -> None:
        if locale not in self._defaults and locale != ROOT_LOCALE:
            self._defaults.append(locale)

        parent = ROOT_LOCALE
        for code in (*reversed(locale_ancestors(locale)), locale):
            if code not in self._parents:
                self._parents[code] = parent
                self._children[code] = []
                self._children[parent].append(code)
            parent = code

    @property
    def defaults(self) -> tuple[LocaleCode, ...]:
        return tuple(self._defaults)

    def parent(self, locale: LocaleCode) -> LocaleCode | None:
        """Return the parent of a locale in the tree (None for the root or unknown)."""
        return self._parents.get(locale)

    def children(self, locale: LocaleCode) -> tuple[LocaleCode, ...]:
        return tuple(self._children.get(locale, ()))

    def ancestors(self, locale: LocaleCode) -> tuple[LocaleCode, ...]:
        """Return the ancestor chain of a locale, nearest first, excluding the root."""
        chain: list[LocaleCode] = []
        parent = self._parents.get(locale)
        while parent is not None and parent != ROOT_LOCALE:
            chain.append(parent)
            parent = self._parents.get(parent)
        return tuple(chain)

    def __contains__(self, locale: object) -> bool:
        return locale in self._parents

    def __iter__(self) -> Iterator[LocaleCode]:
        """Iterate all locales depth-first from the root, children in insertion order."""
        stack = [ROOT_LOCALE]
        while stack:
            locale = stack.pop()
            yield locale
            stack.extend(reversed(self._children[locale]))

    def __len__(self) -> int:
        return len(self._parents)

    def __repr__(self) -> str:
        return f"LocaleTree(defaults={self._defaults!r})"


def fallback(tree: LocaleTree, locales: Iterable[LocaleCode]) -> tuple[LocaleCode, ...]:
    """Rank requested locales into the full candidate search order.

    Order:
        1. Each requested locale present in the tree, immediately followed by
           its ancestor chain. A requested locale absent from the tree
           contributes its nearest ancestor that is present, and that
           ancestor's chain.
        2. Each configured default locale, followed by its ancestor chain.
        3. The root locale.

    A locale already placed is never repeated.

    Args:
        tree: Locale tree built from the configured locales
        locales: Requested locales, most preferred first

    Returns:
        Ordered, duplicate-free tuple ending with the root locale
    """
    # dict keeps insertion order and gives O(1) membership
    result: dict[LocaleCode, None] = {}

    def place(locale: LocaleCode) -> None:
        result.setdefault(locale)
        for ancestor in tree.ancestors(locale):
            result.setdefault(ancestor)

    for locale in locales:
        if locale in tree:
            place(locale)
            continue
        for ancestor in locale_ancestors(locale):
            if ancestor in tree:
                place(ancestor)
                break

    for locale in tree.defaults:
        place(locale)

    result.setdefault(ROOT_LOCALE)
    return tuple(result)


class FallbackResolver:
    """Memoizing front end to fallback() for one locale tree.

    The tree is read-only after construction, so results are cached per
    requested tuple.
    """

    __slots__ = ("_resolve", "_tree")

    def __init__(self, tree: LocaleTree) -> None:
        self._tree = tree
        self._resolve = functools.lru_cache(maxsize=MAX_FALLBACK_CACHE_SIZE)(
            functools.partial(fallback, tree)
        )

    @property
    def tree(self) -> LocaleTree:
        return self._tree

    def resolve(self, locales: Iterable[LocaleCode]) -> tuple[LocaleCode, ...]:
        """Return the candidate search order for a ranked request."""
        return self._resolve(tuple(locales))

    def clear_cache(self) -> None:
        self._resolve.cache_clear()
