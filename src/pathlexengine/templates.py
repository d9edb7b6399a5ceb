"""Stored template variants.

A key path resolves to exactly one of two variants:

    PlainTemplate  - markup text expanded by the markup expander
    PresetTemplate - a value rendered by a registered preset renderer

Both are immutable value objects; equality is structural, which is what the
override check in PathStore compares.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

__all__ = [
    "PlainTemplate",
    "PresetTemplate",
    "Template",
]


@dataclass(frozen=True, slots=True)
class PlainTemplate:
    """Markup text with {placeholder} references.

    Attributes:
        text: Template source
    """

    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class PresetTemplate:
    """Value rendered by the preset renderer registered under ``tag``.

    Attributes:
        source: The node defined under the "path@tag" key, unchanged
            (a string or a nested mapping)
        tag: Preset renderer tag
    """

    source: str | Mapping[str, Any]
    tag: str

    def __hash__(self) -> int:
        # Mapping sources are unhashable; the tag is enough to spread buckets.
        return hash(("preset", self.tag))


type Template = PlainTemplate | PresetTemplate
"""Any stored dictionary value."""
