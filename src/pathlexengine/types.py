"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the package and by user code
when annotating call sites.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping
from typing import Any

__all__ = [
    "KeyPath",
    "LocaleCode",
    "Node",
    "Params",
]

type LocaleCode = str
"""Opaque locale code (e.g., 'en-US', 'zh-CN', '$en-US', '')."""

type KeyPath = str
"""Dot-separated dictionary address (e.g., 'commands.help.description')."""

type Params = Any
"""Parameter bag handed to the markup expander or a preset renderer."""

type Node = str | Mapping[str, Node] | None
"""Dictionary node accepted by define(): a template, a nested mapping, or None."""
