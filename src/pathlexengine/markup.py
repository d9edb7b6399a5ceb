"""Default markup expander and output nodes.

Templates are plain text with ``{expression}`` placeholders. expand() splits
a template into output elements: literal runs become text elements and each
placeholder is replaced by the value its dotted expression names in the
parameter bag.

    >>> to_text(expand("Hello, {user.name}!", {"user": {"name": "Anna"}}))
    'Hello, Anna!'
    >>> to_text(expand("{0} and {1}", ["tea", "cake"]))
    'tea and cake'

A parameter that is itself an Element (or a sequence of Elements) is spliced
into the output unchanged, so callers can embed rich content.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from html import escape
from typing import Any

from pathlexengine.types import Params

__all__ = [
    "Element",
    "MarkupExpander",
    "expand",
    "text",
    "to_text",
]

_PLACEHOLDER = re.compile(r"\{([^{}]*)\}")


@dataclass(frozen=True, slots=True)
class Element:
    """Output node.

    Attributes:
        type: Element type ("text" for plain text)
        attrs: Element attributes; text elements carry "content"
        children: Child elements
    """

    type: str
    attrs: Mapping[str, Any] = field(default_factory=dict)
    children: tuple[Element, ...] = ()

    def __str__(self) -> str:
        if self.type == "text":
            return str(self.attrs.get("content", ""))
        attrs = "".join(
            f' {key}="{escape(str(value))}"' for key, value in self.attrs.items()
        )
        if not self.children:
            return f"<{self.type}{attrs}/>"
        inner = "".join(str(child) for child in self.children)
        return f"<{self.type}{attrs}>{inner}</{self.type}>"


type MarkupExpander = Callable[[str, Params], list[Element]]
"""Expands a template string against parameters into output elements."""


def text(content: str) -> Element:
    """Build a text element."""
    return Element("text", {"content": content})


def to_text(nodes: Iterable[Element]) -> str:
    """Join output elements into a string."""
    return "".join(str(node) for node in nodes)


def _resolve(params: Params, expression: str) -> Any:
    value = params
    for segment in expression.split("."):
        if value is None:
            return None
        match value:
            case Mapping():
                value = value.get(segment)
            case Sequence() if segment.isdigit() and not isinstance(value, str):
                index = int(segment)
                value = value[index] if index < len(value) else None
            case _:
                value = getattr(value, segment, None)
    return value


def _is_element_sequence(value: Any) -> bool:
    return (
        isinstance(value, (list, tuple))
        and bool(value)
        and all(isinstance(item, Element) for item in value)
    )


def expand(template: str, params: Params = None) -> list[Element]:
    """Expand a template against parameters.

    Args:
        template: Template text with {expression} placeholders
        params: Mapping, sequence or object the expressions are resolved in

    Returns:
        Output elements; an empty template yields an empty list. Expressions
        that resolve to None expand to nothing.
    """
    nodes: list[Element] = []
    position = 0
    for match in _PLACEHOLDER.finditer(template):
        if match.start() > position:
            nodes.append(text(template[position : match.start()]))
        position = match.end()

        expression = match.group(1).strip()
        value = _resolve(params, expression) if expression else None
        if value is None:
            continue
        if isinstance(value, Element):
            nodes.append(value)
        elif _is_element_sequence(value):
            nodes.extend(value)
        else:
            nodes.append(text(str(value)))

    if position < len(template):
        nodes.append(text(template[position:]))
    return nodes
