"""
Outline document model: places, nested items, navigation links, parse diagnostics.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

PLACE_TYPES = ("place", "page", "component", "dialog")
ITEM_TYPES = ("item", "input", "button", "checkbox", "radio", "page", "component", "dialog")
# Types written as a ".suffix" on the label
SUFFIX_TYPES = ("input", "button", "page", "component", "dialog")


@dataclass
class Item:
    """One element inside a place; may own nested children."""
    id: str
    text: str
    type: str
    depth: int  # indentation of the source line
    children: list[Item] = field(default_factory=list)
    link: str | None = None
    is_separator: bool = False

    def _flat_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "text": self.text,
            "type": self.type,
            "children": [],
            "depth": self.depth,
        }
        if self.link is not None:
            out["link"] = self.link
        if self.is_separator:
            out["isSeparator"] = True
        return out

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready form consumed by renderers (camelCase keys)."""
        root = self._flat_dict()
        stack = [(self, root)]
        while stack:
            item, out = stack.pop()
            for child in item.children:
                child_out = child._flat_dict()
                out["children"].append(child_out)
                stack.append((child, child_out))
        return root


@dataclass
class Place:
    """Top-level screen / page / component / dialog."""
    id: str
    text: str
    type: str = "place"
    items: list[Item] = field(default_factory=list)


@dataclass(frozen=True)
class Link:
    """Navigation from an item (by id) to a target named by free text."""
    from_id: str
    to: str


@dataclass(frozen=True)
class Diagnostic:
    line: int  # 0-based
    kind: str
    text: str


@dataclass
class OutlineDocument:
    nodes: list[Place] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)


def iter_items(items: list[Item]):
    """Yield items depth-first, pre-order."""
    stack = list(reversed(items))
    while stack:
        item = stack.pop()
        yield item
        stack.extend(reversed(item.children))
