"""
Parse breadboard outline text into places, nested items and navigation links.

The parser is permissive: it never raises. Lines it cannot place in the tree are
skipped and reported as diagnostics on the returned document.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from .schema import Diagnostic, Item, Link, OutlineDocument, Place, iter_items

logger = logging.getLogger(__name__)

# Item nesting levels kept under one place; deeper lines become diagnostics
MAX_NESTING_DEPTH = 200

_INDENT_RE = re.compile(r"^(\s*)")
_LIST_ITEM_RE = re.compile(r"^\s*-\s+")
_SEPARATOR_RE = re.compile(r"^\s*-\s+-{3,}\s*$")
_LINK_RE = re.compile(r"^(.+?)\s*=>\s*(.+)$")
_SUFFIX_RE = re.compile(r"^(.+?)\.(input|button|page|component|dialog)$")

# Item types a place header may keep; anything else falls back to "place"
_PLACE_HEADER_TYPES = ("page", "component", "dialog")


def indent_level(line: str) -> int:
    """Leading whitespace count; a tab counts as one."""
    m = _INDENT_RE.match(line)
    return len(m.group(1)) if m else 0


def is_list_item(line: str) -> bool:
    return bool(_LIST_ITEM_RE.match(line))


def is_separator(line: str) -> bool:
    """'- ---' (three or more dashes after the list marker)."""
    return bool(_SEPARATOR_RE.match(line))


def decompose_label(content: str) -> tuple[str, str, str | None]:
    """
    Split one line's content into (type, label, link target).

    Order: '=>' link first, then '[]' checkbox, '()' radio, '.type' suffix.
    """
    label = content.strip()
    node_type = "item"
    link: str | None = None

    m = _LINK_RE.match(label)
    if m:
        label = m.group(1).strip()
        link = m.group(2).strip()

    if label.startswith("[]"):
        node_type = "checkbox"
        label = label[2:].strip()
    elif label.startswith("()"):
        node_type = "radio"
        label = label[2:].strip()
    elif "." in label:
        m = _SUFFIX_RE.match(label)
        if m:
            label = m.group(1).strip()
            node_type = m.group(2)

    return node_type, label, link


@dataclass
class _Level:
    """One open sibling list while items are being consumed."""
    items: list[Item]
    base: int
    count: int = 0  # non-separator items so far, used in ids


class _OutlineParser:
    """Single-use parser state: source lines plus collected diagnostics."""

    def __init__(self, text: str) -> None:
        self.lines = text.split("\n")
        self.diagnostics: list[Diagnostic] = []

    def _note(self, index: int, kind: str) -> None:
        self.diagnostics.append(Diagnostic(line=index, kind=kind, text=self.lines[index]))

    def _skip_blank(self, i: int) -> int:
        while i < len(self.lines) and not self.lines[i].strip():
            i += 1
        return i

    def parse_items(self, start: int, base: int) -> tuple[list[Item], int]:
        """
        Consume list items at indentation `base` starting at line `start`, with
        their nested subtrees. Returns (items, index of first line not consumed).

        Open subtrees live on an explicit stack of _Level frames; at most
        MAX_NESTING_DEPTH of them are open at once.
        """
        lines = self.lines
        top: list[Item] = []
        stack: list[_Level] = [_Level(top, base)]
        i = start
        while i < len(lines):
            line = lines[i]
            if not line.strip():
                i += 1
                continue
            if not is_list_item(line):
                break
            depth = indent_level(line)
            # a shallower line closes every subtree deeper than it
            while len(stack) > 1 and depth < stack[-1].base:
                stack.pop()
            level = stack[-1]
            if depth < level.base:
                break
            if depth > level.base:
                # deeper line that does not follow an item at this level
                if level.items and level.items[-1].is_separator:
                    self._note(i, "separator-children-ignored")
                elif level.items and len(stack) >= MAX_NESTING_DEPTH:
                    self._note(i, "nesting-too-deep")
                else:
                    self._note(i, "orphan-item")
                i += 1
                continue

            if is_separator(line):
                level.items.append(
                    Item(id=f"separator-{i}", text="", type="item", depth=depth, is_separator=True)
                )
                i += 1
                continue

            content = _LIST_ITEM_RE.sub("", line, count=1)
            node_type, label, link = decompose_label(content)
            item = Item(id=f"item-{i}-{level.count}", text=label, type=node_type, depth=depth, link=link)
            level.count += 1
            level.items.append(item)
            i += 1

            nxt = self._skip_blank(i)
            if nxt < len(lines) and is_list_item(lines[nxt]) and len(stack) < MAX_NESTING_DEPTH:
                child_depth = indent_level(lines[nxt])
                if child_depth > depth:
                    stack.append(_Level(item.children, child_depth))
                    i = nxt
        return top, i

    def parse(self) -> OutlineDocument:
        lines = self.lines
        doc = OutlineDocument(diagnostics=self.diagnostics)
        i = 0
        while i < len(lines):
            line = lines[i]
            if not line.strip():
                i += 1
                continue
            if indent_level(line) != 0 or is_list_item(line):
                self._note(i, "orphan-item" if is_list_item(line) else "ignored-line")
                i += 1
                continue

            node_type, label, link = decompose_label(line)
            if link is not None:
                self._note(i, "place-link-ignored")
            place = Place(
                id=f"place-{len(doc.nodes)}",
                text=label,
                type=node_type if node_type in _PLACE_HEADER_TYPES else "place",
            )
            i = self._skip_blank(i + 1)
            if i < len(lines) and is_list_item(lines[i]):
                place.items, i = self.parse_items(i, indent_level(lines[i]))
            doc.nodes.append(place)
            doc.links.extend(
                Link(from_id=item.id, to=item.link) for item in iter_items(place.items) if item.link
            )
        return doc


def parse_outline(text: str) -> OutlineDocument:
    """Parse outline text; never raises on malformed input."""
    doc = _OutlineParser(text or "").parse()
    logger.debug(
        "Parsed outline: %d place(s), %d link(s), %d diagnostic(s)",
        len(doc.nodes), len(doc.links), len(doc.diagnostics),
    )
    return doc
