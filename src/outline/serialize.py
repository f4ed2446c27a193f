"""
Render an OutlineDocument back to outline text (normalized indentation).
"""
from __future__ import annotations

from .schema import SUFFIX_TYPES, Item, OutlineDocument


def _label(text: str, node_type: str) -> str:
    if node_type == "checkbox":
        return f"[] {text}"
    if node_type == "radio":
        return f"() {text}"
    if node_type in SUFFIX_TYPES:
        return f"{text}.{node_type}"
    return text


def _item_lines(items: list[Item], level: int, indent: str) -> list[str]:
    out = []
    stack = [(item, level) for item in reversed(items)]
    while stack:
        item, lvl = stack.pop()
        prefix = indent * lvl + "- "
        if item.is_separator:
            out.append(prefix + "---")
            continue
        line = prefix + _label(item.text, item.type)
        if item.link:
            line += f" => {item.link}"
        out.append(line)
        stack.extend((child, lvl + 1) for child in reversed(item.children))
    return out


def outline_to_text(doc: OutlineDocument, indent: str = "  ") -> str:
    """One block per place, separated by a blank line."""
    blocks = []
    for place in doc.nodes:
        header = place.text if place.type == "place" else f"{place.text}.{place.type}"
        blocks.append("\n".join([header] + _item_lines(place.items, 0, indent)))
    return "\n\n".join(blocks)
