"""Outline: parse breadboard text into places, items and links; write it back."""
from .schema import Item, Place, Link, Diagnostic, OutlineDocument, iter_items, PLACE_TYPES, ITEM_TYPES
from .parse import parse_outline, decompose_label, indent_level, is_list_item, is_separator, MAX_NESTING_DEPTH
from .serialize import outline_to_text

__all__ = [
    "Item",
    "Place",
    "Link",
    "Diagnostic",
    "OutlineDocument",
    "iter_items",
    "PLACE_TYPES",
    "ITEM_TYPES",
    "parse_outline",
    "decompose_label",
    "indent_level",
    "is_list_item",
    "is_separator",
    "MAX_NESTING_DEPTH",
    "outline_to_text",
]
