"""
Outline document -> positioned place nodes, colored handles and edges.

Two pure steps: resolve_links() builds an immutable table (color and target per
link, in link order), then build_graph() maps that table onto render records.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

from ..outline import OutlineDocument, parse_outline, iter_items
from .theme import Theme

logger = logging.getLogger(__name__)

START_X = 50
START_Y = 50
VERTICAL_SPACING = 40
PLACE_BASE_HEIGHT = 80
ITEM_HEIGHT = 50

PLACE_NODE_TYPE = "breadboardPlace"
EDGE_TYPE = "smoothstep"


@dataclass(frozen=True)
class LinkResolution:
    """Where one link points and which color it draws with."""
    index: int
    source_item_id: str
    source_place_id: str | None
    target_name: str
    color: str
    target_kind: str | None = None  # "place", "item" or None when unresolved
    target_id: str | None = None
    target_place_id: str | None = None

    @property
    def resolved(self) -> bool:
        return self.target_kind is not None


def source_handle_id(item_id: str) -> str:
    return f"{item_id}-source"


def target_handle_id(item_id: str) -> str:
    return f"{item_id}-target"


def place_target_handle_id(place_id: str) -> str:
    return f"{place_id}-place-target"


def item_place_map(doc: OutlineDocument) -> dict[str, str]:
    """item id -> id of the place owning it (nested items included)."""
    return {item.id: place.id for place in doc.nodes for item in iter_items(place.items)}


def find_target(doc: OutlineDocument, name: str) -> tuple[str | None, str | None, str | None]:
    """
    Case-insensitive exact match: all place texts first, then every item tree
    depth-first in document order. Returns (kind, target id, owning place id).
    """
    wanted = name.lower()
    for place in doc.nodes:
        if place.text.lower() == wanted:
            return "place", place.id, place.id
    for place in doc.nodes:
        for item in iter_items(place.items):
            if not item.is_separator and item.text.lower() == wanted:
                return "item", item.id, place.id
    return None, None, None


def resolve_links(doc: OutlineDocument, palette: Sequence[str]) -> tuple[LinkResolution, ...]:
    """Assign each link its palette color by position, then resolve its target."""
    colors = list(palette)
    if not colors:
        raise ValueError("Theme has no edge colors")
    owners = item_place_map(doc)
    table = []
    for index, link in enumerate(doc.links):
        color = colors[index % len(colors)]
        kind, target_id, target_place = find_target(doc, link.to)
        if kind is None:
            logger.debug("Link %d from %s to %r matched nothing", index, link.from_id, link.to)
        table.append(
            LinkResolution(
                index=index,
                source_item_id=link.from_id,
                source_place_id=owners.get(link.from_id),
                target_name=link.to,
                color=color,
                target_kind=kind,
                target_id=target_id,
                target_place_id=target_place,
            )
        )
    return tuple(table)


def place_positions(doc: OutlineDocument) -> dict[str, dict[str, float]]:
    """
    Vertical stack in document order. Height is estimated from direct items
    only; nested children do not add to it.
    """
    positions = {}
    y = START_Y
    for place in doc.nodes:
        positions[place.id] = {"x": START_X, "y": y}
        y += PLACE_BASE_HEIGHT + len(place.items) * ITEM_HEIGHT + VERTICAL_SPACING
    return positions


def _handle_colors(table: tuple[LinkResolution, ...]) -> dict[str, str]:
    """handle id -> color; later links overwrite earlier ones on a shared target."""
    colors: dict[str, str] = {}
    for res in table:
        colors[source_handle_id(res.source_item_id)] = res.color
        if res.target_kind == "place":
            colors[place_target_handle_id(res.target_id)] = res.color
        elif res.target_kind == "item":
            colors[target_handle_id(res.target_id)] = res.color
    return colors


def _edge_record(res: LinkResolution) -> dict[str, Any]:
    target_item = res.target_id if res.target_kind == "item" else None
    edge: dict[str, Any] = {
        "id": f"{res.source_item_id}-{target_item or res.target_place_id}",
        "source": res.source_place_id,
        "sourceHandle": source_handle_id(res.source_item_id),
        "target": res.target_place_id,
        "color": res.color,
        "type": EDGE_TYPE,
        "animated": True,
        "style": {"stroke": res.color, "strokeWidth": 2},
    }
    if target_item:
        edge["targetHandle"] = target_handle_id(target_item)
    return edge


def build_graph(doc: OutlineDocument, theme: Theme) -> dict[str, list[dict[str, Any]]]:
    """Render-ready {"nodes": [...], "edges": [...]}; inputs are not modified."""
    table = resolve_links(doc, theme["edge_colors"])
    handle_colors = _handle_colors(table)
    item_targets = {r.target_id for r in table if r.target_kind == "item"}
    place_targets = {r.target_id for r in table if r.target_kind == "place"}
    positions = place_positions(doc)

    nodes = []
    for place in doc.nodes:
        place_items = list(iter_items(place.items))
        own_handles = {place_target_handle_id(place.id)}
        for item in place_items:
            own_handles.add(source_handle_id(item.id))
            own_handles.add(target_handle_id(item.id))
        nodes.append({
            "id": place.id,
            "type": PLACE_NODE_TYPE,
            "position": dict(positions[place.id]),
            "data": {
                "label": place.text,
                "nodeType": place.type,
                "items": [item.to_dict() for item in place.items],
                "placeId": place.id,
                "linkTargets": [item.id for item in place_items if item.id in item_targets],
                "hasIncomingLinks": place.id in place_targets,
                "handleColors": {h: c for h, c in handle_colors.items() if h in own_handles},
                "darkMode": bool(theme["dark"]),
            },
            "draggable": True,
        })

    edges = [
        _edge_record(res)
        for res in table
        if res.resolved and res.source_place_id and res.target_place_id
    ]
    return {"nodes": nodes, "edges": edges}


def compile_outline(text: str, theme: Theme) -> dict[str, list[dict[str, Any]]]:
    """parse + build; any failure renders nothing instead of propagating."""
    try:
        return build_graph(parse_outline(text), theme)
    except Exception:
        logger.exception("Failed to build graph from outline")
        return {"nodes": [], "edges": []}
