"""
Keep user-chosen positions across recomputed layouts.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping

logger = logging.getLogger(__name__)


def merge_positions(
    saved_positions: Mapping[str, Mapping[str, float]],
    fresh_nodes: list[dict[str, Any]],
) -> list[dict[str, Any]]:
    """
    Fresh nodes with saved positions applied by id. Node data always comes from
    the fresh layout; ids without a saved position keep the computed one.
    """
    merged = []
    for node in fresh_nodes:
        out = dict(node)
        saved = saved_positions.get(node["id"])
        if saved is not None:
            out["position"] = {"x": float(saved["x"]), "y": float(saved["y"])}
        else:
            out["position"] = dict(node["position"])
        merged.append(out)
    return merged


def positions_from_nodes(nodes: list[dict[str, Any]]) -> dict[str, dict[str, float]]:
    return {n["id"]: dict(n["position"]) for n in nodes}


def load_positions(path: Path | str) -> dict[str, dict[str, float]]:
    """
    Read a {id: {x, y}} JSON file (as saved from the HTML canvas).
    Entries without numeric x/y are skipped.
    """
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise ValueError(f"Positions file must hold a JSON object: {path}")
    positions: dict[str, dict[str, float]] = {}
    for node_id, pos in raw.items():
        try:
            positions[str(node_id)] = {"x": float(pos["x"]), "y": float(pos["y"])}
        except (KeyError, TypeError, ValueError):
            logger.warning("Skipping invalid position for %s: %r", node_id, pos)
    return positions
