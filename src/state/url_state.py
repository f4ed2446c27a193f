"""
Editor state <-> compact URL-fragment string.

Fragments are LZ-string compressToBase64 output, the same encoding the browser
editor writes to location.hash. Current fragments hold a JSON object
{"text", "positions", "hasManualLayout"}; older ones hold the outline text
alone and decode to a state with just the text.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Mapping
from urllib.parse import unquote

from lzstring import LZString

logger = logging.getLogger(__name__)

_lz = LZString()


def _clean_positions(raw: Any) -> dict[str, dict[str, float]] | None:
    """Keep entries with numeric x/y only."""
    if not isinstance(raw, dict):
        return None
    out = {}
    for node_id, pos in raw.items():
        if isinstance(pos, dict) and all(isinstance(pos.get(k), (int, float)) for k in ("x", "y")):
            out[str(node_id)] = {"x": float(pos["x"]), "y": float(pos["y"])}
    return out or None


def encode_state(
    text: str,
    positions: Mapping[str, Mapping[str, float]] | None = None,
    has_manual_layout: bool = False,
) -> str:
    state: dict[str, Any] = {"text": text}
    if positions:
        state["positions"] = {k: {"x": v["x"], "y": v["y"]} for k, v in positions.items()}
    if has_manual_layout:
        state["hasManualLayout"] = True
    return _lz.compressToBase64(json.dumps(state, ensure_ascii=False, separators=(",", ":")))


def encode_text(text: str) -> str:
    """Legacy format: the outline text only, no wrapping object."""
    return _lz.compressToBase64(text)


def decode_state(fragment: str) -> dict[str, Any] | None:
    """
    Decode a fragment (leading '#' allowed) to {"text", "positions", "hasManualLayout"}.
    Returns None when the fragment is empty or cannot be decoded.
    """
    # browsers may percent-encode '+', '/' and '=' in the hash
    fragment = unquote((fragment or "").lstrip("#").strip())
    if not fragment:
        return None
    try:
        payload = _lz.decompressFromBase64(fragment)
    except (KeyError, IndexError, TypeError, ValueError, OverflowError) as e:
        logger.warning("Failed to decode state fragment: %s", e)
        return None
    if not payload:
        return None

    try:
        obj = json.loads(payload)
    except json.JSONDecodeError:
        obj = None
    if isinstance(obj, dict) and isinstance(obj.get("text"), str):
        return {
            "text": obj["text"],
            "positions": _clean_positions(obj.get("positions")),
            "hasManualLayout": bool(obj.get("hasManualLayout", False)),
        }
    return {"text": payload, "positions": None, "hasManualLayout": False}


def get_initial_state(fragment: str | None, default_text: str) -> dict[str, Any]:
    """Decoded state, or a state holding default_text when there is nothing usable."""
    state = decode_state(fragment or "")
    if state is None or not state["text"]:
        return {"text": default_text, "positions": None, "hasManualLayout": False}
    return state
