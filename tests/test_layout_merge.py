"""Tests for keeping dragged positions across recomputed layouts."""
from __future__ import annotations

import copy
import json
from pathlib import Path

import pytest

from src.layout import build_graph, load_positions, merge_positions, positions_from_nodes, LIGHT_THEME
from src.outline import parse_outline


def test_saved_position_wins(login_graph) -> None:
    merged = merge_positions({"place-0": {"x": 300, "y": 10}}, login_graph["nodes"])
    assert merged[0]["position"] == {"x": 300.0, "y": 10.0}
    assert merged[1]["position"] == login_graph["nodes"][1]["position"]


def test_fresh_data_is_kept_and_inputs_untouched(login_graph) -> None:
    nodes_before = copy.deepcopy(login_graph["nodes"])
    saved = {"place-1": {"x": 1, "y": 2}}
    merged = merge_positions(saved, login_graph["nodes"])
    assert login_graph["nodes"] == nodes_before
    assert saved == {"place-1": {"x": 1, "y": 2}}
    assert [n["data"] for n in merged] == [n["data"] for n in nodes_before]


def test_new_and_removed_ids() -> None:
    """Ids missing from the fresh layout are dropped; new ids use computed positions."""
    old = build_graph(parse_outline("A\nB"), LIGHT_THEME)
    saved = positions_from_nodes(old["nodes"])
    saved["place-0"] = {"x": 999, "y": 999}
    fresh = build_graph(parse_outline("A\nB\nC"), LIGHT_THEME)
    merged = merge_positions(saved, fresh["nodes"])
    assert [n["id"] for n in merged] == ["place-0", "place-1", "place-2"]
    assert merged[0]["position"] == {"x": 999.0, "y": 999.0}
    assert merged[2]["position"] == fresh["nodes"][2]["position"]

    shrunk = build_graph(parse_outline("A"), LIGHT_THEME)
    assert [n["id"] for n in merge_positions(saved, shrunk["nodes"])] == ["place-0"]


def test_positions_from_nodes(login_graph) -> None:
    pos = positions_from_nodes(login_graph["nodes"])
    assert pos == {"place-0": {"x": 50, "y": 50}, "place-1": {"x": 50, "y": 270}}


def test_load_positions(tmp_path: Path) -> None:
    f = tmp_path / "positions.json"
    f.write_text(json.dumps({
        "place-0": {"x": 10, "y": 20.5},
        "place-1": {"x": "oops"},
        "place-2": None,
    }), encoding="utf-8")
    assert load_positions(f) == {"place-0": {"x": 10.0, "y": 20.5}}


def test_load_positions_rejects_non_object(tmp_path: Path) -> None:
    f = tmp_path / "positions.json"
    f.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_positions(f)
