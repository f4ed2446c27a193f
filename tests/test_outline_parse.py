"""Tests for outline parsing: places, item types, nesting, links, diagnostics."""
from __future__ import annotations

import pytest

from src.outline import (
    MAX_NESTING_DEPTH,
    Item,
    Link,
    decompose_label,
    indent_level,
    is_list_item,
    is_separator,
    iter_items,
    parse_outline,
)


def test_login_scenario(login_doc) -> None:
    """Two places; button item carries its link; links collected in order."""
    assert [p.text for p in login_doc.nodes] == ["Login Page", "Dashboard"]
    assert [p.id for p in login_doc.nodes] == ["place-0", "place-1"]
    assert all(p.type == "place" for p in login_doc.nodes)

    username, login = login_doc.nodes[0].items
    assert (username.text, username.type, username.link) == ("Username", "input", None)
    assert (login.text, login.type, login.link) == ("Login", "button", "Dashboard")
    assert login.id == "item-2-1"

    assert login_doc.links == [
        Link(from_id="item-2-1", to="Dashboard"),
        Link(from_id="item-5-0", to="Login Page"),
    ]
    assert login_doc.diagnostics == []


def test_checkbox_item() -> None:
    doc = parse_outline("Login\n- [] Remember me")
    item = doc.nodes[0].items[0]
    assert item.type == "checkbox"
    assert item.text == "Remember me"
    assert item.link is None
    assert doc.links == []


def test_radio_item() -> None:
    item = parse_outline("Form\n- () Option A").nodes[0].items[0]
    assert (item.type, item.text) == ("radio", "Option A")


def test_separator_item() -> None:
    doc = parse_outline("Page\n- Above\n- ---\n- Below")
    sep = doc.nodes[0].items[1]
    assert sep.is_separator is True
    assert sep.text == ""
    assert sep.children == []
    assert sep.link is None
    assert sep.id == "separator-2"
    # separators do not advance the sibling counter
    assert doc.nodes[0].items[2].id == "item-3-1"
    assert doc.links == []


def test_nested_items() -> None:
    doc = parse_outline("Page\n- Parent\n  - Child.input")
    (parent,) = doc.nodes[0].items
    assert (parent.text, parent.type, parent.depth) == ("Parent", "item", 0)
    (child,) = parent.children
    assert (child.text, child.type) == ("Child", "input")
    assert child.depth == parent.depth + 2


def test_children_have_greater_depth() -> None:
    doc = parse_outline("P\n- a\n  - b\n    - c\n  - d\n- e")

    def check(items):
        for item in items:
            for child in item.children:
                assert child.depth > item.depth
            check(item.children)

    check(doc.nodes[0].items)
    texts = [i.text for i in iter_items(doc.nodes[0].items)]
    assert texts == ["a", "b", "c", "d", "e"]


def test_blank_lines_are_skipped_inside_nested_lists() -> None:
    doc = parse_outline("Page\n- A\n  - B\n\n  - C\n\n- D")
    a, d = doc.nodes[0].items
    assert [c.text for c in a.children] == ["B", "C"]
    assert [c.id for c in a.children] == ["item-2-0", "item-4-1"]
    assert d.text == "D"
    assert doc.diagnostics == []


def test_blank_lines_between_place_and_items() -> None:
    doc = parse_outline("Page\n\n\n- First")
    assert [i.text for i in doc.nodes[0].items] == ["First"]


def test_shallower_line_ends_subtree_and_is_reported() -> None:
    doc = parse_outline("Page\n- A\n    - B\n  - C\n- D")
    a, d = doc.nodes[0].items
    assert [c.text for c in a.children] == ["B"]
    assert d.text == "D"
    assert [(x.line, x.kind) for x in doc.diagnostics] == [(3, "orphan-item")]


def test_items_under_separator_are_reported() -> None:
    doc = parse_outline("Page\n- ---\n  - hidden")
    assert len(doc.nodes[0].items) == 1
    assert doc.diagnostics[0].kind == "separator-children-ignored"


def test_non_list_lines_are_ignored() -> None:
    doc = parse_outline("- stray\nPage\n- A\n  just a note\n- B")
    assert [p.text for p in doc.nodes] == ["Page"]
    assert [i.text for i in doc.nodes[0].items] == ["A"]
    kinds = [(x.line, x.kind) for x in doc.diagnostics]
    assert (0, "orphan-item") in kinds
    assert (3, "ignored-line") in kinds


def test_non_list_line_at_column_zero_starts_a_new_place() -> None:
    doc = parse_outline("Page\n- A\nNext\n- B")
    assert [p.text for p in doc.nodes] == ["Page", "Next"]
    assert doc.nodes[1].items[0].text == "B"


@pytest.mark.parametrize(
    "header,expected_text,expected_type",
    [
        ("Home.page", "Home", "page"),
        ("Header.component", "Header", "component"),
        ("Confirm.dialog", "Confirm", "dialog"),
        ("Submit.button", "Submit", "place"),
        ("Name.input", "Name", "place"),
        ("[] Agree", "Agree", "place"),
        ("Plain", "Plain", "place"),
    ],
)
def test_place_type_resolution(header: str, expected_text: str, expected_type: str) -> None:
    place = parse_outline(header).nodes[0]
    assert (place.text, place.type) == (expected_text, expected_type)


def test_link_on_place_header_is_dropped() -> None:
    doc = parse_outline("Home => Elsewhere\n- A")
    assert doc.nodes[0].text == "Home"
    assert doc.links == []
    assert doc.diagnostics[0].kind == "place-link-ignored"


def test_item_may_declare_place_level_type() -> None:
    item = parse_outline("P\n- Settings.dialog").nodes[0].items[0]
    assert (item.text, item.type) == ("Settings", "dialog")


def test_links_collected_depth_first_pre_order() -> None:
    doc = parse_outline("P\n- a => X\n  - b => Y\n- c => Z\nQ\n- d => W")
    assert [l.to for l in doc.links] == ["X", "Y", "Z", "W"]
    assert all(l.from_id for l in doc.links)


def test_ids_unique() -> None:
    doc = parse_outline("P\n- a\n- ---\n  - x\n- b\n  - c\n    - d\nQ\n- a\n- ---")
    ids = [p.id for p in doc.nodes] + [i.id for p in doc.nodes for i in iter_items(p.items)]
    assert len(ids) == len(set(ids))


def test_parse_is_idempotent(login_outline: str) -> None:
    assert parse_outline(login_outline) == parse_outline(login_outline)


def test_ids_depend_on_line_position() -> None:
    before = parse_outline("P\n- a\n- b")
    after = parse_outline("\nP\n- a\n- b")
    assert [i.id for i in before.nodes[0].items] == ["item-1-0", "item-2-1"]
    assert [i.id for i in after.nodes[0].items] == ["item-2-0", "item-3-1"]


@pytest.mark.parametrize("text", ["", "\n\n", "   ", "- - -", "\t\t- x", "  indented text"])
def test_malformed_input_never_raises(text: str) -> None:
    doc = parse_outline(text)
    assert doc.nodes == []


def test_tabs_count_as_one_indent() -> None:
    assert indent_level("\t  x") == 3
    doc = parse_outline("Page\n- A\n\t- B")
    assert doc.nodes[0].items[0].children[0].depth == 1


def test_crlf_line_endings() -> None:
    doc = parse_outline("Page\r\n- Go.button => Page\r\n- ---\r\n")
    go, sep = doc.nodes[0].items
    assert (go.text, go.type, go.link) == ("Go", "button", "Page")
    assert sep.is_separator


def test_list_and_separator_patterns() -> None:
    assert is_list_item("- a")
    assert is_list_item("   -\tb")
    assert not is_list_item("-a")
    assert not is_list_item("a - b")
    assert is_separator("- ---")
    assert is_separator("  -   -----  ")
    assert not is_separator("- --")
    assert not is_separator("- --- x")


@pytest.mark.parametrize(
    "content,expected",
    [
        ("Login.button => Dashboard", ("button", "Login", "Dashboard")),
        ("Login.button=>Dashboard", ("button", "Login", "Dashboard")),
        ("[] Accept => Terms", ("checkbox", "Accept", "Terms")),
        ("() Yes", ("radio", "Yes", None)),
        ("a.b.button", ("button", "a.b", None)),
        ("version 1.2", ("item", "version 1.2", None)),
        ("Name.Input", ("item", "Name.Input", None)),
        ("=> X", ("item", "=> X", None)),
        ("A => B => C", ("item", "A", "B => C")),
        ("[].button", ("checkbox", ".button", None)),
    ],
)
def test_decompose_label(content: str, expected: tuple) -> None:
    assert decompose_label(content) == expected


def _deep_outline(levels: int) -> str:
    return "P\n" + "\n".join(" " * k + "- x" for k in range(levels))


def test_deep_nesting_is_capped_and_reported() -> None:
    doc = parse_outline(_deep_outline(1200) + "\n\nQ\n- y => P")
    assert [p.text for p in doc.nodes] == ["P", "Q"]
    chain = list(iter_items(doc.nodes[0].items))
    assert len(chain) == MAX_NESTING_DEPTH
    assert all(len(item.children) <= 1 for item in chain)
    assert chain[-1].depth == MAX_NESTING_DEPTH - 1
    assert chain[-1].children == []
    kinds = {d.kind for d in doc.diagnostics}
    assert kinds == {"nesting-too-deep"}
    assert len(doc.diagnostics) == 1200 - MAX_NESTING_DEPTH
    assert doc.diagnostics[0].line == MAX_NESTING_DEPTH + 1
    assert doc.links == [Link(from_id=doc.nodes[1].items[0].id, to="P")]


def test_nesting_at_the_cap_is_kept_whole() -> None:
    doc = parse_outline(_deep_outline(MAX_NESTING_DEPTH))
    assert len(list(iter_items(doc.nodes[0].items))) == MAX_NESTING_DEPTH
    assert doc.diagnostics == []


def test_deep_item_trees_walk_without_recursion() -> None:
    """Trees built by hand may be deeper than the parser allows."""
    root = Item(id="item-0-0", text="0", type="item", depth=0)
    node = root
    for k in range(1, 3000):
        child = Item(id=f"item-{k}-0", text=str(k), type="item", depth=k)
        node.children.append(child)
        node = child

    assert [i.text for i in iter_items([root])][:3] == ["0", "1", "2"]
    assert len(list(iter_items([root]))) == 3000

    d = root.to_dict()
    count = 0
    while d["children"]:
        d = d["children"][0]
        count += 1
    assert count == 2999
    assert d["text"] == "2999"
