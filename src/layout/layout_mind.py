"""
Export the outline tree to an XMind mind map: places under the root, items nested below.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any

from ..outline import Item, OutlineDocument


def _topic_title(text: str, node_type: str, default_type: str) -> str:
    title = text.strip() or "(untitled)"
    if node_type != default_type:
        title = f"{title} [{node_type}]"
    return title


def _add_items(parent_topic: Any, items: list[Item]) -> None:
    for item in items:
        if item.is_separator:
            continue
        sub = parent_topic.add_subtopic(_topic_title(item.text, item.type, "item"))
        _add_items(sub, item.children)


def build_xmind(
    doc: OutlineDocument,
    out_path: Path | str,
    *,
    sheet_title: str = "Breadboard",
) -> Path:
    """
    Build an XMind mind map from a parsed outline and save it to out_path.
    Non-default types are shown in brackets, e.g. "Username [input]".
    """
    try:
        from py_xmind16 import Workbook
    except ImportError as e:
        raise ImportError("py-xmind16 is required for --xmind. Install with: pip install py-xmind16") from e

    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    workbook = Workbook()
    sheet = workbook.create_sheet(sheet_title)
    root = sheet.get_root_topic()
    if not doc.nodes:
        root.title = "(No content)"
        workbook.save(str(out_path))
        return out_path

    root.title = sheet_title
    for place in doc.nodes:
        place_topic = root.add_subtopic(_topic_title(place.text, place.type, "place"))
        _add_items(place_topic, place.items)

    workbook.save(str(out_path))
    return out_path


def _walk_topics(xmind_path: Path | str):
    """Yield (parent title or None, title) for every titled topic, depth-first."""
    from py_xmind16 import Workbook

    w = Workbook.load(str(xmind_path))
    stack: list[tuple[str | None, Any]] = []
    for i in reversed(range(w.sheet_count)):
        root = w.get_sheet(i).root_topic
        if root:
            stack.append((None, root))
    while stack:
        parent_title, topic = stack.pop()
        t = getattr(topic, "title", None)
        if not t:
            continue
        current = str(t).strip()
        yield parent_title, current
        for st in reversed(list(getattr(topic, "subtopics", []) or [])):
            stack.append((current, st))


def load_xmind_topic_titles(xmind_path: Path | str) -> list[str]:
    """All topic titles in traversal order (for tests)."""
    return [title for _, title in _walk_topics(xmind_path)]


def load_xmind_parent_child_pairs(xmind_path: Path | str) -> list[tuple[str, str]]:
    """(parent_title, child_title) for each parent-child edge (for validation)."""
    return [(parent, title) for parent, title in _walk_topics(xmind_path) if parent is not None]
