"""
Light / dark themes; the edge palette is shared and reused cyclically per link.
"""
from __future__ import annotations

from typing import TypedDict

EDGE_COLORS = [
    "#3b82f6",  # blue-500
    "#a855f7",  # purple-500
    "#f59e0b",  # amber-500
    "#10b981",  # emerald-500
    "#ec4899",  # pink-500
    "#06b6d4",  # cyan-500
    "#f97316",  # orange-500
    "#8b5cf6",  # violet-500
    "#14b8a6",  # teal-500
    "#f43f5e",  # rose-500
]


class Theme(TypedDict):
    name: str
    dark: bool
    edge_colors: list[str]
    handle_fallback: str
    background: str
    place_fill: str
    item_fill: str
    border: str
    text: str


LIGHT_THEME: Theme = {
    "name": "light",
    "dark": False,
    "edge_colors": EDGE_COLORS,
    "handle_fallback": "#94a3b8",
    "background": "#f9fafb",
    "place_fill": "#ffffff",
    "item_fill": "#ffffff",
    "border": "#d1d5db",
    "text": "#111827",
}

DARK_THEME: Theme = {
    "name": "dark",
    "dark": True,
    "edge_colors": EDGE_COLORS,
    "handle_fallback": "#94a3b8",
    "background": "#111827",
    "place_fill": "#1f2937",
    "item_fill": "#1f2937",
    "border": "#4b5563",
    "text": "#f3f4f6",
}

THEMES = {"light": LIGHT_THEME, "dark": DARK_THEME}


def get_theme(name: str | None) -> Theme:
    """Copy of the named theme; unknown names fall back to light."""
    base = THEMES.get((name or "").strip().lower(), LIGHT_THEME)
    theme = dict(base)
    theme["edge_colors"] = list(base["edge_colors"])
    return theme  # type: ignore[return-value]
