"""Layout: outline -> positioned graph; position merge; HTML canvas, PNG/diagnostics preview, XMind export."""
from .theme import Theme, LIGHT_THEME, DARK_THEME, EDGE_COLORS, get_theme
from .graph import LinkResolution, resolve_links, place_positions, build_graph, compile_outline
from .merge import merge_positions, positions_from_nodes, load_positions
from .canvas_html import render_graph_to_html
from .preview import write_diagnostics_html, render_graph_png
from .layout_mind import build_xmind, load_xmind_topic_titles, load_xmind_parent_child_pairs

__all__ = [
    "Theme",
    "LIGHT_THEME",
    "DARK_THEME",
    "EDGE_COLORS",
    "get_theme",
    "LinkResolution",
    "resolve_links",
    "place_positions",
    "build_graph",
    "compile_outline",
    "merge_positions",
    "positions_from_nodes",
    "load_positions",
    "render_graph_to_html",
    "write_diagnostics_html",
    "render_graph_png",
    "build_xmind",
    "load_xmind_topic_titles",
    "load_xmind_parent_child_pairs",
]
