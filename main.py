#!/usr/bin/env python3
"""
Root entry: outline text -> parse -> graph layout -> HTML canvas, graph.json, markdown export.
Supports --state (URL-fragment input), --positions (keep dragged positions), --png and --xmind.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from pathlib import Path

_ROOT = Path(__file__).resolve().parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from src.config import load_env, get_output_dir, get_theme_name, get_export_name
from src.outline import parse_outline, outline_to_text
from src.layout import (
    get_theme,
    compile_outline,
    merge_positions,
    positions_from_nodes,
    load_positions,
    render_graph_to_html,
    write_diagnostics_html,
    render_graph_png,
    build_xmind,
)
from src.state import encode_state, get_initial_state, export_markdown

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

DEFAULT_TEXT = """Login Page
- Username.input
- Password.input
- [] Remember me
- Login.button => Dashboard

Dashboard
- Welcome message
- Recent items
- ---
- Logout.button => Login Page"""


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Outline text -> breadboard diagram (HTML canvas, graph.json, markdown export)."
    )
    parser.add_argument(
        "outline",
        nargs="?",
        default=None,
        help="Outline text file; without it (and without --state) the built-in sample is used",
    )
    parser.add_argument(
        "--state",
        metavar="FRAGMENT",
        default=None,
        help="Start from an encoded URL fragment (text, and positions if it carries them)",
    )
    parser.add_argument(
        "--out",
        metavar="DIR",
        default=None,
        help="Output directory (default: BREADBOARD_OUTPUT_DIR or ./output)",
    )
    parser.add_argument(
        "--theme",
        choices=("light", "dark"),
        default=None,
        help="Color theme (default: BREADBOARD_THEME or light)",
    )
    parser.add_argument(
        "--positions",
        metavar="FILE",
        default=None,
        help="positions.json saved from layout.html; those places keep their dragged position",
    )
    parser.add_argument(
        "--xmind",
        action="store_true",
        help="Also export the outline tree to breadboard.xmind (mind map)",
    )
    parser.add_argument(
        "--png",
        action="store_true",
        help="Also draw a PNG overview of the diagram to .debug/overview.png",
    )
    parser.add_argument(
        "--normalize",
        action="store_true",
        help="Also write the outline re-serialized with normalized indentation",
    )
    args = parser.parse_args()

    load_env()
    output_dir = Path(args.out) if args.out else get_output_dir()
    output_dir.mkdir(parents=True, exist_ok=True)
    theme = get_theme(args.theme or get_theme_name())
    logger.info("Output dir: %s, theme: %s", output_dir, theme["name"])

    if args.outline:
        if args.state:
            logger.warning("Both OUTLINE and --state given; using %s and ignoring --state", args.outline)
        outline_path = Path(args.outline)
        if not outline_path.is_file():
            logger.error("Outline file not found: %s", outline_path)
            return 1
        text = outline_path.read_text(encoding="utf-8-sig")
        state = {"text": text, "positions": None, "hasManualLayout": False}
    else:
        state = get_initial_state(args.state, DEFAULT_TEXT)

    saved_positions = state["positions"] or {}
    has_manual_layout = bool(state["hasManualLayout"])
    if args.positions:
        try:
            saved_positions = load_positions(args.positions)
        except (OSError, ValueError) as e:
            logger.error("Cannot read positions from %s: %s", args.positions, e)
            return 1
        has_manual_layout = True

    return _run_pipeline(
        state["text"],
        output_dir,
        theme,
        saved_positions if has_manual_layout else {},
        use_png=args.png,
        use_xmind=args.xmind,
        normalize=args.normalize,
    )


def _run_pipeline(
    text: str,
    output_dir: Path,
    theme: dict,
    saved_positions: dict,
    *,
    use_png: bool = False,
    use_xmind: bool = False,
    normalize: bool = False,
) -> int:
    """Parse, lay out, merge saved positions and write all outputs into output_dir."""
    t0 = time.perf_counter()
    doc = parse_outline(text)
    graph = compile_outline(text, theme)
    if saved_positions:
        graph = {"nodes": merge_positions(saved_positions, graph["nodes"]), "edges": graph["edges"]}
    logger.info(
        "Parsed %d place(s), %d link(s) -> %d edge(s)",
        len(doc.nodes), len(doc.links), len(graph["edges"]),
    )
    if doc.diagnostics:
        logger.info("  %d line(s) ignored, see .debug/diagnostics.html", len(doc.diagnostics))

    render_graph_to_html(graph, output_dir / "layout.html", theme=theme)
    logger.info("Layout: layout.html")
    (output_dir / "graph.json").write_text(
        json.dumps(graph, ensure_ascii=False, indent=2), encoding="utf-8"
    )
    export_path = export_markdown(text, output_dir / get_export_name())
    logger.info("Export: %s", export_path.name)

    fragment = encode_state(
        text,
        positions_from_nodes(graph["nodes"]) if saved_positions else None,
        has_manual_layout=bool(saved_positions),
    )
    (output_dir / "state.txt").write_text(fragment + "\n", encoding="utf-8")
    logger.info("State: state.txt (%d chars)", len(fragment))

    debug_dir = output_dir / ".debug"
    try:
        write_diagnostics_html(doc, debug_dir / "diagnostics.html")
        logger.info("  .debug: diagnostics.html")
    except Exception as e:
        logger.warning("  Failed to write diagnostics.html: %s", e)
    if use_png:
        try:
            render_graph_png(graph, debug_dir / "overview.png", theme=theme)
            logger.info("  .debug: overview.png")
        except Exception as e:
            logger.warning("  Failed to write overview.png: %s", e)
    if use_xmind:
        try:
            xmind_path = build_xmind(doc, output_dir / "breadboard.xmind")
            logger.info("XMind: %s", xmind_path.name)
        except Exception as e:
            logger.warning("XMind export failed: %s", e)
    if normalize:
        (output_dir / "breadboard.normalized.md").write_text(outline_to_text(doc) + "\n", encoding="utf-8")
        logger.info("Normalized: breadboard.normalized.md")

    logger.info("Done in %.2fs. Output: %s", time.perf_counter() - t0, output_dir)
    return 0


if __name__ == "__main__":
    sys.exit(main())
