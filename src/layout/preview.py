"""
Debug output: 1) HTML table of places, links and parser diagnostics; 2) PNG overview of the graph.
"""
from __future__ import annotations

import html
from pathlib import Path
from typing import Any

from ..outline import OutlineDocument
from .graph import resolve_links, PLACE_BASE_HEIGHT, ITEM_HEIGHT
from .theme import Theme, LIGHT_THEME, EDGE_COLORS

PNG_PLACE_WIDTH = 260
PNG_MARGIN = 40


def _esc(s: str) -> str:
    return html.escape(str(s))


def write_diagnostics_html(doc: OutlineDocument, out_path: Path | str) -> Path:
    """
    Write diagnostics.html: places, links with their resolution, ignored lines.
    """
    out_path = Path(out_path)
    parts = []
    parts.append("""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8"/>
<meta name="viewport" content="width=device-width, initial-scale=1"/>
<title>Outline diagnostics</title>
<style>
  body { font-family: sans-serif; margin: 1rem; background: #fafafa; }
  h1 { font-size: 1.2rem; }
  h2 { font-size: 1rem; margin-top: 1.5rem; }
  table { border-collapse: collapse; width: 100%; max-width: 900px; background: #fff; box-shadow: 0 1px 3px rgba(0,0,0,0.1); }
  th, td { border: 1px solid #ddd; padding: 0.4rem 0.6rem; text-align: left; }
  th { background: #333; color: #fff; }
  tr:nth-child(even) { background: #f9f9f9; }
  .num { font-variant-numeric: tabular-nums; }
  .unresolved { color: #b91c1c; }
  code { background: #eee; padding: 0.1em 0.3em; border-radius: 3px; }
</style>
</head>
<body>
<h1>Outline diagnostics</h1>
""")
    parts.append(f"<h2>Places ({len(doc.nodes)})</h2>")
    parts.append("<table>\n<thead><tr><th>id</th><th>text</th><th>type</th><th>items</th></tr></thead>\n<tbody>\n")
    for place in doc.nodes:
        parts.append(
            f'<tr><td><code>{_esc(place.id)}</code></td><td>{_esc(place.text)}</td>'
            f'<td>{_esc(place.type)}</td><td class="num">{len(place.items)}</td></tr>\n'
        )
    parts.append("</tbody></table>\n")

    parts.append(f"<h2>Links ({len(doc.links)})</h2>")
    parts.append("<table>\n<thead><tr><th>#</th><th>from</th><th>to</th><th>target</th><th>color</th></tr></thead>\n<tbody>\n")
    for res in resolve_links(doc, EDGE_COLORS):
        if res.resolved:
            target = f"{_esc(res.target_kind)} <code>{_esc(res.target_id)}</code>"
        else:
            target = '<span class="unresolved">unresolved</span>'
        parts.append(
            f'<tr><td class="num">{res.index}</td><td><code>{_esc(res.source_item_id)}</code></td>'
            f'<td>{_esc(res.target_name)}</td><td>{target}</td><td><code>{_esc(res.color)}</code></td></tr>\n'
        )
    parts.append("</tbody></table>\n")

    parts.append(f"<h2>Ignored lines ({len(doc.diagnostics)})</h2>")
    parts.append("<table>\n<thead><tr><th>line</th><th>kind</th><th>text</th></tr></thead>\n<tbody>\n")
    for d in doc.diagnostics:
        parts.append(
            f'<tr><td class="num">{d.line + 1}</td><td>{_esc(d.kind)}</td><td><code>{_esc(d.text)}</code></td></tr>\n'
        )
    parts.append("</tbody></table>\n")
    parts.append("</body></html>")
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text("".join(parts), encoding="utf-8")
    return out_path


def _hex_to_rgb(color: str) -> tuple[int, int, int]:
    c = color.lstrip("#")
    return int(c[0:2], 16), int(c[2:4], 16), int(c[4:6], 16)


def _place_box(node: dict[str, Any]) -> tuple[int, int, int, int]:
    x = int(node["position"]["x"]) + PNG_MARGIN
    y = int(node["position"]["y"]) + PNG_MARGIN
    n_items = len((node.get("data") or {}).get("items") or [])
    return x, y, x + PNG_PLACE_WIDTH, y + PLACE_BASE_HEIGHT + n_items * ITEM_HEIGHT


def render_graph_png(
    graph: dict[str, list[dict[str, Any]]],
    out_path: Path | str,
    *,
    theme: Theme = LIGHT_THEME,
) -> Path:
    """
    Draw place boxes (label + direct item texts) and straight edges between them; save as PNG.
    """
    from PIL import Image, ImageDraw, ImageFont

    out_path = Path(out_path)
    nodes = graph.get("nodes") or []
    boxes = {n["id"]: _place_box(n) for n in nodes}
    w = max([b[2] for b in boxes.values()] + [400]) + PNG_MARGIN
    h = max([b[3] for b in boxes.values()] + [300]) + PNG_MARGIN

    img = Image.new("RGB", (w, h), _hex_to_rgb(theme["background"]))
    draw = ImageDraw.Draw(img)
    try:
        font = ImageFont.load_default()
    except OSError:
        font = None

    fill = _hex_to_rgb(theme["place_fill"])
    border = _hex_to_rgb(theme["border"])
    text_color = _hex_to_rgb(theme["text"])
    for node in nodes:
        x0, y0, x1, y1 = boxes[node["id"]]
        draw.rectangle((x0, y0, x1, y1), fill=fill, outline=border, width=2)
        data = node.get("data") or {}
        draw.text((x0 + 10, y0 + 10), str(data.get("label", "")), fill=text_color, font=font)
        for i, item in enumerate(data.get("items") or []):
            iy = y0 + 40 + i * ITEM_HEIGHT
            if item.get("isSeparator"):
                draw.line((x0 + 10, iy + 10, x1 - 10, iy + 10), fill=border, width=1)
                continue
            draw.text((x0 + 20, iy), str(item.get("text", "")), fill=text_color, font=font)

    for edge in graph.get("edges") or []:
        src = boxes.get(edge["source"])
        dst = boxes.get(edge["target"])
        if not src or not dst:
            continue
        start = (src[2], (src[1] + src[3]) // 2)
        end = (dst[0], (dst[1] + dst[3]) // 2)
        draw.line((start, end), fill=_hex_to_rgb(edge.get("color") or theme["handle_fallback"]), width=2)

    out_path.parent.mkdir(parents=True, exist_ok=True)
    img.save(out_path, "PNG")
    return out_path
