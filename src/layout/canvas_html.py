"""
Graph -> self-contained HTML canvas: one draggable card per place, colored
handles per item, SVG edges redrawn while dragging; positions can be saved as
JSON and fed back into merge_positions().
"""
from __future__ import annotations

import html
import json
from pathlib import Path
from typing import Any

from .theme import Theme, LIGHT_THEME

# Extra canvas space below / right of the furthest node (px)
CANVAS_MARGIN = 400
PLACE_WIDTH = 260


def _esc(s: str) -> str:
    return html.escape(str(s))


def _json_script(obj: Any) -> str:
    """JSON safe to embed inside a <script> element."""
    return json.dumps(obj, ensure_ascii=False).replace("</", "<\\/")


def _handle(handle_id: str, kind: str, color: str) -> str:
    return (
        f'<span class="handle handle-{kind}" data-handle="{_esc(handle_id)}" '
        f'style="border-color:{_esc(color)}"></span>'
    )


def _render_items(items: list[dict], data: dict, theme: Theme, depth: int = 0) -> str:
    colors = data.get("handleColors") or {}
    targets = set(data.get("linkTargets") or [])
    fallback = theme["handle_fallback"]
    out = []
    for item in items:
        if item.get("isSeparator"):
            out.append('<div class="bb-separator"></div>')
            continue
        iid = item["id"]
        itype = item.get("type", "item")
        parts = []
        if iid in targets:
            hid = f"{iid}-target"
            parts.append(_handle(hid, "target", colors.get(hid, fallback)))
        if itype in ("checkbox", "radio"):
            parts.append(f'<span class="bb-icon bb-icon-{itype}"></span>')
        parts.append(f"<span>{_esc(item.get('text', ''))}</span>")
        if item.get("link"):
            hid = f"{iid}-source"
            parts.append(f'<span class="bb-link">&rarr; {_esc(item["link"])}</span>')
            parts.append(_handle(hid, "source", colors.get(hid, fallback)))
        out.append(
            f'<div class="bb-item bb-item-{_esc(itype)}" data-id="{_esc(iid)}" '
            f'style="margin-left:{depth * 15}px">{"".join(parts)}</div>'
        )
        children = item.get("children") or []
        if children:
            out.append(_render_items(children, data, theme, depth + 1))
    return "\n".join(out)


def _render_place(node: dict, theme: Theme) -> str:
    data = node.get("data") or {}
    pos = node.get("position") or {"x": 0, "y": 0}
    node_type = data.get("nodeType", "place")
    place_handle = ""
    if data.get("hasIncomingLinks"):
        hid = f"{node['id']}-place-target"
        place_handle = _handle(hid, "place-target", (data.get("handleColors") or {}).get(hid, theme["handle_fallback"]))
    badge = f'<span class="bb-badge">{_esc(node_type)}</span>' if node_type != "place" else ""
    return f'''<div class="bb-place bb-place-{_esc(node_type)}" data-node="{_esc(node["id"])}" style="left:{pos["x"]}px;top:{pos["y"]}px">
  <div class="bb-place-header">{place_handle}<span class="bb-place-label">{_esc(data.get("label", ""))}</span>{badge}</div>
  <div class="bb-items">
{_render_items(data.get("items") or [], data, theme)}
  </div>
</div>'''


def _canvas_size(nodes: list[dict]) -> tuple[int, int]:
    if not nodes:
        return 800, 600
    max_x = max(float(n["position"]["x"]) for n in nodes) + PLACE_WIDTH + CANVAS_MARGIN
    max_y = max(float(n["position"]["y"]) for n in nodes) + CANVAS_MARGIN
    return int(max_x), int(max_y)


def render_graph_to_html(
    graph: dict[str, list[dict[str, Any]]],
    out_path: Path | str,
    *,
    theme: Theme = LIGHT_THEME,
    title: str = "Breadboard",
) -> Path:
    """Write the canvas page for {"nodes", "edges"} and return its path."""
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    nodes = graph.get("nodes") or []
    edges = graph.get("edges") or []

    if not nodes:
        out_path.write_text("<!DOCTYPE html><html><body><p>No places</p></body></html>", encoding="utf-8")
        return out_path

    width, height = _canvas_size(nodes)
    places_html = "\n".join(_render_place(n, theme) for n in nodes)
    t = theme

    html_content = f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8"/>
<meta name="viewport" content="width=device-width, initial-scale=1"/>
<title>{_esc(title)}</title>
<style>
  :root {{ font-family: sans-serif; font-size: 14px; color: {t["text"]}; }}
  body {{ margin: 0; background: {t["background"]}; }}
  .save-bar {{ position: fixed; top: 0; left: 0; right: 0; padding: 8px 16px; background: #333; color: #fff; z-index: 1000; }}
  .save-bar button {{ padding: 6px 12px; cursor: pointer; background: #0af; color: #fff; border: none; border-radius: 4px; }}
  .bb-canvas {{ position: relative; width: {width}px; height: {height}px; }}
  .bb-edges {{ position: absolute; left: 0; top: 0; width: 100%; height: 100%; pointer-events: none; }}
  .bb-place {{
    position: absolute;
    width: {PLACE_WIDTH}px;
    background: {t["place_fill"]};
    border: 2px solid {t["border"]};
    border-radius: 8px;
    box-sizing: border-box;
    cursor: grab;
    user-select: none;
  }}
  .bb-place:active {{ cursor: grabbing; }}
  .bb-place-header {{ position: relative; padding: 8px 12px; font-weight: bold; border-bottom: 1px solid {t["border"]}; }}
  .bb-badge {{ margin-left: 8px; font-size: 11px; font-weight: normal; opacity: 0.7; }}
  .bb-items {{ padding: 8px; }}
  .bb-item {{ position: relative; display: flex; align-items: center; padding: 6px 12px; margin-bottom: 4px; border: 1px solid {t["border"]}; border-radius: 4px; background: {t["item_fill"]}; font-size: 13px; }}
  .bb-item-button {{ font-weight: 500; border-color: #60a5fa; }}
  .bb-link {{ margin-left: 8px; font-size: 11px; opacity: 0.6; }}
  .bb-icon {{ width: 12px; height: 12px; border: 2px solid currentColor; margin-right: 8px; display: inline-block; }}
  .bb-icon-checkbox {{ border-radius: 3px; }}
  .bb-icon-radio {{ border-radius: 50%; }}
  .bb-separator {{ border-top: 1px solid {t["border"]}; margin: 8px 0; }}
  .handle {{ position: absolute; top: 50%; width: 8px; height: 8px; border: 2px solid; border-radius: 50%; background: {t["place_fill"]}; transform: translateY(-50%); }}
  .handle-source {{ right: -6px; }}
  .handle-target, .handle-place-target {{ left: -6px; }}
</style>
</head>
<body>
<div class="save-bar"><button type="button" id="save-positions-btn">Save positions (JSON)</button></div>
<div style="height: 44px;"></div>
<div class="bb-canvas" id="bb-canvas">
  <svg class="bb-edges" id="bb-edges" xmlns="http://www.w3.org/2000/svg"></svg>
{places_html}
</div>
<script type="application/json" id="bb-edge-data">{_json_script(edges)}</script>
<script>
(function() {{
  var ns = "http://www.w3.org/2000/svg";
  var canvas = document.getElementById("bb-canvas");
  var svg = document.getElementById("bb-edges");
  var edges = JSON.parse(document.getElementById("bb-edge-data").textContent);
  var dragging = null;
  var startX, startY, startLeft, startTop;

  function handleCenter(id) {{
    var el = canvas.querySelector('[data-handle="' + id + '"]');
    if (!el) return null;
    var r = el.getBoundingClientRect(), c = canvas.getBoundingClientRect();
    return [r.left + r.width / 2 - c.left, r.top + r.height / 2 - c.top];
  }}
  function placeLeft(id) {{
    var el = canvas.querySelector('[data-node="' + id + '"]');
    if (!el) return null;
    var r = el.getBoundingClientRect(), c = canvas.getBoundingClientRect();
    return [r.left - c.left, r.top + 20 - c.top];
  }}

  function updateEdges() {{
    svg.innerHTML = "";
    edges.forEach(function(e) {{
      var from = handleCenter(e.sourceHandle);
      var to = e.targetHandle ? handleCenter(e.targetHandle) : (handleCenter(e.target + "-place-target") || placeLeft(e.target));
      if (!from || !to) return;
      var dx = Math.max(40, Math.abs(to[0] - from[0]) * 0.5);
      var d = "M " + from[0] + " " + from[1] + " C " + (from[0] + dx) + " " + from[1] + ", " + (to[0] - dx) + " " + to[1] + ", " + to[0] + " " + to[1];
      var path = document.createElementNS(ns, "path");
      path.setAttribute("d", d);
      path.setAttribute("stroke", e.color);
      path.setAttribute("stroke-width", 2);
      path.setAttribute("stroke-dasharray", "6 4");
      path.setAttribute("fill", "none");
      path.setAttribute("data-edge", e.id);
      svg.appendChild(path);
    }});
  }}

  canvas.querySelectorAll(".bb-place").forEach(function(el) {{
    el.addEventListener("mousedown", function(e) {{
      if (e.button !== 0) return;
      e.preventDefault();
      startX = e.clientX;
      startY = e.clientY;
      startLeft = parseFloat(el.style.left) || 0;
      startTop = parseFloat(el.style.top) || 0;
      dragging = el;
    }});
  }});

  document.addEventListener("mousemove", function(e) {{
    if (!dragging) return;
    e.preventDefault();
    dragging.style.left = Math.max(0, startLeft + e.clientX - startX) + "px";
    dragging.style.top = Math.max(0, startTop + e.clientY - startY) + "px";
    updateEdges();
  }});
  document.addEventListener("mouseup", function() {{ dragging = null; }});
  document.addEventListener("mouseleave", function() {{ dragging = null; }});

  document.getElementById("save-positions-btn").addEventListener("click", function() {{
    var positions = {{}};
    canvas.querySelectorAll(".bb-place").forEach(function(el) {{
      positions[el.getAttribute("data-node")] = {{ x: parseFloat(el.style.left) || 0, y: parseFloat(el.style.top) || 0 }};
    }});
    var blob = new Blob([JSON.stringify(positions, null, 2)], {{ type: "application/json" }});
    var a = document.createElement("a");
    a.href = URL.createObjectURL(blob);
    a.download = "positions.json";
    a.click();
    URL.revokeObjectURL(a.href);
  }});

  updateEdges();
}})();
</script>
</body>
</html>
"""
    out_path.write_text(html_content, encoding="utf-8")
    return out_path
