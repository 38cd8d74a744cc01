"""
ECharts options builder for the radial graph editor.

The model only stores polar offsets. This module derives the render graph
(center, categories, tool satellites) as a NetworkX graph with canvas
positions attached, then converts it into an ECharts option dict for
``ui.echart``.

Canvas units map 1:1 onto a hidden cartesian grid (x: 0..1000, y: 0..800,
y axis inverted so it grows downward like screen space).
"""

import math
from typing import Any, Dict, List, Optional

import networkx as nx

from orbit.constants import (
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    CENTER_LABEL,
    CENTER_NODE_RADIUS,
    HIGHLIGHT_COLOR,
    INK_COLOR,
    NODE_RADIUS,
    ORBIT_RINGS,
    PAPER_COLOR,
    SATELLITE_RADIUS,
    SELECTED_NODE_RADIUS,
)
from orbit.geometry import ORIGIN, Point, satellite_positions, to_cartesian
from orbit.model import GraphModel, NodeKind

CENTER_NODE_ID = "__center__"

# Points used to approximate each dashed guide ring
RING_SEGMENTS = 72


def tool_node_id(category_id: str, tool_id: str) -> str:
    return f"{category_id}/{tool_id}"


def build_render_graph(model: GraphModel, selected_id: Optional[str] = None,
                       origin: Point = ORIGIN) -> nx.Graph:
    """
    Build the render graph. Every node carries ``kind`` (a NodeKind),
    ``x``/``y`` in canvas units, ``label`` and ``color``.
    """
    G = nx.Graph()
    G.add_node(CENTER_NODE_ID, kind=NodeKind.CENTER, x=origin.x, y=origin.y,
               label=CENTER_LABEL, color=INK_COLOR, selected=False)

    for category in model.categories:
        pos = to_cartesian(origin, category.angle, category.radius)
        is_selected = category.id == selected_id
        G.add_node(category.id, kind=NodeKind.CATEGORY, x=pos.x, y=pos.y,
                   label=category.label, color=category.color, selected=is_selected)
        G.add_edge(CENTER_NODE_ID, category.id, selected=is_selected)

        satellites = satellite_positions(pos, len(category.tools))
        for tool, sat in zip(category.tools, satellites):
            nid = tool_node_id(category.id, tool.id)
            G.add_node(nid, kind=NodeKind.TOOL, x=sat.x, y=sat.y,
                       label=tool.name, color=INK_COLOR, selected=False)
    return G


def _node_style(attrs: Dict[str, Any]) -> Dict[str, Any]:
    kind = attrs["kind"]
    if kind is NodeKind.CENTER:
        return {
            "symbolSize": CENTER_NODE_RADIUS * 2,
            "itemStyle": {"color": INK_COLOR},
            "label": {"show": True, "position": "inside", "color": PAPER_COLOR,
                      "fontWeight": "bold", "formatter": attrs["label"]},
        }
    if kind is NodeKind.CATEGORY:
        radius = SELECTED_NODE_RADIUS if attrs["selected"] else NODE_RADIUS
        return {
            "symbolSize": radius * 2,
            "itemStyle": {"color": attrs["color"], "borderColor": INK_COLOR, "borderWidth": 2},
            "label": {"show": True, "position": "bottom", "color": INK_COLOR,
                      "fontWeight": "bold", "formatter": str(attrs["label"]).upper()},
        }
    if kind is NodeKind.TOOL:
        return {
            "symbolSize": SATELLITE_RADIUS * 2,
            "itemStyle": {"color": INK_COLOR, "opacity": 0.6},
            "label": {"show": False},
            "tooltip": {"formatter": attrs["label"]},
        }
    raise ValueError(f"Unknown node kind: {kind}")


def _edge_style(selected: bool) -> Dict[str, Any]:
    if selected:
        return {"color": HIGHLIGHT_COLOR, "width": 2, "opacity": 1.0}
    return {"color": INK_COLOR, "width": 1, "opacity": 0.2}


def _ring_series(origin: Point) -> List[Dict[str, Any]]:
    series = []
    for r in ORBIT_RINGS:
        points = []
        for i in range(RING_SEGMENTS + 1):
            theta = i / RING_SEGMENTS * math.pi * 2
            points.append([origin.x + r * math.cos(theta), origin.y + r * math.sin(theta)])
        series.append({
            "type": "line",
            "name": f"ring-{r}",
            "data": points,
            "showSymbol": False,
            "silent": True,
            "smooth": True,
            "lineStyle": {"color": INK_COLOR, "width": 1, "type": "dashed", "opacity": 0.1},
        })
    return series


def build_echart_options(model: GraphModel, selected_id: Optional[str] = None,
                         origin: Point = ORIGIN, animate: bool = True) -> Dict[str, Any]:
    """
    Build ECharts options from the model.

    Args:
        model: The graph to draw
        selected_id: Currently selected category, highlighted if present
        origin: Canvas position of the center node
        animate: Disable while dragging so nodes track the pointer

    Returns:
        ECharts options dict ready for ui.echart()
    """
    G = build_render_graph(model, selected_id, origin)

    data = []
    for nid, attrs in G.nodes(data=True):
        entry = {
            "id": nid,
            "name": nid,
            "value": [attrs["x"], attrs["y"]],
            "kind": attrs["kind"].value,
        }
        entry.update(_node_style(attrs))
        data.append(entry)

    links = [
        {"source": src, "target": tgt, "lineStyle": _edge_style(attrs.get("selected", False))}
        for src, tgt, attrs in G.edges(data=True)
    ]

    axis = {"show": False, "type": "value"}
    return {
        "animation": animate,
        "backgroundColor": PAPER_COLOR,
        "tooltip": {"show": True},
        "grid": {"left": 0, "right": 0, "top": 0, "bottom": 0},
        "xAxis": {**axis, "min": 0, "max": CANVAS_WIDTH},
        "yAxis": {**axis, "min": 0, "max": CANVAS_HEIGHT, "inverse": True},
        "series": _ring_series(origin) + [
            {
                "type": "graph",
                "coordinateSystem": "cartesian2d",
                "layout": "none",
                "roam": False,
                "data": data,
                "links": links,
            }
        ],
    }
