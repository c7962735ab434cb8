"""Export a laid-out chart for rendering surfaces."""

import json
import logging
from pathlib import Path

import pydot

from bloodline_chart.models import BETROTHAL, MARRIAGE, PARENT, LayoutResult

logger = logging.getLogger(__name__)

HOUSE_COLORS = [
    "lightblue",
    "lightpink",
    "palegreen",
    "khaki",
    "plum",
    "lightsalmon",
    "paleturquoise",
    "wheat",
]

EDGE_STYLES = {
    PARENT: {"color": "darkgray"},
    MARRIAGE: {"color": "firebrick", "dir": "none", "penwidth": "2"},
    BETROTHAL: {"color": "goldenrod", "dir": "none", "style": "dashed"},
}


def to_dict(result: LayoutResult) -> dict:
    """Plain JSON-ready nodes and edges, in chart order."""
    nodes = []
    for node in result.nodes.values():
        c = node.character
        nodes.append(
            {
                "id": c.id,
                "name": c.name,
                "displayName": node.display_name,
                "title": c.title,
                "aliases": list(c.aliases),
                "main_house": c.main_house,
                "secondary_house": c.secondary_house,
                "birth_year": c.birth_year,
                "death_year": c.death_year,
                "description": c.description,
                "portrait": c.portrait,
                "generation": node.generation,
                "x": node.x,
                "y": node.y,
                "children": list(node.children),
                "partners": list(node.partners),
                "betrothals": list(node.betrothals),
            }
        )
    edges = [{"id": e.id, "source": e.source, "target": e.target, "type": e.type} for e in result.edges]
    return {"nodes": nodes, "edges": edges, "unreachable": list(result.unreachable)}


def house_colors(result: LayoutResult) -> dict[str | None, str]:
    """Assign a fill color to each main house in order of first appearance."""
    colors: dict[str | None, str] = {None: "lightgray"}
    for node in result.nodes.values():
        house = node.character.main_house
        if house not in colors:
            colors[house] = HOUSE_COLORS[(len(colors) - 1) % len(HOUSE_COLORS)]
    return colors


def to_dot(result: LayoutResult) -> pydot.Dot:
    """
    Build a Graphviz graph with every node pinned at its computed position.

    Canvas y grows downward while Graphviz y grows upward, so y is negated.
    Render with `neato -n` to keep the positions.
    """
    P = pydot.Dot(graph_type="digraph")
    P.set("splines", "ortho")
    P.set("outputorder", "edgesfirst")

    colors = house_colors(result)

    for node in result.nodes.values():
        c = node.character
        label = node.display_name
        if c.birth_year is not None or c.death_year is not None:
            birth = "" if c.birth_year is None else c.birth_year
            death = "" if c.death_year is None else c.death_year
            label += f"\\n{birth}-{death}"

        P.add_node(
            pydot.Node(
                c.id,
                label=label,
                pos=f"{float(node.x)},{-float(node.y)}!",
                shape="box",
                style="rounded,filled",
                fillcolor=colors[c.main_house],
                fontsize="10",
            )
        )

    for edge in result.edges:
        P.add_edge(pydot.Edge(edge.source, edge.target, **EDGE_STYLES[edge.type]))

    return P


def write_json(result: LayoutResult, output_path: Path):
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(to_dict(result), f, indent=2)
    logger.info("Chart JSON saved to %s", output_path)


def write_dot(result: LayoutResult, output_path: Path):
    """Write DOT source, or an image when the suffix is png, svg or pdf."""
    P = to_dot(result)
    ext = output_path.suffix.lower().lstrip(".")
    if ext in ("png", "svg", "pdf"):
        P.write(str(output_path), prog=["neato", "-n"], format=ext)
    else:
        P.write(str(output_path), format="raw")
    logger.info("Chart graph saved to %s", output_path)
