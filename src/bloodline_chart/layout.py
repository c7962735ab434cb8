"""
Chart layout engine.
Places characters on a canvas by generation and house, centers partners over
their shared children, then pushes apart characters that sit too close.
"""

from bloodline_chart.config import LayoutConfig
from bloodline_chart.graph import resolved_parents
from bloodline_chart.models import BETROTHAL, MARRIAGE, PARENT, Edge, LayoutNode


def display_name(name: str, max_length: int) -> str:
    """Shorten long names to first name plus last-name initial ("Talon V.")."""
    if len(name) <= max_length:
        return name
    parts = name.split()
    if len(parts) < 2:
        return name
    return f"{parts[0]} {parts[-1][0]}."


def group_by_generation(nodes: dict[str, LayoutNode]) -> dict[int, list[LayoutNode]]:
    """Nodes per generation, generations ascending, input order within each."""
    groups: dict[int, list[LayoutNode]] = {}
    for node in nodes.values():
        groups.setdefault(node.generation, []).append(node)
    return {g: groups[g] for g in sorted(groups)}


def place_grid(nodes: dict[str, LayoutNode], config: LayoutConfig):
    """
    Pass 1: one row per generation, house groups left to right.

    Houses keep the order in which they are first met in the generation;
    characters inside a house are sorted by id.
    """
    for generation, members in group_by_generation(nodes).items():
        houses: dict[str | None, list[LayoutNode]] = {}
        for node in members:
            houses.setdefault(node.character.main_house, []).append(node)

        y = config.base_offset + generation * config.generation_spacing
        start_x = config.base_offset
        for house_members in houses.values():
            house_members.sort(key=lambda n: n.id)
            for index, node in enumerate(house_members):
                node.x = start_x + index * config.sibling_spacing
                node.y = y
            span = (len(house_members) - 1) * config.sibling_spacing
            start_x += span + config.house_padding


def partnerships(nodes: dict[str, LayoutNode]) -> list[tuple[LayoutNode, LayoutNode]]:
    """Each partnership once, smaller id first, top generation first."""
    pairs = [
        (node, nodes[partner_id])
        for node in nodes.values()
        for partner_id in node.partners
        if node.id < partner_id
    ]
    pairs.sort(key=lambda pair: (pair[0].generation, pair[0].id, pair[1].id))
    return pairs


def center_partnerships(nodes: dict[str, LayoutNode], config: LayoutConfig):
    """
    Pass 2: put partners side by side around their average x and spread their
    shared children evenly underneath.
    """
    for person1, person2 in partnerships(nodes):
        common_children = [cid for cid in person1.children if cid in person2.children]

        avg_x = (person1.x + person2.x) / 2
        person1.x = avg_x - config.partner_gap / 2
        person2.x = avg_x + config.partner_gap / 2

        if common_children:
            children_width = (len(common_children) - 1) * config.sibling_spacing
            start_x = avg_x - children_width / 2
            for index, child_id in enumerate(common_children):
                nodes[child_id].x = start_x + index * config.sibling_spacing


def resolve_overlaps(nodes: dict[str, LayoutNode], config: LayoutConfig):
    """
    Pass 3: walk each generation left to right and push any character closer
    than min_spacing to its left neighbour, carrying the shift to everyone
    further right.
    """
    for members in group_by_generation(nodes).values():
        row = sorted(members, key=lambda n: (n.x, n.id))
        for i in range(1, len(row)):
            target_x = row[i - 1].x + config.min_spacing
            if row[i].x < target_x:
                delta = target_x - row[i].x
                row[i].x = target_x
                for node in row[i + 1:]:
                    node.x += delta


def compute_positions(nodes: dict[str, LayoutNode], config: LayoutConfig):
    """Run all three layout passes. Every node must already have a generation."""
    missing = [cid for cid, node in nodes.items() if node.generation is None]
    if missing:
        raise ValueError(f"Cannot lay out characters without a generation: {missing}")

    for node in nodes.values():
        node.display_name = display_name(node.character.name, config.display_name_max_length)

    place_grid(nodes, config)
    center_partnerships(nodes, config)
    resolve_overlaps(nodes, config)


def materialize_edges(nodes: dict[str, LayoutNode]) -> list[Edge]:
    """Parent edges, then marriage and betrothal edges from the smaller id."""
    edges: list[Edge] = []

    # Parent-child links
    for node in nodes.values():
        for parent_id in resolved_parents(node, nodes):
            edges.append(Edge(source=parent_id, target=node.id, type=PARENT))

    # Marriage links, one direction only
    for node in nodes.values():
        for partner_id in node.partners:
            if node.id < partner_id:
                edges.append(Edge(source=node.id, target=partner_id, type=MARRIAGE))

    # Betrothal links, one direction only
    for node in nodes.values():
        for betrothed_id in node.betrothals:
            if node.id < betrothed_id:
                edges.append(Edge(source=node.id, target=betrothed_id, type=BETROTHAL))

    return edges
