"""Relationship inference and NetworkX graph building."""

import logging

import networkx as nx

from bloodline_chart.models import Character, LayoutNode

logger = logging.getLogger(__name__)

PARENT_OF = "PARENT_OF"
SPOUSE_OF = "SPOUSE_OF"
BETROTHED_TO = "BETROTHED_TO"


def _add_unique(values: list[str], value: str):
    if value not in values:
        values.append(value)


def resolved_parents(node: LayoutNode, nodes: dict[str, LayoutNode]) -> list[str]:
    """Distinct parent ids of `node` that exist in `nodes`, parent_1 first."""
    parents: list[str] = []
    for parent_id in (node.character.parent_1, node.character.parent_2):
        if parent_id is not None and parent_id in nodes:
            _add_unique(parents, parent_id)
    return parents


def infer_relationships(characters: list[Character]) -> dict[str, LayoutNode]:
    """
    Derive children, partners and betrothals from raw character records.

    Returns one LayoutNode per character id, in input order. References to ids
    that are not in the dataset are dropped.
    """
    nodes: dict[str, LayoutNode] = {}

    # First pass: index characters by id
    for character in characters:
        if character.id in nodes:
            logger.warning("Duplicate character id %s ignored (%s)", character.id, character.name)
            continue
        nodes[character.id] = LayoutNode(character=character)

    for node in nodes.values():
        c = node.character
        for key in ("parent_1", "parent_2", "betrothed"):
            ref = getattr(c, key)
            if ref is not None and ref not in nodes:
                logger.debug("Dropping unresolved %s=%r on %s", key, ref, c.id)

    # Second pass: connect parents and children
    for node in nodes.values():
        for parent_id in resolved_parents(node, nodes):
            _add_unique(nodes[parent_id].children, node.id)

    # Third pass: two known parents of one child are partners
    for node in nodes.values():
        parents = resolved_parents(node, nodes)
        if len(parents) == 2:
            p1, p2 = parents
            _add_unique(nodes[p1].partners, p2)
            _add_unique(nodes[p2].partners, p1)

    # Fourth pass: betrothals
    for node in nodes.values():
        betrothed_id = node.character.betrothed
        if betrothed_id is None or betrothed_id not in nodes or betrothed_id == node.id:
            continue
        _add_unique(node.betrothals, betrothed_id)
        _add_unique(nodes[betrothed_id].betrothals, node.id)

    return nodes


def find_roots(nodes: dict[str, LayoutNode]) -> list[str]:
    """Ids of characters with no resolved parent, in input order."""
    return [cid for cid, node in nodes.items() if not resolved_parents(node, nodes)]


def build_graph(nodes: dict[str, LayoutNode]) -> nx.DiGraph:
    """Build a NetworkX directed graph from inferred relationships."""
    G = nx.DiGraph()

    # Add nodes (characters)
    # Note: use 'person_name' instead of 'name' to avoid conflict with pydot
    for cid, node in nodes.items():
        c = node.character
        G.add_node(
            cid,
            person_name=c.name,
            main_house=c.main_house,
            secondary_house=c.secondary_house,
            birth_year=c.birth_year,
            death_year=c.death_year,
        )

    # Add edges (relationships)
    for cid, node in nodes.items():
        for child_id in node.children:
            G.add_edge(cid, child_id, relationship_type=PARENT_OF)
        for partner_id in node.partners:
            G.add_edge(cid, partner_id, relationship_type=SPOUSE_OF)
        for betrothed_id in node.betrothals:
            # A betrothed pair who are also partners keep the SPOUSE_OF edge
            if not G.has_edge(cid, betrothed_id):
                G.add_edge(cid, betrothed_id, relationship_type=BETROTHED_TO)

    return G


def parent_graph(G: nx.DiGraph) -> nx.DiGraph:
    """Return a view of G with only PARENT_OF edges (parent -> child)."""

    def is_parent_edge(u, v):
        return G.edges[u, v].get("relationship_type") == PARENT_OF

    return nx.subgraph_view(G, filter_edge=is_parent_edge)
