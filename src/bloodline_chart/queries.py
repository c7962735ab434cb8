"""Lineage, search and filter queries over a laid-out chart."""

from collections.abc import Iterable

import networkx as nx

from bloodline_chart.graph import build_graph, parent_graph, resolved_parents
from bloodline_chart.models import (
    Character,
    CharacterNotFoundError,
    FamilyView,
    HouseFilter,
    LayoutResult,
    Lineage,
)


def _relation_graph(result: LayoutResult) -> nx.DiGraph:
    if result.graph is not None:
        return result.graph
    return build_graph(result.nodes)


def _check_exists(result: LayoutResult, character_id: str):
    if character_id not in result.nodes:
        raise CharacterNotFoundError(character_id)


def find_ancestors(result: LayoutResult, character_id: str) -> set[str]:
    """All parents, grandparents, ... of a character (excluding itself)."""
    _check_exists(result, character_id)
    ancestors = nx.ancestors(parent_graph(_relation_graph(result)), character_id)
    # A parent cycle makes a character its own ancestor
    ancestors.discard(character_id)
    return ancestors


def find_descendants(result: LayoutResult, character_id: str) -> set[str]:
    """All children, grandchildren, ... of a character (excluding itself)."""
    _check_exists(result, character_id)
    descendants = nx.descendants(parent_graph(_relation_graph(result)), character_id)
    descendants.discard(character_id)
    return descendants


def _edges_within(result: LayoutResult, node_ids: set[str]) -> frozenset[str]:
    return frozenset(e.id for e in result.edges if e.source in node_ids and e.target in node_ids)


def compute_lineage(result: LayoutResult, character_id: str, include_partners: bool = False) -> Lineage:
    """
    The character, its ancestors and its descendants, plus the edges between them.

    Args:
        result: A chart built by pipeline.build_chart
        character_id: The character to center the lineage on
        include_partners: Also include the character's direct partners

    Returns:
        A Lineage whose node_ids are highlighted and everything else dimmed.
    """
    node_ids = {character_id}
    node_ids |= find_ancestors(result, character_id)
    node_ids |= find_descendants(result, character_id)
    if include_partners:
        node_ids.update(result.nodes[character_id].partners)

    return Lineage(
        root_id=character_id,
        node_ids=frozenset(node_ids),
        edge_ids=_edges_within(result, node_ids),
    )


def search(result: LayoutResult, query: str) -> list[Character]:
    """Case-insensitive substring search over character names."""
    needle = query.strip().lower()
    if not needle:
        return []
    return [n.character for n in result.nodes.values() if needle in n.character.name.lower()]


def filter_by_house(result: LayoutResult, houses: Iterable[str]) -> HouseFilter:
    """
    Characters whose main or secondary house is selected, and the edges
    between them. House names compare case-insensitively.
    """
    if isinstance(houses, str):
        raise TypeError(f"houses must be a collection of house names, not the string {houses!r}")
    selected = frozenset(h.lower() for h in houses)
    node_ids = {
        cid
        for cid, node in result.nodes.items()
        if any(h.lower() in selected for h in node.character.houses)
    }
    return HouseFilter(
        houses=selected,
        node_ids=frozenset(node_ids),
        edge_ids=_edges_within(result, node_ids),
    )


def family_of(result: LayoutResult, character_id: str) -> FamilyView:
    """Direct family of a character, as listed on its details panel."""
    node = result.node(character_id)
    parents = resolved_parents(node, result.nodes)

    siblings: list[str] = []
    for parent_id in parents:
        for child_id in result.nodes[parent_id].children:
            if child_id != character_id and child_id not in siblings:
                siblings.append(child_id)

    return FamilyView(
        character_id=character_id,
        parents=tuple(parents),
        partners=tuple(node.partners),
        betrothed=tuple(node.betrothals),
        children=tuple(node.children),
        siblings=tuple(siblings),
    )


def born_within(result: LayoutResult, year: int, span: int = 0) -> list[Character]:
    """Characters born in [year - span, year + span]. Unknown birth years never match."""
    return [
        n.character
        for n in result.nodes.values()
        if n.character.birth_year is not None and year - span <= n.character.birth_year <= year + span
    ]


def find_character(result: LayoutResult, id_or_name: str) -> Character:
    """Look a character up by id, falling back to an exact name match."""
    if id_or_name in result.nodes:
        return result.nodes[id_or_name].character
    for node in result.nodes.values():
        if node.character.name == id_or_name:
            return node.character
    raise CharacterNotFoundError(id_or_name)
