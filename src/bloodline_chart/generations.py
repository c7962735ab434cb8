"""Generation assignment by depth-first traversal from root characters."""

import logging

import networkx as nx

from bloodline_chart.graph import build_graph, find_roots, parent_graph, resolved_parents
from bloodline_chart.models import GenerationResult, LayoutNode, UnreachableCharactersError

logger = logging.getLogger(__name__)


def _traverse(
    start_id: str,
    nodes: dict[str, LayoutNode],
    generations: dict[str, int],
    visited: set[str],
):
    """
    Assign generations depth-first from `start_id` at generation 0.

    Children go one generation down and are processed before partners, which
    stay on the same generation. Uses an explicit stack in recursive pre-order.
    """
    stack: list[tuple[str, int]] = [(start_id, 0)]
    while stack:
        cid, generation = stack.pop()
        if cid in visited:
            continue
        visited.add(cid)
        generations[cid] = generation

        node = nodes[cid]
        # Pushed in reverse so children pop first, in list order, then partners
        for partner_id in reversed(node.partners):
            if partner_id not in visited:
                stack.append((partner_id, generation))
        for child_id in reversed(node.children):
            stack.append((child_id, generation + 1))


def find_parent_cycles(nodes: dict[str, LayoutNode], character_ids: list[str]) -> list[list[str]]:
    """Parent cycles passing through any of `character_ids`, smallest id first."""
    G = parent_graph(build_graph(nodes))
    suspects = set(character_ids)
    cycles = []
    for cycle in nx.simple_cycles(G):
        if suspects.intersection(cycle):
            start = cycle.index(min(cycle))
            cycles.append(cycle[start:] + cycle[:start])
    return sorted(cycles)


def order_roots(nodes: dict[str, LayoutNode]) -> list[str]:
    """
    Root ids in input order, with married-in spouses moved to the end.

    A root whose partners all have parents joins the chart through that
    partner, so it is only walked once every lineage root has placed it.
    """
    lineage_roots: list[str] = []
    spouse_roots: list[str] = []
    for root_id in find_roots(nodes):
        partners = nodes[root_id].partners
        if partners and all(resolved_parents(nodes[p], nodes) for p in partners):
            spouse_roots.append(root_id)
        else:
            lineage_roots.append(root_id)
    return lineage_roots + spouse_roots


def assign_generations(nodes: dict[str, LayoutNode], strict: bool = False) -> GenerationResult:
    """
    Give every character a generation and store it on its LayoutNode.

    Characters that cannot be reached from a root only exist when parent links
    form a cycle. They are collected after every root has been traversed; the
    smallest member of each cycle is then used as an extra root at generation
    0, and any id still left over after that is walked in sorted order. In
    strict mode UnreachableCharactersError is raised instead.
    """
    generations: dict[str, int] = {}
    visited: set[str] = set()

    for root_id in order_roots(nodes):
        _traverse(root_id, nodes, generations, visited)

    unreachable = [cid for cid in nodes if cid not in visited]
    cycles: list[list[str]] = []
    if unreachable:
        cycles = find_parent_cycles(nodes, unreachable)
        if strict:
            raise UnreachableCharactersError(unreachable, cycles)
        logger.warning(
            "%d character(s) unreachable from any root, placing them from fallback roots: %s (cycles: %s)",
            len(unreachable),
            unreachable,
            cycles,
        )
        for cid in [cycle[0] for cycle in cycles] + sorted(unreachable):
            if cid not in visited:
                _traverse(cid, nodes, generations, visited)

    for cid, node in nodes.items():
        node.generation = generations[cid]

    return GenerationResult(generations=generations, unreachable=unreachable, cycles=cycles)
