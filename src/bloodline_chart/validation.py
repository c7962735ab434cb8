"""Data-quality checks for chart relation graphs."""

import networkx as nx

from bloodline_chart.graph import PARENT_OF, parent_graph

MIN_PARENT_AGE = 12


def _cycle_warnings(G: nx.DiGraph) -> list[str]:
    try:
        cycle = nx.find_cycle(parent_graph(G), orientation="original")
    except nx.NetworkXNoCycle:
        return []
    return [f"Cycle detected in parent-child relationships: {[edge[0] for edge in cycle]}"]


def _parent_age_warnings(G: nx.DiGraph) -> list[str]:
    warnings: list[str] = []
    for parent, child, data in G.edges(data=True):
        if data.get("relationship_type") != PARENT_OF:
            continue

        parent_name = G.nodes[parent].get("person_name")
        child_name = G.nodes[child].get("person_name")
        parent_birth = G.nodes[parent].get("birth_year")
        child_birth = G.nodes[child].get("birth_year")
        if parent_birth is None or child_birth is None:
            continue

        if child_birth < parent_birth:
            warnings.append(f"Impossible: {child_name} born before parent {parent_name}")
        elif child_birth - parent_birth < MIN_PARENT_AGE:
            warnings.append(
                f"Suspicious: {parent_name} was less than {MIN_PARENT_AGE} years old "
                f"when {child_name} was born"
            )
    return warnings


def _lifespan_warnings(G: nx.DiGraph) -> list[str]:
    return [
        f"Impossible: {data.get('person_name')} died before being born"
        for _, data in G.nodes(data=True)
        if data.get("birth_year") is not None
        and data.get("death_year") is not None
        and data["death_year"] < data["birth_year"]
    ]


def validate_graph(G: nx.DiGraph) -> list[str]:
    """
    Validate the relation graph for:
    - Cycles in parent-child relationships
    - Impossible ages (child born before parent, or to a parent under 12)
    - Death before birth

    Returns a list of warning messages. Nothing here stops a chart from
    being laid out.
    """
    return _cycle_warnings(G) + _parent_age_warnings(G) + _lifespan_warnings(G)
