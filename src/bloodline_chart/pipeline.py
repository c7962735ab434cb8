"""Build a laid-out chart from raw character records."""

import logging

from bloodline_chart.config import LayoutConfig
from bloodline_chart.generations import assign_generations
from bloodline_chart.graph import build_graph, infer_relationships
from bloodline_chart.layout import compute_positions, materialize_edges
from bloodline_chart.models import Character, LayoutResult

logger = logging.getLogger(__name__)


def build_chart(characters: list[Character], config: LayoutConfig | None = None) -> LayoutResult:
    """
    Run relationship inference, generation assignment, layout and edge
    materialization over the whole character set.

    Input records are not modified; every call builds fresh LayoutNodes, so
    calling it twice on the same input gives the same positions.

    Raises:
        UnreachableCharactersError: if config.strict is set and some characters
            cannot be reached from a root (parent cycles).
    """
    config = config or LayoutConfig()

    nodes = infer_relationships(characters)
    generation_result = assign_generations(nodes, strict=config.strict)
    compute_positions(nodes, config)
    edges = materialize_edges(nodes)

    logger.info(
        "Laid out %d characters over %d generation(s) with %d edges",
        len(nodes),
        len({n.generation for n in nodes.values()}),
        len(edges),
    )

    return LayoutResult(
        nodes=nodes,
        edges=edges,
        unreachable=generation_result.unreachable,
        cycles=generation_result.cycles,
        graph=build_graph(nodes),
    )
