"""Family chart layout and lineage queries for fictional character sets."""

from bloodline_chart.config import LayoutConfig
from bloodline_chart.models import (
    Character,
    CharacterNotFoundError,
    Edge,
    LayoutNode,
    LayoutResult,
    UnreachableCharactersError,
)
from bloodline_chart.pipeline import build_chart
from bloodline_chart.queries import compute_lineage, filter_by_house, search

__all__ = [
    "Character",
    "CharacterNotFoundError",
    "Edge",
    "LayoutConfig",
    "LayoutNode",
    "LayoutResult",
    "UnreachableCharactersError",
    "build_chart",
    "compute_lineage",
    "filter_by_house",
    "search",
]
