"""Data classes for chart characters, derived layout nodes and query results."""

from dataclasses import dataclass, field

import networkx as nx

PARENT = "parent"
MARRIAGE = "marriage"
BETROTHAL = "betrothal"

EDGE_TYPES = (PARENT, MARRIAGE, BETROTHAL)


class CharacterNotFoundError(ValueError):
    """Raised when a query names a character id that is not in the chart."""

    def __init__(self, character_id: str):
        super().__init__(f"Character ID {character_id!r} not found in chart")
        self.character_id = character_id


class UnreachableCharactersError(ValueError):
    """Raised in strict mode when some characters cannot be reached from any root."""

    def __init__(self, character_ids: list[str], cycles: list[list[str]]):
        message = f"{len(character_ids)} character(s) unreachable from any root: {character_ids}"
        if cycles:
            message += f"; parent cycles: {cycles}"
        super().__init__(message)
        self.character_ids = character_ids
        self.cycles = cycles


@dataclass(frozen=True)
class Character:
    id: str
    name: str
    parent_1: str | None = None
    parent_2: str | None = None
    betrothed: str | None = None
    main_house: str | None = None
    secondary_house: str | None = None
    birth_year: int | None = None
    death_year: int | None = None
    # Descriptive fields, passed through untouched
    title: str | None = None
    aliases: tuple[str, ...] = ()
    description: str | None = None
    portrait: str | None = None

    @property
    def houses(self) -> tuple[str, ...]:
        return tuple(h for h in (self.main_house, self.secondary_house) if h)


@dataclass
class LayoutNode:
    """Derived state for one character. Rebuilt from scratch on every chart build."""

    character: Character
    children: list[str] = field(default_factory=list)
    partners: list[str] = field(default_factory=list)
    betrothals: list[str] = field(default_factory=list)
    generation: int | None = None
    x: float = 0.0
    y: float = 0.0
    display_name: str = ""

    @property
    def id(self) -> str:
        return self.character.id


@dataclass(frozen=True)
class Edge:
    source: str
    target: str
    type: str  # parent, marriage, betrothal

    @property
    def id(self) -> str:
        return f"{self.type}:{self.source}->{self.target}"


@dataclass
class GenerationResult:
    generations: dict[str, int]
    unreachable: list[str] = field(default_factory=list)
    cycles: list[list[str]] = field(default_factory=list)


@dataclass
class LayoutResult:
    nodes: dict[str, LayoutNode]
    edges: list[Edge]
    unreachable: list[str] = field(default_factory=list)
    cycles: list[list[str]] = field(default_factory=list)
    graph: nx.DiGraph | None = None  # relation graph, see graph.build_graph

    def node(self, character_id: str) -> LayoutNode:
        try:
            return self.nodes[character_id]
        except KeyError:
            raise CharacterNotFoundError(character_id) from None

    @property
    def characters(self) -> list[Character]:
        return [n.character for n in self.nodes.values()]


@dataclass(frozen=True)
class Lineage:
    root_id: str
    node_ids: frozenset[str]
    edge_ids: frozenset[str]

    def is_highlighted(self, character_id: str) -> bool:
        return character_id in self.node_ids


@dataclass(frozen=True)
class HouseFilter:
    houses: frozenset[str]
    node_ids: frozenset[str]
    edge_ids: frozenset[str]


@dataclass(frozen=True)
class FamilyView:
    character_id: str
    parents: tuple[str, ...]
    partners: tuple[str, ...]
    betrothed: tuple[str, ...]
    children: tuple[str, ...]
    siblings: tuple[str, ...]
