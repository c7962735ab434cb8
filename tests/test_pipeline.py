import itertools

import pytest

from bloodline_chart.config import LayoutConfig
from bloodline_chart.models import UnreachableCharactersError
from bloodline_chart.pipeline import build_chart
from conftest import char


def positions(result):
    return {cid: (n.generation, n.x, n.y) for cid, n in result.nodes.items()}


def test_build_chart(realm):
    result = build_chart(realm)

    assert list(result.nodes) == [c.id for c in realm]
    assert len(result.edges) == 13
    assert result.unreachable == []
    assert result.graph.number_of_nodes() == len(realm)
    assert result.nodes["aldric"].display_name == "Aldric Stormvale"


def test_build_chart_is_idempotent(realm):
    first = build_chart(realm)
    second = build_chart(realm)

    assert positions(first) == positions(second)
    assert first.edges == second.edges


def test_married_couple_with_only_child():
    result = build_chart(
        [
            char("R", main_house="Vale"),
            char("C1", parent_1="R", main_house="Vale"),
            char("S", main_house="Ash"),
            char("G", parent_1="C1", parent_2="S", main_house="Vale"),
        ]
    )
    nodes = result.nodes

    assert [nodes[c].generation for c in ("R", "C1", "S", "G")] == [0, 1, 1, 2]
    assert nodes["G"].x == (nodes["C1"].x + nodes["S"].x) / 2
    assert nodes["S"].x - nodes["C1"].x == LayoutConfig().partner_gap


def assert_generations_consistent(result):
    nodes = result.nodes
    for edge in result.edges:
        source, target = nodes[edge.source], nodes[edge.target]
        if edge.type == "parent":
            assert target.generation == source.generation + 1, edge.id
        elif edge.type == "marriage":
            assert target.generation == source.generation, edge.id


def test_generations_consistent_on_every_edge(realm):
    assert_generations_consistent(build_chart(realm))


def test_generations_consistent_with_reversed_input(realm):
    assert_generations_consistent(build_chart(list(reversed(realm))))


def test_generations_independent_of_input_order():
    characters = [
        char("R"),
        char("C1", parent_1="R"),
        char("C2", parent_1="R"),
        char("S"),
        char("G", parent_1="C1", parent_2="S"),
    ]

    for ordering in itertools.permutations(characters):
        result = build_chart(list(ordering))
        generations = {cid: n.generation for cid, n in result.nodes.items()}
        assert generations == {"R": 0, "C1": 1, "C2": 1, "S": 1, "G": 2}, [c.id for c in ordering]
        assert_generations_consistent(result)


def test_empty_dataset():
    result = build_chart([])

    assert result.nodes == {}
    assert result.edges == []


def test_cycle_is_laid_out_with_warning():
    result = build_chart([char("a"), char("x", parent_1="y"), char("y", parent_1="x")])

    assert result.unreachable == ["x", "y"]
    assert all(n.generation is not None for n in result.nodes.values())


def test_strict_config_rejects_cycles():
    with pytest.raises(UnreachableCharactersError):
        build_chart([char("x", parent_1="y"), char("y", parent_1="x")], LayoutConfig(strict=True))


def test_custom_spacing():
    config = LayoutConfig(generation_spacing=200, base_offset=0)
    result = build_chart([char("p"), char("k", parent_1="p")], config)

    assert result.nodes["p"].y == 0
    assert result.nodes["k"].y == 200
