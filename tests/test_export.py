import json

import pytest

from bloodline_chart.export import house_colors, to_dict, to_dot, write_dot, write_json
from bloodline_chart.pipeline import build_chart


@pytest.fixture
def chart(realm):
    return build_chart(realm)


def dot_node(P, name):
    for node in P.get_nodes():
        if node.get_name().strip('"') == name:
            return node
    raise AssertionError(f"{name} not in graph")


def test_to_dict(chart):
    data = to_dict(chart)

    assert len(data["nodes"]) == 10
    assert len(data["edges"]) == 13
    assert data["unreachable"] == []

    cedric = data["nodes"][2]
    assert cedric["id"] == "cedric"
    assert cedric["displayName"] == "Cedric Stormvale"
    assert cedric["generation"] == 1
    assert cedric["x"] == chart.nodes["cedric"].x
    assert cedric["partners"] == ["fiona"]

    assert data["edges"][0] == {
        "id": "parent:aldric->cedric",
        "source": "aldric",
        "target": "cedric",
        "type": "parent",
    }
    json.dumps(data)


def test_house_colors_follow_first_appearance(chart):
    colors = house_colors(chart)

    assert colors["Stormvale"] == "lightblue"
    assert colors["Ashford"] == "lightpink"
    assert colors["Ravencrest"] == "palegreen"


def test_to_dot_pins_positions(chart):
    P = to_dot(chart)

    node = dot_node(P, "aldric")
    x, y = chart.nodes["aldric"].x, chart.nodes["aldric"].y
    assert node.get("pos").strip('"') == f"{float(x)},{-float(y)}!"
    assert len(P.get_edges()) == 13


def test_write_json(chart, tmp_path):
    path = tmp_path / "chart.json"
    write_json(chart, path)

    data = json.loads(path.read_text(encoding="utf-8"))
    assert [n["id"] for n in data["nodes"]] == list(chart.nodes)


def test_write_dot_source(chart, tmp_path):
    path = tmp_path / "chart.dot"
    write_dot(chart, path)

    text = path.read_text(encoding="utf-8")
    assert text.lstrip().startswith("digraph")
    assert "aldric" in text
