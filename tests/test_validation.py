from bloodline_chart.graph import build_graph, infer_relationships
from bloodline_chart.validation import validate_graph
from conftest import char


def warnings_for(characters):
    return validate_graph(build_graph(infer_relationships(characters)))


def test_clean_realm_has_no_warnings(realm):
    assert warnings_for(realm) == []


def test_child_born_before_parent():
    warnings = warnings_for([char("p", "Parent", birth_year=1200), char("c", "Child", parent_1="p", birth_year=1190)])

    assert warnings == ["Impossible: Child born before parent Parent"]


def test_young_parent_is_suspicious():
    warnings = warnings_for([char("p", "Parent", birth_year=1200), char("c", "Child", parent_1="p", birth_year=1208)])

    assert len(warnings) == 1
    assert warnings[0].startswith("Suspicious: Parent was less than 12 years old")


def test_death_before_birth():
    warnings = warnings_for([char("p", "Ghost", birth_year=1200, death_year=1150)])

    assert warnings == ["Impossible: Ghost died before being born"]


def test_parent_cycle():
    warnings = warnings_for([char("x", parent_1="y"), char("y", parent_1="x")])

    assert len(warnings) == 1
    assert warnings[0].startswith("Cycle detected in parent-child relationships")
