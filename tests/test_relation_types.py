"""Tests for relation declaration parsing."""

import pytest

from pyqt_formrelation.relation import (
    Dependency,
    Inline,
    NamedRef,
    Relation,
    RelationConfigError,
    as_rule_spec,
    parse_relations,
)


def test_from_dict_parses_plain_declaration():
    relation = Relation.from_dict({
        "dependences": [{"id": "country", "logic": "equal", "value": "US"}],
        "targets": ["state"],
        "actions": ["show"],
    })

    assert relation.pattern == NamedRef("all")
    assert relation.targets == ("state",)
    assert relation.actions == (NamedRef("show"),)
    dependency = relation.dependences[0]
    assert dependency.id == "country"
    assert dependency.logic == NamedRef("equal")
    assert dependency.value == "US"
    assert relation.dependency_ids == ("country",)


def test_child_name_alias_and_extra_params():
    dependency = Dependency.from_dict({"childName": "age", "logic": "between", "min": 1, "max": 9})
    assert dependency.id == "age"
    assert dict(dependency.params) == {"min": 1, "max": 9}
    assert dependency.value is None


def test_single_target_and_action_are_wrapped():
    hide_all = lambda state, target: None
    relation = Relation.from_dict({
        "dependences": {"id": "a", "logic": "equal", "value": "1"},
        "targets": "b",
        "actions": hide_all,
    })
    assert relation.targets == ("b",)
    assert relation.actions == (Inline(hide_all),)
    assert len(relation.dependences) == 1


@pytest.mark.parametrize("declaration", [
    {"dependences": [], "targets": ["b"], "actions": ["show"]},
    {"dependences": [{"id": "a"}], "targets": [], "actions": ["show"]},
    {"dependences": [{"id": "a"}], "targets": ["b"], "actions": []},
    {"dependences": [{"logic": "equal"}], "targets": ["b"], "actions": ["show"]},
    {"dependences": [{"id": "a"}], "targets": [""], "actions": ["show"]},
    {"dependences": [{"id": "a"}], "targets": ["b"], "actions": [42]},
    {"dependences": [{"id": "a"}], "targets": ["b"], "actions": ["show"], "priority": 1},
])
def test_invalid_declarations_raise(declaration):
    with pytest.raises(RelationConfigError):
        Relation.from_dict(declaration)


def test_as_rule_spec():
    func = lambda: None
    assert as_rule_spec("all") == NamedRef("all")
    assert as_rule_spec(func) == Inline(func)
    assert as_rule_spec(NamedRef("x")) == NamedRef("x")
    with pytest.raises(RelationConfigError):
        as_rule_spec(3.5)


def test_parse_relations_accepts_mixed_input():
    existing = Relation(dependences=[{"id": "a"}], targets=["b"], actions=["show"], name="existing")
    relations = parse_relations([
        existing,
        {"dependences": [{"id": "c"}], "targets": ["d"], "actions": ["hide"], "pattern": "any"},
    ])
    assert relations[0] is existing
    assert relations[1].pattern == NamedRef("any")
    assert parse_relations(None) == ()
