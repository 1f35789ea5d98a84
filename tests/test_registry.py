"""Tests for logic/pattern/action registries and their built-ins."""

import logging

import pytest

from relation_fakes import FakeField

from pyqt_formrelation.relation import (
    ACTIONS,
    LOGICS,
    PATTERNS,
    Dependency,
    Inline,
    NamedRef,
    RuleRegistry,
    register_pattern,
)


def test_builtin_names_are_seeded():
    assert "equal" in LOGICS
    assert {"all", "any"} <= set(PATTERNS.names())
    assert {"show", "hide", "disable", "enable"} <= set(ACTIONS.names())


@pytest.mark.parametrize("states, expected", [
    ((True, True), True),
    ((True, False), False),
])
def test_all_pattern(states, expected):
    assert PATTERNS.get("all")(states) is expected


@pytest.mark.parametrize("states, expected", [
    ((False, False), False),
    ((False, True), True),
])
def test_any_pattern(states, expected):
    assert PATTERNS.get("any")(states) is expected


def test_equal_logic():
    equal = LOGICS.get("equal")
    dependency = Dependency(id="f", logic="equal", params={"value": "x"})
    assert equal(dependency, "x") is True
    assert equal(dependency, "y") is False


def test_equal_logic_uses_normalized_comparison():
    equal = LOGICS.get("equal")
    assert equal(Dependency(id="n", params={"value": "1"}), 1) is True
    assert equal(Dependency(id="b", params={"value": "true"}), True) is True
    assert equal(Dependency(id="e", params={"value": ""}), None) is True


def test_show_and_hide_actions_are_inverse():
    field = FakeField("t")
    ACTIONS.get("show")(False, field)
    assert not field.is_shown()
    ACTIONS.get("show")(True, field)
    assert field.is_shown()

    ACTIONS.get("hide")(True, field)
    assert not field.is_shown()
    ACTIONS.get("hide")(False, field)
    assert field.is_shown()


def test_enable_and_disable_actions_are_inverse():
    field = FakeField("t")
    ACTIONS.get("disable")(True, field)
    assert field.is_disabled()
    ACTIONS.get("enable")(True, field)
    assert not field.is_disabled()
    ACTIONS.get("enable")(False, field)
    assert field.is_disabled()
    ACTIONS.get("disable")(False, field)
    assert not field.is_disabled()


def test_builtin_action_fails_loud_on_incapable_target():
    with pytest.raises(TypeError, match="Displayable"):
        ACTIONS.get("show")(True, object())


def test_resolve_inline_named_and_missing():
    registry = RuleRegistry("pattern", {"all": all})
    func = lambda states: True
    assert registry.resolve(Inline(func)) is func
    assert registry.resolve(NamedRef("all")) is all
    assert registry.resolve(NamedRef("missing")) is None
    assert registry.resolve(None) is None


def test_register_as_decorator_and_override_warns(caplog):
    registry = RuleRegistry("logic")

    @registry.register("truthy")
    def truthy(dependency, value):
        return bool(value)

    assert registry.get("truthy") is truthy
    assert "truthy" in registry

    with caplog.at_level(logging.WARNING, logger="pyqt_formrelation.relation.registry"):
        registry.register("truthy", lambda dependency, value: False)
    assert any("Overwriting" in r.getMessage() for r in caplog.records)


def test_register_rejects_non_callable():
    with pytest.raises(TypeError):
        RuleRegistry("action").register("bad", "not callable")


def test_copy_is_independent():
    original = RuleRegistry("pattern", {"all": all})
    copy = original.copy()
    copy.register("any", any)
    assert "any" not in original
    assert len(copy) == 2


def test_process_wide_registration():
    @register_pattern("test_majority")
    def majority(states):
        return sum(states) * 2 > len(states)

    assert PATTERNS.resolve(NamedRef("test_majority")) is majority
    assert majority((True, True, False)) is True
