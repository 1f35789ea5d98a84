"""Tests for field protocols and widget adapters."""

import pytest
from PyQt6.QtWidgets import QLabel, QWidget

from pyqt_formrelation.protocols import (
    CheckBoxAdapter,
    Displayable,
    Field,
    LineEditAdapter,
    SelectAdapter,
    SelectOption,
    SpinBoxAdapter,
    Toggleable,
    ValueSettable,
    parse_datasource,
)


def test_line_edit_adapter(qapp):
    """Test LineEditAdapter implements protocols."""
    adapter = LineEditAdapter("name")
    assert isinstance(adapter, Field)
    assert isinstance(adapter, ValueSettable)
    assert isinstance(adapter, Displayable)
    assert isinstance(adapter, Toggleable)
    assert adapter.get_field_id() == "name"
    assert adapter.get_field_name() == "name"

    adapter.set_value("test")
    assert adapter.get_value() == "test"
    adapter.set_value("   ")
    assert adapter.get_value() is None


def test_show_hide_enable_disable(qapp):
    adapter = LineEditAdapter("name")
    assert adapter.is_shown()
    adapter.hide()
    assert not adapter.is_shown()
    adapter.show()
    assert adapter.is_shown()

    adapter.disable()
    assert adapter.is_disabled()
    adapter.enable()
    assert not adapter.is_disabled()


def test_is_shown_follows_explicit_visibility_only(qapp):
    parent = QWidget()
    adapter = LineEditAdapter("name", parent)
    label = QLabel("Name", parent)
    adapter.attach_label(label)
    assert adapter.is_shown()  # parent never shown
    assert not label.isHidden()

    adapter.hide()
    assert not adapter.is_shown()
    assert label.isHidden()

    adapter.attach_label(None)
    adapter.show()
    assert adapter.is_shown()
    assert label.isHidden()


def test_change_signal_connect_and_disconnect(qapp):
    adapter = LineEditAdapter("name")
    received = []
    callback = received.append

    adapter.connect_change_signal(callback)
    adapter.connect_change_signal(callback)  # connecting twice is idempotent
    adapter.set_value("a")
    assert received == ["a"]

    adapter.disconnect_change_signal(callback)
    adapter.set_value("b")
    assert received == ["a"]

    adapter.disconnect_change_signal(callback)  # unknown callback is a no-op


def test_spin_box_adapter(qapp):
    adapter = SpinBoxAdapter("count")
    adapter.set_value(5)
    assert adapter.get_value() == 5
    adapter.set_value(None)
    assert adapter.get_value() is None


def test_check_box_adapter(qapp):
    adapter = CheckBoxAdapter("agree", text="I agree")
    received = []
    adapter.connect_change_signal(received.append)

    adapter.set_value(True)
    assert adapter.get_value() is True
    adapter.set_value(None)
    assert adapter.get_value() is False
    assert received == [True, False]


def test_parse_datasource_string():
    options = parse_datasource("Beijing:010, Shanghai:021 , Guangzhou")
    assert options == [
        SelectOption("Beijing", "010"),
        SelectOption("Shanghai", "021"),
        SelectOption("Guangzhou", "Guangzhou"),
    ]


def test_parse_datasource_value_use_index():
    options = parse_datasource(["red", "green:g"], value_use_index=True)
    assert options == [SelectOption("red", 0), SelectOption("green", "g")]


def test_parse_datasource_mappings():
    options = parse_datasource([{"text": "One", "value": 1}, {"name": "Two"}])
    assert options == [SelectOption("One", 1), SelectOption("Two", "Two")]
    assert parse_datasource("") == []
    assert parse_datasource(None) == []


def test_select_adapter(qapp):
    adapter = SelectAdapter("country", datasource="France:FR, USA:US")
    assert adapter.get_value() is None
    assert [option.value for option in adapter.options] == ["FR", "US"]

    adapter.set_value("US")
    assert adapter.get_value() == "US"
    assert adapter.currentText() == "USA"

    adapter.set_value("XX")
    assert adapter.get_value() is None


def test_select_adapter_normalized_match(qapp):
    adapter = SelectAdapter("size", datasource="small, large", value_use_index=True)
    adapter.set_value("1")
    assert adapter.get_value() == 1


def test_select_fill_keeps_existing_value(qapp):
    adapter = SelectAdapter("country", datasource="France:FR, USA:US")
    adapter.set_value("US")

    adapter.fill("USA:US, Canada:CA")
    assert adapter.get_value() == "US"

    adapter.fill("Canada:CA")
    assert adapter.get_value() is None


@pytest.mark.parametrize("adapter_class", [LineEditAdapter, SpinBoxAdapter, CheckBoxAdapter, SelectAdapter])
def test_field_name_defaults_to_id(qapp, adapter_class):
    adapter = adapter_class("field_id", field_name="data_key")
    assert adapter.get_field_id() == "field_id"
    assert adapter.get_field_name() == "data_key"
