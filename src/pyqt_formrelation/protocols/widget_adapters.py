"""
Widget adapters that wrap Qt widgets to implement the field ABCs.

Normalizes Qt's inconsistent APIs:
- QLineEdit.text() vs QSpinBox.value() vs QComboBox.currentData()
- QLineEdit.setText() vs QSpinBox.setValue() vs QComboBox.setCurrentIndex()
- textChanged vs valueChanged vs currentIndexChanged
- setEnabled(bool) vs the enable()/disable() pair used by relation actions

All adapters implement consistent interface via ABCs:
- get_field_id() / get_value() / set_value() for all widgets
- show() / hide() / enable() / disable() for relation targets
- connect_change_signal() for all widgets
"""

from abc import ABCMeta
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union
import logging
import re

from PyQt6.QtCore import QObject, Qt
from PyQt6.QtWidgets import QCheckBox, QComboBox, QLineEdit, QSpinBox, QWidget

from pyqt_formrelation.core import normalize_value
from .field_protocols import (
    Field, ValueSettable, Displayable, Toggleable, ChangeSignalEmitter
)

logger = logging.getLogger(__name__)

# PyQt-specific metaclass that combines ABCMeta with Qt's metaclass
_QtMetaclass = type(QObject)


class PyQtWidgetMeta(_QtMetaclass, ABCMeta):
    """Metaclass for PyQt widgets that need ABC support."""
    pass


class FieldWidgetMixin:
    """
    Shared plumbing for QWidget-based field adapters.

    - Field identity lives in the Qt objectName so it shows up in Qt tooling.
    - show()/hide() come straight from QWidget. A row label attached with
      attach_label() follows the field's visibility.
    - Change callbacks are wrapped once and remembered, so that
      disconnect_change_signal() can remove the exact slot it connected.
    """

    def _init_field(self, field_id: str, field_name: Optional[str] = None) -> None:
        self.setObjectName(field_id or "")
        self._field_name = field_name or field_id or ""
        self._change_slots: Dict[Callable, Callable] = {}
        self._row_label: Optional[QWidget] = None

    def get_field_id(self) -> str:
        """Implement FieldIdentifiable ABC."""
        return self.objectName()

    def get_field_name(self) -> str:
        """Key under which the value is collected by RelationForm.get_data()."""
        return self._field_name

    def attach_label(self, label: Optional[QWidget]) -> None:
        """Let ``label`` (e.g. a form row label) be shown and hidden with this field."""
        self._row_label = label
        if label is not None:
            label.setVisible(self.is_shown())

    def setVisible(self, visible: bool) -> None:
        super().setVisible(visible)
        if self._row_label is not None:
            self._row_label.setVisible(visible)

    def is_shown(self) -> bool:
        """Implement Displayable ABC. Only an explicit hide() makes a field not shown."""
        explicit = self.testAttribute(Qt.WidgetAttribute.WA_WState_ExplicitShowHide)
        return not (explicit and self.isHidden())

    def enable(self) -> None:
        """Implement Toggleable ABC."""
        self.setEnabled(True)

    def disable(self) -> None:
        """Implement Toggleable ABC."""
        self.setEnabled(False)

    def is_disabled(self) -> bool:
        """Implement Toggleable ABC."""
        return not self.isEnabled()

    def _connect_slot(self, signal, callback: Callable[[Any], None]) -> None:
        if callback in self._change_slots:
            return
        slot = lambda *_: callback(self.get_value())
        self._change_slots[callback] = slot
        signal.connect(slot)

    def _disconnect_slot(self, signal, callback: Callable[[Any], None]) -> None:
        slot = self._change_slots.pop(callback, None)
        if slot is None:
            return
        try:
            signal.disconnect(slot)
        except TypeError:
            # Signal already disconnected (widget torn down) - ignore
            pass


class LineEditAdapter(FieldWidgetMixin, QLineEdit, Field, ValueSettable, Displayable,
                      Toggleable, ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """
    Adapter for QLineEdit implementing the field ABCs.

    Empty (or whitespace-only) text reads as None.
    """

    def __init__(self, field_id: str = "", parent=None, field_name: Optional[str] = None):
        super().__init__(parent)
        self._init_field(field_id, field_name)

    def get_value(self) -> Any:
        """Implement ValueGettable ABC."""
        text = self.text().strip()
        return None if text == "" else text

    def set_value(self, value: Any) -> None:
        """Implement ValueSettable ABC."""
        self.setText("" if value is None else str(value))

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """Implement ChangeSignalEmitter ABC."""
        self._connect_slot(self.textChanged, callback)

    def disconnect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """Implement ChangeSignalEmitter ABC."""
        self._disconnect_slot(self.textChanged, callback)


class SpinBoxAdapter(FieldWidgetMixin, QSpinBox, Field, ValueSettable, Displayable,
                     Toggleable, ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """
    Adapter for QSpinBox implementing the field ABCs.

    Handles None values using special value text mechanism.
    When value is None, the spinbox sits at its minimum with blank special text.
    """

    def __init__(self, field_id: str = "", parent=None, field_name: Optional[str] = None):
        super().__init__(parent)
        self._init_field(field_id, field_name)
        self.setSpecialValueText(" ")  # Empty special value = None
        self.setRange(-2147483648, 2147483647)

    def get_value(self) -> Any:
        """Implement ValueGettable ABC."""
        if self.value() == self.minimum() and self.specialValueText():
            return None
        return self.value()

    def set_value(self, value: Any) -> None:
        """Implement ValueSettable ABC."""
        if value is None:
            self.setValue(self.minimum())
        else:
            self.setValue(int(value))

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """Implement ChangeSignalEmitter ABC."""
        self._connect_slot(self.valueChanged, callback)

    def disconnect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """Implement ChangeSignalEmitter ABC."""
        self._disconnect_slot(self.valueChanged, callback)


class CheckBoxAdapter(FieldWidgetMixin, QCheckBox, Field, ValueSettable, Displayable,
                      Toggleable, ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """
    Adapter for QCheckBox implementing the field ABCs.

    Returns bool values, treats None as False.
    """

    def __init__(self, field_id: str = "", parent=None, field_name: Optional[str] = None,
                 text: str = ""):
        super().__init__(parent)
        self._init_field(field_id, field_name)
        self.setText(text)

    def get_value(self) -> Any:
        """Implement ValueGettable ABC."""
        return self.isChecked()

    def set_value(self, value: Any) -> None:
        """Implement ValueSettable ABC."""
        self.setChecked(bool(value) if value is not None else False)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """Implement ChangeSignalEmitter ABC."""
        self._connect_slot(self.toggled, callback)

    def disconnect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """Implement ChangeSignalEmitter ABC."""
        self._disconnect_slot(self.toggled, callback)


@dataclass(frozen=True)
class SelectOption:
    """One selectable entry of a SelectAdapter."""
    text: str
    value: Any


Datasource = Union[str, Sequence[Union[str, Mapping[str, Any], SelectOption]]]

_ITEM_SPLIT = re.compile(r"\s*,\s*")
_PAIR_SPLIT = re.compile(r"\s*:\s*")


def parse_datasource(datasource: Datasource, value_use_index: bool = False) -> List[SelectOption]:
    """
    Parse a select datasource into options.

    Accepted shapes:
    - "Beijing:010, Shanghai:021" (comma separated, "text:value" entries)
    - ["Beijing", "Shanghai:021"] (same entry syntax, already split)
    - [{"text": "Beijing", "value": "010"}, {"name": "Shanghai"}]

    An entry without a value uses its position when ``value_use_index`` is set,
    and its text otherwise.
    """
    if datasource is None:
        return []
    if isinstance(datasource, str):
        stripped = datasource.strip()
        items: Sequence[Any] = _ITEM_SPLIT.split(stripped) if stripped else []
    else:
        items = list(datasource)

    options: List[SelectOption] = []
    for index, item in enumerate(items):
        if isinstance(item, SelectOption):
            options.append(item)
        elif isinstance(item, Mapping):
            text = item.get("text", item.get("name", ""))
            text = "" if text is None else str(text)
            if "value" in item:
                value = item["value"]
            else:
                value = index if value_use_index else text
            options.append(SelectOption(text=text, value=value))
        else:
            parts = _PAIR_SPLIT.split(str(item).strip(), maxsplit=1)
            text = parts[0]
            if len(parts) > 1:
                value = parts[1]
            else:
                value = index if value_use_index else text
            options.append(SelectOption(text=text, value=value))
    return options


class SelectAdapter(FieldWidgetMixin, QComboBox, Field, ValueSettable, Displayable,
                    Toggleable, ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """
    Adapter for QComboBox acting as a select field.

    Stores actual values in itemData, not just display text. Values are
    matched with normalize_value(), the same equality relation logic uses.
    With no selection the default label is shown as placeholder text.
    """

    def __init__(self, field_id: str = "", parent=None, field_name: Optional[str] = None,
                 datasource: Datasource = (), value_use_index: bool = False,
                 default_label: str = "Please select"):
        super().__init__(parent)
        self._init_field(field_id, field_name)
        self.value_use_index = value_use_index
        self.setPlaceholderText(default_label)
        self.fill(datasource)

    @property
    def options(self) -> List[SelectOption]:
        return [SelectOption(self.itemText(i), self.itemData(i)) for i in range(self.count())]

    def fill(self, datasource: Datasource) -> None:
        """Replace all options. The current value is kept when it still exists."""
        previous = self.get_value()
        options = parse_datasource(datasource, self.value_use_index)
        self.blockSignals(True)
        try:
            self.clear()
            for option in options:
                self.addItem(option.text, option.value)
            self.setCurrentIndex(self.find_option_index(previous))
        finally:
            self.blockSignals(False)
        logger.debug(f"Filled select '{self.get_field_id()}' with {len(options)} options")

    def find_option_index(self, value: Any) -> int:
        """Index of the option whose value equals ``value``, or -1."""
        if value is None:
            return -1
        target = normalize_value(value)
        for i in range(self.count()):
            if normalize_value(self.itemData(i)) == target:
                return i
        return -1

    def get_value(self) -> Any:
        """Implement ValueGettable ABC."""
        if self.currentIndex() < 0:
            return None
        return self.itemData(self.currentIndex())

    def set_value(self, value: Any) -> None:
        """Implement ValueSettable ABC. Unknown values clear the selection."""
        self.setCurrentIndex(self.find_option_index(value))

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """Implement ChangeSignalEmitter ABC."""
        self._connect_slot(self.currentIndexChanged, callback)

    def disconnect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """Implement ChangeSignalEmitter ABC."""
        self._disconnect_slot(self.currentIndexChanged, callback)
