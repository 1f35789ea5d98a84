"""PyQt form container that hosts relation plugins."""

import logging
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QFormLayout, QLabel, QWidget

from pyqt_formrelation.protocols import (
    ChangeSignalEmitter,
    FieldContainer,
    FieldIdentifiable,
    FieldWidgetMixin,
    PyQtWidgetMeta,
    Toggleable,
    ValueGettable,
    ValueSettable,
)
from pyqt_formrelation.relation import FieldDispatcher, FormRelation, FormRelationError
from pyqt_formrelation.relation.relation_types import RelationLike
from pyqt_formrelation.services import SignalService

logger = logging.getLogger(__name__)


class RelationForm(QWidget, FieldContainer, metaclass=PyQtWidgetMeta):
    """
    Form container implementing FieldContainer for relation plugins.

    Fields are added with add_field(); their change signals are funneled into
    one field-changed notification carrying the changed field. The form becomes
    ready on mark_ready() or on first show, whichever comes first.

    Notification paths:
    - FieldContainer callbacks (the relation engine) run synchronously and in
      subscription order. When notify_field_changed() is called directly,
      relation errors propagate to the caller.
    - When the change originates from a widget signal, a FormRelationError is
      logged and re-emitted through relation_failed, since exceptions cannot
      cross the Qt signal boundary.
    - field_changed / ready Qt signals fire after the callbacks for external
      listeners.

    Example:
        form = RelationForm(relations=[{
            "dependences": [{"id": "country", "logic": "equal", "value": "US"}],
            "targets": ["state"],
            "actions": ["show"],
        }])
        form.add_field(SelectAdapter("country", datasource="France:FR, USA:US"), "Country")
        form.add_field(LineEditAdapter("state"), "State")
        form.mark_ready()
    """

    field_changed = pyqtSignal(object)  # changed field
    ready = pyqtSignal()
    relation_failed = pyqtSignal(object)  # FormRelationError

    def __init__(self, parent: Optional[QWidget] = None,
                 relations: Optional[Iterable[RelationLike]] = None,
                 plugins: Optional[Iterable[Any]] = None):
        super().__init__(parent)
        self._layout = QFormLayout(self)
        self._ready = False
        self._field_changed_callbacks: List[Callable[[Any], None]] = []
        self._ready_callbacks: List[Callable[[], None]] = []
        self._widget_slots: Dict[QWidget, Callable[[Any], None]] = {}
        self.plugins: List[Any] = []

        if relations is not None:
            self.install_plugin(FormRelation(relations))
        for plugin in plugins or ():
            self.install_plugin(plugin)

    # ========== FIELDS ==========

    def add_field(self, widget: QWidget, label: Optional[str] = None) -> QWidget:
        """
        Add a field widget as a new form row and wire its change signal.

        Raises:
            TypeError: If widget doesn't implement FieldIdentifiable, ValueGettable
                and ChangeSignalEmitter ABCs
        """
        for abc_type in (FieldIdentifiable, ValueGettable, ChangeSignalEmitter):
            if not isinstance(widget, abc_type):
                raise TypeError(
                    f"Widget {type(widget).__name__} does not implement {abc_type.__name__} ABC."
                )

        if label is None:
            self._layout.addRow(widget)
        else:
            row_label = QLabel(label, self)
            row_label.setBuddy(widget)
            self._layout.addRow(row_label, widget)
            if isinstance(widget, FieldWidgetMixin):
                widget.attach_label(row_label)

        slot = lambda _value, w=widget: self._on_widget_changed(w)
        self._widget_slots[widget] = slot
        widget.connect_change_signal(slot)
        logger.debug(f"Added field '{widget.get_field_id()}' ({type(widget).__name__})")
        return widget

    def remove_field(self, widget: QWidget) -> None:
        """Disconnect and detach a field previously added with add_field(). The widget itself is kept."""
        slot = self._widget_slots.pop(widget, None)
        if slot is None:
            return
        widget.disconnect_change_signal(slot)
        if isinstance(widget, FieldWidgetMixin):
            widget.attach_label(None)
        row = self._layout.takeRow(widget)
        if row.labelItem is not None and row.labelItem.widget() is not None:
            row.labelItem.widget().deleteLater()
        widget.setParent(None)

    def _iter_fields(self, root: Optional[QWidget] = None) -> Iterator[Any]:
        """
        Input fields depth-first.

        A widget with an identifier and a value is yielded and not descended
        into; nested RelationForms own their own fields and are skipped.
        """
        for child in (self if root is None else root).children():
            if not isinstance(child, QWidget) or isinstance(child, RelationForm):
                continue
            if FieldDispatcher.is_input_field(child):
                yield child
            else:
                yield from self._iter_fields(child)

    def get_input_fields(self) -> List[Any]:
        """Implement FieldContainer ABC."""
        return list(self._iter_fields())

    def get_field(self, field_id: str) -> Optional[Any]:
        """First input field in this form's scope whose identifier is ``field_id``."""
        for field in self._iter_fields():
            if field.get_field_id() == field_id:
                return field
        return None

    # ========== DATA ==========

    @staticmethod
    def _field_name(field: Any) -> str:
        if isinstance(field, FieldWidgetMixin):
            return field.get_field_name()
        return field.get_field_id()

    def get_data(self) -> Dict[str, Any]:
        """
        Collect values of enabled input fields keyed by field name.

        Disabled fields are skipped. Several fields sharing one name are merged
        into a list, in form order.
        """
        data: Dict[str, Any] = {}
        for field in self.get_input_fields():
            if isinstance(field, Toggleable) and field.is_disabled():
                continue
            name = self._field_name(field)
            value = field.get_value()
            if name in data:
                previous = data[name]
                merged = previous if isinstance(previous, list) else [previous]
                data[name] = merged + (value if isinstance(value, list) else [value])
            else:
                data[name] = value
        return data

    def set_data(self, data: Mapping[str, Any], silent: bool = False) -> None:
        """
        Write values into fields by field name.

        With ``silent=True`` no change notifications are emitted, so relations
        are not re-evaluated (see refresh_relations()).
        """
        for field in self.get_input_fields():
            name = self._field_name(field)
            if name not in data or not isinstance(field, ValueSettable):
                continue
            with SignalService.block_signals_if(silent, field):
                field.set_value(data[name])

    # ========== NOTIFICATIONS ==========

    def _on_widget_changed(self, widget: QWidget) -> None:
        try:
            self.notify_field_changed(widget)
        except FormRelationError as error:
            logger.error(f"Relation evaluation failed for '{widget.get_field_id()}': {error}", exc_info=True)
            self.relation_failed.emit(error)

    def notify_field_changed(self, field: Any) -> None:
        """Deliver a field change to every subscriber, then emit field_changed."""
        for callback in list(self._field_changed_callbacks):
            callback(field)
        self.field_changed.emit(field)

    def connect_field_changed(self, callback: Callable[[Any], None]) -> None:
        """Implement FieldContainer ABC."""
        if callback not in self._field_changed_callbacks:
            self._field_changed_callbacks.append(callback)

    def disconnect_field_changed(self, callback: Callable[[Any], None]) -> None:
        """Implement FieldContainer ABC."""
        if callback in self._field_changed_callbacks:
            self._field_changed_callbacks.remove(callback)

    def is_ready(self) -> bool:
        """Implement FieldContainer ABC."""
        return self._ready

    def connect_ready(self, callback: Callable[[], None]) -> None:
        """Implement FieldContainer ABC."""
        if callback not in self._ready_callbacks:
            self._ready_callbacks.append(callback)

    def disconnect_ready(self, callback: Callable[[], None]) -> None:
        """Implement FieldContainer ABC."""
        if callback in self._ready_callbacks:
            self._ready_callbacks.remove(callback)

    def mark_ready(self) -> None:
        """Declare the form's fields built. Runs ready callbacks once, then emits ready."""
        if self._ready:
            return
        self._ready = True
        for callback in list(self._ready_callbacks):
            callback()
        self.ready.emit()

    def showEvent(self, event) -> None:
        super().showEvent(event)
        if self._ready:
            return
        try:
            self.mark_ready()
        except FormRelationError as error:
            logger.error(f"Initial relation evaluation failed: {error}", exc_info=True)
            self.relation_failed.emit(error)

    # ========== PLUGINS ==========

    def install_plugin(self, plugin: Any) -> Any:
        """Activate ``plugin`` (e.g. a FormRelation) against this form."""
        plugin.activate(self)
        self.plugins.append(plugin)
        return plugin

    def refresh_relations(self) -> None:
        """Re-evaluate all relation plugins against current field values."""
        for plugin in self.plugins:
            if isinstance(plugin, FormRelation):
                plugin.refresh()

    def dispose(self) -> None:
        """Dispose every plugin, most recently installed first."""
        while self.plugins:
            self.plugins.pop().dispose()
