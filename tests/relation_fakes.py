"""Plain-Python field and container doubles for engine tests (no Qt needed)."""

from typing import Any, List, Optional

from pyqt_formrelation.protocols import (
    Displayable, Field, FieldContainer, Toggleable, ValueSettable
)


class FakeField(Field, ValueSettable, Displayable, Toggleable):
    """Field that notifies its container synchronously on every set_value()."""

    def __init__(self, field_id: str, value: Any = None):
        self.field_id = field_id
        self.value = value
        self.visible = True
        self.disabled = False
        self.container: Optional["FakeContainer"] = None

    def get_field_id(self) -> str:
        return self.field_id

    def get_value(self) -> Any:
        return self.value

    def set_value(self, value: Any) -> None:
        self.value = value
        if self.container is not None:
            self.container.notify(self)

    def show(self) -> None:
        self.visible = True

    def hide(self) -> None:
        self.visible = False

    def is_shown(self) -> bool:
        return self.visible

    def enable(self) -> None:
        self.disabled = False

    def disable(self) -> None:
        self.disabled = True

    def is_disabled(self) -> bool:
        return self.disabled


class FakeContainer(FieldContainer):
    """In-memory container with explicit readiness."""

    def __init__(self, *fields: FakeField, ready: bool = True):
        self.fields: List[FakeField] = []
        self.ready = ready
        self.field_callbacks: List[Any] = []
        self.ready_callbacks: List[Any] = []
        for field in fields:
            self.add(field)

    def add(self, field: FakeField) -> FakeField:
        field.container = self
        self.fields.append(field)
        return field

    def __getitem__(self, field_id: str) -> FakeField:
        return self.get_field(field_id)

    def notify(self, field: FakeField) -> None:
        for callback in list(self.field_callbacks):
            callback(field)

    def make_ready(self) -> None:
        self.ready = True
        for callback in list(self.ready_callbacks):
            callback()

    def get_input_fields(self) -> List[FakeField]:
        return list(self.fields)

    def get_field(self, field_id: str) -> Optional[FakeField]:
        return next((f for f in self.fields if f.get_field_id() == field_id), None)

    def connect_field_changed(self, callback) -> None:
        self.field_callbacks.append(callback)

    def disconnect_field_changed(self, callback) -> None:
        if callback in self.field_callbacks:
            self.field_callbacks.remove(callback)

    def is_ready(self) -> bool:
        return self.ready

    def connect_ready(self, callback) -> None:
        self.ready_callbacks.append(callback)

    def disconnect_ready(self, callback) -> None:
        if callback in self.ready_callbacks:
            self.ready_callbacks.remove(callback)
