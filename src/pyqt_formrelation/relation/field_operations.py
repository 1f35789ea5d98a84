"""
Field dispatcher with fail-loud ABC checking.

Replaces duck typing (hasattr checks) with explicit isinstance checks against
the field ABCs. All methods fail loud if the field doesn't implement the
required ABC.
"""

from typing import Any

from pyqt_formrelation.protocols.field_protocols import (
    FieldIdentifiable, ValueGettable, Displayable, Toggleable
)


def _require(field: Any, abc_type: type, method: str) -> None:
    if not isinstance(field, abc_type):
        raise TypeError(
            f"Field {type(field).__name__} does not implement {abc_type.__name__} ABC. "
            f"Add {abc_type.__name__} to the field's base classes and implement {method}()."
        )


class FieldDispatcher:
    """
    ABC-based field dispatch - NO DUCK TYPING.

    Example:
        value = FieldDispatcher.get_value(field)   # TypeError if not ValueGettable
        FieldDispatcher.hide(target)               # TypeError if not Displayable
    """

    @staticmethod
    def get_field_id(field: Any) -> str:
        _require(field, FieldIdentifiable, "get_field_id")
        return field.get_field_id()

    @staticmethod
    def get_value(field: Any) -> Any:
        _require(field, ValueGettable, "get_value")
        return field.get_value()

    @staticmethod
    def show(field: Any) -> None:
        _require(field, Displayable, "show")
        field.show()

    @staticmethod
    def hide(field: Any) -> None:
        _require(field, Displayable, "hide")
        field.hide()

    @staticmethod
    def enable(field: Any) -> None:
        _require(field, Toggleable, "enable")
        field.enable()

    @staticmethod
    def disable(field: Any) -> None:
        _require(field, Toggleable, "disable")
        field.disable()

    @staticmethod
    def is_input_field(field: Any) -> bool:
        """Whether ``field`` can act as a relation dependency (addressable and valued)."""
        return (
            isinstance(field, FieldIdentifiable)
            and isinstance(field, ValueGettable)
            and bool(field.get_field_id())
        )
