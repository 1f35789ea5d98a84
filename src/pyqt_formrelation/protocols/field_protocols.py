"""
Field ABC contracts for relation-driven forms.

Defines the capabilities a form element must implement to take part in
relations, either as a dependency (something whose value is examined) or as
a target (something an action is applied to).

Design Philosophy:
- Explicit inheritance over duck typing
- Fail-loud over fail-silent
- Multiple inheritance for composable capabilities
"""

from abc import ABC, abstractmethod
from typing import Any, Callable


class FieldIdentifiable(ABC):
    """
    ABC for elements that can be looked up by identifier.

    The identifier is what relation declarations refer to in
    ``dependences[i].id`` and ``targets``.
    """

    @abstractmethod
    def get_field_id(self) -> str:
        """
        Get the identifier of this field within its container.

        Returns:
            Non-empty identifier string. Empty string means "not addressable".
        """
        pass


class ValueGettable(ABC):
    """
    ABC for fields that can return a value.

    All input fields must implement this to participate in relation evaluation
    and form data extraction.
    """

    @abstractmethod
    def get_value(self) -> Any:
        """
        Get the current value from the field.

        Returns:
            The field's current value. None if no value set.
        """
        pass


class ValueSettable(ABC):
    """ABC for fields that can accept a value."""

    @abstractmethod
    def set_value(self, value: Any) -> None:
        """
        Set the field's value.

        Args:
            value: The value to set. None clears the field.
        """
        pass


class Field(FieldIdentifiable, ValueGettable):
    """
    Minimal contract for a relation dependency: an identifier plus a value.

    Action targets additionally implement Displayable and/or Toggleable when
    the built-in show/hide/enable/disable actions are used on them.
    """


class Displayable(ABC):
    """ABC for fields whose visibility can be toggled (show/hide actions)."""

    @abstractmethod
    def show(self) -> None:
        pass

    @abstractmethod
    def hide(self) -> None:
        pass

    @abstractmethod
    def is_shown(self) -> bool:
        """Whether the field has not been explicitly hidden."""
        pass


class Toggleable(ABC):
    """ABC for fields whose interactivity can be toggled (enable/disable actions)."""

    @abstractmethod
    def enable(self) -> None:
        pass

    @abstractmethod
    def disable(self) -> None:
        pass

    @abstractmethod
    def is_disabled(self) -> bool:
        pass


class ChangeSignalEmitter(ABC):
    """
    ABC for fields that emit change signals.

    Provides explicit contract for signal connection, eliminating duck typing
    of signal names (textChanged vs valueChanged vs currentIndexChanged).
    """

    @abstractmethod
    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """
        Connect callback to the field's change signal.

        Args:
            callback: Function to call when the field value changes.
                     Signature: callback(new_value: Any) -> None
        """
        pass

    @abstractmethod
    def disconnect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """
        Disconnect a callback previously passed to connect_change_signal().

        Disconnecting a callback that is not connected is a no-op.
        """
        pass
