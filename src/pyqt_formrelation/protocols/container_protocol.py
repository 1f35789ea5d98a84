"""
Field container contract.

The relation engine consumes exactly these capabilities from the form it is
attached to, and nothing more. Concrete containers (RelationForm, test
doubles) inherit from FieldContainer.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional


FieldChangedCallback = Callable[[Any], None]
ReadyCallback = Callable[[], None]


class FieldContainer(ABC):
    """
    ABC for form-like containers that own a set of input fields.

    Example:
        engine = FormRelation(relations=[...])
        engine.activate(form)   # binds once form.is_ready() / ready fires
    """

    @abstractmethod
    def get_input_fields(self) -> List[Any]:
        """
        Enumerate input-capable fields currently reachable from this container.

        Returns:
            Fields implementing the Field ABC, in container order.
        """
        pass

    @abstractmethod
    def get_field(self, field_id: str) -> Optional[Any]:
        """
        Look up a field by identifier within this container's scope.

        Returns:
            The field, or None if no field carries that identifier.
        """
        pass

    @abstractmethod
    def connect_field_changed(self, callback: FieldChangedCallback) -> None:
        """Subscribe to field value changes. The callback receives the changed field."""
        pass

    @abstractmethod
    def disconnect_field_changed(self, callback: FieldChangedCallback) -> None:
        """Unsubscribe a field change callback. Unknown callbacks are ignored."""
        pass

    @abstractmethod
    def is_ready(self) -> bool:
        """Whether the container's structure (its fields) has been built."""
        pass

    @abstractmethod
    def connect_ready(self, callback: ReadyCallback) -> None:
        """Subscribe to the structurally-ready signal."""
        pass

    @abstractmethod
    def disconnect_ready(self, callback: ReadyCallback) -> None:
        """Unsubscribe a ready callback. Unknown callbacks are ignored."""
        pass
