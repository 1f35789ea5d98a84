"""Relation exceptions."""

from typing import Sequence


class FormRelationError(Exception):
    """Base class for all relation engine errors."""


class ConfigurationError(FormRelationError):
    """Raised when a relation declaration is broken."""


class RelationConfigError(ConfigurationError):
    """Raised when a relation declaration is structurally invalid at parse time."""


class MissingFieldError(ConfigurationError):
    """Raised when a dependency's field cannot be resolved in the bound container."""

    def __init__(self, field_id: str, relation_key: str):
        self.field_id = field_id
        self.relation_key = relation_key
        super().__init__(
            f"Lost field '{field_id}' required by {relation_key}: "
            f"no field with this id is reachable from the container"
        )


class RelationCycleError(FormRelationError):
    """Raised when an action re-enters a relation that is still being evaluated."""

    def __init__(self, chain: Sequence[str]):
        self.chain = tuple(chain)
        super().__init__(f"Relation cycle detected: {' -> '.join(self.chain)}")
