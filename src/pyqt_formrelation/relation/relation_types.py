"""
Relation declaration types.

A relation is plain data: which fields it depends on (and the logic checked
against each), how the per-dependency results combine (pattern), and which
actions run on which target fields with the combined state.

Logic, pattern and action slots each hold a RuleSpec - either a reference to
a registered name or an inline callable:

    Relation.from_dict({
        "dependences": [{"id": "country", "logic": "equal", "value": "US"}],
        "targets": ["state"],
        "actions": ["show"],
    })
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Iterable, List, Mapping, Optional, Tuple, Union

from .exceptions import RelationConfigError


@dataclass(frozen=True)
class NamedRef:
    """Reference to a registry entry by name."""
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Inline:
    """Inline callable used directly, bypassing the registry."""
    func: Callable[..., Any]

    def __str__(self) -> str:
        return getattr(self.func, "__name__", repr(self.func))


RuleSpec = Union[NamedRef, Inline]


def as_rule_spec(value: Any, slot: str = "rule") -> RuleSpec:
    """
    Coerce a declaration value into a RuleSpec.

    Args:
        value: NamedRef/Inline (returned as is), a string, or a callable
        slot: Slot name used in the error message

    Raises:
        RelationConfigError: If value is neither a name nor a callable
    """
    if isinstance(value, (NamedRef, Inline)):
        return value
    if isinstance(value, str):
        return NamedRef(value)
    if callable(value):
        return Inline(value)
    raise RelationConfigError(
        f"{slot} must be a registered name or a callable, got {type(value).__name__}: {value!r}"
    )


def _as_tuple(value: Any) -> Tuple[Any, ...]:
    # A lone string or callable counts as a one-element sequence
    if value is None:
        return ()
    if isinstance(value, (str, Mapping, NamedRef, Inline)) or callable(value):
        return (value,)
    return tuple(value)


@dataclass(frozen=True)
class Dependency:
    """
    Reference to a driving field plus the condition checked against it.

    Attributes:
        id: Identifier of the field whose value is examined
        logic: Logic to evaluate; None evaluates to False
        params: Condition-specific parameters (e.g. ``value`` for ``equal``)
    """
    id: str
    logic: Optional[RuleSpec] = None
    params: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not isinstance(self.id, str) or not self.id:
            raise RelationConfigError(f"Dependency id must be a non-empty string, got {self.id!r}")
        if self.logic is not None:
            object.__setattr__(self, "logic", as_rule_spec(self.logic, "logic"))
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))

    @property
    def value(self) -> Any:
        return self.params.get("value")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Dependency":
        """Parse ``{"id"|"childName": ..., "logic": ..., **params}``."""
        if not isinstance(data, Mapping):
            raise RelationConfigError(f"Dependency must be a mapping, got {type(data).__name__}")
        params = dict(data)
        field_id = params.pop("childName", None) or params.pop("id", None)
        params.pop("id", None)
        logic = params.pop("logic", None)
        return cls(id=field_id, logic=logic, params=params)


@dataclass(frozen=True)
class Relation:
    """
    Declarative unit of reactive behavior.

    Attributes:
        dependences: Non-empty ordered dependencies
        targets: Non-empty ordered target field identifiers
        actions: Non-empty ordered actions, applied to every target
        pattern: Combinator over the dependency results (default "all")
        name: Optional label used in logs and errors
    """
    dependences: Tuple[Dependency, ...]
    targets: Tuple[str, ...]
    actions: Tuple[RuleSpec, ...]
    pattern: RuleSpec = NamedRef("all")
    name: Optional[str] = None

    def __post_init__(self):
        dependences = tuple(
            dep if isinstance(dep, Dependency) else Dependency.from_dict(dep)
            for dep in _as_tuple(self.dependences)
        )
        targets = _as_tuple(self.targets)
        actions = tuple(as_rule_spec(action, "action") for action in _as_tuple(self.actions))
        label = self.name or "relation"

        if not dependences:
            raise RelationConfigError(f"{label}: 'dependences' must not be empty")
        if not targets:
            raise RelationConfigError(f"{label}: 'targets' must not be empty")
        if not all(isinstance(target, str) and target for target in targets):
            raise RelationConfigError(f"{label}: targets must be non-empty strings, got {targets!r}")
        if not actions:
            raise RelationConfigError(f"{label}: 'actions' must not be empty")

        object.__setattr__(self, "dependences", dependences)
        object.__setattr__(self, "targets", targets)
        object.__setattr__(self, "actions", actions)
        object.__setattr__(self, "pattern", as_rule_spec(self.pattern or "all", "pattern"))

    @property
    def dependency_ids(self) -> Tuple[str, ...]:
        return tuple(dep.id for dep in self.dependences)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Relation":
        """Parse the plain-data declaration form."""
        if not isinstance(data, Mapping):
            raise RelationConfigError(f"Relation must be a mapping, got {type(data).__name__}")
        unknown = set(data) - {"dependences", "pattern", "targets", "actions", "name"}
        if unknown:
            raise RelationConfigError(f"Unknown relation keys: {sorted(unknown)}")
        return cls(
            dependences=data.get("dependences"),
            targets=data.get("targets"),
            actions=data.get("actions"),
            pattern=data.get("pattern") or "all",
            name=data.get("name"),
        )


RelationLike = Union[Relation, Mapping[str, Any]]


def parse_relations(items: Optional[Iterable[RelationLike]]) -> Tuple[Relation, ...]:
    """Parse a sequence of Relation instances and/or plain mappings."""
    if items is None:
        return ()
    if isinstance(items, (Relation, Mapping)):
        items = [items]
    relations: List[Relation] = []
    for item in items:
        relations.append(item if isinstance(item, Relation) else Relation.from_dict(item))
    return tuple(relations)


__all__ = [
    "NamedRef",
    "Inline",
    "RuleSpec",
    "as_rule_spec",
    "Dependency",
    "Relation",
    "RelationLike",
    "parse_relations",
]
