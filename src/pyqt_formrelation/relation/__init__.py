"""
Declarative field-dependency rules.

FormRelation evaluates relations (dependencies -> pattern -> actions on
targets) whenever a field of its container changes.
"""

from .exceptions import (
    FormRelationError,
    ConfigurationError,
    RelationConfigError,
    MissingFieldError,
    RelationCycleError,
)
from .relation_types import (
    NamedRef,
    Inline,
    RuleSpec,
    as_rule_spec,
    Dependency,
    Relation,
    parse_relations,
)
from .field_operations import FieldDispatcher
from .registry import (
    RuleRegistry,
    RelationRegistries,
    LOGICS,
    PATTERNS,
    ACTIONS,
    register_logic,
    register_pattern,
    register_action,
)
from .dependency_index import DependencyIndex, IndexedRelation
from .relation_engine import FormRelation

__all__ = [
    "FormRelationError",
    "ConfigurationError",
    "RelationConfigError",
    "MissingFieldError",
    "RelationCycleError",
    "NamedRef",
    "Inline",
    "RuleSpec",
    "as_rule_spec",
    "Dependency",
    "Relation",
    "parse_relations",
    "FieldDispatcher",
    "RuleRegistry",
    "RelationRegistries",
    "LOGICS",
    "PATTERNS",
    "ACTIONS",
    "register_logic",
    "register_pattern",
    "register_action",
    "DependencyIndex",
    "IndexedRelation",
    "FormRelation",
]
