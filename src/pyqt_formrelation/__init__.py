"""
pyqt-formrelation: declarative field-dependency rules for PyQt6 forms.

Relations watch named input fields inside a form, evaluate conditions over
their values, and show/hide/enable/disable (or customize) target fields
whenever a relevant field changes.

Architecture:
- Tier 1 (Core): Pure Python value normalization
- Tier 2 (Protocols): Field/container ABCs, widget adapters, configuration
- Tier 3 (Relation): Registries, dependency index, FormRelation engine
- Tier 4 (Forms): RelationForm container

Key Features:
- ABC-based field protocols (no duck typing)
- Pluggable logic/pattern/action registries, named or inline
- Reverse dependency index: only affected relations are re-evaluated
- Cycle guard for cascading actions
"""

__version__ = "0.1.0"

from .relation import (
    FormRelation,
    Relation,
    Dependency,
    RelationRegistries,
    register_logic,
    register_pattern,
    register_action,
    FormRelationError,
    ConfigurationError,
    MissingFieldError,
    RelationCycleError,
)

__all__ = [
    "__version__",
    "FormRelation",
    "Relation",
    "Dependency",
    "RelationRegistries",
    "register_logic",
    "register_pattern",
    "register_action",
    "FormRelationError",
    "ConfigurationError",
    "MissingFieldError",
    "RelationCycleError",
]
