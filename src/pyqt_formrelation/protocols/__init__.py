"""
Field and container protocol definitions, widget adapters and configuration.

ABC-based contracts that eliminate duck typing in favor of
explicit, fail-loud inheritance-based architecture.
"""

from .field_protocols import (
    FieldIdentifiable,
    ValueGettable,
    ValueSettable,
    Field,
    Displayable,
    Toggleable,
    ChangeSignalEmitter,
)
from .container_protocol import FieldContainer
from .form_config import CyclePolicy, RelationConfig, set_relation_config, get_relation_config
from .widget_adapters import (
    PyQtWidgetMeta,
    FieldWidgetMixin,
    LineEditAdapter,
    SpinBoxAdapter,
    CheckBoxAdapter,
    SelectAdapter,
    SelectOption,
    parse_datasource,
)

__all__ = [
    "FieldIdentifiable",
    "ValueGettable",
    "ValueSettable",
    "Field",
    "Displayable",
    "Toggleable",
    "ChangeSignalEmitter",
    "FieldContainer",
    "CyclePolicy",
    "RelationConfig",
    "set_relation_config",
    "get_relation_config",
    "PyQtWidgetMeta",
    "FieldWidgetMixin",
    "LineEditAdapter",
    "SpinBoxAdapter",
    "CheckBoxAdapter",
    "SelectAdapter",
    "SelectOption",
    "parse_datasource",
]
