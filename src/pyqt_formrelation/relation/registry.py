"""
Logic, pattern and action registries.

Each registry maps a name to a function and resolves RuleSpecs:
- Inline(func) -> func, used directly
- NamedRef(name) -> registry lookup, None if not registered

Three process-wide registries are pre-seeded with the built-ins:
- LOGICS:   equal                      (dependency, value) -> bool
- PATTERNS: all, any                   (states) -> bool
- ACTIONS:  show, hide, disable, enable (state, target) -> None

Lifecycle: populate at application startup, read-only thereafter. There is no
removal API; re-registering a name overrides it (with a warning).

Example:
    from pyqt_formrelation.relation import register_logic

    @register_logic("not_empty")
    def not_empty(dependency, value):
        return value not in (None, "")
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, List, Optional, Sequence, TypeVar
import logging

from pyqt_formrelation.core import values_equal
from .field_operations import FieldDispatcher
from .relation_types import Dependency, Inline, NamedRef, RuleSpec

logger = logging.getLogger(__name__)

LogicFunc = Callable[[Dependency, Any], bool]
PatternFunc = Callable[[Sequence[bool]], bool]
ActionFunc = Callable[[bool, Any], None]

F = TypeVar("F", bound=Callable[..., Any])


class RuleRegistry(Generic[F]):
    """Name -> function registry for one rule kind (logic, pattern or action)."""

    def __init__(self, kind: str, entries: Optional[Dict[str, F]] = None):
        self.kind = kind
        self._entries: Dict[str, F] = dict(entries or {})

    def register(self, name: str, func: Optional[F] = None):
        """
        Register ``func`` under ``name``.

        Can be used as a decorator when ``func`` is omitted.

        Raises:
            TypeError: If func is not callable
        """
        if func is None:
            def decorator(f: F) -> F:
                self.register(name, f)
                return f
            return decorator

        if not callable(func):
            raise TypeError(f"{self.kind} '{name}' must be callable, got {type(func).__name__}")

        if name in self._entries and self._entries[name] is not func:
            logger.warning(
                f"{self.kind.capitalize()} '{name}' already registered to "
                f"{getattr(self._entries[name], '__name__', self._entries[name])}. Overwriting."
            )
        self._entries[name] = func
        logger.debug(f"Registered {self.kind} '{name}'")
        return func

    def get(self, name: str) -> Optional[F]:
        return self._entries.get(name)

    def resolve(self, spec: Optional[RuleSpec]) -> Optional[F]:
        """
        Resolve a RuleSpec to a function.

        Returns:
            The inline function, the registered function, or None if unresolved
        """
        if spec is None:
            return None
        if isinstance(spec, Inline):
            return spec.func
        if isinstance(spec, NamedRef):
            return self._entries.get(spec.name)
        raise TypeError(f"Expected NamedRef or Inline, got {type(spec).__name__}")

    def names(self) -> List[str]:
        return list(self._entries)

    def copy(self) -> "RuleRegistry[F]":
        """Independent registry with the same entries (for per-engine customization)."""
        return RuleRegistry(self.kind, self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"RuleRegistry({self.kind!r}, {self.names()!r})"


# ========== BUILT-INS ==========

def _logic_equal(dependency: Dependency, value: Any) -> bool:
    return values_equal(value, dependency.value)


def _pattern_all(states: Sequence[bool]) -> bool:
    return all(states)


def _pattern_any(states: Sequence[bool]) -> bool:
    return any(states)


def _action_show(state: bool, target: Any) -> None:
    if state:
        FieldDispatcher.show(target)
    else:
        FieldDispatcher.hide(target)


def _action_hide(state: bool, target: Any) -> None:
    if state:
        FieldDispatcher.hide(target)
    else:
        FieldDispatcher.show(target)


def _action_disable(state: bool, target: Any) -> None:
    if state:
        FieldDispatcher.disable(target)
    else:
        FieldDispatcher.enable(target)


def _action_enable(state: bool, target: Any) -> None:
    if state:
        FieldDispatcher.enable(target)
    else:
        FieldDispatcher.disable(target)


# Process-wide registries shared by every engine built with default registries
LOGICS: RuleRegistry[LogicFunc] = RuleRegistry("logic", {"equal": _logic_equal})

PATTERNS: RuleRegistry[PatternFunc] = RuleRegistry("pattern", {
    "all": _pattern_all,
    "any": _pattern_any,
})

ACTIONS: RuleRegistry[ActionFunc] = RuleRegistry("action", {
    "show": _action_show,
    "hide": _action_hide,
    "disable": _action_disable,
    "enable": _action_enable,
})


@dataclass
class RelationRegistries:
    """Bundle of the three registries an engine resolves names against."""
    logics: RuleRegistry = field(default_factory=lambda: LOGICS)
    patterns: RuleRegistry = field(default_factory=lambda: PATTERNS)
    actions: RuleRegistry = field(default_factory=lambda: ACTIONS)

    @classmethod
    def default(cls) -> "RelationRegistries":
        """The process-wide registries."""
        return cls()

    @classmethod
    def isolated(cls) -> "RelationRegistries":
        """Copies of the process-wide registries, safe to extend locally."""
        return cls(LOGICS.copy(), PATTERNS.copy(), ACTIONS.copy())


def register_logic(name: str, func: Optional[LogicFunc] = None):
    """Register a process-wide logic. Usable as a decorator."""
    return LOGICS.register(name, func)


def register_pattern(name: str, func: Optional[PatternFunc] = None):
    """Register a process-wide pattern. Usable as a decorator."""
    return PATTERNS.register(name, func)


def register_action(name: str, func: Optional[ActionFunc] = None):
    """Register a process-wide action. Usable as a decorator."""
    return ACTIONS.register(name, func)
