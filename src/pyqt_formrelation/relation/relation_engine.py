"""
Form relation engine.

Watches the input fields of one container and keeps target fields in sync with
declarative relations:

    container fires field change
      -> DependencyIndex: which relations read this field?
      -> per relation: logic per dependency -> pattern -> combined state
      -> per (target, action): action(state, target)

Everything runs synchronously inside the change notification. An action that
changes another field re-enters check() before the outer dispatch completes;
relations currently being evaluated are tracked so a cycle is reported instead
of recursing without bound.
"""

from typing import Any, Dict, Iterable, Optional, Set, Tuple
import logging

from pyqt_formrelation.protocols.container_protocol import FieldContainer
from pyqt_formrelation.protocols.form_config import CyclePolicy, RelationConfig, get_relation_config
from .dependency_index import DependencyIndex, IndexedRelation
from .exceptions import MissingFieldError, RelationCycleError
from .field_operations import FieldDispatcher
from .registry import RelationRegistries
from .relation_types import Dependency, Relation, RelationLike, RuleSpec, parse_relations

logger = logging.getLogger(__name__)


class FormRelation:
    """
    Relation plugin for a single FieldContainer.

    Lifecycle:
        engine = FormRelation(relations=[...])   # inert
        engine.activate(form)                    # binds when form is ready
        ...
        engine.inactivate()                      # stops listening
        engine.dispose()                         # drops container and index

    Failure semantics:
        - dependency field missing from the container -> MissingFieldError
        - unresolved logic -> False, unresolved pattern -> False
        - unresolved action or target -> skipped
    """

    def __init__(self, relations: Optional[Iterable[RelationLike]] = None,
                 registries: Optional[RelationRegistries] = None,
                 config: Optional[RelationConfig] = None):
        self._relations: Tuple[Relation, ...] = parse_relations(relations)
        self.registries = registries or RelationRegistries.default()
        self.config = config or get_relation_config()

        self.container: Optional[FieldContainer] = None
        self._index: Optional[DependencyIndex] = None
        self._subscribed = False
        self._waiting_for_ready = False

        # Relation position -> key for relations under evaluation, in entry order
        self._in_progress: Dict[int, str] = {}
        self._reported_unresolved: Set[Tuple[str, str]] = set()

    # ========== PROPERTIES ==========

    @property
    def relations(self) -> Tuple[Relation, ...]:
        return self._relations

    @property
    def index(self) -> Optional[DependencyIndex]:
        return self._index

    @property
    def is_active(self) -> bool:
        """Attached to a container and either bound or waiting for it to become ready."""
        return self._subscribed or self._waiting_for_ready

    @property
    def is_bound(self) -> bool:
        return self._subscribed

    # ========== LIFECYCLE ==========

    def activate(self, container: FieldContainer) -> None:
        """
        Attach to ``container``. Binding is deferred until the container is ready.

        Raises:
            TypeError: If container does not implement FieldContainer
            RuntimeError: If the engine is already active
        """
        if not isinstance(container, FieldContainer):
            raise TypeError(
                f"Container {type(container).__name__} does not implement FieldContainer ABC."
            )
        if self.is_active:
            raise RuntimeError(
                f"FormRelation is already active on {type(self.container).__name__}; "
                f"inactivate() it first"
            )

        self.container = container
        self._index = None
        if container.is_ready():
            self.bind()
        else:
            self._waiting_for_ready = True
            container.connect_ready(self._on_container_ready)
            logger.debug(f"FormRelation waiting for {type(container).__name__} to become ready")

    def _on_container_ready(self) -> None:
        if not self._waiting_for_ready:
            return
        self._waiting_for_ready = False
        self.container.disconnect_ready(self._on_container_ready)
        self.bind()

    def bind(self) -> None:
        """
        Build the dependency index, evaluate every current field once, then
        subscribe to field changes.
        """
        if self.container is None:
            raise RuntimeError("FormRelation.bind() called before activate()")
        if self._subscribed:
            return

        self._index = DependencyIndex(self._relations)
        self.refresh()
        self.container.connect_field_changed(self.on_field_change)
        self._subscribed = True
        logger.debug(
            f"FormRelation bound to {type(self.container).__name__} "
            f"with {len(self._relations)} relation(s)"
        )

    def refresh(self) -> None:
        """Run check() for every input field currently in the container."""
        if self.container is None or self._index is None:
            return
        for field in self.container.get_input_fields():
            self.check(field)

    def inactivate(self) -> None:
        """Stop listening to the container. The container reference is kept until dispose()."""
        if self.container is None:
            return
        if self._waiting_for_ready:
            self._waiting_for_ready = False
            self.container.disconnect_ready(self._on_container_ready)
        if self._subscribed:
            self._subscribed = False
            self.container.disconnect_field_changed(self.on_field_change)
            logger.debug(f"FormRelation unbound from {type(self.container).__name__}")

    def dispose(self) -> None:
        """Release the container reference and discard the index."""
        self.inactivate()
        self.container = None
        self._index = None
        self._in_progress.clear()
        self._reported_unresolved.clear()

    def set_relations(self, relations: Optional[Iterable[RelationLike]]) -> None:
        """Replace the relation set. A bound engine rebuilds its index and re-evaluates."""
        self._relations = parse_relations(relations)
        self._reported_unresolved.clear()
        if self._index is not None:
            self._index.rebuild(self._relations)
            if self._subscribed:
                self.refresh()

    # ========== CHECK ==========

    def on_field_change(self, field: Any) -> None:
        """Field change notification handler."""
        self.check(field)

    def find_reliers(self, field_id: str) -> Tuple[Relation, ...]:
        """Relations that declare a dependency on ``field_id``."""
        if self._index is None:
            return ()
        return tuple(entry.relation for entry in self._index.reliers(field_id))

    def check(self, source: Any) -> None:
        """
        Re-evaluate every relation that depends on ``source`` and dispatch its actions.

        Raises:
            MissingFieldError: If a dependency of a relying relation cannot be resolved
            RelationCycleError: If a relation re-enters itself and cycle_policy is RAISE
        """
        if not self._relations or self._index is None:
            return

        field_id = FieldDispatcher.get_field_id(source)
        reliers = self._index.reliers(field_id)
        if not reliers:
            return

        if self.config.debug_dispatch:
            logger.info(f"🚀 CHECK: '{field_id}' -> {[entry.key for entry in reliers]}")

        for entry in reliers:
            self._run(entry)

    def _run(self, entry: IndexedRelation) -> None:
        if entry.position in self._in_progress:
            chain = [*self._in_progress.values(), entry.key]
            if self.config.cycle_policy is CyclePolicy.RAISE:
                raise RelationCycleError(chain)
            logger.warning(f"🚫 Skipping re-entrant evaluation of {entry.key}: {' -> '.join(chain)}")
            return

        self._in_progress[entry.position] = entry.key
        try:
            state = self.get_relation_state(entry.relation, entry.key)
            if self.config.debug_dispatch:
                logger.info(f"  ✅ {entry.key}: state={state}")
            self.execute(entry.relation, state, entry.key)
        finally:
            del self._in_progress[entry.position]

    # ========== EVALUATION ==========

    def get_field(self, field_id: str) -> Optional[Any]:
        """Look up a field by identifier in the bound container."""
        if self.container is None:
            raise RuntimeError("FormRelation has no container; call activate() first")
        return self.container.get_field(field_id)

    def get_relation_state(self, relation: Relation, relation_key: str = "relation") -> bool:
        """Evaluate every dependency in declared order and combine through the pattern."""
        states = [self.get_logic_state(dep, relation_key) for dep in relation.dependences]
        return self.get_pattern_state(relation, states, relation_key)

    def get_logic_state(self, dependency: Dependency, relation_key: str = "relation") -> bool:
        """
        Evaluate one dependency against its field's current value.

        Raises:
            MissingFieldError: If the dependency's field is not in the container
        """
        field = self.get_field(dependency.id)
        if field is None:
            raise MissingFieldError(dependency.id, relation_key)

        logic = self.registries.logics.resolve(dependency.logic)
        if logic is None:
            self._report_unresolved("logic", dependency.logic, relation_key)
            return False

        value = FieldDispatcher.get_value(field)
        result = bool(logic(dependency, value))
        if self.config.debug_dispatch:
            logger.info(f"    🔍 {relation_key}: {dependency.logic}('{dependency.id}'={value!r}) -> {result}")
        return result

    def get_pattern_state(self, relation: Relation, states, relation_key: str = "relation") -> bool:
        """Combine per-dependency results. Unresolved pattern -> False."""
        pattern = self.registries.patterns.resolve(relation.pattern)
        if pattern is None:
            self._report_unresolved("pattern", relation.pattern, relation_key)
            return False
        return bool(pattern(tuple(states)))

    # ========== DISPATCH ==========

    def execute(self, relation: Relation, state: bool, relation_key: str = "relation") -> None:
        """Apply every action to every target (targets outer, actions inner)."""
        for target_id in relation.targets:
            target = self.get_field(target_id)
            if target is None:
                logger.debug(f"{relation_key}: target '{target_id}' not found, skipping")
                continue

            for action_spec in relation.actions:
                action = self.registries.actions.resolve(action_spec)
                if action is None:
                    self._report_unresolved("action", action_spec, relation_key)
                    continue
                if self.config.debug_dispatch:
                    logger.info(f"    📣 {relation_key}: {action_spec}({state}) -> '{target_id}'")
                action(state, target)

    def _report_unresolved(self, kind: str, spec: Optional[RuleSpec], relation_key: str) -> None:
        name = "<none>" if spec is None else str(spec)
        report_key = (kind, name)
        if report_key in self._reported_unresolved:
            return
        self._reported_unresolved.add(report_key)
        message = f"{relation_key}: {kind} '{name}' is not registered; treating as no-op"
        if self.config.warn_on_unresolved:
            logger.warning(message)
        else:
            logger.debug(message)
