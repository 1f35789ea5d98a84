"""
Reverse dependency index: field id -> relations that depend on it.

Built once from the full relation list and never mutated incrementally;
the engine rebuilds it wholesale when the relation set changes. It exists so
that a field change only touches the relations that actually read that field.
"""

from typing import Dict, Iterator, List, NamedTuple, Sequence, Tuple
import logging

from .relation_types import Relation

logger = logging.getLogger(__name__)


class IndexedRelation(NamedTuple):
    """A relation together with its stable position and diagnostic key."""
    key: str
    position: int
    relation: Relation


def relation_key(relation: Relation, position: int) -> str:
    return relation.name or f"relation[{position}]"


class DependencyIndex:
    """
    Mapping from field identifier to relying relations, in declaration order.

    A relation that depends on the same field through several dependencies is
    listed once for that field, so one change evaluates it exactly once.
    """

    def __init__(self, relations: Sequence[Relation] = ()):
        self._entries: Tuple[IndexedRelation, ...] = ()
        self._by_field: Dict[str, Tuple[IndexedRelation, ...]] = {}
        self.rebuild(relations)

    def rebuild(self, relations: Sequence[Relation]) -> None:
        """Discard the current mapping and scan ``relations`` from scratch."""
        entries = tuple(
            IndexedRelation(relation_key(relation, i), i, relation)
            for i, relation in enumerate(relations)
        )
        by_field: Dict[str, List[IndexedRelation]] = {}
        for entry in entries:
            for field_id in dict.fromkeys(entry.relation.dependency_ids):
                by_field.setdefault(field_id, []).append(entry)

        self._entries = entries
        self._by_field = {field_id: tuple(reliers) for field_id, reliers in by_field.items()}
        logger.debug(
            f"Built dependency index: {len(entries)} relation(s) over "
            f"{len(self._by_field)} field(s)"
        )

    def reliers(self, field_id: str) -> Tuple[IndexedRelation, ...]:
        """Relations declaring a dependency on ``field_id`` (empty if none)."""
        return self._by_field.get(field_id, ())

    @property
    def entries(self) -> Tuple[IndexedRelation, ...]:
        return self._entries

    def __contains__(self, field_id: object) -> bool:
        return field_id in self._by_field

    def __iter__(self) -> Iterator[IndexedRelation]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
