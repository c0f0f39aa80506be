"""Substitution par id dans une collection ordonnée (toujours une nouvelle liste)"""

from typing import List, Sequence, TypeVar

from pulse.core.errors import NotFoundError

E = TypeVar("E")


def find_by_id(items: Sequence[E], entity_id: str, kind: str) -> E:
    for item in items:
        if item.id == entity_id:
            return item
    raise NotFoundError(kind, entity_id)


def replace_by_id(items: Sequence[E], new_item: E, kind: str) -> List[E]:
    find_by_id(items, new_item.id, kind)
    return [new_item if item.id == new_item.id else item for item in items]


def remove_by_id(items: Sequence[E], entity_id: str, kind: str) -> List[E]:
    find_by_id(items, entity_id, kind)
    return [item for item in items if item.id != entity_id]
