from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Generic, TypeVar

Q = TypeVar("Q")
E = TypeVar("E")


class QueryMode(str, Enum):
    """Режим выполнения запроса на стороне чтения."""

    FIND = "find"
    COUNT = "count"
    EXISTS = "exists"
    FOR_DELETE = "for_delete"


class UpdateMode(str, Enum):
    SAVE = "save"
    DELETE = "delete"


@dataclass(frozen=True)
class EntityMetadata:
    name: str
    id_attribute: str = "id"
    markers: FrozenSet[str] = frozenset()

    def has_marker(self, marker: str) -> bool:
        return marker in self.markers


@dataclass(frozen=True)
class MethodMetadata:
    """
    Описание вызывающего метода репозитория.
    markers метода + markers сущности = аналог аннотаций.
    """

    name: str
    entity: EntityMetadata
    markers: FrozenSet[str] = frozenset()

    def has_local_marker(self, marker: str) -> bool:
        return marker in self.markers

    def has_marker(self, marker: str) -> bool:
        return self.has_local_marker(marker) or self.entity.has_marker(marker)


@dataclass(frozen=True)
class QueryContext(Generic[Q]):
    query: Q
    mode: QueryMode = QueryMode.FIND

    def replace(self, **changes) -> "QueryContext[Q]":
        return dataclasses.replace(self, **changes)


@dataclass(frozen=True)
class UpdateContext(Generic[E]):
    entity: E
    mode: UpdateMode = UpdateMode.SAVE

    def replace(self, **changes) -> "UpdateContext[E]":
        return dataclasses.replace(self, **changes)
