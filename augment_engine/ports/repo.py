from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from augment_engine.domain.query import Query
from augment_engine.ports.store import Document


@runtime_checkable
class Repository(Protocol):
    """Репозиторий одной сущности; все операции проходят через аугментеры."""

    def find_all(self, query: Query | None = None) -> list[Document]:
        ...

    def find_by_id(self, doc_id: str, *, required: bool = False) -> Optional[Document]:
        ...

    def count(self, query: Query | None = None) -> int:
        ...

    def exists(self, query: Query | None = None) -> bool:
        ...

    def save(self, doc: Document) -> Optional[Document]:
        ...

    def delete(self, doc_id: str) -> bool:
        ...
