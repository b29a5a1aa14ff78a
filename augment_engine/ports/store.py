from __future__ import annotations

from typing import Any, Dict, Optional, Protocol, runtime_checkable

Document = Dict[str, Any]


@runtime_checkable
class DocumentStore(Protocol):
    """Хранилище документов по коллекциям. Запросов не исполняет — только CRUD по id."""

    def all(self, collection: str) -> list[Document]:
        ...

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        ...

    def put(self, collection: str, doc: Document) -> None:
        ...

    def remove(self, collection: str, doc_id: str) -> bool:
        ...
