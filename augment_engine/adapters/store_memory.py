from __future__ import annotations

import copy
from threading import Lock
from typing import Dict, List, Optional

from augment_engine.ports.store import Document, DocumentStore


class InMemoryDocumentStore(DocumentStore):
    def __init__(self, id_attribute: str = "id"):
        self.id_attribute = id_attribute
        self._lock = Lock()
        self._data: Dict[str, Dict[str, Document]] = {}

    def all(self, collection: str) -> List[Document]:
        with self._lock:
            return [copy.deepcopy(d) for d in self._data.get(collection, {}).values()]

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        with self._lock:
            doc = self._data.get(collection, {}).get(doc_id)
            return copy.deepcopy(doc) if doc is not None else None

    def put(self, collection: str, doc: Document) -> None:
        doc_id = str(doc[self.id_attribute])
        with self._lock:
            self._data.setdefault(collection, {})[doc_id] = copy.deepcopy(doc)

    def remove(self, collection: str, doc_id: str) -> bool:
        with self._lock:
            return self._data.get(collection, {}).pop(doc_id, None) is not None
