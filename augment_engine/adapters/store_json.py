from __future__ import annotations

import json
import logging
from pathlib import Path
from threading import Lock
from typing import Any, Dict, List, Optional

from augment_engine.ports.store import Document, DocumentStore

log = logging.getLogger(__name__)


def _atomic_write(path: Path, text: str) -> None:
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(text, encoding="utf-8")
    tmp.replace(path)


class JsonDocumentStore(DocumentStore):
    """
    Формат:
    {
      "collections": {
        "<collection>": {
          "<id>": { ...document... }
        }
      }
    }
    """

    def __init__(self, path: str, id_attribute: str = "id"):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.id_attribute = id_attribute
        self._lock = Lock()
        self._data: Dict[str, Any] = {"collections": {}}
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            self._data = {"collections": {}}
            return
        try:
            raw = self.path.read_text(encoding="utf-8")
            data = json.loads(raw) if raw.strip() else {"collections": {}}
        except (OSError, ValueError):
            backup = self.path.with_suffix(self.path.suffix + ".bad")
            log.warning("Unreadable document store %s, moved to %s", self.path, backup)
            self.path.replace(backup)
            data = {"collections": {}}

        if not isinstance(data, dict) or not isinstance(data.get("collections"), dict):
            data = {"collections": {}}
        self._data = data

    def _save(self) -> None:
        text = json.dumps(self._data, ensure_ascii=False, indent=2)
        _atomic_write(self.path, text)

    def _collection(self, collection: str) -> Dict[str, Document]:
        c = self._data["collections"].get(collection, {})
        return c if isinstance(c, dict) else {}

    def all(self, collection: str) -> List[Document]:
        with self._lock:
            return [dict(d) for d in self._collection(collection).values() if isinstance(d, dict)]

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        with self._lock:
            doc = self._collection(collection).get(doc_id)
            return dict(doc) if isinstance(doc, dict) else None

    def put(self, collection: str, doc: Document) -> None:
        doc_id = str(doc[self.id_attribute])
        with self._lock:
            c = self._data["collections"].setdefault(collection, {})
            c[doc_id] = dict(doc)
            self._save()

    def remove(self, collection: str, doc_id: str) -> bool:
        with self._lock:
            c = self._collection(collection)
            if doc_id not in c:
                return False
            del c[doc_id]
            self._save()
            return True
