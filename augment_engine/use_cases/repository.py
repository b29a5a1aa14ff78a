from __future__ import annotations

import logging
from threading import Lock
from typing import Dict, Iterable, List, Mapping, Optional, Sequence
from uuid import uuid4

from augment_engine.domain.documents import DocumentQuery, DocumentUpdate
from augment_engine.domain.errors import EntityNotFoundError, InvalidArgumentError
from augment_engine.domain.models import EntityMetadata, MethodMetadata, QueryMode, UpdateMode
from augment_engine.domain.query import Query
from augment_engine.ports.augment import QueryAugmentor
from augment_engine.ports.repo import Repository
from augment_engine.ports.store import Document, DocumentStore
from augment_engine.use_cases.engine import QueryAugmentationEngine

log = logging.getLogger(__name__)

REPOSITORY_METHODS = ("find_all", "find_by_id", "count", "exists", "save", "delete")


def _new_id() -> str:
    return uuid4().hex


class DocumentRepository(Repository):
    """
    Репозиторий одной коллекции документов.

    На каждый метод — свой QueryAugmentationEngine со своим MethodMetadata
    (создаётся лениво). Перед вызовом аугментеров дёшево спрашиваем
    augmentation_needed; None из update-цепочки = запись не выполняется.
    """

    def __init__(
        self,
        store: DocumentStore,
        entity: EntityMetadata,
        augmentors: Sequence[QueryAugmentor] = (),
        *,
        collection: Optional[str] = None,
        method_markers: Optional[Mapping[str, Iterable[str]]] = None,
    ):
        self.store = store
        self.entity = entity
        self.collection = collection or entity.name
        self.augmentors = list(augmentors)
        self.method_markers = {k: frozenset(v) for k, v in (method_markers or {}).items()}

        self._engines: Dict[str, QueryAugmentationEngine] = {}
        self._engines_lock = Lock()

    def method_metadata(self, method: str) -> MethodMetadata:
        if method not in REPOSITORY_METHODS:
            raise InvalidArgumentError(f"Unknown repository method: {method!r}")
        return MethodMetadata(
            name=method,
            entity=self.entity,
            markers=self.method_markers.get(method, frozenset()),
        )

    def engine_for(self, method: str) -> QueryAugmentationEngine:
        metadata = self.method_metadata(method)
        with self._engines_lock:
            engine = self._engines.get(method)
            if engine is None:
                if self.augmentors:
                    engine = QueryAugmentationEngine(self.augmentors, metadata)
                else:
                    engine = QueryAugmentationEngine.NONE
                self._engines[method] = engine
            return engine

    # -----------------------
    # read side
    # -----------------------

    def _prepare_query(self, method: str, mode: QueryMode, query: Optional[Query]) -> Query:
        engine = self.engine_for(method)
        context = DocumentQuery(query=query or Query(), mode=mode, collection=self.collection)

        if engine.augmentation_needed(DocumentQuery, mode, self.entity):
            context = engine.invoke_for_query(context)

        return context.query

    def _select(self, query: Query) -> List[Document]:
        out = [d for d in self.store.all(self.collection) if query.matches(d)]
        out.sort(key=lambda d: str(d.get(self.entity.id_attribute, "")))
        if query.limit is not None:
            out = out[: max(0, query.limit)]
        return out

    def _by_id(self, doc_id: str) -> Query:
        return Query().and_where(self.entity.id_attribute, "eq", doc_id)

    def find_all(self, query: Query | None = None) -> List[Document]:
        return self._select(self._prepare_query("find_all", QueryMode.FIND, query))

    def find_by_id(self, doc_id: str, *, required: bool = False) -> Optional[Document]:
        found = self._select(self._prepare_query("find_by_id", QueryMode.FIND, self._by_id(doc_id)))
        if found:
            return found[0]
        if required:
            raise EntityNotFoundError(self.collection, doc_id)
        return None

    def count(self, query: Query | None = None) -> int:
        return len(self._select(self._prepare_query("count", QueryMode.COUNT, query)))

    def exists(self, query: Query | None = None) -> bool:
        q = self._prepare_query("exists", QueryMode.EXISTS, query)
        return bool(self._select(q.with_limit(1)))

    # -----------------------
    # write side
    # -----------------------

    def _prepare_update(
        self, method: str, mode: Optional[QueryMode], context: DocumentUpdate
    ) -> Optional[DocumentUpdate]:
        engine = self.engine_for(method)
        if not engine.augmentation_needed(DocumentUpdate, mode, self.entity):
            return context
        return engine.invoke_for_update(context)

    def save(self, doc: Document) -> Optional[Document]:
        """Возвращает сохранённый документ или None, если аугментер отменил запись."""
        if doc is None:
            raise InvalidArgumentError("Document must not be None!")

        entity = dict(doc)
        raw_id = entity.get(self.entity.id_attribute)
        entity[self.entity.id_attribute] = str(_new_id() if raw_id is None else raw_id)

        context = self._prepare_update(
            "save", None, DocumentUpdate(entity=entity, mode=UpdateMode.SAVE, collection=self.collection)
        )
        if context is None:
            log.debug("Save of %s/%s suppressed by augmentors", self.collection, entity[self.entity.id_attribute])
            return None

        self.store.put(self.collection, context.entity)
        return context.entity

    def delete(self, doc_id: str) -> bool:
        """
        True — документ физически удалён из хранилища.
        False — не найден, либо удаление поглощено/отклонено аугментером (soft delete, чужой tenant).
        """
        targets = self._select(self._prepare_query("delete", QueryMode.FOR_DELETE, self._by_id(doc_id)))
        if not targets:
            return False

        context = self._prepare_update(
            "delete",
            QueryMode.FOR_DELETE,
            DocumentUpdate(entity=targets[0], mode=UpdateMode.DELETE, collection=self.collection),
        )
        if context is None:
            log.debug("Delete of %s/%s consumed by augmentors", self.collection, doc_id)
            return False

        return self.store.remove(self.collection, str(context.entity[self.entity.id_attribute]))
