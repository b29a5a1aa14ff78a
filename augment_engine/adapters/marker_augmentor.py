from __future__ import annotations

from typing import Optional, TypeVar

from augment_engine.domain.documents import DocumentUpdate
from augment_engine.domain.models import (
    EntityMetadata,
    MethodMetadata,
    QueryContext,
    QueryMode,
    UpdateContext,
    UpdateMode,
)
from augment_engine.ports.augment import QueryAugmentor
from augment_engine.ports.store import Document, DocumentStore

QC = TypeVar("QC", bound=QueryContext)
UC = TypeVar("UC", bound=UpdateContext)


class MarkerBasedAugmentor(QueryAugmentor[QC, UC]):
    """
    Включается, если маркер стоит на методе репозитория или на его сущности.
    Наследники переопределяют prepare_query / prepare_save / prepare_delete.
    """

    marker: str = ""

    def supports(
        self,
        method: Optional[MethodMetadata],
        mode: Optional[QueryMode],
        entity: Optional[EntityMetadata],
    ) -> bool:
        # та же проверка, что в augment_*: entity из вызова не учитывается
        return self._marked(method)

    def augment_query(self, context: QC, method: Optional[MethodMetadata]) -> QC:
        if not self._marked(method):
            return context
        return self.prepare_query(context, method)

    def augment_update(self, context: UC, method: Optional[MethodMetadata]) -> Optional[UC]:
        if not self._marked(method):
            return context
        if context.mode == UpdateMode.DELETE:
            return self.prepare_delete(context, method)
        return self.prepare_save(context, method)

    def prepare_query(self, context: QC, method: Optional[MethodMetadata]) -> QC:
        return context

    def prepare_save(self, context: UC, method: Optional[MethodMetadata]) -> Optional[UC]:
        return context

    def prepare_delete(self, context: UC, method: Optional[MethodMetadata]) -> Optional[UC]:
        return context

    def _marked(self, method: Optional[MethodMetadata]) -> bool:
        return method is not None and method.has_marker(self.marker)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(marker={self.marker!r})"


def stored_version(
    store: Optional[DocumentStore], context: DocumentUpdate, method: Optional[MethodMetadata]
) -> Optional[Document]:
    """Текущая версия документа в хранилище (None — нет хранилища, id или документа)."""
    if store is None or method is None:
        return None
    doc_id = context.entity.get(method.entity.id_attribute)
    if doc_id is None:
        return None
    return store.get(context.collection, str(doc_id))
