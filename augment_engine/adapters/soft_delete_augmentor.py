from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from augment_engine.adapters.marker_augmentor import MarkerBasedAugmentor
from augment_engine.domain.documents import DocumentQuery, DocumentUpdate
from augment_engine.domain.models import MethodMetadata
from augment_engine.ports.store import DocumentStore
from augment_engine.use_cases.ordering import order

DELETED_FIELD = "deleted"


@order(50)
@dataclass(eq=False)
class SoftDeleteAugmentor(MarkerBasedAugmentor[DocumentQuery, DocumentUpdate]):
    """
    - запросы не видят документы с deleted=True
    - удаление превращается в запись deleted=True, физический delete отменяется (None)
    """

    store: DocumentStore = field(repr=False)
    marker = "soft_delete"

    def prepare_query(self, context: DocumentQuery, method: Optional[MethodMetadata]) -> DocumentQuery:
        return context.replace(query=context.query.and_where(DELETED_FIELD, "ne", True))

    def prepare_delete(self, context: DocumentUpdate, method: Optional[MethodMetadata]) -> Optional[DocumentUpdate]:
        doc = dict(context.entity)
        doc[DELETED_FIELD] = True
        self.store.put(context.collection, doc)
        return None
