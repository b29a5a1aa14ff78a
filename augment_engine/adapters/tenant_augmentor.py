from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from augment_engine.adapters.marker_augmentor import MarkerBasedAugmentor, stored_version
from augment_engine.domain.documents import DocumentQuery, DocumentUpdate
from augment_engine.domain.models import MethodMetadata
from augment_engine.ports.store import DocumentStore
from augment_engine.use_cases.ordering import order

TENANT_FIELD = "tenant"


@order(10)
@dataclass(eq=False)
class TenantAugmentor(MarkerBasedAugmentor[DocumentQuery, DocumentUpdate]):
    """
    Изоляция арендаторов: чужие документы не видны, чужие записи отклоняются.
    С store сверяет и владельца уже сохранённого документа с тем же id.
    """

    tenant_id: str
    store: Optional[DocumentStore] = field(default=None, repr=False)
    marker = "multi_tenant"

    def _foreign(self, doc) -> bool:
        owner = doc.get(TENANT_FIELD) if doc is not None else None
        return owner is not None and owner != self.tenant_id

    def prepare_query(self, context: DocumentQuery, method: Optional[MethodMetadata]) -> DocumentQuery:
        return context.replace(query=context.query.and_where(TENANT_FIELD, "eq", self.tenant_id))

    def prepare_save(self, context: DocumentUpdate, method: Optional[MethodMetadata]) -> Optional[DocumentUpdate]:
        if self._foreign(context.entity) or self._foreign(stored_version(self.store, context, method)):
            return None
        return context.replace(entity={**context.entity, TENANT_FIELD: self.tenant_id})

    def prepare_delete(self, context: DocumentUpdate, method: Optional[MethodMetadata]) -> Optional[DocumentUpdate]:
        return None if self._foreign(context.entity) else context
