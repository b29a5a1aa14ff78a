from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Optional

from augment_engine.adapters.marker_augmentor import MarkerBasedAugmentor, stored_version
from augment_engine.domain.documents import DocumentQuery, DocumentUpdate
from augment_engine.domain.models import MethodMetadata
from augment_engine.ports.store import DocumentStore
from augment_engine.use_cases.ordering import order

CREATED_FIELD = "created_at"
UPDATED_FIELD = "updated_at"


def _utc_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@order(100)
@dataclass(eq=False)
class AuditAugmentor(MarkerBasedAugmentor[DocumentQuery, DocumentUpdate]):
    clock: Callable[[], str] = _utc_iso
    store: Optional[DocumentStore] = field(default=None, repr=False)
    marker = "audited"

    def prepare_save(self, context: DocumentUpdate, method: Optional[MethodMetadata]) -> Optional[DocumentUpdate]:
        now = self.clock()
        doc = dict(context.entity)

        stored = stored_version(self.store, context, method)
        if stored is not None and stored.get(CREATED_FIELD) is not None:
            doc[CREATED_FIELD] = stored[CREATED_FIELD]
        else:
            doc.setdefault(CREATED_FIELD, now)

        doc[UPDATED_FIELD] = now
        return context.replace(entity=doc)
