from __future__ import annotations

from dataclasses import dataclass
from threading import Lock
from typing import Any, Dict, List, Tuple

from augment_engine.adapters.audit_augmentor import AuditAugmentor
from augment_engine.adapters.soft_delete_augmentor import SoftDeleteAugmentor
from augment_engine.adapters.tenant_augmentor import TenantAugmentor
from augment_engine.app.settings import AppSettings
from augment_engine.domain.models import EntityMetadata
from augment_engine.ports.augment import QueryAugmentor
from augment_engine.ports.store import DocumentStore
from augment_engine.use_cases.repository import DocumentRepository


@dataclass(frozen=True)
class RepositoryBundle:
    store: DocumentStore
    augmentors: Tuple[QueryAugmentor, ...]
    repository: DocumentRepository


# -----------------------
# Internal shared cache
# -----------------------
_cache_lock = Lock()
_shared: Dict[Tuple[Any, ...], RepositoryBundle] = {}


def _settings_key(s: AppSettings) -> Tuple[Any, ...]:
    st = s.store
    a = s.augment
    return (
        st.backend,
        st.path,
        st.collection,
        tuple(sorted(st.entity_markers)),
        a.enable_soft_delete,
        a.enable_tenant,
        a.enable_audit,
        a.tenant_id,
    )


def _build_store(settings: AppSettings) -> DocumentStore:
    if settings.store.backend == "json":
        from augment_engine.adapters.store_json import JsonDocumentStore
        return JsonDocumentStore(settings.store.path)

    from augment_engine.adapters.store_memory import InMemoryDocumentStore
    return InMemoryDocumentStore()


def _build_bundle(settings: AppSettings) -> RepositoryBundle:
    store = _build_store(settings)

    augmentors: List[QueryAugmentor] = []
    if settings.augment.enable_soft_delete:
        augmentors.append(SoftDeleteAugmentor(store=store))
    if settings.augment.enable_tenant:
        augmentors.append(TenantAugmentor(tenant_id=settings.augment.tenant_id, store=store))
    if settings.augment.enable_audit:
        augmentors.append(AuditAugmentor(store=store))

    entity = EntityMetadata(
        name=settings.store.collection,
        markers=frozenset(settings.store.entity_markers),
    )
    repository = DocumentRepository(store, entity, augmentors)

    return RepositoryBundle(store=store, augmentors=tuple(augmentors), repository=repository)


def build_bundle(settings: AppSettings) -> RepositoryBundle:
    key = _settings_key(settings)

    with _cache_lock:
        bundle = _shared.get(key)
        if bundle is None:
            bundle = _build_bundle(settings)
            _shared[key] = bundle

    return bundle


def describe_plan(bundle: RepositoryBundle, method: str = "find_all") -> Dict[str, List[str]]:
    """Тип контекста -> аугментеры в порядке вызова (для --plan и GET /plan)."""
    engine = bundle.repository.engine_for(method)
    return {
        t.__qualname__: [type(a).__name__ for a in engine.augmentors_for(t)]
        for t in sorted(engine.context_types, key=lambda t: t.__qualname__)
    }
