from .audit_augmentor import AuditAugmentor
from .marker_augmentor import MarkerBasedAugmentor
from .soft_delete_augmentor import SoftDeleteAugmentor
from .store_json import JsonDocumentStore
from .store_memory import InMemoryDocumentStore
from .tenant_augmentor import TenantAugmentor

__all__ = [
    "AuditAugmentor", "MarkerBasedAugmentor", "SoftDeleteAugmentor", "TenantAugmentor",
    "InMemoryDocumentStore", "JsonDocumentStore",
]
