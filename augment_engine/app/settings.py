from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import FrozenSet


def _env_str(name: str, default: str) -> str:
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v


def _env_bool(name: str, default: bool) -> bool:
    v = os.getenv(name)
    if v is None or v.strip() == "":
        return default
    return v.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_choice(name: str, default: str, allowed: set[str]) -> str:
    v = os.getenv(name)
    if v is None or v.strip() == "":
        return default
    val = v.strip().lower()
    return val if val in allowed else default


def _env_set(name: str, default: FrozenSet[str]) -> FrozenSet[str]:
    v = os.getenv(name)
    if v is None or v.strip() == "":
        return default
    return frozenset(p.strip() for p in v.split(",") if p.strip())


@dataclass(frozen=True)
class AugmentSettings:
    enable_soft_delete: bool = True
    enable_tenant: bool = False
    enable_audit: bool = True
    tenant_id: str = "default"


@dataclass(frozen=True)
class StoreSettings:
    backend: str = "memory"  # memory | json
    path: str = "./data/documents.json"
    collection: str = "documents"
    entity_markers: FrozenSet[str] = frozenset({"soft_delete", "audited", "multi_tenant"})


@dataclass(frozen=True)
class AppSettings:
    log_level: str = "INFO"
    store: StoreSettings = field(default_factory=StoreSettings)
    augment: AugmentSettings = field(default_factory=AugmentSettings)

    @staticmethod
    def from_env() -> "AppSettings":
        store = StoreSettings(
            backend=_env_choice("AE_STORE", StoreSettings.backend, {"memory", "json"}),
            path=_env_str("AE_STORE_PATH", StoreSettings.path),
            collection=_env_str("AE_COLLECTION", StoreSettings.collection),
            entity_markers=_env_set("AE_ENTITY_MARKERS", StoreSettings().entity_markers),
        )

        aug = AugmentSettings(
            enable_soft_delete=_env_bool("AE_ENABLE_SOFT_DELETE", AugmentSettings.enable_soft_delete),
            enable_tenant=_env_bool("AE_ENABLE_TENANT", AugmentSettings.enable_tenant),
            enable_audit=_env_bool("AE_ENABLE_AUDIT", AugmentSettings.enable_audit),
            tenant_id=_env_str("AE_TENANT", AugmentSettings.tenant_id),
        )

        return AppSettings(
            log_level=_env_choice("AE_LOG_LEVEL", "info", {"debug", "info", "warning", "error"}).upper(),
            store=store,
            augment=aug,
        )
