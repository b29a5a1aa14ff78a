from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from augment_engine.domain.models import QueryContext, UpdateContext
from augment_engine.domain.query import Query


@dataclass(frozen=True)
class DocumentQuery(QueryContext[Query]):
    query: Query = field(default_factory=Query)
    collection: str = ""


@dataclass(frozen=True)
class DocumentUpdate(UpdateContext[Dict[str, Any]]):
    entity: Dict[str, Any] = field(default_factory=dict)
    collection: str = ""
