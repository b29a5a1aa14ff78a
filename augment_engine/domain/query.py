from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from augment_engine.domain.errors import InvalidArgumentError

_MISSING = object()

_OPS: Dict[str, Callable[[Any, Any], bool]] = {
    "eq": lambda a, b: a == b,
    "ne": lambda a, b: a != b,
    "lt": lambda a, b: a is not _MISSING and a < b,
    "le": lambda a, b: a is not _MISSING and a <= b,
    "gt": lambda a, b: a is not _MISSING and a > b,
    "ge": lambda a, b: a is not _MISSING and a >= b,
    "in": lambda a, b: a in b,
    "exists": lambda a, b: (a is not _MISSING) == bool(b),
}


@dataclass(frozen=True)
class Criterion:
    field: str
    op: str
    value: Any = None

    def __post_init__(self) -> None:
        if self.op not in _OPS:
            raise InvalidArgumentError(f"Unsupported operator: {self.op!r}")

    def matches(self, doc: Mapping[str, Any]) -> bool:
        actual = doc.get(self.field, _MISSING)
        if actual is _MISSING and self.op == "eq":
            return self.value is None
        if actual is _MISSING and self.op == "ne":
            return self.value is not None
        try:
            return _OPS[self.op](actual, self.value)
        except TypeError:
            # несравнимые типы (str < int и т.п.) — просто не совпадает
            return False


@dataclass(frozen=True)
class Query:
    """Конъюнкция критериев + необязательный limit."""

    criteria: Tuple[Criterion, ...] = ()
    limit: Optional[int] = None

    def and_where(self, field: str, op: str = "eq", value: Any = None) -> "Query":
        return replace(self, criteria=self.criteria + (Criterion(field, op, value),))

    def with_limit(self, limit: Optional[int]) -> "Query":
        return replace(self, limit=limit)

    def matches(self, doc: Mapping[str, Any]) -> bool:
        return all(c.matches(doc) for c in self.criteria)
