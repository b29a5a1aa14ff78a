from __future__ import annotations

from typing import Optional, Protocol, TypeVar, runtime_checkable

from augment_engine.domain.models import (
    EntityMetadata,
    MethodMetadata,
    QueryContext,
    QueryMode,
    UpdateContext,
)

QC = TypeVar("QC", bound=QueryContext)
UC = TypeVar("UC", bound=UpdateContext)


@runtime_checkable
class QueryAugmentor(Protocol[QC, UC]):
    """
    Перехватывает и преобразует запросы (QC) и операции записи (UC) репозитория.

    Реализация явно наследует QueryAugmentor[MyQueryContext, MyUpdateContext]:
    по этим параметрам движок решает, для каких контекстов её вызывать.
    """

    def supports(
        self,
        method: Optional[MethodMetadata],
        mode: Optional[QueryMode],
        entity: Optional[EntityMetadata],
    ) -> bool:
        ...

    def augment_query(self, context: QC, method: Optional[MethodMetadata]) -> QC:
        ...

    def augment_update(self, context: UC, method: Optional[MethodMetadata]) -> Optional[UC]:
        """None = запись поглощена/отменена, дальше по цепочке не идём."""
        ...
