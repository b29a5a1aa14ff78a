from __future__ import annotations

import logging
from typing import ClassVar, Dict, FrozenSet, Iterable, List, Optional, Tuple, TypeVar, Union

from augment_engine.domain.errors import InvalidArgumentError
from augment_engine.domain.models import (
    EntityMetadata,
    MethodMetadata,
    QueryContext,
    QueryMode,
    UpdateContext,
)
from augment_engine.ports.augment import QueryAugmentor
from augment_engine.use_cases.ordering import sort_by_order
from augment_engine.use_cases.type_resolution import context_types_of

log = logging.getLogger(__name__)

QC = TypeVar("QC", bound=QueryContext)
UC = TypeVar("UC", bound=UpdateContext)


class QueryAugmentationEngine:
    """
    Набор QueryAugmentor'ов, сгруппированных по типу контекста, с которым они работают.

    Индекс строится один раз в конструкторе: каждый аугментер попадает и под свой
    тип query-контекста, и под тип update-контекста; списки сортируются по order.
    Дальше движок только читается — его можно делить между потоками.
    """

    NONE: ClassVar["QueryAugmentationEngine"]

    def __init__(
        self,
        augmentors: Optional[Iterable[QueryAugmentor]],
        method_metadata: Optional[MethodMetadata],
    ):
        self._init(augmentors, method_metadata, check_metadata=True)

    @classmethod
    def _create(
        cls,
        augmentors: Optional[Iterable[QueryAugmentor]],
        method_metadata: Optional[MethodMetadata],
        *,
        check_metadata: bool,
    ) -> "QueryAugmentationEngine":
        """Внутренний путь для NONE: допускает method_metadata=None."""
        engine = cls.__new__(cls)
        engine._init(augmentors, method_metadata, check_metadata=check_metadata)
        return engine

    def _init(
        self,
        augmentors: Optional[Iterable[QueryAugmentor]],
        method_metadata: Optional[MethodMetadata],
        *,
        check_metadata: bool,
    ) -> None:
        if augmentors is None:
            raise InvalidArgumentError("QueryAugmentors must not be None!")
        if check_metadata and method_metadata is None:
            raise InvalidArgumentError("MethodMetadata must not be None!")

        self._method_metadata = method_metadata

        grouped: Dict[type, List[QueryAugmentor]] = {}
        for augmentor in augmentors:
            query_type, update_type = context_types_of(augmentor)
            log.debug(
                "Registering query augmentor %r for %s / %s",
                augmentor, query_type.__qualname__, update_type.__qualname__,
            )
            grouped.setdefault(query_type, []).append(augmentor)
            grouped.setdefault(update_type, []).append(augmentor)

        self._augmentors: Dict[type, Tuple[QueryAugmentor, ...]] = {
            key: tuple(sort_by_order(values)) for key, values in grouped.items()
        }

    @property
    def method_metadata(self) -> Optional[MethodMetadata]:
        return self._method_metadata

    @property
    def context_types(self) -> FrozenSet[type]:
        return frozenset(self._augmentors)

    def augmentors_for(self, context_type: type) -> Tuple[QueryAugmentor, ...]:
        return self._augmentors.get(context_type, ())

    def augmentation_needed(
        self,
        context_type: type,
        mode: Optional[QueryMode],
        entity_metadata: Optional[EntityMetadata],
    ) -> bool:
        """Есть ли хоть один аугментер, которому интересен этот тип контекста в этом режиме."""
        augmentors = self._augmentors.get(context_type)
        if augmentors is None:
            return False

        return any(
            augmentor.supports(self._method_metadata, mode, entity_metadata)
            for augmentor in augmentors
        )

    def invoke_for_query(self, context: QC) -> QC:
        augmented = context

        for augmentor in self._augmentors.get(type(context), ()):
            log.debug("Invoking query augmentor %r for query context %r", augmentor, context)
            augmented = augmentor.augment_query(augmented, self._method_metadata)

        return augmented

    def invoke_for_update(self, context: Optional[UC]) -> Optional[UC]:
        """
        Прогоняет update-контекст через аугментеры по порядку.
        Если кто-то вернул None — запись поглощена/отменена: остальные не вызываются, результат None.
        """
        if context is None:
            raise InvalidArgumentError("UpdateContext must not be None!")

        augmented: Optional[UC] = context

        for augmentor in self._augmentors.get(type(context), ()):
            log.debug("Invoking query augmentor %r for update context %r", augmentor, context)
            augmented = augmentor.augment_update(augmented, self._method_metadata)

            if augmented is None:
                log.debug("Update context %r consumed by %r", context, augmentor)
                return None

        return augmented

    def invoke_augmentors(
        self, context: Union[QueryContext, UpdateContext]
    ) -> Optional[Union[QueryContext, UpdateContext]]:
        if isinstance(context, QueryContext):
            return self.invoke_for_query(context)
        if isinstance(context, UpdateContext):
            return self.invoke_for_update(context)
        raise InvalidArgumentError(f"Unsupported context: {context!r}")

    def __repr__(self) -> str:
        keys = ", ".join(sorted(t.__qualname__ for t in self._augmentors))
        return f"{type(self).__name__}([{keys}], method={self._method_metadata!r})"


QueryAugmentationEngine.NONE = QueryAugmentationEngine._create((), None, check_metadata=False)
