from __future__ import annotations

from typing import Any, Callable, Iterable, List, Optional, Tuple, TypeVar

from augment_engine.ports.ordering import Ordered, PriorityOrdered

HIGHEST_PRECEDENCE = -(2**31)
LOWEST_PRECEDENCE = 2**31 - 1

_ORDER_ATTR = "__augment_order__"

T = TypeVar("T")
C = TypeVar("C", bound=type)


def order(value: int) -> Callable[[C], C]:
    """
    Декоратор класса: явный приоритет.

        @order(10)
        class TenantAugmentor(...): ...
    """

    def deco(cls: C) -> C:
        setattr(cls, _ORDER_ATTR, int(value))
        return cls

    return deco


def explicit_order(obj: Any) -> Optional[int]:
    if isinstance(obj, Ordered):
        return int(obj.get_order())
    # только собственный атрибут класса по MRO, не инстанса
    for klass in type(obj).__mro__:
        if _ORDER_ATTR in vars(klass):
            return int(vars(klass)[_ORDER_ATTR])
    return None


def order_key(obj: Any) -> Tuple[int, int]:
    value = explicit_order(obj)
    return (
        0 if isinstance(obj, PriorityOrdered) else 1,
        LOWEST_PRECEDENCE if value is None else value,
    )


def sort_by_order(items: Iterable[T]) -> List[T]:
    # sorted() стабилен: при равном ключе сохраняется порядок вставки
    return sorted(items, key=order_key)
