from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Ordered(Protocol):
    """Меньше значение — раньше вызов."""

    def get_order(self) -> int:
        ...


class PriorityOrdered:
    """Маркер: такие объекты идут раньше всех обычных Ordered."""
