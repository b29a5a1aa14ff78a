from augment_engine.ports.ordering import PriorityOrdered
from augment_engine.use_cases.ordering import (
    HIGHEST_PRECEDENCE,
    LOWEST_PRECEDENCE,
    explicit_order,
    order,
    order_key,
    sort_by_order,
)


class Plain:
    def __init__(self, name: str):
        self.name = name


@order(5)
class Five(Plain):
    pass


@order(1)
class One(Plain):
    pass


class InheritsFive(Five):
    pass


class WithGetOrder(Five):
    def __init__(self, name: str, value: int):
        super().__init__(name)
        self.value = value

    def get_order(self) -> int:
        return self.value


class Urgent(PriorityOrdered, Plain):
    def get_order(self) -> int:
        return 1000


def _names(items):
    return [i.name for i in items]


def test_decorator_orders_lower_first():
    assert _names(sort_by_order([Five("five"), One("one")])) == ["one", "five"]


def test_plain_items_go_last_and_stay_stable():
    items = [Plain("p1"), Five("five"), Plain("p2"), One("one"), Plain("p3")]
    assert _names(sort_by_order(items)) == ["one", "five", "p1", "p2", "p3"]


def test_equal_priorities_keep_insertion_order():
    items = [Five("a"), Five("b"), Five("c")]
    assert _names(sort_by_order(items)) == ["a", "b", "c"]


def test_decorator_is_inherited():
    assert explicit_order(InheritsFive("x")) == 5


def test_get_order_wins_over_decorator():
    assert explicit_order(WithGetOrder("x", -3)) == -3
    assert _names(sort_by_order([One("one"), WithGetOrder("neg", -3)])) == ["neg", "one"]


def test_priority_ordered_runs_before_everything():
    items = [One("one"), Urgent("urgent"), Plain("plain")]
    assert _names(sort_by_order(items)) == ["urgent", "one", "plain"]


def test_order_key_defaults():
    assert explicit_order(Plain("x")) is None
    assert order_key(Plain("x")) == (1, LOWEST_PRECEDENCE)
    assert order_key(One("x")) == (1, 1)
    assert order_key(Urgent("x")) == (0, 1000)


def test_explicit_lowest_precedence_ties_with_unordered():
    @order(LOWEST_PRECEDENCE)
    class Last(Plain):
        pass

    @order(HIGHEST_PRECEDENCE)
    class First(Plain):
        pass

    items = [Plain("p"), Last("last"), First("first")]
    assert _names(sort_by_order(items)) == ["first", "p", "last"]


def test_sort_does_not_mutate_input():
    items = [Five("five"), One("one")]
    sort_by_order(items)
    assert _names(items) == ["five", "one"]
