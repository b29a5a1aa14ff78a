from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, Optional, Tuple, TypeVar, get_args, get_origin

from augment_engine.domain.errors import InvalidArgumentError
from augment_engine.ports.augment import QueryAugmentor


def _bases_of(cls: type) -> Tuple[Any, ...]:
    # __orig_bases__ есть только у классов, объявленных с параметризованными базами
    return vars(cls).get("__orig_bases__", cls.__bases__)


def _substitute(arg: Any, bindings: Dict[Any, Any]) -> Any:
    if isinstance(arg, TypeVar):
        return bindings.get(arg, arg)
    return arg


def _walk(cls: type, generic_base: type, bindings: Dict[Any, Any]) -> Optional[Tuple[Any, ...]]:
    for base in _bases_of(cls):
        origin = get_origin(base) or base
        args = tuple(_substitute(a, bindings) for a in get_args(base))

        if origin is generic_base:
            return args

        if not isinstance(origin, type):
            continue

        params = getattr(origin, "__parameters__", ())
        found = _walk(origin, generic_base, dict(zip(params, args)))
        if found is not None:
            return found
    return None


@lru_cache(maxsize=None)
def resolve_type_arguments(cls: type, generic_base: type) -> Optional[Tuple[type, ...]]:
    """
    Достаёт фактические типовые аргументы generic_base для класса cls.

        class Base(QueryAugmentor[Q, SaveContext]): ...
        class Leaf(Base[FindContext]): ...

        resolve_type_arguments(Leaf, QueryAugmentor) == (FindContext, SaveContext)

    Параметризованный аргумент (FindContext[str]) сворачивается до FindContext.
    None — если cls не параметризует generic_base или остались свободные TypeVar.
    """
    found = _walk(cls, generic_base, {})
    if found is None:
        return None

    resolved = tuple(get_origin(a) or a for a in found)
    if not resolved or not all(isinstance(a, type) for a in resolved):
        return None
    return resolved


def context_types_of(augmentor: Any) -> Tuple[type, type]:
    """(тип query-контекста, тип update-контекста) для экземпляра аугментера."""
    args = resolve_type_arguments(type(augmentor), QueryAugmentor)
    if args is None or len(args) != 2:
        raise InvalidArgumentError(
            f"Cannot resolve context types of {type(augmentor).__qualname__}: "
            "it must subclass QueryAugmentor[QueryContextType, UpdateContextType]"
        )
    return args[0], args[1]
