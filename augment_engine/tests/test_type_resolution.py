from dataclasses import dataclass, field
from typing import Generic, TypeVar

import pytest

from augment_engine.adapters.marker_augmentor import MarkerBasedAugmentor
from augment_engine.adapters.soft_delete_augmentor import SoftDeleteAugmentor
from augment_engine.adapters.store_memory import InMemoryDocumentStore
from augment_engine.domain.documents import DocumentQuery, DocumentUpdate
from augment_engine.domain.errors import InvalidArgumentError
from augment_engine.domain.models import MethodMetadata, EntityMetadata, QueryContext, UpdateContext
from augment_engine.ports.augment import QueryAugmentor
from augment_engine.use_cases.engine import QueryAugmentationEngine
from augment_engine.use_cases.type_resolution import context_types_of, resolve_type_arguments

T = TypeVar("T")
QC = TypeVar("QC", bound=QueryContext)


@dataclass(frozen=True)
class Find(QueryContext[str]):
    query: str = ""


@dataclass(frozen=True)
class TypedFind(QueryContext[T]):
    query: object = None


@dataclass(frozen=True)
class Save(UpdateContext[dict]):
    entity: dict = field(default_factory=dict)


class _Passthrough:
    def supports(self, method, mode, entity):
        return True

    def augment_query(self, context, method):
        return context

    def augment_update(self, context, method):
        return context


class Direct(_Passthrough, QueryAugmentor[Find, Save]):
    pass


class HalfBound(_Passthrough, QueryAugmentor[QC, Save]):
    pass


class Leaf(HalfBound[Find]):
    pass


class DeeperLeaf(Leaf):
    pass


class Parameterised(_Passthrough, QueryAugmentor[TypedFind[int], Save]):
    pass


class Mixin(Generic[T]):
    pass


class WithUnrelatedGeneric(Mixin[int], Direct):
    pass


def test_direct_parameterisation():
    assert resolve_type_arguments(Direct, QueryAugmentor) == (Find, Save)


def test_type_vars_resolved_through_intermediate_generic():
    assert resolve_type_arguments(Leaf, QueryAugmentor) == (Find, Save)
    assert resolve_type_arguments(DeeperLeaf, QueryAugmentor) == (Find, Save)


def test_parameterised_context_collapses_to_class():
    assert resolve_type_arguments(Parameterised, QueryAugmentor) == (TypedFind, Save)


def test_unrelated_generic_bases_are_skipped():
    assert resolve_type_arguments(WithUnrelatedGeneric, QueryAugmentor) == (Find, Save)


def test_unbound_type_vars_give_none():
    assert resolve_type_arguments(HalfBound, QueryAugmentor) is None
    assert resolve_type_arguments(MarkerBasedAugmentor, QueryAugmentor) is None


def test_non_augmentor_gives_none():
    assert resolve_type_arguments(_Passthrough, QueryAugmentor) is None
    assert resolve_type_arguments(int, QueryAugmentor) is None


def test_context_types_of_instances():
    assert context_types_of(Leaf()) == (Find, Save)
    assert context_types_of(SoftDeleteAugmentor(store=InMemoryDocumentStore())) == (DocumentQuery, DocumentUpdate)


def test_unresolvable_augmentor_fails_construction():
    with pytest.raises(InvalidArgumentError):
        context_types_of(_Passthrough())

    method = MethodMetadata(name="find_all", entity=EntityMetadata(name="x"))
    with pytest.raises(InvalidArgumentError):
        QueryAugmentationEngine([Direct(), _Passthrough()], method)
