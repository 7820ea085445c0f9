"""Shared test fixtures for mappinglint test suite"""

from typing import Callable

import pytest

from mappinglint.builder.core import ModelBuilder
from mappinglint.configuration import MarkerNames
from mappinglint.diagnostics import CollectingSink, Diagnostic
from mappinglint.model import Model, TypeReference, ref
from mappinglint.validator import MappingValidator

PARENT = "shop.Parent"
CHILD = "shop.Child"


@pytest.fixture
def names() -> MarkerNames:
    """Provides the default marker names"""
    return MarkerNames()


@pytest.fixture
def builder(names: MarkerNames) -> ModelBuilder:
    """Provides a model builder that already declares the persistence types"""
    return ModelBuilder().with_persistence_types(names)


@pytest.fixture
def sink() -> CollectingSink:
    """Provides an empty diagnostic sink"""
    return CollectingSink()


@pytest.fixture
def children_type() -> TypeReference:
    """Provides the set[shop.Child] collection type"""
    return ref("builtins.set", ref(CHILD))


@pytest.fixture
def validate(sink: CollectingSink) -> Callable[[Model], list[Diagnostic]]:
    """Provides a function running a full validation session over a model"""

    def _validate(model: Model) -> list[Diagnostic]:
        sink.clear()
        MappingValidator(sink).initialize(model).process()
        return list(sink.diagnostics)

    return _validate
