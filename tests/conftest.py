"""Shared test fixtures and utilities."""

import pytest
from loguru import logger

from objectgraph import MappingServiceLookup, NullServiceLookup, ObjectGraphBuilder


@pytest.fixture
def builder():
    """Create a fresh builder whose lookup knows no services."""
    return ObjectGraphBuilder(NullServiceLookup())


@pytest.fixture
def services():
    """Mutable mapping backing the ``lookup_builder`` fixture."""
    return {}


@pytest.fixture
def lookup_builder(services):
    """Create a builder consulting the ``services`` mapping."""
    return ObjectGraphBuilder(MappingServiceLookup(services))


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted while the test runs."""
    messages = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="DEBUG")
    logger.enable("objectgraph")
    yield messages
    logger.disable("objectgraph")
    logger.remove(handler_id)
