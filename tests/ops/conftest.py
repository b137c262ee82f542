"""Fixtures for operation-layer tests."""

import pytest

from apidoc.ops.context import OperationContext


@pytest.fixture
def ctx(catalog):
    return OperationContext(catalog=catalog, caller="test")


@pytest.fixture
def dry_ctx(catalog):
    return OperationContext(catalog=catalog, caller="test", dry_run=True)
