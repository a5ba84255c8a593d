"""Shared unit-test fixtures."""

import pytest

from tests.unit.fakes import FakeSession


@pytest.fixture
def db() -> FakeSession:
    return FakeSession()
