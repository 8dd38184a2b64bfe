"""Shared fixtures for case builder tests."""

import pytest

from case_builder.builder import TestCaseBuilder
from case_builder.config import BuilderConfig


@pytest.fixture
def builder() -> TestCaseBuilder:
    """Builder with the default configuration."""
    return TestCaseBuilder()


@pytest.fixture
def strict_builder() -> TestCaseBuilder:
    """Builder that raises on unresolved case sources."""
    return TestCaseBuilder(config=BuilderConfig(strict_sources=True))
