"""Pytest configuration and fixtures for api-type-detector tests."""

import pytest

from api_type_detector.store import DeclarationStore


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: Tests that take longer to run")


@pytest.fixture
def store(tmp_path) -> DeclarationStore:
    return DeclarationStore(directory=tmp_path / "declarations")
