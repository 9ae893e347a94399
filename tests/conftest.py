"""Pytest configuration and fixtures."""

import pytest

from trackmatch.services.carrier_loader import CarrierLoader
from trackmatch.services.registry import ProviderRegistry


@pytest.fixture(scope="session")
def loader():
    """Load the carriers shipped with the package."""
    loader = CarrierLoader()
    loader.load_all()
    return loader


@pytest.fixture(scope="session")
def registry(loader):
    """Create a sequential registry over all carriers."""
    return ProviderRegistry(loader.load_all().values(), fanout_workers=0)


@pytest.fixture(scope="session")
def carrier(registry):
    """Look up a carrier by key."""
    return registry.get_provider
