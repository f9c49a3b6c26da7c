"""
Shared fixtures: in-memory chain apis so no test touches the network.
"""

import pytest

from fakes import FakeChainApi


@pytest.fixture
def fake_apis():
    """Registry of FakeChainApi per chain; the factory creates blank ones on demand."""
    apis = {}

    def factory(chain):
        if chain not in apis:
            apis[chain] = FakeChainApi(chain)
        return apis[chain]

    factory.apis = apis
    return factory
