"""Fixtures for the test suite."""

import pytest
from django.utils.functional import empty

from newsroom.newsletter import newsletter, newsletter_handler
from newsroom.newsletter.backends import ClientConfiguration
from newsroom.newsletter.backends.mock import MockNewsroomBackend
from newsroom.newsletter.mock import reset_default_store
from newsroom.newsletter.mock.store import SubscriptionStateStore


@pytest.fixture(autouse=True)
def reset_newsletter():
    """Give every test a fresh default backend and mock store."""
    newsletter_handler.reset()
    newsletter._wrapped = empty
    reset_default_store()
    yield
    newsletter_handler.reset()
    newsletter._wrapped = empty
    reset_default_store()


@pytest.fixture(name="configuration")
def fixture_configuration():
    """Return a complete, not normalised, md5 configuration."""
    return ClientConfiguration(
        universe="TESTUNIVERSE",
        app_id="TESTAPP",
        private_key="phpunit-test-private-key",
        hash_method="md5",
        normalised=False,
    )


@pytest.fixture(name="store")
def fixture_store():
    """Return an empty simulated Newsroom API."""
    return SubscriptionStateStore()


@pytest.fixture(name="mock_backend")
def fixture_mock_backend(configuration, store):
    """Return a backend answered by the simulated Newsroom API."""
    return MockNewsroomBackend(configuration=configuration, store=store)
