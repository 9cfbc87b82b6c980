"""Test the newsletter handler."""

import pytest
from django.core.exceptions import ImproperlyConfigured

from newsroom.newsletter.backends.mock import MockNewsroomBackend
from newsroom.newsletter.backends.newsroom import LenientNewsroomBackend, NewsroomBackend
from newsroom.newsletter.exceptions import NewsroomInvalidBackendError
from newsroom.newsletter.handler import NewsroomHandler
from newsroom.newsletter.mock.store import SubscriptionStateStore


def test_newsletter_handler_from_settings(settings):
    """Test the newsletter handler from the settings."""
    settings.NEWSROOM_NEWSLETTER = {
        "BACKEND": "newsroom",
    }
    handler = NewsroomHandler()
    assert type(handler()) is NewsroomBackend


def test_newsletter_handler_from_backend():
    """Test the newsletter handler from the backend."""
    handler = NewsroomHandler(
        backend={
            "BACKEND": "lenient",
            "PARAMETERS": {"timeout": 30},
        }
    )
    backend = handler()
    assert isinstance(backend, LenientNewsroomBackend)
    assert backend.timeout == 30
    assert handler() is backend


def test_newsletter_handler_backend_class():
    """Test a backend class can be given instead of a name."""
    store = SubscriptionStateStore()
    handler = NewsroomHandler(backend={"BACKEND": MockNewsroomBackend, "PARAMETERS": {"store": store}})
    assert handler().store is store


def test_newsletter_handler_defaults_to_newsroom():
    """Test the Newsroom backend is used when no backend is named."""
    assert type(NewsroomHandler(backend={})()) is NewsroomBackend


@pytest.mark.parametrize(
    "backend",
    [
        "newsroom.newsletter.backends.newsroom.NewsroomBackend",
        "unknown",
        SubscriptionStateStore,
    ],
)
def test_newsletter_handler_invalid_backend(backend):
    """Test only known newsletter backends can be used."""
    handler = NewsroomHandler(backend={"BACKEND": backend})
    with pytest.raises(NewsroomInvalidBackendError):
        handler()


def test_newsletter_backend_no_config(settings):
    """Test the newsletter handler when no config set should raise an error."""
    settings.NEWSROOM_NEWSLETTER = None
    handler = NewsroomHandler()
    with pytest.raises(ImproperlyConfigured):
        handler()


def test_newsletter_handler_reset(settings):
    """Test a reset handler builds a new backend from the current settings."""
    settings.NEWSROOM_NEWSLETTER = {"BACKEND": "newsroom"}
    handler = NewsroomHandler()
    first = handler()

    settings.NEWSROOM_NEWSLETTER = {"BACKEND": "mock"}
    handler.reset()

    assert handler() is not first
    assert isinstance(handler(), MockNewsroomBackend)
