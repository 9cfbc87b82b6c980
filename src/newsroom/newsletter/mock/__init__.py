"""Simulation of the Newsroom newsletter API for tests and local development."""

from django.conf import settings

from .store import CachedSubscriptionStateStore, SubscriptionStateStore

_default_store = None


def get_default_store() -> SubscriptionStateStore:
    """
    Return the store shared by the mock backends built without a store.

    The store is persisted in the cache named by NEWSROOM_MOCK_CACHE when set,
    otherwise it lives in memory for the whole process.
    """
    global _default_store  # noqa: PLW0603
    if _default_store is None:
        alias = getattr(settings, "NEWSROOM_MOCK_CACHE", None)
        _default_store = CachedSubscriptionStateStore(alias) if alias else SubscriptionStateStore()
    return _default_store


def reset_default_store():
    """Reset and forget the shared store."""
    global _default_store  # noqa: PLW0603
    if _default_store is not None:
        _default_store.reset()
    _default_store = None
