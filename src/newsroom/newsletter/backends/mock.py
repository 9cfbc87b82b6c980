"""Newsroom backend talking to the simulated API."""

from newsroom.newsletter.backends import ClientConfiguration
from newsroom.newsletter.mock import get_default_store
from newsroom.newsletter.mock.adapter import NewsroomMockAdapter
from newsroom.newsletter.mock.store import SubscriptionStateStore

from .newsroom import NewsroomBackend


class MockNewsroomBackend(NewsroomBackend):
    """
    Newsroom backend whose requests are answered by a SubscriptionStateStore.

    Only the transport is replaced, payloads, status codes and responses go
    through the same code as with the real API.
    """

    def __init__(
        self,
        configuration: ClientConfiguration | None = None,
        store: SubscriptionStateStore | None = None,
        api_url: str | None = None,
        timeout: int | None = None,
    ):
        """Mount the mock adapter on the API URL."""
        super().__init__(configuration, api_url=api_url, timeout=timeout)
        self.store = store if store is not None else get_default_store()
        self._session.mount(self.api_url, NewsroomMockAdapter(self.store, base_url=self.api_url))
