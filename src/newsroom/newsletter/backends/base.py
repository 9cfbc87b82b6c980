"""Newsroom newsletter backend base module."""

from abc import ABC, abstractmethod

from newsroom.newsletter.backends import ClientConfiguration, Subscription, SubscriptionRequest
from newsroom.newsletter.exceptions import NotConfiguredError


class BaseBackend(ABC):
    """Base class for all newsletter backends."""

    def __init__(self, configuration: ClientConfiguration | None = None):
        """Keep the configuration, read from the settings when not given."""
        self._configuration = configuration or ClientConfiguration.from_settings()

    def get_configuration(self) -> ClientConfiguration:
        """Return the configuration in use."""
        return self._configuration

    def is_configured(self) -> bool:
        """Return True when the private key, the universe and the app id are set."""
        return self._configuration.is_complete

    def require_configured(self):
        """
        Make sure the backend can talk to Newsroom.

        Raises:
            NotConfiguredError: If the private key, the universe or the app id is missing

        """
        if not self.is_configured():
            raise NotConfiguredError(
                "The subscription service is not configured at the moment. Please try again later."
            )

    @abstractmethod
    def subscribe(self, request: SubscriptionRequest) -> Subscription:
        """
        Subscribe an email address to distribution lists.

        Args:
            request: Subscriber, lists, related lists, language and topics

        Returns:
            Subscription: The subscription of the first requested list

        Raises:
            NotConfiguredError: If the backend is not configured
            InvalidResponseError: If Newsroom answers with an unusable response
            ServiceUnavailableError: If Newsroom cannot be reached

        """

    @abstractmethod
    def unsubscribe(self, request: SubscriptionRequest) -> bool:
        """
        Unsubscribe an email address from distribution lists.

        Args:
            request: Subscriber and lists

        Returns:
            bool: True if every list was unsubscribed

        Raises:
            NotConfiguredError: If the backend is not configured
            ServiceUnavailableError: If Newsroom cannot be reached

        """

    @abstractmethod
    def is_subscribed(self, email: str, list_ids=None) -> bool:
        """
        Check whether an email address is subscribed.

        Args:
            email: Subscriber email address
            list_ids: Distribution lists to look at, every list of the universe if empty

        Returns:
            bool: True if at least one subscription was found

        Raises:
            NotConfiguredError: If the backend is not configured
            ServiceUnavailableError: If Newsroom does not answer with HTTP 200

        """
