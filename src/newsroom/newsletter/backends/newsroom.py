"""Newsroom newsletter API integration."""

import logging

import requests
from django.conf import settings

from newsroom.newsletter.backends import ClientConfiguration, Subscription, SubscriptionRequest
from newsroom.newsletter.exceptions import (
    InvalidResponseError,
    NewsroomError,
    NotConfiguredError,
    ServiceUnavailableError,
)
from newsroom.newsletter.payloads import (
    build_subscribe_payload,
    build_subscriptions_query,
    build_unsubscribe_queries,
    requested_list_ids,
)

from .base import BaseBackend

logger = logging.getLogger(__name__)

API_URL = "https://ec.europa.eu/newsroom/api/v1"


class NewsroomBackend(BaseBackend):
    """
    Client of the Newsroom newsletter subscription API.

    Every operation is a single request/response cycle (one request per
    list for unsubscriptions). Failures are raised to the caller, nothing is
    retried.
    """

    def __init__(
        self,
        configuration: ClientConfiguration | None = None,
        api_url: str | None = None,
        timeout: int | None = None,
        session: requests.Session | None = None,
    ):
        """Configure the Newsroom backend."""
        super().__init__(configuration)
        self.api_url = (api_url or getattr(settings, "NEWSROOM_API_URL", None) or API_URL).rstrip("/")
        self.timeout = timeout or getattr(settings, "NEWSROOM_TIMEOUT", None) or 10
        self._session = session or requests.Session()

    def _request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        """Send a request, transport failures are turned into ServiceUnavailableError."""
        url = f"{self.api_url}/{endpoint}"
        logger.debug("Sending %s request to %s", method, url)
        try:
            return self._session.request(method, url, timeout=self.timeout, **kwargs)
        except (requests.ConnectionError, requests.Timeout) as err:
            raise ServiceUnavailableError(
                "The subscription service is not available at the moment. Please try again later."
            ) from err
        except requests.RequestException as err:
            raise InvalidResponseError(f"An error has occurred during a {endpoint} request.") from err

    def subscribe(self, request: SubscriptionRequest) -> Subscription:
        """
        Subscribe an email address to the requested distribution lists.

        Newsroom marks every requested and related list as subscribed but only
        the item of the first requested list found in the response is returned.
        """
        self.require_configured()
        payload = build_subscribe_payload(request, self._configuration)
        response = self._request("POST", "subscribe", json=payload)

        if requests.codes.bad_request <= response.status_code < requests.codes.internal_server_error:
            try:
                response.raise_for_status()
            except requests.HTTPError as err:
                raise InvalidResponseError("Invalid response returned by Newsroom API.") from err

        if response.status_code != requests.codes.ok:
            raise ServiceUnavailableError(
                f"Newsroom API returned a response with HTTP status {response.status_code} instead of expected 200."
            )

        try:
            data = response.json()
        except ValueError as err:
            raise InvalidResponseError("Unparseable response returned by Newsroom newsletter API.") from err

        if not data or not isinstance(data, list):
            raise InvalidResponseError("Empty response returned by Newsroom newsletter API.")

        items = {}
        for item in data:
            if isinstance(item, dict) and "newsletterId" in item:
                items.setdefault(str(item["newsletterId"]), item)

        for list_id in requested_list_ids(request):
            if list_id in items:
                subscription = Subscription.from_api(items[list_id])
                logger.info(
                    "Subscribed to Newsroom list %s (new subscription: %s)",
                    subscription.list_id,
                    subscription.is_new_subscription,
                )
                return subscription

        raise InvalidResponseError(
            "Newsroom API returned a 200 response but none of the requested lists were found in it."
        )

    def unsubscribe(self, request: SubscriptionRequest) -> bool:
        """
        Unsubscribe an email address from the requested distribution lists.

        Newsroom does not support multiple lists in one unsubscription, lists are
        processed one by one and the first failure stops the processing.
        """
        self.require_configured()
        for query in build_unsubscribe_queries(request, self._configuration):
            response = self._request("GET", "unsubscribe", params=query)
            # Newsroom answers with a plain text message we do not need.
            if response.status_code != requests.codes.ok:
                logger.warning(
                    "Newsroom unsubscription from list %s failed with HTTP status %s",
                    query["sv_id"],
                    response.status_code,
                )
                return False

        logger.info("Unsubscribed from Newsroom lists %s", ",".join(request.list_ids))
        return True

    def is_subscribed(self, email: str, list_ids=None) -> bool:
        """Check whether an email address has a subscription to the given lists."""
        self.require_configured()
        query = build_subscriptions_query(email, list_ids, self._configuration)
        response = self._request("GET", "subscriptions", params=query)

        if response.status_code != requests.codes.ok:
            raise ServiceUnavailableError(
                "The subscription service is not available at the moment. Please try again later."
            )

        try:
            subscriptions = response.json()
        except ValueError as err:
            raise InvalidResponseError("Unparseable response returned by Newsroom newsletter API.") from err

        return bool(subscriptions)


class LenientNewsroomBackend(NewsroomBackend):
    """
    Newsroom backend returning empty results instead of raising.

    Operations return None when the backend is not configured, None or False
    when Newsroom fails, and log the failure.
    """

    def subscribe(self, request: SubscriptionRequest) -> Subscription | None:
        """Subscribe, return None on failure."""
        try:
            return super().subscribe(request)
        except NewsroomError as err:
            logger.warning("Newsroom subscription failed: %s", err)
            return None

    def unsubscribe(self, request: SubscriptionRequest) -> bool | None:
        """Unsubscribe, return None when not configured and False on failure."""
        try:
            return super().unsubscribe(request)
        except NotConfiguredError as err:
            logger.warning("Newsroom unsubscription skipped: %s", err)
            return None
        except NewsroomError as err:
            logger.warning("Newsroom unsubscription failed: %s", err)
            return False

    def is_subscribed(self, email: str, list_ids=None) -> bool | None:
        """Check the subscription, return None when not configured and False on failure."""
        try:
            return super().is_subscribed(email, list_ids)
        except NotConfiguredError as err:
            logger.warning("Newsroom subscription lookup skipped: %s", err)
            return None
        except NewsroomError as err:
            logger.warning("Newsroom subscription lookup failed: %s", err)
            return False
