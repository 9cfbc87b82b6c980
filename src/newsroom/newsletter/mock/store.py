"""In-memory simulation of the Newsroom newsletter API."""

import copy
import json
import logging
from dataclasses import dataclass, field

from django.core.cache import caches

from newsroom.newsletter.backends import split_list_ids
from newsroom.newsletter.exceptions import NotFoundError

logger = logging.getLogger(__name__)

API_PATH = "/newsroom/api/v1"

# Newsroom translates the feedback of new subscriptions, the other messages are English only.
THANKS_MESSAGES = {
    "en": "Thanks for Signing Up to the service: Test Newsletter Service",
    "de": "Vielen Dank für Ihre Anmeldung zum Service: Test Newsletter Service",
    "fr": "Merci de votre inscription au service : Test Newsletter Service",
    "it": "Grazie per esserti iscritto al servizio: Test Newsletter Service",
    "es": "Gracias por suscribirse al servicio: Test Newsletter Service",
}
ALREADY_REGISTERED_MESSAGE = "A subscription for this service is already registered for this email address"
UNSUBSCRIBED_MESSAGE = "User unsubscribed!"
NOT_FOUND_MESSAGE = "Not found"


@dataclass
class MockResponse:
    """Response produced by the simulated API."""

    status: int
    body: list | dict | str = ""

    @property
    def content_type(self) -> str:
        """Return the content type matching the body."""
        return "text/plain" if isinstance(self.body, str) else "application/json"

    @property
    def content(self) -> bytes:
        """Return the encoded body."""
        if isinstance(self.body, str):
            return self.body.encode()
        return json.dumps(self.body).encode()


@dataclass
class RecordedRequest:
    """Request received by the simulated API."""

    method: str
    path: str
    query: dict = field(default_factory=dict)
    body: dict | None = None


def feedback_message(language: str | None, is_new_subscription: bool) -> str:
    """Return the feedback message Newsroom shows for a subscription."""
    if not is_new_subscription:
        return ALREADY_REGISTERED_MESSAGE
    return THANKS_MESSAGES.get(language or "en", THANKS_MESSAGES["en"])


def subscription_item(universe: str, email: str, list_id: str, language: str | None, is_new_subscription: bool):
    """Generate a subscription item shaped like the ones of Newsroom."""
    return {
        "responseType": "json",
        "email": email,
        "firstName": None,
        "lastName": None,
        "organisation": None,
        "country": None,
        "universeId": "1",
        "universeName": "TEST FORUM",
        "universAcronym": universe,
        "newsletterId": list_id,
        "newsletterName": "Test newsletter distribution list",
        "status": "Valid",
        "unsubscriptionLink": f"https://ec.europa.eu/newsroom/{universe}/user-subscriptions/unsubscribe/{email}/RANDOM_STRING",
        "isNewUser": None,
        "hostBy": f"{universe} Newsroom",
        "profileLink": f"https://ec.europa.eu/newsroom/{universe}/user-profile/123456789",
        "isNewSubscription": is_new_subscription,
        "feedbackMessage": feedback_message(language, is_new_subscription),
        "language": language,
        "frequency": "On demand",
        "defaultLanguage": "0",
        "pattern": None,
    }


class SubscriptionStateStore:
    """
    Simulated Newsroom subscription database.

    The state maps universe -> list ID -> email -> record, where a record
    holds the subscribed flag, the language and the topic IDs. Records are
    never deleted, unsubscribing only clears the flag. Every received request
    is recorded so tests can look at what was sent.
    """

    def __init__(self, validate_unsubscriptions: bool = True):
        """Initialize an empty store."""
        self.validate_unsubscriptions = validate_unsubscriptions
        self._state = {"subscriptions": {}, "apps": {}}
        self._requests = []
        self._next_response = None

    def _load(self) -> dict:
        return self._state

    def _save(self, state: dict):
        self._state = state

    def _load_requests(self) -> list:
        return self._requests

    def _save_requests(self, recorded: list):
        self._requests = recorded

    @property
    def subscriptions(self) -> dict:
        """Return a copy of the universe -> list -> email -> record mapping."""
        return copy.deepcopy(self._load()["subscriptions"])

    @property
    def requests(self) -> list[RecordedRequest]:
        """Return the requests received since the last reset."""
        return list(self._load_requests())

    def clear_requests(self):
        """Forget the recorded requests."""
        self._save_requests([])

    def set_next_response(self, status: int, body: list | dict | str = ""):
        """Answer the next request with the given response instead of handling it."""
        self._next_response = MockResponse(status, body)

    def reset(self):
        """Drop every subscription, recorded request and pending response."""
        self._save({"subscriptions": {}, "apps": {}})
        self._save_requests([])
        self._next_response = None

    def get_record(self, universe: str, list_id: str, email: str) -> dict:
        """
        Return the record of a subscriber for a list.

        Raises:
            NotFoundError: If Newsroom never heard of the subscriber for this list

        """
        try:
            return copy.deepcopy(self._load()["subscriptions"][universe][list_id][email])
        except KeyError as err:
            raise NotFoundError(f"No subscriber {email!r} for list {list_id!r} in universe {universe!r}.") from err

    def is_subscribed(self, universe: str, list_id: str, email: str) -> bool:
        """Return True when the subscriber is currently subscribed to the list."""
        try:
            return self.get_record(universe, list_id, email)["subscribed"]
        except NotFoundError:
            return False

    def dispatch(self, method: str, path: str, query: dict | None = None, body: dict | None = None) -> MockResponse:
        """Record a request and route it to its handler."""
        query = query or {}
        self._save_requests([*self._load_requests(), RecordedRequest(method.upper(), path, query, body)])

        if self._next_response is not None:
            response, self._next_response = self._next_response, None
            return response

        endpoint = path.removeprefix(API_PATH).strip("/")
        if endpoint == "subscribe" and method.upper() == "POST":
            return self.handle_subscribe(body or {})
        if endpoint == "unsubscribe":
            return self.handle_unsubscribe(_single_values(query))
        if endpoint == "subscriptions":
            list_ids = query.get("sv_id[]") or query.get("sv_id")
            return self.handle_subscriptions_query(
                _single_value(query.get("universe_acronym")),
                _single_value(query.get("user_email")),
                list_ids,
            )

        return MockResponse(404, NOT_FOUND_MESSAGE)

    def handle_subscribe(self, payload: dict) -> MockResponse:
        """
        Subscribe an email address to the lists and related lists of a payload.

        Newsroom marks every list as subscribed, the response holds one item per
        list telling whether the subscription is new.
        """
        data = payload.get("subscription") or {}
        universe = data.get("universeAcronym")
        email = data.get("email")
        language = data.get("language") or "en"
        topic_ext_ids = list(split_list_ids([data.get("topicExtId") or ""]))
        list_ids = split_list_ids([data.get("sv_id") or "", data.get("relatedSv_Id") or ""])

        state = self._load()
        if data.get("topicExtWebsite"):
            state["apps"][data["topicExtWebsite"]] = universe
        lists = state["subscriptions"].setdefault(universe, {})

        items = []
        for list_id in list_ids:
            record = lists.get(list_id, {}).get(email)
            is_new_subscription = not (record and record["subscribed"])
            items.append(subscription_item(universe, email, list_id, language, is_new_subscription))
            lists.setdefault(list_id, {})[email] = {
                "subscribed": True,
                "language": language,
                "topic_ext_ids": topic_ext_ids,
            }
        self._save(state)

        logger.debug("Mock subscribed %s to lists %s of universe %s", email, ",".join(list_ids), universe)
        return MockResponse(200, items)

    def handle_unsubscribe(self, query: dict) -> MockResponse:
        """Unsubscribe an email address from a single list."""
        app = query.get("app")
        email = query.get("user_email")
        list_id = query.get("sv_id")

        state = self._load()
        universe = state["apps"].get(app, app)

        try:
            self.get_record(universe, list_id, email)
        except NotFoundError:
            # Newsroom fails when it does not know the subscriber at all.
            if self.validate_unsubscriptions:
                return MockResponse(404, NOT_FOUND_MESSAGE)

        state["subscriptions"].setdefault(universe, {}).setdefault(list_id, {})[email] = {
            "subscribed": False,
            "language": None,
            "topic_ext_ids": None,
        }
        self._save(state)

        return MockResponse(200, UNSUBSCRIBED_MESSAGE)

    def handle_subscriptions_query(self, universe: str, email: str, list_ids=None) -> MockResponse:
        """List the current subscriptions of an email address, filtered by lists when given."""
        lists = self._load()["subscriptions"].get(universe, {})
        list_ids = split_list_ids(list_ids) or tuple(lists)

        items = []
        for list_id in list_ids:
            record = lists.get(list_id, {}).get(email)
            if record and record["subscribed"]:
                items.append(subscription_item(universe, email, list_id, record["language"], False))

        return MockResponse(200, items)


class CachedSubscriptionStateStore(SubscriptionStateStore):
    """Simulated Newsroom database persisted in a Django cache."""

    STATE_KEY = "newsroom.mock_api_subscriptions"
    REQUESTS_KEY = "newsroom.mock_api_requests"

    def __init__(self, alias: str = "default", validate_unsubscriptions: bool = True):
        """Use the given cache alias."""
        super().__init__(validate_unsubscriptions=validate_unsubscriptions)
        self.alias = alias

    @property
    def cache(self):
        """Return the cache holding the state."""
        return caches[self.alias]

    def _load(self) -> dict:
        return self.cache.get(self.STATE_KEY) or {"subscriptions": {}, "apps": {}}

    def _save(self, state: dict):
        self.cache.set(self.STATE_KEY, state, timeout=None)

    def _load_requests(self) -> list:
        return self.cache.get(self.REQUESTS_KEY) or []

    def _save_requests(self, recorded: list):
        self.cache.set(self.REQUESTS_KEY, recorded, timeout=None)


def _single_value(value):
    if isinstance(value, list | tuple):
        return value[0] if value else None
    return value


def _single_values(query: dict) -> dict:
    return {name: _single_value(value) for name, value in query.items()}
