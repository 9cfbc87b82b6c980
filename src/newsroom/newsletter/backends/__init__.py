"""Newsroom newsletter backends module."""

from dataclasses import dataclass, field

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from newsroom.newsletter.enums import HashMethod, SubscriptionStatus


def split_list_ids(list_ids) -> tuple[str, ...]:
    """
    Split distribution list IDs into individual IDs.

    An entry may hold several comma separated IDs ("222,333"). Duplicates are
    dropped and the order of first occurrence is kept.
    """
    if isinstance(list_ids, str | int):
        list_ids = [list_ids]
    result = []
    for entry in list_ids or ():
        for list_id in str(entry).split(","):
            list_id = list_id.strip()
            if list_id and list_id not in result:
                result.append(list_id)
    return tuple(result)


@dataclass(frozen=True)
class ClientConfiguration:
    """Credentials and options used to talk to the Newsroom API."""

    universe: str | None = None
    app_id: str | None = None
    private_key: str | None = field(default=None, repr=False)
    hash_method: HashMethod = HashMethod.MD5
    normalised: bool = False

    def __post_init__(self):
        """Reject hash methods Newsroom does not support."""
        try:
            hash_method = HashMethod(str(self.hash_method).lower())
        except ValueError as err:
            raise ImproperlyConfigured(
                f"Hash method {self.hash_method!r} is not supported, it must be md5 or sha256."
            ) from err
        object.__setattr__(self, "hash_method", hash_method)
        object.__setattr__(self, "normalised", bool(self.normalised))

    @classmethod
    def from_settings(cls):
        """Build the configuration from the NEWSROOM_* settings."""
        return cls(
            universe=getattr(settings, "NEWSROOM_UNIVERSE", None),
            app_id=getattr(settings, "NEWSROOM_APP_ID", None),
            private_key=getattr(settings, "NEWSROOM_API_KEY", None),
            hash_method=getattr(settings, "NEWSROOM_HASH_METHOD", HashMethod.MD5),
            normalised=getattr(settings, "NEWSROOM_NORMALISED", False),
        )

    @property
    def is_complete(self) -> bool:
        """Return True when every value needed to reach Newsroom is set."""
        return bool(self.private_key and self.universe and self.app_id)


@dataclass
class SubscriptionRequest:
    """Subscriber and distribution lists of a subscription operation."""

    email: str
    list_ids: tuple[str, ...]
    related_list_ids: tuple[str, ...] = ()
    language: str | None = None
    topic_ext_ids: tuple[str, ...] = ()

    def __post_init__(self):
        """Normalise the distribution list IDs."""
        self.list_ids = split_list_ids(self.list_ids)
        self.related_list_ids = split_list_ids(self.related_list_ids)
        self.topic_ext_ids = split_list_ids(self.topic_ext_ids)
        if not self.list_ids:
            raise ValueError("At least one distribution list ID is required.")


@dataclass
class Subscription:
    """Subscription returned by Newsroom for a subscribe request."""

    email: str
    universe_acronym: str | None
    list_id: str
    list_name: str | None
    is_new_subscription: bool
    feedback_message: str | None
    language: str | None
    status: SubscriptionStatus
    unsubscription_link: str | None = None
    profile_link: str | None = None
    raw: dict = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_api(cls, item: dict):
        """Build a subscription from an item of the API response."""
        status = SubscriptionStatus.VALID if item.get("status") == SubscriptionStatus.VALID else SubscriptionStatus.OTHER
        return cls(
            email=item.get("email"),
            # "universAcronym" is the spelling used by the API.
            universe_acronym=item.get("universAcronym"),
            list_id=str(item.get("newsletterId")),
            list_name=item.get("newsletterName"),
            is_new_subscription=bool(item.get("isNewSubscription")),
            feedback_message=item.get("feedbackMessage"),
            language=item.get("language"),
            status=status,
            unsubscription_link=item.get("unsubscriptionLink"),
            profile_link=item.get("profileLink"),
            raw=item,
        )
