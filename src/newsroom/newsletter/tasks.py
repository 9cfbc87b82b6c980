"""Newsletter tasks module."""

from dataclasses import asdict

from celery import shared_task

from newsroom.newsletter import newsletter
from newsroom.newsletter.backends import SubscriptionRequest


@shared_task
def subscribe(
    email: str,
    list_ids: list[str],
    related_list_ids: list[str] | None = None,
    language: str | None = None,
    topic_ext_ids: list[str] | None = None,
):
    """Subscribe an email address to distribution lists."""
    request = SubscriptionRequest(
        email=email,
        list_ids=list_ids,
        related_list_ids=related_list_ids or (),
        language=language,
        topic_ext_ids=topic_ext_ids or (),
    )
    subscription = newsletter.subscribe(request)
    if subscription is None:
        return None
    return asdict(subscription)


@shared_task
def unsubscribe(email: str, list_ids: list[str]):
    """Unsubscribe an email address from distribution lists."""
    return newsletter.unsubscribe(SubscriptionRequest(email=email, list_ids=list_ids))


@shared_task
def is_subscribed(email: str, list_ids: list[str] | None = None):
    """Check whether an email address is subscribed."""
    return newsletter.is_subscribed(email, list_ids)
