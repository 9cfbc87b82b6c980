"""Payloads and query strings sent to the Newsroom API."""

from newsroom.newsletter.backends import ClientConfiguration, SubscriptionRequest, split_list_ids
from newsroom.newsletter.keys import generate_key, normalise_email


def _key(email: str, configuration: ClientConfiguration) -> str:
    return generate_key(email, configuration.private_key, configuration.hash_method, configuration.normalised)


def requested_list_ids(request: SubscriptionRequest) -> tuple[str, ...]:
    """Return the lists the subscriber asked to join, related lists excluded."""
    return request.list_ids


def marked_list_ids(request: SubscriptionRequest) -> tuple[str, ...]:
    """Return every list a subscribe request enrolls the subscriber in."""
    return split_list_ids(request.list_ids + request.related_list_ids)


def build_subscribe_payload(request: SubscriptionRequest, configuration: ClientConfiguration) -> dict:
    """
    Build the JSON body of a subscribe request.

    Related lists and topics are only sent when there are some, Newsroom does
    not accept empty values for them.
    """
    subscription = {
        "universeAcronym": configuration.universe,
        "topicExtWebsite": configuration.app_id,
        "sv_id": ",".join(request.list_ids),
        "email": normalise_email(request.email, configuration.normalised),
        "language": request.language,
    }
    if request.related_list_ids:
        subscription["relatedSv_Id"] = ",".join(request.related_list_ids)
    if request.topic_ext_ids:
        subscription["topicExtId"] = ",".join(request.topic_ext_ids)

    return {
        "key": _key(request.email, configuration),
        "subscription": subscription,
    }


def build_unsubscribe_queries(request: SubscriptionRequest, configuration: ClientConfiguration) -> list[dict]:
    """Build one unsubscribe query per distribution list, in request order."""
    email = normalise_email(request.email, configuration.normalised)
    key = _key(request.email, configuration)
    return [
        {
            "user_email": email,
            "key": key,
            "app": configuration.app_id,
            "sv_id": list_id,
        }
        for list_id in request.list_ids
    ]


def build_subscriptions_query(email: str, list_ids, configuration: ClientConfiguration) -> dict:
    """
    Build the query of a subscriptions lookup, filtered by lists when given.

    The list IDs are sent as an `sv_id[]` array, a plain repeated `sv_id`
    would only keep the last list on the Newsroom side.
    """
    query = {
        "user_email": normalise_email(email, configuration.normalised),
        "key": _key(email, configuration),
        "universe_acronym": configuration.universe,
        "app": configuration.app_id,
    }
    list_ids = split_list_ids(list_ids)
    if list_ids:
        query["sv_id[]"] = list(list_ids)
    return query
