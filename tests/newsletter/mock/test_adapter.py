"""Test the requests adapter of the simulated Newsroom API."""

import requests

from newsroom.newsletter.mock.adapter import NewsroomMockAdapter


def test_adapter_builds_responses(store):
    """Test the adapter answers requests from the store."""
    session = requests.Session()
    session.mount("https://ec.europa.eu/newsroom/api/v1", NewsroomMockAdapter(store))

    subscribe = session.post(
        "https://ec.europa.eu/newsroom/api/v1/subscribe",
        json={"subscription": {"universeAcronym": "U", "topicExtWebsite": "A", "sv_id": "1", "email": "e@x.com"}},
    )
    lookup = session.get(
        "https://ec.europa.eu/newsroom/api/v1/subscriptions",
        params={"universe_acronym": "U", "user_email": "e@x.com", "sv_id": ["1", "2"]},
    )
    unsubscribe = session.get(
        "https://ec.europa.eu/newsroom/api/v1/unsubscribe",
        params={"app": "A", "user_email": "unknown@x.com", "sv_id": "1"},
    )

    assert subscribe.status_code == 200
    assert subscribe.headers["Content-Type"] == "application/json"
    assert subscribe.json()[0]["newsletterId"] == "1"
    assert [item["newsletterId"] for item in lookup.json()] == ["1"]
    assert store.requests[1].query["sv_id"] == ["1", "2"]
    assert unsubscribe.status_code == 404
    assert unsubscribe.text == "Not found"
    assert unsubscribe.reason == "Not Found"


def test_adapter_relative_to_base_url(store):
    """Test the store is given paths relative to the URL the adapter serves."""
    session = requests.Session()
    session.mount("http://localhost:8000/api", NewsroomMockAdapter(store, base_url="http://localhost:8000/api/"))

    response = session.post(
        "http://localhost:8000/api/subscribe",
        json={"subscription": {"universeAcronym": "U", "topicExtWebsite": "A", "sv_id": "1", "email": "e@x.com"}},
    )

    assert response.status_code == 200
    assert store.requests[0].path == "/subscribe"
    assert store.is_subscribed("U", "1", "e@x.com") is True


def test_adapter_non_standard_status(store):
    """Test a status without a standard reason phrase is still answered."""
    session = requests.Session()
    session.mount("https://ec.europa.eu/newsroom/api/v1", NewsroomMockAdapter(store))
    store.set_next_response(520, "origin error")

    response = session.get("https://ec.europa.eu/newsroom/api/v1/subscriptions")

    assert response.status_code == 520
    assert response.reason == ""
    assert response.text == "origin error"
