"""Requests transport adapter answering from a simulated Newsroom API."""

import json
from http import HTTPStatus
from urllib.parse import parse_qs, urlsplit

from requests.adapters import BaseAdapter
from requests.models import Response
from requests.structures import CaseInsensitiveDict

from .store import SubscriptionStateStore


class NewsroomMockAdapter(BaseAdapter):
    """
    Transport adapter routing requests to a SubscriptionStateStore.

    Mount it on the API URL of a requests session so the client code runs
    unchanged without reaching the network. When `base_url` is given, the
    store receives paths relative to it, so the API can live anywhere.
    """

    def __init__(self, store: SubscriptionStateStore, base_url: str = ""):
        """Use the given store to answer requests sent below `base_url`."""
        super().__init__()
        self.store = store
        self.base_path = urlsplit(base_url).path.rstrip("/")

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        """Answer a prepared request from the store."""
        url = urlsplit(request.url)
        query = parse_qs(url.query, keep_blank_values=True)
        query = {name: values[0] if len(values) == 1 else values for name, values in query.items()}

        body = None
        if request.body:
            content = request.body.decode() if isinstance(request.body, bytes) else request.body
            try:
                body = json.loads(content)
            except ValueError:
                body = None

        path = url.path.removeprefix(self.base_path)
        mock_response = self.store.dispatch(request.method, path, query, body)

        response = Response()
        response.status_code = mock_response.status
        try:
            response.reason = HTTPStatus(mock_response.status).phrase
        except ValueError:
            # Statuses such as the 52x of proxies have no standard phrase.
            response.reason = ""
        response.headers = CaseInsensitiveDict({"Content-Type": mock_response.content_type})
        response._content = mock_response.content
        response.encoding = "utf-8"
        response.url = request.url
        response.request = request
        return response

    def close(self):
        """Nothing to release."""
