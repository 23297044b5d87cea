"""
Tests for core.clover_client: URL building, auth header, pagination, failures.
"""

from unittest.mock import MagicMock

import pytest
import requests

from core.clover_client import CloverApiClient, CloverApiError, CloverConfig


def _response(status_code=200, payload=None):
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = payload if payload is not None else {"elements": []}
    return resp


def _client(sandbox=True, limit_pages=None):
    session = MagicMock(spec=requests.Session)
    if limit_pages is not None:
        session.request.side_effect = limit_pages
    client = CloverApiClient(CloverConfig(token="tok", merchant_id="M123", sandbox=sandbox), session=session)
    return client, session


class TestCloverApiClient:
    def test_sandbox_url_and_bearer_header(self):
        client, session = _client(sandbox=True)
        session.request.return_value = _response(payload={"elements": [{"id": "c1", "name": "Dairy"}]})

        assert client.fetch_categories() == [{"id": "c1", "name": "Dairy"}]

        method, url = session.request.call_args.args
        kwargs = session.request.call_args.kwargs
        assert method == "GET"
        assert url == "https://sandbox.dev.clover.com/v3/merchants/M123/categories"
        assert kwargs["headers"]["Authorization"] == "Bearer tok"
        assert kwargs["params"]["offset"] == 0

    def test_production_url(self):
        client, session = _client(sandbox=False)
        session.request.return_value = _response()
        client.fetch_items()

        _, url = session.request.call_args.args
        assert url == "https://api.clover.com/v3/merchants/M123/items"
        assert session.request.call_args.kwargs["params"]["expand"] == "categories"

    def test_items_are_paginated(self, monkeypatch):
        monkeypatch.setattr("core.clover_client.settings.clover_items_page_limit", 2)
        pages = [
            _response(payload={"elements": [{"id": "1"}, {"id": "2"}]}),
            _response(payload={"elements": [{"id": "3"}]}),
        ]
        client, session = _client(limit_pages=pages)

        assert [e["id"] for e in client.fetch_items()] == ["1", "2", "3"]
        offsets = [c.kwargs["params"]["offset"] for c in session.request.call_args_list]
        assert offsets == [0, 2]

    def test_error_status_raises(self):
        client, session = _client()
        session.request.return_value = _response(status_code=401)

        with pytest.raises(CloverApiError, match="401"):
            client.fetch_items()

    def test_transport_error_raises(self):
        client, session = _client()
        session.request.side_effect = requests.ConnectionError("boom")

        with pytest.raises(CloverApiError):
            client.fetch_categories()
