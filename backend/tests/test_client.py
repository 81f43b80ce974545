"""
Tests for the HTTP client and listing filter helpers
"""
import json
from datetime import date
from unittest.mock import MagicMock

import pytest
import requests

from app.client.api import ApiError, MarketplaceClient
from app.client.filters import category_query


def make_response(status_code=200, payload=None):
    response = requests.Response()
    response.status_code = status_code
    response._content = b"" if payload is None else json.dumps(payload).encode()
    response.url = "http://api.test/api"
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def api(session):
    return MarketplaceClient("http://api.test/api/", access_token="tok", session=session)


class TestMarketplaceClient:
    def test_create_reservation_posts_iso_dates(self, api, session):
        session.request.return_value = make_response(200, {"success": True, "data": {"id": 7}})

        result = api.create_reservation(7, date(2024, 1, 10), date(2024, 1, 12), 200)

        assert result == {"id": 7}
        method, url = session.request.call_args.args
        kwargs = session.request.call_args.kwargs
        assert (method, url) == ("POST", "http://api.test/api/reservations")
        assert kwargs["json"] == {
            "listing_id": 7,
            "start_date": "2024-01-10",
            "end_date": "2024-01-12",
            "total_price": 200,
        }
        assert kwargs["headers"] == {"Authorization": "Bearer tok"}
        assert kwargs["timeout"] is None

    def test_http_error_becomes_api_error(self, api, session):
        session.request.return_value = make_response(409, {"detail": "taken"})

        with pytest.raises(ApiError) as exc:
            api.create_listing({"title": "x"})
        assert exc.value.status_code == 409

    def test_transport_error_becomes_api_error(self, api, session):
        session.request.side_effect = requests.exceptions.ConnectionError("down")

        with pytest.raises(ApiError) as exc:
            api.delete_reservation(3)
        assert exc.value.status_code is None

    def test_delete_returns_count(self, api, session):
        session.request.return_value = make_response(200, {"count": 0})
        assert api.delete_reservation(3) == 0

    def test_list_reservations_drops_unset_filters(self, api, session):
        session.request.return_value = make_response(200, {"items": []})

        api.list_reservations(author_id=5)

        assert session.request.call_args.kwargs["params"] == {"author_id": 5}

    def test_anonymous_client_sends_no_auth_header(self, session):
        session.request.return_value = make_response(200, {"items": []})
        MarketplaceClient("http://api.test", session=session).list_reservations()
        assert session.request.call_args.kwargs["headers"] == {}


class TestCategoryQuery:
    def test_selects_category_and_keeps_other_filters(self):
        assert category_query({"guest_count": "2"}, "Beach") == {
            "guest_count": "2",
            "category": "Beach",
        }

    def test_clicking_active_category_clears_it(self):
        assert category_query({"category": "Beach"}, "Beach") == {}

    def test_switches_category(self):
        assert category_query({"category": "Beach"}, "Lake") == {"category": "Lake"}
