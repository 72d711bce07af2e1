"""Shared fixtures for booker-e2e tests."""

import json
from unittest.mock import Mock

import pytest
import requests

from booker_e2e.config import RunConfig
from booker_e2e.fixture.schema import Booking, BookingDates
from booker_e2e.transport.http_client import BookerHttpClient

BASE_URL = "http://booker.test"


def make_response(status_code=200, json_body=None, text=None):
    """Build a stand-in for requests.Response."""
    response = Mock()
    response.status_code = status_code
    if json_body is None:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.json.return_value = json_body
    if text is None:
        text = json.dumps(json_body) if json_body is not None else ""
    response.text = text
    return response


@pytest.fixture
def booking_data():
    return {
        "firstname": "Jim",
        "lastname": "Brown",
        "totalprice": 111,
        "depositpaid": True,
        "bookingdates": {"checkin": "2025-01-01", "checkout": "2025-01-05"},
        "additionalneeds": "Breakfast",
    }


@pytest.fixture
def booking():
    return Booking(
        firstname="Jim",
        lastname="Brown",
        totalprice=111,
        depositpaid=True,
        bookingdates=BookingDates(checkin="2025-01-01", checkout="2025-01-05"),
        additionalneeds="Breakfast",
    )


@pytest.fixture
def run_config():
    return RunConfig(username="admin", password="password123", base_url=BASE_URL, timeout=5.0)


@pytest.fixture
def session():
    return Mock(spec=requests.Session)


@pytest.fixture
def client(session):
    return BookerHttpClient(BASE_URL, request_timeout=5.0, session=session)


@pytest.fixture
def happy_responses(booking_data):
    """Responses for a full successful lifecycle, in request order."""
    return [
        make_response(200, {"token": "abc123def456ghi"}),
        make_response(200, {"bookingid": 42, "booking": booking_data}),
        make_response(200, booking_data),
        make_response(201, text="Created"),
    ]
