"""HTTP client for the Restful Booker API.

Implements the endpoints exercised by a lifecycle run:
- POST /auth            - Create an auth token
- POST /booking         - Create a booking
- GET /booking/:id      - Retrieve a booking
- DELETE /booking/:id   - Delete a booking
- GET /ping             - Health check
"""

from typing import Any, Optional

import requests
from requests.auth import HTTPBasicAuth

from ..errors import TransportError

JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


class BookerHttpClient:
    """HTTP client for the booking API.

    Methods return the raw ``requests.Response``; status and body checks
    belong to the caller. Nothing is retried.
    """

    def __init__(
        self,
        base_url: str,
        request_timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        """Initialize HTTP client.

        Args:
            base_url: Base URL of the API (e.g., https://restful-booker.herokuapp.com).
            request_timeout: Per-request timeout in seconds.
            session: Session to use. A new one is created when omitted.
        """
        self.base_url = base_url.rstrip("/")
        self.request_timeout = request_timeout
        self._session = session or requests.Session()

    def create_token(self, username: str, password: str) -> requests.Response:
        """POST /auth with the given credentials."""
        return self._request(
            "POST",
            "/auth",
            json={"username": username, "password": password},
            headers={"Content-Type": "application/json"},
        )

    def create_booking(self, booking: dict[str, Any]) -> requests.Response:
        """POST /booking with the booking as JSON body."""
        return self._request(
            "POST",
            "/booking",
            json=booking,
            headers=JSON_HEADERS,
        )

    def get_booking(self, booking_id: int) -> requests.Response:
        """GET /booking/:id."""
        return self._request(
            "GET",
            f"/booking/{booking_id}",
            headers={"Accept": "application/json"},
        )

    def delete_booking(
        self,
        booking_id: int,
        token: str,
        basic_auth: tuple[str, str],
    ) -> requests.Response:
        """DELETE /booking/:id.

        Args:
            booking_id: Booking to delete.
            token: Token from ``create_token``, sent as the ``token`` cookie.
            basic_auth: (username, password) for the Authorization header.
        """
        return self._request(
            "DELETE",
            f"/booking/{booking_id}",
            headers={
                "Content-Type": "application/json",
                "Cookie": f"token={token}",
            },
            auth=HTTPBasicAuth(*basic_auth),
        )

    def health_check(self) -> bool:
        """Check if the API is reachable.

        Returns:
            True if GET /ping answers with a non-5xx status.
        """
        try:
            response = self._request("GET", "/ping")
        except TransportError:
            return False
        return response.status_code < 500

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        """Send one request with the configured timeout.

        Raises:
            TransportError: On connection errors, timeouts and other
                request-level failures.
        """
        url = f"{self.base_url}{path}"
        kwargs.setdefault("timeout", self.request_timeout)

        try:
            return self._session.request(method, url, **kwargs)
        except requests.RequestException as e:
            raise TransportError(method, url, e) from e

    def close(self) -> None:
        """Close the HTTP session."""
        self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
