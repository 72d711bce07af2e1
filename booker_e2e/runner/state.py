"""Session state threaded between lifecycle steps."""

from dataclasses import dataclass
from typing import Optional

from ..errors import StateError


@dataclass
class SessionState:
    """Token and booking id carried from one step to the next.

    Each value is written once by the step that produces it and read by the
    steps after it.
    """
    auth_token: str = ""
    booking_id: Optional[int] = None

    def set_token(self, token: str) -> None:
        if self.auth_token:
            raise StateError("auth_token", "'auth_token' is already set")
        self.auth_token = token

    def set_booking_id(self, booking_id: int) -> None:
        if self.booking_id is not None:
            raise StateError("booking_id", "'booking_id' is already set")
        self.booking_id = booking_id

    def require_token(self) -> str:
        if not self.auth_token:
            raise StateError("auth_token")
        return self.auth_token

    def require_booking_id(self) -> int:
        if self.booking_id is None:
            raise StateError("booking_id")
        return self.booking_id

    @property
    def masked_token(self) -> str:
        """First 10 characters of the token, for console output."""
        if not self.auth_token:
            return ""
        return f"{self.auth_token[:10]}..."
