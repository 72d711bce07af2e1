"""Exception types raised during a lifecycle run."""

from typing import Optional


class BookerE2EError(Exception):
    """Base class for all booker-e2e failures."""


class ConfigurationError(BookerE2EError):
    """Missing credentials, bad settings, or an unusable fixture.

    Raised before any request is sent.
    """


class TransportError(BookerE2EError):
    """Network failure or timeout while talking to the API."""

    def __init__(self, method: str, url: str, cause: Exception):
        self.method = method
        self.url = url
        self.cause = cause
        super().__init__(f"{method} {url} failed: {type(cause).__name__}: {cause}")


class ExpectationFailed(BookerE2EError):
    """A response did not match what the step expected."""

    def __init__(self, check: str, detail: str):
        self.check = check
        self.detail = detail
        super().__init__(f"{check}: {detail}")


class StateError(BookerE2EError):
    """Session state read before the step that writes it has run."""

    def __init__(self, name: str, detail: Optional[str] = None):
        self.name = name
        super().__init__(detail or f"'{name}' must be set before use")
