"""E2E lifecycle test tool for the Restful Booker API."""

__version__ = "0.1.0"
