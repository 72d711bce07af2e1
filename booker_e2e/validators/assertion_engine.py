"""Assertion engine for checking API responses.

Each step owns one engine. Every check is recorded in the engine's report;
the first failing check raises ExpectationFailed so the step stops there.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

import requests

from ..errors import ExpectationFailed
from ..fixture.schema import Booking

_MISSING = object()


@dataclass
class AssertionResult:
    """Result of a single check."""
    name: str
    passed: bool
    details: str


@dataclass
class AssertionReport:
    """All checks recorded for one step."""
    results: list[AssertionResult] = field(default_factory=list)

    @property
    def all_passed(self) -> bool:
        return all(r.passed for r in self.results)

    @property
    def passed_count(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def failed_count(self) -> int:
        return sum(1 for r in self.results if not r.passed)

    @property
    def total_count(self) -> int:
        return len(self.results)


class AssertionEngine:
    """Records and enforces expectations on API responses."""

    def __init__(self, report: Optional[AssertionReport] = None):
        self.report = report or AssertionReport()

    def check(self, name: str, passed: bool, details: str) -> None:
        """Record a check; raise ExpectationFailed if it did not pass."""
        self.report.results.append(AssertionResult(name=name, passed=passed, details=details))
        if not passed:
            raise ExpectationFailed(name, details)

    def expect_status(self, response: requests.Response, expected: int) -> None:
        actual = response.status_code
        self.check(
            "status",
            actual == expected,
            f"expected {expected}, got {actual}",
        )

    def expect_json(self, response: requests.Response) -> Any:
        """Decode the response body as JSON.

        Returns:
            The decoded body.
        """
        try:
            body = response.json()
        except ValueError:
            body = _MISSING

        self.check(
            "json body",
            body is not _MISSING,
            "body is JSON" if body is not _MISSING else f"body is not JSON: {_preview(response.text)}",
        )
        return body

    def expect_field(self, body: Any, name: str) -> Any:
        """Require ``name`` in a JSON object body.

        Returns:
            The field value.
        """
        present = isinstance(body, dict) and name in body
        self.check(
            f"has '{name}'",
            present,
            "present" if present else f"missing from {_preview(body)}",
        )
        return body[name]

    def expect_non_empty(self, name: str, value: Any) -> None:
        ok = isinstance(value, str) and len(value) > 0
        self.check(
            f"{name} non-empty",
            ok,
            "non-empty string" if ok else f"got {value!r}",
        )

    def expect_integer(self, name: str, value: Any) -> None:
        ok = isinstance(value, int) and not isinstance(value, bool)
        self.check(
            f"{name} is integer",
            ok,
            f"{value!r}" if ok else f"expected integer, got {type(value).__name__} {value!r}",
        )

    def expect_text(self, response: requests.Response, expected: str) -> None:
        actual = response.text
        self.check(
            "body",
            actual == expected,
            f"expected {expected!r}, got {_preview(actual)}",
        )

    def expect_booking(self, actual: Any, expected: Booking) -> None:
        """Compare a booking record field by field against the fixture.

        ``bookingdates`` is compared per nested field. Fields absent from
        the fixture (``additionalneeds`` = None) are not compared.
        """
        if not isinstance(actual, dict):
            self.check("booking record", False, f"expected an object, got {_preview(actual)}")

        for path, want in expected.flat_fields().items():
            got = _lookup(actual, path)
            if got is _MISSING:
                self.check(path, False, f"missing, expected {want!r}")
            else:
                self.check(path, _same(got, want), f"expected {want!r}, got {got!r}")


def _lookup(data: dict, path: str) -> Any:
    value: Any = data
    for part in path.split("."):
        if not isinstance(value, dict) or part not in value:
            return _MISSING
        value = value[part]
    return value


def _same(actual: Any, expected: Any) -> bool:
    # True == 1 in Python; keep booleans and numbers apart
    if isinstance(actual, bool) or isinstance(expected, bool):
        return type(actual) is type(expected) and actual == expected
    return actual == expected


def _preview(value: Any, limit: int = 120) -> str:
    text = repr(value)
    if len(text) > limit:
        return text[:limit] + "..."
    return text
