"""Booking fixture data models.

Defines the immutable booking record sent to ``POST /booking`` and the
validation result types used by the fixture validator.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

BOOKING_FIELDS = (
    "firstname",
    "lastname",
    "totalprice",
    "depositpaid",
    "bookingdates",
    "additionalneeds",
)
REQUIRED_BOOKING_FIELDS = ("firstname", "lastname", "totalprice", "depositpaid", "bookingdates")
BOOKING_DATES_FIELDS = ("checkin", "checkout")


@dataclass(frozen=True)
class BookingDates:
    """Check-in / check-out pair, ISO dates (YYYY-MM-DD)."""
    checkin: str
    checkout: str

    def to_dict(self) -> dict[str, str]:
        return {"checkin": self.checkin, "checkout": self.checkout}


@dataclass(frozen=True)
class Booking:
    """A booking record as the API accepts and echoes it."""
    firstname: str
    lastname: str
    totalprice: int
    depositpaid: bool
    bookingdates: BookingDates
    additionalneeds: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON body for ``POST /booking``."""
        data: dict[str, Any] = {
            "firstname": self.firstname,
            "lastname": self.lastname,
            "totalprice": self.totalprice,
            "depositpaid": self.depositpaid,
            "bookingdates": self.bookingdates.to_dict(),
        }
        if self.additionalneeds is not None:
            data["additionalneeds"] = self.additionalneeds
        return data

    def flat_fields(self) -> dict[str, Any]:
        """Field path -> value, with booking dates flattened.

        Used for field-by-field comparison against API responses.
        """
        data = self.to_dict()
        dates = data.pop("bookingdates")
        for name, value in dates.items():
            data[f"bookingdates.{name}"] = value
        return data


@dataclass
class ValidationError:
    """A single validation error."""
    path: str
    message: str
    severity: str = "error"  # "error" or "warning"


@dataclass
class ValidationResult:
    """Result of fixture validation."""
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationError] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    def __str__(self) -> str:
        if self.valid:
            msg = "Valid"
            if self.warnings:
                msg += f" ({self.warning_count} warnings)"
            return msg
        return f"Invalid: {self.error_count} errors, {self.warning_count} warnings"
