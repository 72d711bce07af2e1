"""Fixture module - booking fixture loading and validation."""

from .schema import (
    Booking,
    BookingDates,
    ValidationError,
    ValidationResult,
)
from .parser import parse_fixture, parse_fixture_data
from .validator import validate_fixture

__all__ = [
    "Booking",
    "BookingDates",
    "ValidationError",
    "ValidationResult",
    "parse_fixture",
    "parse_fixture_data",
    "validate_fixture",
]
