"""Booking fixture validator.

Validates parsed Booking objects before they are sent to the API.
"""

from datetime import date

from .schema import Booking, ValidationError, ValidationResult


def validate_fixture(booking: Booking) -> ValidationResult:
    """Validate a parsed Booking.

    Checks:
    - Guest names are non-empty strings
    - Price is a non-negative integer, deposit flag is a boolean
    - Dates are ISO formatted and checkout is not before checkin

    Args:
        booking: Parsed Booking to validate.

    Returns:
        ValidationResult with errors and warnings.
    """
    errors: list[ValidationError] = []
    warnings: list[ValidationError] = []

    _validate_guest(booking, errors)
    _validate_payment(booking, errors)
    _validate_dates(booking, errors)

    if not booking.additionalneeds:
        warnings.append(ValidationError(
            path="additionalneeds",
            message="No 'additionalneeds' given. The field will not be compared.",
            severity="warning",
        ))

    return ValidationResult(
        valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )


def _validate_guest(booking: Booking, errors: list[ValidationError]) -> None:
    for name in ("firstname", "lastname"):
        value = getattr(booking, name)
        if not isinstance(value, str) or not value.strip():
            errors.append(ValidationError(
                path=name,
                message=f"'{name}' is required and must be a non-empty string.",
            ))

    if booking.additionalneeds is not None and not isinstance(booking.additionalneeds, str):
        errors.append(ValidationError(
            path="additionalneeds",
            message="'additionalneeds' must be a string.",
        ))


def _validate_payment(booking: Booking, errors: list[ValidationError]) -> None:
    price = booking.totalprice
    # bool is an int subclass
    if isinstance(price, bool) or not isinstance(price, int):
        errors.append(ValidationError(
            path="totalprice",
            message=f"'totalprice' must be an integer, got {type(price).__name__}.",
        ))
    elif price < 0:
        errors.append(ValidationError(
            path="totalprice",
            message=f"'totalprice' must not be negative, got {price}.",
        ))

    if not isinstance(booking.depositpaid, bool):
        errors.append(ValidationError(
            path="depositpaid",
            message=f"'depositpaid' must be a boolean, got {type(booking.depositpaid).__name__}.",
        ))


def _validate_dates(booking: Booking, errors: list[ValidationError]) -> None:
    parsed: dict[str, date] = {}

    for name in ("checkin", "checkout"):
        value = getattr(booking.bookingdates, name)
        path = f"bookingdates.{name}"
        if not isinstance(value, str):
            errors.append(ValidationError(
                path=path,
                message=f"'{name}' must be a date string (YYYY-MM-DD).",
            ))
            continue
        try:
            parsed[name] = date.fromisoformat(value)
        except ValueError:
            errors.append(ValidationError(
                path=path,
                message=f"Invalid date '{value}'. Expected YYYY-MM-DD.",
            ))

    if len(parsed) == 2 and parsed["checkout"] < parsed["checkin"]:
        errors.append(ValidationError(
            path="bookingdates.checkout",
            message=(
                f"Checkout {booking.bookingdates.checkout} is before "
                f"checkin {booking.bookingdates.checkin}."
            ),
        ))
