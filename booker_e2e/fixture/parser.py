"""Booking fixture parser.

Loads a booking fixture from a JSON or YAML file into a Booking object.
"""

import json
from pathlib import Path
from typing import Any, Union

import yaml

from .schema import BOOKING_DATES_FIELDS, REQUIRED_BOOKING_FIELDS, Booking, BookingDates

JSON_SUFFIXES = (".json",)
YAML_SUFFIXES = (".yaml", ".yml")


def parse_fixture(file_path: Union[str, Path]) -> Booking:
    """Parse a booking fixture file.

    Args:
        file_path: Path to a .json, .yaml or .yml fixture.

    Returns:
        Parsed Booking.

    Raises:
        FileNotFoundError: If the fixture file doesn't exist.
        ValueError: If the file is malformed or missing required fields.
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Fixture file not found: {file_path}")

    suffix = file_path.suffix.lower()
    if suffix not in JSON_SUFFIXES + YAML_SUFFIXES:
        raise ValueError(f"Expected .json, .yaml or .yml file, got: {file_path.suffix}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as e:
        raise ValueError(f"Cannot read fixture file {file_path}: {e}") from e

    if not text.strip():
        raise ValueError(f"Empty fixture file: {file_path}")

    try:
        if suffix in JSON_SUFFIXES:
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ValueError(f"Malformed fixture file {file_path}: {e}") from e

    return parse_fixture_data(data, source=str(file_path))


def parse_fixture_data(data: Any, source: str = "<inline>") -> Booking:
    """Build a Booking from an already-decoded mapping.

    Unknown keys are ignored. Values are taken as-is; type checks are the
    validator's job.

    Raises:
        ValueError: If required fields are missing or not mappings.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Fixture must be a mapping, got {type(data).__name__} ({source})")

    _require_fields(data, REQUIRED_BOOKING_FIELDS, "booking", source)

    dates_data = data["bookingdates"]
    if not isinstance(dates_data, dict):
        raise ValueError(f"'bookingdates' must be a mapping ({source})")
    _require_fields(dates_data, BOOKING_DATES_FIELDS, "bookingdates", source)

    return Booking(
        firstname=data["firstname"],
        lastname=data["lastname"],
        totalprice=data["totalprice"],
        depositpaid=data["depositpaid"],
        bookingdates=BookingDates(
            checkin=_as_date_string(dates_data["checkin"]),
            checkout=_as_date_string(dates_data["checkout"]),
        ),
        additionalneeds=data.get("additionalneeds"),
    )


def _as_date_string(value: Any) -> Any:
    # YAML turns unquoted 2025-01-01 into a datetime.date
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return value


def _require_fields(
    data: dict, fields: tuple[str, ...], context: str, source: str
) -> None:
    """Check that required fields exist in a dictionary."""
    for field_name in fields:
        if field_name not in data:
            raise ValueError(
                f"Missing required field '{field_name}' in {context} ({source})"
            )
