"""Field-level rules for emotions, days and users."""

import re
from datetime import date

from moodlog.domain.value_objects import Violation, ViolationCode

EMOTION_NAME_MAX_LENGTH = 16
PASSWORD_MIN_LENGTH = 8
DATE_FLOOR = date(2000, 1, 1)

COLOR_PATTERN = re.compile(r"#([0-9a-f]{3}){1,2}", re.IGNORECASE)
DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def check_emotion_name(name: str | None) -> Violation | None:
    """Name is required and at most 16 characters."""
    if not name:
        return Violation("name", ViolationCode.REQUIRED, "Emotion name is required")
    if len(name) > EMOTION_NAME_MAX_LENGTH:
        return Violation("name", ViolationCode.TOO_LONG, "Emotion name is too long")
    return None


def check_color(color: str | None) -> Violation | None:
    """Color is required and must be a 3 or 6 digit hex code."""
    if not color:
        return Violation("color", ViolationCode.REQUIRED, "Emotion color is required")
    if not COLOR_PATTERN.fullmatch(color):
        return Violation("color", ViolationCode.INVALID_FORMAT, f"Invalid color: {color}")
    return None


def check_description(description: str | None, max_length: int) -> Violation | None:
    if description is not None and len(description) > max_length:
        return Violation(
            "description",
            ViolationCode.TOO_LONG,
            f"Day description is longer than {max_length} characters",
        )
    return None


def parse_day_date(value: str) -> date | None:
    """Parse strict ``YYYY-MM-DD``. None if malformed or not a calendar date."""
    if not isinstance(value, str) or not DATE_PATTERN.fullmatch(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def check_day_date(value: str, today: date, floor: date = DATE_FLOOR) -> Violation | None:
    """Date must be a real calendar date within ``[floor, today]``."""
    parsed = parse_day_date(value)
    if parsed is None:
        return Violation("date", ViolationCode.INVALID_DATE, f"Invalid date: {value}")
    if parsed < floor:
        return Violation(
            "date", ViolationCode.INVALID_DATE, f"Date {value} is before {floor.isoformat()}"
        )
    if parsed > today:
        return Violation("date", ViolationCode.INVALID_DATE, f"Date {value} is in the future")
    return None


def check_user_name(name: str | None) -> Violation | None:
    if not name or not name.strip():
        return Violation("name", ViolationCode.REQUIRED, "Name is required")
    return None


def check_password(password: str | None) -> Violation | None:
    """Password is required and at least 8 characters."""
    if not password:
        return Violation("password", ViolationCode.REQUIRED, "Password is required")
    if len(password) < PASSWORD_MIN_LENGTH:
        return Violation("password", ViolationCode.TOO_SHORT, "Password is too small")
    return None
