"""JSON decoders for AMS API responses."""

import re
from datetime import datetime
from typing import Any

from .models import AttendanceRecord, Course, Student

VALUES_KEY = "$values"
_EXTRA_FRACTION = re.compile(r"(\.\d{6})\d+")


def unwrap_values(data: Any) -> list[Any]:
    """Return the list wrapped under ``$values``.

    The API serializer preserves reference metadata, so list endpoints answer
    with ``{"$id": "1", "$values": [...]}``. A missing or null ``$values``
    decodes as an empty list.

    Raises:
        ValueError: If the payload is not an object or ``$values`` is not a list
    """
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")

    values = data.get(VALUES_KEY)
    if values is None:
        return []
    if not isinstance(values, list):
        raise ValueError(f"Expected '{VALUES_KEY}' to be a list")
    return values


def _require(item: Any, key: str) -> Any:
    if not isinstance(item, dict):
        raise ValueError(f"Expected a JSON object, got {type(item).__name__}")
    if item.get(key) is None:
        raise ValueError(f"Missing field '{key}'")
    return item[key]


def parse_datetime(value: Any) -> datetime:
    """Parse an ISO-8601 timestamp such as ``2024-01-01T09:00:00``.

    Fractions longer than microseconds (the API emits 7 digits) are truncated.
    """
    if not isinstance(value, str):
        raise ValueError(f"Invalid timestamp: {value!r}")
    return datetime.fromisoformat(_EXTRA_FRACTION.sub(r"\1", value.strip()))


def parse_course(item: Any) -> Course:
    return Course(
        id=int(_require(item, "id")),
        name=str(item.get("name") or ""),
        code=str(item.get("code") or ""),
    )


def parse_student(item: Any) -> Student:
    return Student(
        id=int(_require(item, "id")),
        first_name=str(item.get("firstName") or ""),
        last_name=str(item.get("lastName") or ""),
    )


def parse_attendance_record(item: Any) -> AttendanceRecord:
    return AttendanceRecord(
        id=int(_require(item, "id")),
        student_id=int(_require(item, "studentId")),
        date=parse_datetime(_require(item, "date")),
        is_present=bool(item.get("isPresent", False)),
    )


def parse_courses_json(data: Any) -> list[Course]:
    """Parse the course list endpoint response."""
    return [parse_course(item) for item in unwrap_values(data)]


def parse_attendance_json(data: Any) -> list[AttendanceRecord]:
    """Parse the per-course attendance endpoint response."""
    return [parse_attendance_record(item) for item in unwrap_values(data)]


def filter_courses(courses: list[Course], search_term: str) -> list[Course]:
    """Case-insensitive substring match on course name or code."""
    term = search_term.lower()
    return [
        course
        for course in courses
        if term in course.name.lower() or term in course.code.lower()
    ]
