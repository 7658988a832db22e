from __future__ import annotations

from datetime import datetime

import pytest

from ams_mcp.models import Course
from ams_mcp.parsers import (
    filter_courses,
    parse_attendance_json,
    parse_courses_json,
    parse_student,
    unwrap_values,
)


def test_missing_values_is_empty_list():
    assert unwrap_values({"$id": "1"}) == []
    assert unwrap_values({"$values": None}) == []
    assert parse_courses_json({}) == []
    assert parse_attendance_json({"$id": "7"}) == []


def test_unwrap_rejects_non_object():
    with pytest.raises(ValueError):
        unwrap_values([1, 2, 3])
    with pytest.raises(ValueError):
        unwrap_values({"$values": "nope"})


def test_parse_courses_ignores_reference_metadata():
    courses = parse_courses_json(
        {"$id": "1", "$values": [{"$id": "2", "id": 4, "name": "Algebra", "code": "MATH101"}]}
    )
    assert courses == [Course(id=4, name="Algebra", code="MATH101")]


def test_parse_attendance_record_fields():
    (record,) = parse_attendance_json(
        {"$values": [{"id": 1, "studentId": 7, "date": "2024-01-01T09:00:00.1234567", "isPresent": True}]}
    )
    assert record.student_id == 7
    assert record.is_present is True
    assert record.date.replace(microsecond=0) == datetime(2024, 1, 1, 9, 0, 0)


def test_parse_attendance_defaults_absent():
    (record,) = parse_attendance_json({"$values": [{"id": 1, "studentId": 7, "date": "2024-01-01T09:00"}]})
    assert record.is_present is False


def test_parse_attendance_requires_student_and_date():
    with pytest.raises(ValueError):
        parse_attendance_json({"$values": [{"id": 1, "date": "2024-01-01T09:00"}]})
    with pytest.raises(ValueError):
        parse_attendance_json({"$values": [{"id": 1, "studentId": 2, "date": "yesterday"}]})


def test_parse_student_full_name():
    student = parse_student({"$id": "1", "id": 3, "firstName": "Grace", "lastName": "Hopper"})
    assert student.full_name == "Grace Hopper"


def test_filter_courses_case_insensitive_on_name_or_code():
    courses = [
        Course(id=1, name="Algebra", code="MATH101"),
        Course(id=2, name="Biology", code="BIO201"),
    ]

    assert filter_courses(courses, "bio") == [courses[1]]
    assert filter_courses(courses, "math") == [courses[0]]
    assert filter_courses(courses, "1") == courses
    assert filter_courses(courses, "") == courses
    assert filter_courses(courses, "chemistry") == []
