from __future__ import annotations

from typing import Callable

import httpx
import pytest

from ams_mcp.client import AmsClient
from ams_mcp.session import LocalStorage, SessionGuard

BASE_URL = "https://ams.test"

COURSES = {
    "$id": "1",
    "$values": [
        {"$id": "2", "id": 1, "name": "Algebra", "code": "MATH101"},
        {"$id": "3", "id": 2, "name": "Biology", "code": "BIO201"},
    ],
}

ATTENDANCE = {
    "$id": "1",
    "$values": [
        {"id": 10, "studentId": 1, "date": "2024-01-01T09:00:00", "isPresent": True},
        {"id": 11, "studentId": 2, "date": "2024-01-01T09:05:00", "isPresent": True},
        {"id": 12, "studentId": 1, "date": "2024-01-01T14:00:00", "isPresent": True},
        {"id": 13, "studentId": 1, "date": "2024-01-02T09:00:00", "isPresent": False},
        {"id": 14, "studentId": 2, "date": "2024-01-02T09:02:00", "isPresent": False},
    ],
}

STUDENTS = {
    1: {"id": 1, "firstName": "Ada", "lastName": "Lovelace"},
    2: {"id": 2, "firstName": "Alan", "lastName": "Turing"},
}


def build_handler(
    *,
    courses=COURSES,
    attendance=ATTENDANCE,
    students=STUDENTS,
    status: int = 200,
    failing_students: frozenset[int] = frozenset(),
) -> Callable[[httpx.Request], httpx.Response]:
    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path == "/api/course":
            return httpx.Response(status, json=courses)
        if path.startswith("/api/Attendance/course/"):
            return httpx.Response(status, json=attendance)
        if path.startswith("/api/student/"):
            student_id = int(path.rsplit("/", 1)[1])
            if student_id in failing_students or student_id not in students:
                return httpx.Response(404, json={})
            return httpx.Response(200, json=students[student_id])
        return httpx.Response(404)

    return handler


@pytest.fixture
def make_handler():
    return build_handler


@pytest.fixture
def make_client():
    def _make(handler) -> AmsClient:
        return AmsClient(BASE_URL, transport=httpx.MockTransport(handler))

    return _make


@pytest.fixture
def storage(tmp_path) -> LocalStorage:
    return LocalStorage(tmp_path / "storage.json")


@pytest.fixture
def guard(storage) -> SessionGuard:
    guard = SessionGuard(storage)
    guard.login()
    return guard
