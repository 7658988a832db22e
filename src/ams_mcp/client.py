"""AMS HTTP client for the course, attendance and student endpoints."""

import asyncio
import logging
from typing import Any, Iterable, Optional

import httpx

from .models import AttendanceRecord, Course, Student, StudentLookup
from .parsers import parse_attendance_json, parse_courses_json, parse_student

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://ams-sz8c.onrender.com"


class AmsAuthError(Exception):
    """Raised when there is no logged-in session."""

    pass


class AmsAPIError(Exception):
    """Raised when an API request fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class AmsClient:
    """Read-only async client for the AMS REST API."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the AMS client.

        Args:
            base_url: Base URL of the API (e.g., https://ams-sz8c.onrender.com)
            timeout: Request timeout in seconds
            transport: Optional httpx transport, used by tests to stub the API
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                follow_redirects=True,
                timeout=self.timeout,
                transport=self._transport,
                headers={
                    "User-Agent": "AmsMCP/0.1.0",
                    "Accept": "application/json",
                },
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _get_json(self, path: str, error_prefix: str) -> Any:
        """GET a path and decode its JSON body.

        Args:
            path: Request path relative to the base URL
            error_prefix: Message prefix used when the status is not 2xx

        Returns:
            The decoded JSON document

        Raises:
            AmsAPIError: On transport errors, non-2xx statuses or invalid JSON
        """
        client = await self._get_client()
        logger.debug("GET %s", path)

        try:
            response = await client.get(path)
        except httpx.HTTPError as e:
            raise AmsAPIError(f"Request to {path} failed: {e}")

        if not response.is_success:
            raise AmsAPIError(
                f"{error_prefix}{response.status_code}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError:
            raise AmsAPIError(f"Failed to parse response from {path}")

    async def get_courses(self) -> list[Course]:
        """Get every course.

        Returns:
            List of Course objects, empty when the response has no ``$values``
        """
        data = await self._get_json("/api/course", "HTTP error! status: ")
        try:
            return parse_courses_json(data)
        except (ValueError, TypeError) as e:
            raise AmsAPIError(f"Failed to parse courses response: {e}")

    async def get_course_attendance(self, course_id: Any) -> list[AttendanceRecord]:
        """Get all attendance records for one course."""
        data = await self._get_json(
            f"/api/Attendance/course/{course_id}", "Error fetching attendance: "
        )
        try:
            return parse_attendance_json(data)
        except (ValueError, TypeError) as e:
            raise AmsAPIError(f"Failed to parse attendance response: {e}")

    async def get_student(self, student_id: int) -> Student:
        """Get a single student profile."""
        data = await self._get_json(
            f"/api/student/{student_id}", f"Error fetching student {student_id}: "
        )
        try:
            return parse_student(data)
        except (ValueError, TypeError) as e:
            raise AmsAPIError(f"Failed to parse student {student_id}: {e}")

    async def get_students(self, student_ids: Iterable[int]) -> dict[int, StudentLookup]:
        """Fetch several student profiles concurrently.

        Every request is awaited. A failed lookup is logged and kept as an
        unresolved StudentLookup; it never fails the whole batch.

        Args:
            student_ids: Student IDs, fetched once each

        Returns:
            Mapping of student ID to lookup result, in first-seen order
        """
        unique_ids = list(dict.fromkeys(student_ids))
        results = await asyncio.gather(
            *(self.get_student(student_id) for student_id in unique_ids),
            return_exceptions=True,
        )

        lookups: dict[int, StudentLookup] = {}
        for student_id, result in zip(unique_ids, results):
            if isinstance(result, Exception):
                logger.warning("Error fetching student data: %s", result)
                lookups[student_id] = StudentLookup(student_id=student_id, error=str(result))
            elif isinstance(result, BaseException):
                raise result
            else:
                lookups[student_id] = StudentLookup(student_id=student_id, student=result)
        return lookups
