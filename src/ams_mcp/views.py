"""View models for the course list and course attendance pages."""

import logging
from typing import Any, Optional

from .aggregation import compute_student_stats, group_by_date
from .client import AmsAPIError, AmsClient
from .models import AttendanceRecord, Course, DateGroup, StudentAttendanceStat, StudentLookup
from .parsers import filter_courses
from .session import SessionGuard

logger = logging.getLogger(__name__)

PENDING_NAME = "Loading..."


class CourseListView:
    """All courses, filtered client-side by a search term."""

    def __init__(self, client: AmsClient, guard: SessionGuard):
        self.client = client
        self.guard = guard
        self.courses: list[Course] = []
        self.search_term = ""
        self.loading = True
        self.error: Optional[str] = None

    async def load(self) -> None:
        """Check the session, then fetch every course.

        Raises:
            AmsAuthError: If there is no logged-in session; nothing is fetched
        """
        self.guard.require()
        try:
            self.courses = await self.client.get_courses()
        except AmsAPIError as e:
            logger.error("Failed to load courses: %s", e)
            self.error = str(e)
        finally:
            self.loading = False

    def set_search_term(self, search_term: str) -> None:
        self.search_term = search_term

    @property
    def filtered_courses(self) -> list[Course]:
        return filter_courses(self.courses, self.search_term)

    @staticmethod
    def route_for(course: Course) -> str:
        """Navigation path of a course's attendance page."""
        return f"/courses/{course.id}"


class CourseAttendanceView:
    """Attendance for one course, grouped by day and summarized per student."""

    def __init__(self, client: AmsClient, guard: SessionGuard, course_id: Any):
        self.client = client
        self.guard = guard
        self.course_id = course_id
        self.records: list[AttendanceRecord] = []
        self.students: dict[int, StudentLookup] = {}
        self.loading = True
        self.error: Optional[str] = None

    async def load(self) -> None:
        """Fetch the course's attendance records, then the students they reference.

        An attendance fetch failure puts the view in its error state. Student
        lookup failures only leave those names unresolved.

        Raises:
            AmsAuthError: If there is no logged-in session; nothing is fetched
        """
        self.guard.require()
        try:
            self.records = await self.client.get_course_attendance(self.course_id)
        except AmsAPIError as e:
            logger.error("Failed to load attendance for course %s: %s", self.course_id, e)
            self.error = str(e)
            return
        finally:
            self.loading = False

        if self.records:
            self.students = await self.client.get_students(
                record.student_id for record in self.records
            )

    @property
    def groups(self) -> list[DateGroup]:
        return group_by_date(self.records)

    @property
    def stats(self) -> list[StudentAttendanceStat]:
        return compute_student_stats(self.groups, self.students)

    def student_name(self, student_id: int) -> str:
        """Resolved full name, or a placeholder while the profile is unresolved."""
        lookup = self.students.get(student_id)
        if lookup is None or lookup.student is None:
            return PENDING_NAME
        return lookup.student.full_name
