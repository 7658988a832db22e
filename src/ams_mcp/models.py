"""Data models for the AMS attendance viewer."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class Course:
    """A course as listed by the AMS API."""

    id: int
    name: str
    code: str


@dataclass(frozen=True)
class Student:
    """A student profile."""

    id: int
    first_name: str
    last_name: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class AttendanceRecord:
    """A single present/absent observation for one student in a course."""

    id: int
    student_id: int
    date: datetime
    is_present: bool = False


@dataclass
class DateGroup:
    """All attendance records that fall on one calendar day."""

    date: date
    records: list[AttendanceRecord] = field(default_factory=list)

    @property
    def present_records(self) -> list[AttendanceRecord]:
        return [record for record in self.records if record.is_present]


@dataclass(frozen=True)
class StudentAttendanceStat:
    """Attendance summary for one student across every observed date."""

    student_id: int
    full_name: str
    present_days: int
    total_dates: int
    percentage: int


@dataclass(frozen=True)
class StudentLookup:
    """Outcome of fetching one student profile.

    Exactly one of ``student`` and ``error`` is set.
    """

    student_id: int
    student: Optional[Student] = None
    error: Optional[str] = None

    @property
    def resolved(self) -> bool:
        return self.student is not None
