"""Date grouping and per-student attendance percentages."""

from datetime import date, datetime
from typing import Iterable, Mapping, Optional

from .models import AttendanceRecord, DateGroup, StudentAttendanceStat, StudentLookup

UNKNOWN_NAME = "Unknown"


def date_key(timestamp: datetime) -> date:
    """Calendar day of a timestamp, with the time of day discarded.

    Aware timestamps are converted to local time first; naive timestamps are
    already treated as local.
    """
    if timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone()
    return timestamp.date()


def group_by_date(records: Iterable[AttendanceRecord]) -> list[DateGroup]:
    """Group records by calendar day.

    Groups come out in the order their day was first seen, and records keep
    their input order inside each group.
    """
    groups: dict[date, DateGroup] = {}
    for record in records:
        day = date_key(record.date)
        if day not in groups:
            groups[day] = DateGroup(date=day)
        groups[day].records.append(record)
    return list(groups.values())


def attendance_percentage(present_days: int, total_dates: int) -> int:
    """Percentage of dates attended, rounded half up. Zero when there are no dates."""
    if total_dates <= 0:
        return 0
    return (200 * present_days + total_dates) // (2 * total_dates)


def compute_student_stats(
    groups: list[DateGroup],
    students: Optional[Mapping[int, StudentLookup]] = None,
) -> list[StudentAttendanceStat]:
    """Attendance stats for each student present on at least one date.

    A student with several present records on the same day is counted once
    for that day. Results are ordered by student id.
    """
    students = students or {}
    total_dates = len(groups)

    present_counts: dict[int, int] = {}
    for group in groups:
        for student_id in {record.student_id for record in group.present_records}:
            present_counts[student_id] = present_counts.get(student_id, 0) + 1

    stats = []
    for student_id in sorted(present_counts):
        lookup = students.get(student_id)
        if lookup is not None and lookup.student is not None:
            full_name = lookup.student.full_name
        else:
            full_name = UNKNOWN_NAME
        present_days = present_counts[student_id]
        stats.append(
            StudentAttendanceStat(
                student_id=student_id,
                full_name=full_name,
                present_days=present_days,
                total_dates=total_dates,
                percentage=attendance_percentage(present_days, total_dates),
            )
        )
    return stats
