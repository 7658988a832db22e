"""Text and HTML rendering of the course list and attendance views."""

from datetime import date, datetime

from bs4 import BeautifulSoup, Tag

from .models import Course, StudentAttendanceStat
from .views import CourseAttendanceView, CourseListView

NO_MATCHING_COURSES = "No courses match your search."
NO_ONE_PRESENT = "No students present on this day."
BAR_WIDTH = 20


def _format_date(day: date) -> str:
    return day.strftime("%A, %B %d, %Y")


def _format_time(timestamp: datetime) -> str:
    if timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone()
    return timestamp.strftime("%H:%M:%S")


def format_bar(percentage: int, width: int = BAR_WIDTH) -> str:
    """Text percentage bar, e.g. ``[##########----------]`` for 50."""
    filled = max(0, min(width, round(percentage * width / 100)))
    return "[" + "#" * filled + "-" * (width - filled) + "]"


def format_course(course: Course) -> str:
    return f"[{course.id}] {course.name} ({course.code})"


def format_course_list(view: CourseListView) -> str:
    """Format the course list view for display."""
    if view.loading:
        return "Loading courses..."
    if view.error:
        return f"Error: {view.error}"

    courses = view.filtered_courses
    lines = ["Courses", ""]
    if not courses:
        lines.append(NO_MATCHING_COURSES)
    for course in courses:
        lines.append(f"  {format_course(course)}")
    return "\n".join(lines)


def format_stat(stat: StudentAttendanceStat) -> str:
    return (
        f"  {stat.full_name}: {stat.percentage}% "
        f"({stat.present_days}/{stat.total_dates} days) {format_bar(stat.percentage)}"
    )


def format_attendance(view: CourseAttendanceView) -> str:
    """Format the attendance view: one section per date, then the summary."""
    if view.loading:
        return "Loading attendance records..."
    if view.error:
        return f"Error: {view.error}"

    lines = [f"Attendance for Course {view.course_id}", "=" * 40]
    for group in view.groups:
        lines.append("")
        lines.append(f"{_format_date(group.date)}:")
        present = group.present_records
        if not present:
            lines.append(f"  {NO_ONE_PRESENT}")
        for record in present:
            lines.append(
                f"  {view.student_name(record.student_id)} - {_format_time(record.date)}"
            )

    lines.extend(["", "Attendance Summary", "-" * 40])
    for stat in view.stats:
        lines.append(format_stat(stat))
    return "\n".join(lines)


def _tag(soup: BeautifulSoup, name: str, text: str = "", **attrs: str) -> Tag:
    tag = soup.new_tag(name, attrs=attrs)
    if text:
        tag.string = text
    return tag


def render_attendance_html(view: CourseAttendanceView) -> str:
    """Render the attendance view as a standalone HTML document."""
    soup = BeautifulSoup("<!DOCTYPE html><html><head></head><body></body></html>", "html.parser")
    title = f"Attendance for Course {view.course_id}"
    soup.head.append(_tag(soup, "meta", charset="utf-8"))
    soup.head.append(_tag(soup, "title", title))
    body = soup.body

    if view.loading:
        body.append(_tag(soup, "p", "Loading attendance records..."))
        return str(soup)
    if view.error:
        body.append(_tag(soup, "p", f"Error: {view.error}", **{"class": "error"}))
        return str(soup)

    body.append(_tag(soup, "h1", title))

    for group in view.groups:
        section = _tag(soup, "section", **{"class": "date-group"})
        section.append(_tag(soup, "h2", _format_date(group.date)))
        present = group.present_records
        if present:
            table = _tag(soup, "table")
            header = _tag(soup, "tr")
            header.append(_tag(soup, "th", "Student Name"))
            header.append(_tag(soup, "th", "Time"))
            table.append(header)
            for record in present:
                row = _tag(soup, "tr")
                row.append(_tag(soup, "td", view.student_name(record.student_id)))
                row.append(_tag(soup, "td", _format_time(record.date)))
                table.append(row)
            section.append(table)
        else:
            section.append(_tag(soup, "p", NO_ONE_PRESENT, **{"class": "empty"}))
        body.append(section)

    summary = _tag(soup, "section", **{"class": "summary"})
    summary.append(_tag(soup, "h2", "Attendance Summary"))
    items = _tag(soup, "ul")
    for stat in view.stats:
        item = _tag(soup, "li", **{"data-student-id": str(stat.student_id)})
        item.append(_tag(soup, "span", stat.full_name, **{"class": "name"}))
        item.append(_tag(soup, "span", f"{stat.percentage}%", **{"class": "percentage"}))
        bar = _tag(soup, "div", **{"class": "bar"})
        bar.append(_tag(soup, "div", **{"class": "fill", "style": f"width: {stat.percentage}%"}))
        item.append(bar)
        items.append(item)
    summary.append(items)
    body.append(summary)

    return str(soup)
