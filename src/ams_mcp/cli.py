"""AMS CLI - Command-line interface for the AMS attendance viewer.

Usage:
    python -m ams_mcp.cli <command> [options]

Commands:
    courses [search]                 List courses, optionally filtered
    attendance <course_id>           Show attendance for a course
    export <course_id> [file.html]   Write the attendance page as HTML
    login                            Mark the local session as logged in
    logout                           Clear the local session
"""

import asyncio
import sys
from pathlib import Path

from .config import configure_logging, load_env, load_settings


def _get_settings():
    try:
        return load_settings()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def _get_guard():
    from .session import LocalStorage, SessionGuard

    return SessionGuard(LocalStorage(_get_settings().storage_path))


def _get_client():
    from .client import AmsClient

    settings = _get_settings()
    return AmsClient(settings.base_url, timeout=settings.timeout)


def _require_login(guard) -> None:
    from .client import AmsAuthError

    try:
        guard.require()
    except AmsAuthError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


async def cmd_courses(args):
    from .render import format_course_list
    from .views import CourseListView

    guard = _get_guard()
    _require_login(guard)
    client = _get_client()
    try:
        view = CourseListView(client, guard)
        await view.load()
        view.set_search_term(" ".join(args))
        print(format_course_list(view))
        if view.error:
            sys.exit(1)
    finally:
        await client.close()


async def _load_attendance(course_id):
    from .views import CourseAttendanceView

    guard = _get_guard()
    _require_login(guard)
    client = _get_client()
    try:
        view = CourseAttendanceView(client, guard, course_id)
        await view.load()
        return view
    finally:
        await client.close()


async def cmd_attendance(args):
    from .render import format_attendance

    if not args:
        print("Error: course_id is required", file=sys.stderr)
        sys.exit(1)
    view = await _load_attendance(args[0])
    print(format_attendance(view))
    if view.error:
        sys.exit(1)


async def cmd_export(args):
    from .render import render_attendance_html

    if not args:
        print("Error: course_id is required", file=sys.stderr)
        sys.exit(1)
    course_id = args[0]
    output = Path(args[1]) if len(args) > 1 else Path(f"course-{course_id}-attendance.html")

    view = await _load_attendance(course_id)
    if view.error:
        print(f"Error: {view.error}", file=sys.stderr)
        sys.exit(1)
    output.write_text(render_attendance_html(view), encoding="utf-8")
    print(f"Attendance for course {course_id} written to {output}.")


async def cmd_login(args):
    _get_guard().login()
    print("Logged in.")


async def cmd_logout(args):
    _get_guard().logout()
    print("Logged out.")


COMMANDS = {
    "courses": cmd_courses,
    "attendance": cmd_attendance,
    "export": cmd_export,
    "login": cmd_login,
    "logout": cmd_logout,
}

USAGE = """\
Usage: python -m ams_mcp.cli <command> [options]

Commands:
  courses [search]                  List courses (search matches name or code)
  attendance <course_id>            Show attendance grouped by date with a summary
  export <course_id> [file.html]    Write the attendance page as a standalone HTML file
  login                             Mark the local session as logged in
  logout                            Clear the local session

Environment: AMS_BASE_URL, AMS_TIMEOUT, AMS_STORAGE_PATH, AMS_LOG_LEVEL"""


def main():
    load_env()
    configure_logging(_get_settings())

    args = sys.argv[1:]
    if not args or args[0] in ("-h", "--help", "help"):
        print(USAGE)
        sys.exit(0)

    command = args[0]
    if command not in COMMANDS:
        print(f"Error: Unknown command '{command}'", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        sys.exit(1)

    asyncio.run(COMMANDS[command](args[1:]))


if __name__ == "__main__":
    main()
