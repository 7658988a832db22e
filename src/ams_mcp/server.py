"""AMS MCP Server - FastMCP server for course attendance data."""

from typing import Optional

from fastmcp import FastMCP

from .client import AmsAuthError, AmsClient
from .config import configure_logging, load_env, load_settings
from .render import format_attendance, format_course_list, render_attendance_html
from .session import LocalStorage, SessionGuard
from .views import CourseAttendanceView, CourseListView

# Load environment variables
load_env()

# Create FastMCP server
mcp = FastMCP(
    "AMS MCP",
    instructions="MCP server for the AMS attendance service. Lists courses and shows per-course attendance grouped by date with per-student percentages.",
)

# Global client instance (initialized on first use)
_client: Optional[AmsClient] = None


def _get_client() -> AmsClient:
    """Get or create the AMS client."""
    global _client
    if _client is None:
        settings = load_settings()
        _client = AmsClient(settings.base_url, timeout=settings.timeout)
    return _client


def _get_guard() -> SessionGuard:
    return SessionGuard(LocalStorage(load_settings().storage_path))


async def _load_attendance(course_id: str) -> CourseAttendanceView:
    view = CourseAttendanceView(_get_client(), _get_guard(), course_id)
    await view.load()
    return view


@mcp.tool()
async def list_courses(search: str = "") -> str:
    """List all courses, optionally filtered.

    Args:
        search: Case-insensitive text matched against course name or code.
            Empty shows every course.

    Returns:
        Courses with their IDs, names and codes.
    """
    try:
        view = CourseListView(_get_client(), _get_guard())
        await view.load()
        view.set_search_term(search)
        return format_course_list(view)
    except AmsAuthError as e:
        return f"Authentication error: {e}"
    except ValueError as e:
        return f"Configuration error: {e}"


@mcp.tool()
async def get_course_attendance(course_id: str) -> str:
    """Get attendance for a course.

    Args:
        course_id: The course ID (use list_courses to find IDs).

    Returns:
        Present students per date, then each student's attendance percentage.
    """
    if not course_id.strip():
        return "Error: course_id is required"

    try:
        view = await _load_attendance(course_id.strip())
        return format_attendance(view)
    except AmsAuthError as e:
        return f"Authentication error: {e}"
    except ValueError as e:
        return f"Configuration error: {e}"


@mcp.tool()
async def export_course_attendance_html(course_id: str) -> str:
    """Render a course's attendance page as a standalone HTML document.

    Args:
        course_id: The course ID (use list_courses to find IDs).

    Returns:
        The HTML document, or an error message.
    """
    if not course_id.strip():
        return "Error: course_id is required"

    try:
        view = await _load_attendance(course_id.strip())
        if view.error:
            return f"Error: {view.error}"
        return render_attendance_html(view)
    except AmsAuthError as e:
        return f"Authentication error: {e}"
    except ValueError as e:
        return f"Configuration error: {e}"


def main():
    """Run the MCP server."""
    configure_logging(load_settings())
    mcp.run()


if __name__ == "__main__":
    main()
