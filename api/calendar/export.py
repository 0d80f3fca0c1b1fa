"""
Vercel Python Function for calendar download.

This endpoint handles POST requests to /api/calendar/export. The body is a
flight record (with its stored jetlagPlan when one exists) plus optional
plan options under "options" and export settings under "calendar". The
response is the .ics document as an attachment named
jetlag-plan-{ORIGIN}-{DEST}-{YYYY-MM-DD}.ics.
"""

from http.server import BaseHTTPRequestHandler
import json
import sys
from pathlib import Path

# Add the _python directory to the Python path for importing jetlag module
sys.path.insert(0, str(Path(__file__).parent.parent / "_python"))

from jetlag.calendar_export import (
    CALENDAR_CONTENT_TYPE,
    CalendarExportOptions,
    calendar_filename,
    export_to_calendar,
)
from jetlag.errors import InvalidTripError
from jetlag.planner import load_or_generate
from jetlag.types import PlanOptions


def build_calendar_response(data: dict) -> tuple[int, dict[str, str], bytes]:
    """
    Build the download for a flight record.

    Returns:
        (status_code, headers, body). Errors are JSON bodies: 400 for a bad
        request or trip, 422 when the plan cannot be exported.
    """
    if not isinstance(data, dict):
        return _error(400, "Request body must be a JSON object")

    try:
        plan_options = PlanOptions(**data.get("options", {}))
    except (TypeError, ValueError) as e:
        return _error(400, f"Invalid options: {e}")

    try:
        options = CalendarExportOptions(**data.get("calendar", {}))
    except TypeError as e:
        return _error(400, f"Invalid calendar options: {e}")

    try:
        plan, _ = load_or_generate(data, plan_options)
    except InvalidTripError as e:
        return _error(400, str(e))

    result = export_to_calendar(plan, options)
    if not result.ok:
        return _error(422, str(result.error))

    filename = calendar_filename(
        data.get("originCode"), data.get("destinationCode"), plan.trip.departure
    )
    headers = {
        "Content-Type": CALENDAR_CONTENT_TYPE,
        "Content-Disposition": f'attachment; filename="{filename}"',
    }
    return 200, headers, result.document


def _error(status_code: int, message: str) -> tuple[int, dict[str, str], bytes]:
    return status_code, {"Content-Type": "application/json"}, json.dumps({"error": message}).encode()


class handler(BaseHTTPRequestHandler):
    """HTTP handler for Vercel Python Functions."""

    def do_POST(self):
        """Handle POST requests for calendar export."""
        try:
            content_length = int(self.headers.get("Content-Length", 0))
            body = self.rfile.read(content_length)
            data = json.loads(body)

            self._send_response(*build_calendar_response(data))

        except json.JSONDecodeError:
            self._send_response(*_error(400, "Invalid JSON in request body"))
        except Exception as e:
            self._send_response(*_error(500, f"Calendar export failed: {str(e)}"))

    def _send_response(self, status_code: int, headers: dict[str, str], body: bytes):
        self.send_response(status_code)
        for name, value in headers.items():
            self.send_header(name, value)
        self.send_header("Access-Control-Allow-Origin", "*")
        self.end_headers()
        self.wfile.write(body)

    def do_OPTIONS(self):
        """Handle CORS preflight requests."""
        self.send_response(200)
        self.send_header("Access-Control-Allow-Origin", "*")
        self.send_header("Access-Control-Allow-Methods", "POST, OPTIONS")
        self.send_header("Access-Control-Allow-Headers", "Content-Type")
        self.end_headers()
