"""
Vercel Python Function for jetlag plan generation.

This endpoint handles POST requests to /api/plan/generate. The body is a
flight record (originTimezone, destinationTimezone, departureTime,
arrivalTime, optional id and options); the response carries the plan, its
serialized form for storage, and the user-facing adaptation summary.
"""

from http.server import BaseHTTPRequestHandler
import json
import sys
from pathlib import Path
from dataclasses import asdict

# Add the _python directory to the Python path for importing jetlag module
sys.path.insert(0, str(Path(__file__).parent.parent / "_python"))

from jetlag.adaptation_language import describe, simple_summary
from jetlag.errors import InvalidTripError
from jetlag.planner import load_or_generate
from jetlag.serialization import plan_to_dict
from jetlag.types import PlanOptions


REQUIRED_FIELDS = [
    "originTimezone",
    "destinationTimezone",
    "departureTime",
    "arrivalTime",
]


def validate_request(data: dict) -> str | None:
    """Validate request data, return error message or None if valid."""
    if not isinstance(data, dict):
        return "Request body must be a JSON object"

    for field in REQUIRED_FIELDS:
        if field not in data:
            return f"Missing required field: {field}"

    options = data.get("options", {})
    if not isinstance(options, dict):
        return "options must be an object"

    return None


def build_plan_response(data: dict) -> tuple[int, dict]:
    """
    Generate (or reuse) the plan for a flight record.

    Returns:
        (status_code, JSON-serializable body)
    """
    validation_error = validate_request(data)
    if validation_error:
        return 400, {"error": validation_error}

    try:
        options = PlanOptions(**data.get("options", {}))
    except (TypeError, ValueError) as e:
        return 400, {"error": f"Invalid options: {e}"}

    try:
        plan, serialized = load_or_generate(data, options)
    except InvalidTripError as e:
        return 400, {"error": str(e)}

    shift = plan.shift
    message = describe(
        shift.direction,
        shift.exact_hours,
        flight_direction=shift.flight_direction,
        origin=data.get("originCode") or plan.trip.origin_tz,
        destination=data.get("destinationCode") or plan.trip.dest_tz,
    )

    return 200, {
        "id": plan.flight_id,
        "plan": json.loads(json.dumps(plan_to_dict(plan), default=str)),
        "jetlagPlan": serialized,
        "adaptation": asdict(message),
        "summary": simple_summary(shift.direction, shift.magnitude_hours, shift.recovery_days),
    }


class handler(BaseHTTPRequestHandler):
    """HTTP handler for Vercel Python Functions."""

    def do_POST(self):
        """Handle POST requests for plan generation."""
        try:
            content_length = int(self.headers.get("Content-Length", 0))
            body = self.rfile.read(content_length)
            data = json.loads(body)

            status, result = build_plan_response(data)
            self._send_json_response(status, result)

        except json.JSONDecodeError:
            self._send_json_response(400, {"error": "Invalid JSON in request body"})
        except Exception as e:
            self._send_json_response(500, {"error": f"Plan generation failed: {str(e)}"})

    def _send_json_response(self, status_code: int, data: dict):
        """Send a JSON response with the given status code."""
        self.send_response(status_code)
        self.send_header("Content-Type", "application/json")
        self.send_header("Access-Control-Allow-Origin", "*")
        self.end_headers()
        self.wfile.write(json.dumps(data).encode())

    def do_OPTIONS(self):
        """Handle CORS preflight requests."""
        self.send_response(200)
        self.send_header("Access-Control-Allow-Origin", "*")
        self.send_header("Access-Control-Allow-Methods", "POST, OPTIONS")
        self.send_header("Access-Control-Allow-Headers", "Content-Type")
        self.end_headers()
