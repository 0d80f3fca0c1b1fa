#!/usr/bin/env python3
"""
Export a flight's jetlag plan as an .ics file.

Usage: python3 export_calendar.py <flight.json> [out_dir]

Reuses the flight's stored "jetlagPlan" when it decodes and still matches the
flight and its "options", otherwise generates one. Writes
jetlag-plan-{ORIGIN}-{DEST}-{YYYY-MM-DD}.ics into out_dir (default: current
directory) and prints {"filename": ...} to stdout.
"""

import json
import sys
from pathlib import Path

from jetlag.calendar_export import calendar_filename, export_to_calendar
from jetlag.errors import InvalidTripError
from jetlag.planner import load_or_generate
from jetlag.types import PlanOptions


def main() -> None:
    if len(sys.argv) not in (2, 3):
        print(json.dumps({"error": "Usage: export_calendar.py <flight.json> [out_dir]"}))
        sys.exit(1)

    flight_file = sys.argv[1]
    out_dir = Path(sys.argv[2]) if len(sys.argv) == 3 else Path.cwd()

    try:
        with open(flight_file) as f:
            record = json.load(f)

        options = PlanOptions(**record.get("options", {}))
        plan, _ = load_or_generate(record, options)
        result = export_to_calendar(plan)
        if not result.ok:
            print(json.dumps({"error": str(result.error)}))
            sys.exit(1)

        filename = calendar_filename(
            record.get("originCode"), record.get("destinationCode"), plan.trip.departure
        )
        out_dir.mkdir(parents=True, exist_ok=True)
        (out_dir / filename).write_bytes(result.document)

        print(json.dumps({"filename": filename, "events": len(plan.events)}))

    except FileNotFoundError:
        print(json.dumps({"error": f"Flight file not found: {flight_file}"}))
        sys.exit(1)
    except json.JSONDecodeError as e:
        print(json.dumps({"error": f"Invalid JSON in flight file: {e}"}))
        sys.exit(1)
    except InvalidTripError as e:
        print(json.dumps({"error": f"Invalid trip: {e}"}))
        sys.exit(1)
    except (TypeError, ValueError) as e:
        print(json.dumps({"error": f"Invalid options: {e}"}))
        sys.exit(1)
    except OSError as e:
        print(json.dumps({"error": f"Could not write calendar file: {e}"}))
        sys.exit(1)
    except Exception as e:
        print(json.dumps({"error": f"Calendar export failed: {e}"}))
        sys.exit(1)


if __name__ == "__main__":
    main()
