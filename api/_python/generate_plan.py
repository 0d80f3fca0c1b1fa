#!/usr/bin/env python3
"""
Generate a jetlag plan from a flight JSON file.

Usage: python3 generate_plan.py <flight.json>

The flight file holds originTimezone, destinationTimezone, departureTime and
arrivalTime (plus optional "options"). Prints the serialized plan to stdout.

Security: This script only reads from the specified JSON file and writes
to stdout. It does not accept any code or commands as input.
"""

import json
import sys

from jetlag.errors import InvalidTripError
from jetlag.planner import plan_for_flight
from jetlag.serialization import plan_to_json
from jetlag.types import PlanOptions


def main() -> None:
    if len(sys.argv) != 2:
        print(json.dumps({"error": "Usage: generate_plan.py <flight.json>"}))
        sys.exit(1)

    flight_file = sys.argv[1]

    try:
        with open(flight_file) as f:
            record = json.load(f)

        options = PlanOptions(**record.get("options", {}))
        plan = plan_for_flight(record, options)

        print(plan_to_json(plan))

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
    except Exception as e:
        print(json.dumps({"error": f"Plan generation failed: {e}"}))
        sys.exit(1)


if __name__ == "__main__":
    main()
