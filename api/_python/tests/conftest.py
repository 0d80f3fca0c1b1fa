"""
Pytest fixtures for jetlag plan tests.
"""

import sys
from pathlib import Path

import pytest

# Add parent directory (and this directory, for helpers) to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

from helpers import jfk_lhr_plan, lax_nrt_plan


@pytest.fixture
def westward_plan():
    """LAX -> NRT, 8h delay over 6 days."""
    return lax_nrt_plan()


@pytest.fixture
def eastward_plan():
    """JFK -> LHR, 5h advance over 5 days."""
    return jfk_lhr_plan()


@pytest.fixture
def lax_nrt_record():
    """Flight record as stored by the flight store (camelCase keys)."""
    return {
        "id": "flight-lax-nrt",
        "originCode": "lax",
        "destinationCode": "nrt",
        "originTimezone": "America/Los_Angeles",
        "destinationTimezone": "Asia/Tokyo",
        "departureTime": "2025-10-15T18:00:00-07:00",
        "arrivalTime": "2025-10-16T21:00:00+09:00",
        "flightDurationHours": 11,
    }
