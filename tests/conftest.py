"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
from datetime import datetime
from pathlib import Path

# Add src to path for imports
PROJ_ROOT = Path(__file__).resolve().parent.parent
SRC_DIR = PROJ_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from recruitdesk.models.candidate import CandidateRecord


@pytest.fixture
def sample_row():
    """Raw row as returned by the candidates table."""
    return {
        "id": "c-101",
        "name": "Alice Johnson",
        "email": "alice@example.com",
        "contact_number": "9876543210",
        "position": "Backend Engineer",
        "client_name": "Acme Corp",
        "recruiter_name": "Ravi",
        "Manager": "Priya",
        "interview_mode": "Virtual",
        "interview_round": "L1",
        "status1": "Confirmed",
        "status2": "Pending",
        "interview_date": "2024-03-04T00:00:00+00:00",
        "interview_time": "14:30",
        "client_id": 7,
        "date_informed": "2024-03-01T09:15:00Z",
        "remarks": None,
        "created_at": "2024-02-28T11:00:00+00:00",
    }


@pytest.fixture
def sample_candidates():
    """Small candidate list covering every filterable attribute."""
    return [
        CandidateRecord(
            id="1",
            name="Alice Johnson",
            email="alice@example.com",
            contact_number="9876543210",
            position="Backend Engineer",
            client_name="Acme Corp",
            recruiter_name="Ravi",
            manager="Priya",
            interview_mode="Virtual",
            interview_round="L1",
            status1="Confirmed",
            status2="Pending",
            interview_date=datetime(2024, 3, 4, 10, 0),
            interview_time="10:00",
        ),
        CandidateRecord(
            id="2",
            name="Bob Stone",
            email="bob@example.com",
            contact_number="9123456780",
            position="Data Analyst",
            client_name="Globex",
            recruiter_name="Meera",
            manager="Arjun",
            interview_mode="In-Person",
            interview_round="L2",
            status1="Yet to Confirm",
            status2="Selected",
            interview_date=datetime(2024, 3, 5, 9, 0),
            interview_time="3 PM",
        ),
        CandidateRecord(
            id="3",
            name="Carla Diaz",
            email="carla@example.com",
            contact_number="9000000001",
            position="Backend Engineer",
            client_name="Acme Corp",
            recruiter_name="Meera",
            manager="",
            interview_mode="Virtual",
            interview_round="L2",
            status1="Confirmed",
            status2="Rejected",
            interview_date=None,
            interview_time="N/A",
        ),
    ]
