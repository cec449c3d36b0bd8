"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add src (and tests, for the fixture helpers) to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent))

from fixtures.generate_entries import HEADER, csv_line  # noqa: E402
from models.entries import ReportSettings  # noqa: E402


@pytest.fixture
def settings():
    """Report settings for March 2024 with the default page height."""
    return ReportSettings(company="Acme S.r.l.", person="Mario Rossi", month=3, year=2024)


@pytest.fixture
def sample_csv():
    """Small export: two days of work, one remote, with a gap in between."""
    lines = [
        HEADER,
        csv_line("2024-03-04", "09:00:05", "17:30:40"),
        csv_line("2024-03-07", "09:00:00", "17:00:00", tags="remoto"),
    ]
    return "\n".join(lines) + "\n"
