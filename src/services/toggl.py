"""
Toggl Track API client: workspace discovery and detailed CSV reports.
"""

import calendar
from dataclasses import dataclass
from datetime import date

import requests

from core.config import (
    TOGGL_API_TOKEN,
    TOGGL_API_URL,
    TOGGL_REPORTS_URL,
    TOGGL_TIMEOUT_SECONDS,
    TOGGL_USER_AGENT,
)


class EmptyReportError(Exception):
    """The requested period has no time entries."""


@dataclass
class Workspace:
    id: int
    name: str


def month_range(month: int, year: int) -> tuple[date, date]:
    """First and last day of a month."""
    _, last_day = calendar.monthrange(year, month)
    return date(year, month, 1), date(year, month, last_day)


class TogglClient:
    """Handles Toggl Track API interactions."""

    def __init__(self, api_token: str = TOGGL_API_TOKEN, session: requests.Session | None = None):
        if not api_token:
            raise ValueError("Toggl API token not configured (TOGGL_API_TOKEN)")
        self.session = session or requests.Session()
        # Toggl accepts the token as username with the literal password 'api_token'
        self.session.auth = (api_token, "api_token")
        self.session.headers.update({"User-Agent": TOGGL_USER_AGENT})

    def get_workspaces(self) -> list[Workspace]:
        """List the workspaces the token has access to."""
        response = self.session.get(f"{TOGGL_API_URL}/workspaces", timeout=TOGGL_TIMEOUT_SECONDS)
        response.raise_for_status()
        return [Workspace(id=item["id"], name=item.get("name") or "") for item in response.json()]

    def download_detailed_report(self, workspace_id: int | str, month: int, year: int) -> str:
        """
        Download the detailed time entry report for a month as CSV text.

        Raises:
            EmptyReportError: no entries in the period
            requests.HTTPError: the API rejected the request
        """
        start_date, end_date = month_range(month, year)
        response = self.session.post(
            f"{TOGGL_REPORTS_URL}/workspace/{workspace_id}/search/time_entries.csv",
            json={
                "start_date": start_date.isoformat(),
                "end_date": end_date.isoformat(),
                "order_by": "date",
                "order_dir": "asc",
            },
            timeout=TOGGL_TIMEOUT_SECONDS,
        )
        response.raise_for_status()

        report = response.content.decode("utf-8-sig")
        data_lines = [line for line in report.splitlines()[1:] if line.strip()]
        if not data_lines:
            raise EmptyReportError(
                f"No time entries in workspace {workspace_id} for {start_date:%Y-%m}"
            )
        return report
