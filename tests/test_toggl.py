from datetime import date
from unittest.mock import MagicMock

import pytest
import requests

from services.toggl import EmptyReportError, TogglClient, Workspace, month_range


@pytest.fixture
def session():
    return MagicMock()


def test_month_range_handles_leap_years():
    assert month_range(2, 2024) == (date(2024, 2, 1), date(2024, 2, 29))
    assert month_range(12, 2023) == (date(2023, 12, 1), date(2023, 12, 31))


def test_requires_token(session):
    with pytest.raises(ValueError):
        TogglClient(api_token="", session=session)


def test_uses_token_as_basic_auth(session):
    TogglClient(api_token="tok", session=session)
    assert session.auth == ("tok", "api_token")


def test_get_workspaces(session):
    session.get.return_value.json.return_value = [
        {"id": 101, "name": "Main"},
        {"id": 102, "name": None},
    ]

    workspaces = TogglClient(api_token="tok", session=session).get_workspaces()

    assert workspaces == [Workspace(id=101, name="Main"), Workspace(id=102, name="")]
    session.get.return_value.raise_for_status.assert_called_once()


def test_download_detailed_report(session, sample_csv):
    session.post.return_value.content = sample_csv.encode("utf-8")

    report = TogglClient(api_token="tok", session=session).download_detailed_report(42, 2, 2024)

    assert report == sample_csv
    url = session.post.call_args.args[0]
    assert url.endswith("/workspace/42/search/time_entries.csv")
    body = session.post.call_args.kwargs["json"]
    assert body["start_date"] == "2024-02-01"
    assert body["end_date"] == "2024-02-29"


def test_empty_report_raises(session):
    session.post.return_value.content = b"User,Email,Client,Start date\n\n"

    with pytest.raises(EmptyReportError):
        TogglClient(api_token="tok", session=session).download_detailed_report(42, 3, 2024)


def test_http_errors_propagate(session):
    session.post.return_value.raise_for_status.side_effect = requests.HTTPError("403")

    with pytest.raises(requests.HTTPError):
        TogglClient(api_token="tok", session=session).download_detailed_report(42, 3, 2024)
