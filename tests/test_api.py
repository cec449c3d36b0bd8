import sqlite3
from io import BytesIO

import pytest
from fastapi.testclient import TestClient
from openpyxl import load_workbook

from api.dependencies import get_log_db_path, get_output_dir
from api.main import app
from core import config
from scripts.init_db import create_database

API_KEY = "test-key"


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "db" / "timesheets.db"
    create_database(path)
    return path


@pytest.fixture
def client(db_path, tmp_path, monkeypatch):
    monkeypatch.setattr(config, "TIMESHEET_API_KEY", API_KEY)
    app.dependency_overrides[get_log_db_path] = lambda: db_path
    app.dependency_overrides[get_output_dir] = lambda: tmp_path / "output"
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def post_report(client, csv_text, month="2024-03", filename="report.csv", key=API_KEY):
    return client.post(
        "/v1/timesheets/generate",
        files={"file": (filename, csv_text.encode("utf-8"), "text/csv")},
        data={"month": month, "company": "Acme S.r.l.", "person": "Mario Rossi"},
        headers={"X-API-Key": key},
    )


def logged_requests(db_path):
    conn = sqlite3.connect(db_path)
    try:
        return conn.execute(
            "SELECT status_code, error_code, rows_written, pages_generated FROM api_requests"
        ).fetchall()
    finally:
        conn.close()


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["output_writable"] is True


def test_generate_timesheet(client, sample_csv, db_path):
    response = post_report(client, sample_csv)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    assert "timesheet_2024_03.xlsx" in response.headers["content-disposition"]
    assert response.headers["x-worked-total"] == "16:31"

    ws = load_workbook(BytesIO(response.content)).active
    assert ws["C4"].value == "Acme S.r.l."
    assert ws["C6"].value == "marzo 2024"
    assert ws["H14"].value == "16:31"

    assert logged_requests(db_path) == [(200, None, 2, 1)]


def test_rejects_wrong_api_key(client, sample_csv):
    response = post_report(client, sample_csv, key="nope")

    assert response.status_code == 401
    assert response.json()["detail"]["code"] == "UNAUTHORIZED"


def test_rejects_bad_month(client, sample_csv, db_path):
    response = post_report(client, sample_csv, month="2024-13")

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "INVALID_REQUEST"
    assert logged_requests(db_path) == [(400, "INVALID_REQUEST", None, None)]


def test_rejects_non_csv_upload(client, sample_csv):
    response = post_report(client, sample_csv, filename="report.numbers")

    assert response.status_code == 415
    assert response.json()["detail"]["code"] == "UNSUPPORTED_MEDIA_TYPE"


def test_invalid_time_is_a_validation_error(client, db_path):
    csv_text = "Start date,Start time,End time\n2024-03-04,9am,13:00:00\n"

    response = post_report(client, csv_text)

    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["code"] == "VALIDATION_ERROR"
    assert "9am" in detail["details"][0]
    assert logged_requests(db_path) == [(422, "VALIDATION_ERROR", None, None)]


def test_warnings_are_logged(client, db_path):
    csv_text = "Start date,Start time,End time\n2024-03-04,09:00:00,13:00:00\n"

    response = post_report(client, csv_text)

    assert response.status_code == 200
    assert response.headers["x-warning-count"] == "3"
    conn = sqlite3.connect(db_path)
    try:
        types = conn.execute("SELECT detail_type FROM api_request_details").fetchall()
    finally:
        conn.close()
    assert types == [("warning",)] * 3
