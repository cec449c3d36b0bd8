from io import BytesIO

import pytest
from openpyxl import load_workbook

from services.timesheets import (
    generate_output_filename,
    generate_timesheet_file,
    generate_timesheet_to_bytes,
)


def test_output_filename_versioning(settings, tmp_path):
    first = generate_output_filename(settings, tmp_path)
    assert first.name == "timesheet_2024_03_a.xlsx"

    first.touch()
    assert generate_output_filename(settings, tmp_path).name == "timesheet_2024_03_b.xlsx"


def test_generate_file(settings, sample_csv, tmp_path, capsys):
    output_path = generate_timesheet_file(sample_csv, settings, tmp_path)

    assert output_path.exists()
    ws = load_workbook(output_path).active
    assert ws.title == "Foglio 1"
    assert ws["H14"].value == "16:31"
    assert ws.page_setup.orientation == "landscape"

    out = capsys.readouterr().out
    assert "Found 2 entries across 2 days" in out
    assert "16:31" in out


def test_generate_bytes_is_silent(settings, sample_csv, capsys):
    content, filename, result = generate_timesheet_to_bytes(sample_csv, settings)

    assert filename == "timesheet_2024_03.xlsx"
    assert result.rows_written == 2
    ws = load_workbook(BytesIO(content)).active
    assert ws["B13"].value == "07/03/2024"
    assert capsys.readouterr().out == ""


def test_warnings_are_printed(settings, tmp_path, capsys):
    csv_text = "Start date,Start time,End time\n2024-03-04,09:00:00,13:00:00\n"

    generate_timesheet_file(csv_text, settings, tmp_path)

    out = capsys.readouterr().out
    assert "WARNING" in out
    assert "CLIENTE" in out


def test_input_errors_abort(settings, tmp_path):
    csv_text = "Start date,Start time,End time\n2024-03-04,nine,13:00:00\n"

    with pytest.raises(ValueError):
        generate_timesheet_file(csv_text, settings, tmp_path)
    assert not list(tmp_path.iterdir())
