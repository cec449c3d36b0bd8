"""Timesheet generation endpoint."""

import asyncio
import time
from pathlib import Path
from typing import Annotated

from fastapi import (
    APIRouter,
    Depends,
    File,
    Form,
    HTTPException,
    Request,
    UploadFile,
    status,
)
from fastapi.responses import Response

from api.dependencies import get_log_db_path, verify_api_key
from api.logging import RequestLog, log_request
from api.models.responses import ErrorCodes
from core.config import MAX_UPLOAD_SIZE_BYTES, PAGE_HEIGHT
from core.time_values import format_total
from models.entries import ReportSettings
from services.timesheets import generate_timesheet_to_bytes

router = APIRouter(prefix="/v1")

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxies."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def parse_report_month(month_str: str) -> tuple[int, int]:
    """Parse 'YYYY-MM' into (month, year)."""
    try:
        year_str, month_part = month_str.strip().split("-")
        year, month = int(year_str), int(month_part)
    except ValueError:
        year, month = 0, 0
    if not 1 <= month <= 12 or year < 1:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "Invalid month format",
                "code": ErrorCodes.INVALID_REQUEST,
                "details": ["Expected format: YYYY-MM"],
            },
        )
    return month, year


def decode_upload(file_content: bytes) -> str:
    try:
        return file_content.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "CSV file is not UTF-8 encoded",
                "code": ErrorCodes.INVALID_REQUEST,
                "details": [],
            },
        )


@router.post("/timesheets/generate")
async def generate_timesheet_endpoint(
    request: Request,
    file: Annotated[UploadFile, File(description="Detailed time entry CSV export")],
    month: Annotated[str, Form(description="Report month (YYYY-MM)")],
    company: Annotated[str, Form(description="Company shown in the header")] = "",
    person: Annotated[str, Form(description="Person shown in the header")] = "",
    page_height: Annotated[int, Form(description="Rows per printed page")] = PAGE_HEIGHT,
    _api_key: str = Depends(verify_api_key),
    db_path: Path = Depends(get_log_db_path),
):
    """
    Generate a monthly timesheet from a time entry export.

    Accepts a CSV upload and returns an Excel workbook.
    """
    start_time = time.time()

    request_log = RequestLog(
        endpoint="/v1/timesheets/generate",
        method="POST",
        client_ip=get_client_ip(request),
        file_name=file.filename,
        report_month=month,
    )

    try:
        if not file or not file.filename:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={
                    "error": "No file provided",
                    "code": ErrorCodes.INVALID_REQUEST,
                    "details": [],
                },
            )

        if not file.filename.lower().endswith(".csv"):
            raise HTTPException(
                status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
                detail={
                    "error": "File is not a CSV export",
                    "code": ErrorCodes.UNSUPPORTED_MEDIA_TYPE,
                    "details": [f"Received: {file.filename}"],
                },
            )

        file_content = await file.read()
        request_log.file_size_bytes = len(file_content)

        if len(file_content) > MAX_UPLOAD_SIZE_BYTES:
            max_mb = MAX_UPLOAD_SIZE_BYTES // (1024 * 1024)
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail={
                    "error": f"File exceeds maximum size of {max_mb} MB",
                    "code": ErrorCodes.FILE_TOO_LARGE,
                    "details": [f"File size: {len(file_content) / (1024*1024):.1f} MB"],
                },
            )

        report_month, report_year = parse_report_month(month)
        csv_text = decode_upload(file_content)
        settings = ReportSettings(
            company=company,
            person=person,
            month=report_month,
            year=report_year,
            page_height=page_height,
        )

        # Layout is CPU bound; keep it off the event loop
        excel_bytes, output_filename, result = await asyncio.to_thread(
            generate_timesheet_to_bytes, csv_text, settings
        )

        request_log.status_code = 200
        request_log.rows_written = result.rows_written
        request_log.pages_generated = result.page_count
        request_log.total_hours = round(result.total_worked.total_seconds() / 3600, 2)
        for warning in result.warnings:
            request_log.details.append(("warning", warning))
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)

        return Response(
            content=excel_bytes,
            media_type=XLSX_MEDIA_TYPE,
            headers={
                "Content-Disposition": f'attachment; filename="{output_filename}"',
                "X-Worked-Total": format_total(result.total_worked),
                "X-Warning-Count": str(len(result.warnings)),
            },
        )

    except HTTPException as e:
        request_log.status_code = e.status_code
        if isinstance(e.detail, dict):
            request_log.error_code = e.detail.get("code")
            request_log.error_message = e.detail.get("error")
            for detail in e.detail.get("details", []):
                request_log.details.append(("validation_error", detail))
        else:
            request_log.error_message = str(e.detail)
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)
        raise

    except ValueError as e:
        # Unparseable dates/times in the export, or invalid settings
        error_msg = str(e)
        request_log.status_code = 422
        request_log.error_code = ErrorCodes.VALIDATION_ERROR
        request_log.error_message = error_msg
        request_log.details.append(("validation_error", error_msg))
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)

        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "error": "Time entry export validation failed",
                "code": ErrorCodes.VALIDATION_ERROR,
                "details": [error_msg],
            },
        )

    except Exception as e:
        request_log.status_code = 500
        request_log.error_code = ErrorCodes.INTERNAL_ERROR
        request_log.error_message = str(e)
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)

        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "Internal server error",
                "code": ErrorCodes.INTERNAL_ERROR,
                "details": [],
            },
        )

    finally:
        try:
            log_request(request_log, db_path)
        except Exception as e:
            # Request logging must not fail the request
            print(f"Failed to log request {request_log.request_id}: {e}")
