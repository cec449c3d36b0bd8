"""FastAPI dependencies for authentication and shared resources."""

import secrets
from pathlib import Path

from fastapi import Header, HTTPException, status

from api.models.responses import ErrorCodes
from core import config


async def verify_api_key(x_api_key: str = Header(..., alias="X-API-Key")) -> str:
    """
    Verify API key from X-API-Key header.

    Raises:
        HTTPException: 500 if no key is configured, 401 if the key does not match
    """
    expected = config.TIMESHEET_API_KEY
    if not expected:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "API key not configured on server",
                "code": ErrorCodes.INTERNAL_ERROR,
                "details": [],
            },
        )

    if not secrets.compare_digest(x_api_key, expected):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "error": "Invalid or missing API key",
                "code": ErrorCodes.UNAUTHORIZED,
                "details": [],
            },
        )

    return x_api_key


def get_log_db_path() -> Path:
    """SQLite database receiving the request log."""
    return config.DB_PATH


def get_output_dir() -> Path:
    return config.OUTPUT_DIR
