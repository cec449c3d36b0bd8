"""Health check endpoint."""

import os
from datetime import datetime, timezone
from pathlib import Path

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.dependencies import get_output_dir
from api.models.responses import HealthResponse
from core.config import API_VERSION

router = APIRouter()


def is_writable(path: Path) -> bool:
    """True when path (or its nearest existing parent) accepts new files."""
    for candidate in (path, *path.parents):
        if candidate.exists():
            return os.access(candidate, os.W_OK)
    return False


@router.get("/health", response_model=HealthResponse)
async def health_check(output_dir: Path = Depends(get_output_dir)):
    """
    Health check endpoint for monitoring.

    Returns 200 if healthy, 503 if the output directory cannot be written.
    """
    output_writable = is_writable(output_dir)
    timestamp = datetime.now(timezone.utc).isoformat()

    if output_writable:
        return HealthResponse(
            status="healthy",
            version=API_VERSION,
            output_writable=True,
            timestamp=timestamp,
        )
    else:
        return JSONResponse(
            status_code=503,
            content=HealthResponse(
                status="unhealthy",
                version=API_VERSION,
                output_writable=False,
                timestamp=timestamp,
                error=f"Output directory not writable: {output_dir}",
            ).model_dump(),
        )
