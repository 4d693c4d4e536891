# This project was developed with assistance from AI tools.
"""Liveness and database connectivity."""

from db import DatabaseService, get_db_service
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..core.config import settings

router = APIRouter()


@router.get("/")
async def health(db_service: DatabaseService = Depends(get_db_service)) -> JSONResponse:
    """200 when the database answers, 503 otherwise."""
    database_ok = await db_service.ping()
    return JSONResponse(
        status_code=200 if database_ok else 503,
        content={
            "status": "ok" if database_ok else "degraded",
            "app": settings.APP_NAME,
            "database": "ok" if database_ok else "unavailable",
        },
    )
