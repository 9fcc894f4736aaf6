from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from people_service.api.dependencies import get_db
from people_service.core.database import DatabaseManager

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(database: DatabaseManager = Depends(get_db)) -> dict:
    return {"status": "ok", "database": database.state.value}


@router.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
