from __future__ import annotations

import json
import math
from typing import Any

from fastapi import Depends, Request

from people_service.core.database import DatabaseManager
from people_service.core.exceptions import RequestBodyError
from people_service.people.repository import PeopleRepository


def get_db(request: Request) -> DatabaseManager:
    return request.app.state.database


def get_people_repository(database: DatabaseManager = Depends(get_db)) -> PeopleRepository:
    return PeopleRepository(database.collection())


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not a valid JSON value")


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"{text} is out of range")
    return value


async def json_body(request: Request) -> Any:
    """Parse a JSON request body.

    Bodies that are empty or not declared as JSON are read as an empty object.
    """

    content_type = request.headers.get("content-type", "")
    if "json" not in content_type.lower():
        return {}

    raw = await request.body()
    if not raw.strip():
        return {}

    try:
        return json.loads(raw, parse_constant=_reject_constant, parse_float=_finite_float)
    except ValueError as exc:
        raise RequestBodyError(f"Request body is not valid JSON: {exc}") from exc
