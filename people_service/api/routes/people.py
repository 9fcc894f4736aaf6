"""People CRUD endpoints."""

from __future__ import annotations

from typing import Any, List, Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from people_service.api.dependencies import get_people_repository, json_body
from people_service.core.exceptions import StoreOperationError
from people_service.models.person import Person, PersonFields
from people_service.people.repository import PeopleRepository

router = APIRouter(prefix="/people", tags=["people"])

# Bodies are read raw and cast by the repository, so the schema is documentation only.
_PERSON_BODY = {
    "requestBody": {
        "required": False,
        "content": {"application/json": {"schema": PersonFields.model_json_schema()}},
    }
}

_STORE_ERROR = {"description": "Raw document store error", "content": {"application/json": {}}}


def _store_error_response(status_code: int, exc: StoreOperationError) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=exc.payload)


@router.get(
    "",
    response_model=List[Person],
    response_model_exclude_unset=True,
    responses={status.HTTP_418_IM_A_TEAPOT: _STORE_ERROR},
)
async def list_people(repository: PeopleRepository = Depends(get_people_repository)):
    """Return every person."""

    try:
        return await repository.list_people()
    except StoreOperationError as exc:
        return _store_error_response(status.HTTP_418_IM_A_TEAPOT, exc)


@router.post(
    "",
    response_model=Person,
    response_model_exclude_unset=True,
    responses={status.HTTP_418_IM_A_TEAPOT: _STORE_ERROR},
    openapi_extra=_PERSON_BODY,
)
async def create_person(
    body: Any = Depends(json_body),
    repository: PeopleRepository = Depends(get_people_repository),
):
    """Create a person and return it with its assigned id."""

    try:
        return await repository.create_person(body)
    except StoreOperationError as exc:
        return _store_error_response(status.HTTP_418_IM_A_TEAPOT, exc)


@router.put(
    "/{person_id}",
    response_model=Optional[Person],
    response_model_exclude_unset=True,
    responses={status.HTTP_400_BAD_REQUEST: _STORE_ERROR},
    openapi_extra=_PERSON_BODY,
)
async def update_person(
    person_id: str,
    body: Any = Depends(json_body),
    repository: PeopleRepository = Depends(get_people_repository),
):
    """Merge the body into a person and return the result, or null if no person matched."""

    try:
        return await repository.update_person(person_id, body)
    except StoreOperationError as exc:
        return _store_error_response(status.HTTP_400_BAD_REQUEST, exc)


@router.delete(
    "/{person_id}",
    response_model=Optional[Person],
    response_model_exclude_unset=True,
    responses={status.HTTP_400_BAD_REQUEST: _STORE_ERROR},
)
async def delete_person(
    person_id: str,
    repository: PeopleRepository = Depends(get_people_repository),
):
    """Delete a person and return it as it was, or null if no person matched."""

    try:
        return await repository.delete_person(person_id)
    except StoreOperationError as exc:
        return _store_error_response(status.HTTP_400_BAD_REQUEST, exc)
