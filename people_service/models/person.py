"""Person record shape and store-side field casting."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field

PERSON_FIELDS = ("name", "image", "title")


class CastError(ValueError):
    """A value could not be cast to the type its schema path declares."""

    def __init__(self, path: str, value: Any, kind: str = "string") -> None:
        super().__init__(f'Cast to {kind} failed for value {value!r} at path "{path}"')
        self.path = path
        self.value = value
        self.kind = kind


class PersonFields(BaseModel):
    """Writable Person fields, as documented for create and update bodies."""

    name: Optional[str] = Field(None, description="Display name")
    image: Optional[str] = Field(None, description="Image URL")
    title: Optional[str] = Field(None, description="Job title")


class Person(PersonFields):
    id: str = Field(..., description="Store-assigned unique identifier")

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "Person":
        fields = {key: document[key] for key in PERSON_FIELDS if key in document}
        return cls(id=str(document["_id"]), **fields)


def cast_value(path: str, value: Any) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else str(value)
    raise CastError(path, value)


def cast_person_fields(body: Any) -> Dict[str, Optional[str]]:
    """Cast a request body onto the Person schema.

    Keys outside the schema are dropped. `id` and `_id` are never writable.
    """

    if not isinstance(body, Mapping):
        raise CastError("(body)", body, kind="object")
    return {key: cast_value(key, body[key]) for key in PERSON_FIELDS if key in body}
