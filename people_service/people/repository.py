"""
People persistence (motor).

Each method performs exactly one store round trip and converts the stored
document into a `Person`. Driver, id and cast failures are all raised as
`StoreOperationError`; route handlers pick the status code.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from people_service.core.exceptions import StoreOperationError
from people_service.models.person import CastError, Person, cast_person_fields
from people_service.utils.monitoring import observe_store_operation

logger = logging.getLogger(__name__)


@contextmanager
def _store_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except (PyMongoError, InvalidId, CastError) as exc:
        observe_store_operation(operation, succeeded=False)
        logger.debug("Store operation %s failed: %s", operation, exc)
        raise StoreOperationError(exc) from exc
    observe_store_operation(operation, succeeded=True)


def _decode(document: Optional[dict]) -> Optional[Person]:
    if document is None:
        return None
    return Person.from_document(document)


class PeopleRepository:
    def __init__(self, collection: AsyncIOMotorCollection) -> None:
        self._collection = collection

    async def list_people(self) -> List[Person]:
        """Return every person in the collection's natural order."""

        with _store_errors("list"):
            documents = await self._collection.find().to_list(length=None)
        return [Person.from_document(document) for document in documents]

    async def create_person(self, body: Any) -> Person:
        with _store_errors("create"):
            document = cast_person_fields(body)
            result = await self._collection.insert_one(document)
        document["_id"] = result.inserted_id
        return Person.from_document(document)

    async def update_person(self, person_id: str, body: Any) -> Optional[Person]:
        """Merge `body` into the person and return the updated record.

        Returns None when no person has `person_id`.
        """

        with _store_errors("update"):
            object_id = ObjectId(person_id)
            changes = cast_person_fields(body)
            if not changes:
                document = await self._collection.find_one({"_id": object_id})
            else:
                document = await self._collection.find_one_and_update(
                    {"_id": object_id},
                    {"$set": changes},
                    return_document=ReturnDocument.AFTER,
                )
        return _decode(document)

    async def delete_person(self, person_id: str) -> Optional[Person]:
        """Remove the person and return it as it was before removal, or None."""

        with _store_errors("delete"):
            document = await self._collection.find_one_and_delete({"_id": ObjectId(person_id)})
        return _decode(document)
