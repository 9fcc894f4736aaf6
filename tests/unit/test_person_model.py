import pytest
from bson import ObjectId

from people_service.models.person import CastError, Person, cast_person_fields


def test_cast_keeps_schema_fields_and_drops_the_rest():
    body = {"name": "Ada", "title": "Engineer", "age": 36, "id": "x", "_id": "y"}
    assert cast_person_fields(body) == {"name": "Ada", "title": "Engineer"}


def test_cast_stringifies_scalars():
    body = {"name": 42, "image": True, "title": 2.0}
    assert cast_person_fields(body) == {"name": "42", "image": "true", "title": "2"}


def test_cast_keeps_explicit_null():
    assert cast_person_fields({"image": None}) == {"image": None}


@pytest.mark.parametrize("value", [{"first": "Ada"}, ["Ada"]])
def test_cast_rejects_structured_values(value):
    with pytest.raises(CastError) as excinfo:
        cast_person_fields({"name": value})
    assert excinfo.value.path == "name"
    assert excinfo.value.kind == "string"


def test_cast_rejects_non_object_body():
    with pytest.raises(CastError) as excinfo:
        cast_person_fields([{"name": "Ada"}])
    assert excinfo.value.kind == "object"


def test_person_from_document_renders_id_and_leaves_missing_fields_unset():
    object_id = ObjectId()
    person = Person.from_document({"_id": object_id, "name": "Ada", "__v": 0})

    assert person.id == str(object_id)
    assert person.model_dump(exclude_unset=True) == {"id": str(object_id), "name": "Ada"}
