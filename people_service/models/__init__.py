from .person import PERSON_FIELDS, CastError, Person, PersonFields, cast_person_fields

__all__ = [
    "CastError",
    "PERSON_FIELDS",
    "Person",
    "PersonFields",
    "cast_person_fields",
]
