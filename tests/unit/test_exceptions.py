from bson.errors import InvalidId
from pymongo.errors import OperationFailure

from people_service.core.exceptions import StoreOperationError, describe_error
from people_service.models.person import CastError


def test_describe_driver_error_includes_code_and_details():
    error = OperationFailure("boom", code=11000, details={"errmsg": "boom", "ok": 0})
    payload = describe_error(error)

    assert payload["name"] == "OperationFailure"
    assert "boom" in payload["message"]
    assert payload["code"] == 11000
    assert payload["details"] == {"errmsg": "boom", "ok": 0}


def test_describe_cast_error_includes_path_and_value():
    payload = describe_error(CastError("name", {"first": "Ada"}))

    assert payload["name"] == "CastError"
    assert payload["path"] == "name"
    assert payload["value"] == {"first": "Ada"}
    assert payload["kind"] == "string"


def test_store_operation_error_wraps_raw_error():
    raw = InvalidId("'abc' is not a valid ObjectId")
    exc = StoreOperationError(raw)

    assert exc.error is raw
    assert exc.code == "store_operation_failed"
    assert exc.payload == {"name": "InvalidId", "message": str(raw)}
