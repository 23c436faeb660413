from django.db import DatabaseError

from core.results import ActionResult, ErrorKind, validation_failure


def test_http_status_by_kind():
    assert ActionResult.ok("done").http_status == 200
    assert ActionResult.fail(ErrorKind.NOT_FOUND_OR_UNAUTHORIZED, "x").http_status == 404
    assert ActionResult.fail(ErrorKind.INVALID_STATE_TRANSITION, "x").http_status == 409
    assert ActionResult.fail(ErrorKind.STORE_FAILURE, "x").http_status == 500
    assert ActionResult.fail(ErrorKind.VALIDATION, "x").http_status == 400


def test_as_dict_merges_payload():
    result = ActionResult.ok("Booking approved successfully.", booking_id="b1")

    assert result.as_dict() == {
        "success": True,
        "message": "Booking approved successfully.",
        "booking_id": "b1",
    }


def test_store_failure_message():
    assert ActionResult.store_failure(DatabaseError(), "Failed to save.").message == (
        "Database Error: Failed to save."
    )


def test_validation_failure_flattens_errors():
    result = validation_failure({"name": ["Too short."], "email": "Invalid."})

    assert result.message == "Validation failed: name: Too short.; email: Invalid."
    assert result.as_dict()["error"] == "validation"
