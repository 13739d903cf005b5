import uuid
from http import HTTPStatus

from ticketdesk.domain import InternalError, NotFoundError
from ticketdesk.errors import ApiError, ValidationFieldError


def test_internal_hides_cause():
    cause = RuntimeError("database down")
    error = ApiError.internal(cause)
    assert error.status_code is HTTPStatus.INTERNAL_SERVER_ERROR
    assert error.message == "Internal server error"
    assert error.__cause__ is cause
    assert "errors" not in error.to_dict()


def test_bad_request_keeps_message():
    error = ApiError.bad_request("broken body")
    assert error.status_code is HTTPStatus.BAD_REQUEST
    assert str(error) == "broken body"
    assert error.to_dict() == {"code": int(HTTPStatus.BAD_REQUEST), "message": "broken body"}


def test_not_found_maps_to_404():
    missing = uuid.uuid4()
    cause = NotFoundError(missing)
    error = ApiError.from_exception(cause)
    assert error.status_code is HTTPStatus.NOT_FOUND
    assert error.message == f"item with id {missing} not found"
    assert error.__cause__ is cause


def test_domain_internal_error_maps_to_500_with_its_message():
    error = ApiError.from_exception(InternalError("secret detail"))
    assert error.status_code is HTTPStatus.INTERNAL_SERVER_ERROR
    assert error.message == "internal error"


def test_unknown_exception_maps_to_generic_500():
    error = ApiError.from_exception(KeyError("x"))
    assert error.status_code is HTTPStatus.INTERNAL_SERVER_ERROR
    assert error.message == "Internal server error"


def test_from_exception_passes_api_error_through():
    original = ApiError.bad_request("nope")
    assert ApiError.from_exception(original) is original


def test_validation_collects_field_errors():
    error = ApiError.validation({"title": ["too long"], "description": [None, "empty"]})
    assert error.status_code is HTTPStatus.BAD_REQUEST
    assert str(error) == "Validation error"
    assert error.errors == [
        ValidationFieldError("title", "too long"),
        ValidationFieldError("description", "Invalid value"),
        ValidationFieldError("description", "empty"),
    ]


def test_validation_body_lists_errors():
    body = ApiError.validation({"title": ["bad"]}).to_dict()
    assert body["message"] == "Validation error"
    assert body["code"] == int(HTTPStatus.BAD_REQUEST)
    assert body["errors"] == [{"field": "title", "message": "bad"}]


def test_validation_with_no_failures_still_has_errors_key():
    body = ApiError.validation({}).to_dict()
    assert body["errors"] == []