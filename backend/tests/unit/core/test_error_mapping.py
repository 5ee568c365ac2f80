"""Unit tests for the service error -> HTTP problem table."""

from __future__ import annotations

import uuid

import pytest

from pvz_app.api.errors import SERVICE_ERROR_STATUS, to_api_error
from pvz_app.services._shared.errors import (
    ActiveReceptionExistsError,
    CommitFailedError,
    ConflictError,
    ErrorKind,
    InvalidCredentialsError,
    InvalidProductTypeError,
    NotFoundError,
    StorageError,
)


class TestErrorMapping:
    def test_every_kind_has_a_status(self):
        assert set(SERVICE_ERROR_STATUS) == set(ErrorKind)

    @pytest.mark.parametrize(
        ("error", "status", "code"),
        [
            (InvalidProductTypeError("мебель"), 400, "invalid_product_type"),
            (ActiveReceptionExistsError(uuid.uuid4()), 400, "active_reception_exists"),
            (NotFoundError("PickupPoint", "x"), 404, "not_found"),
            (ConflictError("User", "email already in use"), 409, "conflict"),
            (InvalidCredentialsError(), 401, "invalid_credentials"),
            (StorageError(), 503, "storage_failure"),
            (CommitFailedError(), 503, "storage_failure"),
        ],
    )
    def test_status_and_code(self, error, status, code):
        api_error = to_api_error(error)

        assert api_error.status_code == status
        assert api_error.code == code
        assert api_error.details["kind"] == error.kind.value

    def test_storage_failures_keep_a_generic_message(self):
        api_error = to_api_error(StorageError("psycopg: connection refused at 10.0.0.5"))

        assert "10.0.0.5" not in api_error.message

    def test_not_found_details(self):
        api_error = to_api_error(NotFoundError("Reception", "abc"))

        assert api_error.details["entity"] == "Reception"
        assert api_error.details["key"] == "abc"
