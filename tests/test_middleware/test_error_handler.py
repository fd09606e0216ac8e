"""
Tests for the error middleware and domain error mapping.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from life_weeks.domain.errors import (
    DomainError,
    ImageExportFailure,
    IndexOutOfRange,
    InvalidInput,
)
from life_weeks.middleware.error_handler import (
    get_error_response,
    register_error_handlers,
    status_code_for,
)


@pytest.fixture
def client():
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/invalid")
    async def invalid():
        raise InvalidInput("birthdate is required")

    @app.get("/out-of-range")
    async def out_of_range():
        raise IndexOutOfRange(5000, 4680)

    @app.get("/crash")
    async def crash():
        raise RuntimeError("unexpected")

    return TestClient(app, raise_server_exceptions=False)


class TestStatusCodes:
    @pytest.mark.parametrize(
        "error,expected",
        [
            (InvalidInput("x"), 422),
            (IndexOutOfRange(1, 1), 404),
            (ImageExportFailure("x"), 500),
            (DomainError("x"), 400),
        ],
    )
    def test_status_code_for(self, error, expected):
        assert status_code_for(error) == expected


class TestGetErrorResponse:
    def test_includes_type_and_message(self):
        response = get_error_response(InvalidInput("nope"))
        assert response == {"error": {"message": "nope", "type": "InvalidInput"}}

    def test_request_id_optional(self):
        response = get_error_response(InvalidInput("nope"), request_id="abc123")
        assert response["request_id"] == "abc123"


class TestHandlers:
    def test_invalid_input(self, client):
        response = client.get("/invalid")
        assert response.status_code == 422
        body = response.json()
        assert body["error"]["type"] == "InvalidInput"
        assert body["error"]["message"] == "birthdate is required"
        assert len(body["request_id"]) == 8

    def test_index_out_of_range(self, client):
        response = client.get("/out-of-range")
        assert response.status_code == 404
        assert "5000" in response.json()["error"]["message"]

    def test_unhandled_exception_is_500(self, client):
        response = client.get("/crash")
        assert response.status_code == 500
        body = response.json()
        assert body["error"]["message"] == "Internal server error"
        assert "request_id" in body
