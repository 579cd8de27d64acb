"""
Error responses, trace ids and log redaction
"""

import httpx
import pytest

from timesheet_rest.app import create_app
from timesheet_rest.utils.error_handling import EntityNotFoundError, ErrorHandlingConfig
from tests.doubles import InMemoryRepository


class FailingRepository(InMemoryRepository):
    async def find_all(self):
        raise RuntimeError("Database query failed: connection reset")


class TestErrorResponses:

    @pytest.mark.asyncio
    async def test_not_found_body(self, client):
        response = await client.get("/timesheets/5")

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "HTTP 404"
        assert body["message"] == "Timesheet with id 5 not found"
        assert "timestamp" in body
        assert body["trace_id"] == response.headers["X-Trace-ID"]

    @pytest.mark.asyncio
    async def test_every_response_has_trace_header(self, client):
        first = await client.get("/timesheets")
        second = await client.get("/timesheets")

        assert len(first.headers["X-Trace-ID"]) == 8
        assert first.headers["X-Trace-ID"] != second.headers["X-Trace-ID"]

    @pytest.mark.asyncio
    async def test_validation_error_body(self, client):
        response = await client.put("/timesheets/1", json={"employeeId": "nobody"})

        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "Validation Error"
        assert body["error_count"] == 1
        assert "employeeId" in body["detail"][0]["field"]

    @pytest.mark.asyncio
    async def test_non_numeric_id_is_rejected(self, client):
        response = await client.get("/timesheets/abc")

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_missing_storage_is_unavailable(self):
        app = create_app()
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
            response = await client.get("/timesheets")

        assert response.status_code == 503
        assert response.json()["message"] == "Storage is not initialized"

    @pytest.mark.asyncio
    async def test_unexpected_error_hides_details(self, repositories):
        repositories.timesheets = FailingRepository()
        app = create_app(repositories=repositories)
        transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
            response = await client.get("/timesheets")

        assert response.status_code == 500
        body = response.json()
        assert body["message"] == "An unexpected error occurred"
        assert "connection reset" not in response.text


class TestSanitizeData:

    def test_redacts_sensitive_keys(self):
        data = {"name": "Ada", "password": "hunter2", "nested": {"api_token": "abc"}}

        assert ErrorHandlingConfig.sanitize_data(data) == {
            "name": "Ada",
            "password": "***REDACTED***",
            "nested": {"api_token": "***REDACTED***"},
        }

    def test_truncates_long_strings(self):
        sanitized = ErrorHandlingConfig.sanitize_data("x" * (ErrorHandlingConfig.MAX_BODY_LOG_SIZE + 10))

        assert sanitized.endswith("...[TRUNCATED]")
        assert len(sanitized) == ErrorHandlingConfig.MAX_BODY_LOG_SIZE + len("...[TRUNCATED]")

    def test_entity_not_found_message(self):
        error = EntityNotFoundError("Project", 42)

        assert str(error) == "Project with id 42 not found"
        assert error.entity_id == 42
