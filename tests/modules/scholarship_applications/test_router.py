"""
API tests for the scholarship applications endpoints.

These tests drive the app over ASGI against a SQLite database and cover:
- Submission (201, validation 400, malformed JSON, session gate 401)
- Strict numbers and flags, column-width limits and verbatim email
- Listing and search
- Lookup by ID (200, unknown and malformed IDs)
- Generic 500 responses on storage failure
- Absence of update/delete routes
"""

from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest

from scholarship_api.modules.scholarship_applications import repository
from scholarship_api.modules.scholarship_applications.repository import PersistenceError

APPLICATIONS_URL = "/api/applications"


class TestSubmitApplicationEndpoint:
    """Tests for POST /api/applications."""

    @pytest.mark.asyncio
    async def test_submit_creates_application(self, authed_client, application_payload):
        response = await authed_client.post(APPLICATIONS_URL, json=application_payload)

        assert response.status_code == 201
        body = response.json()
        assert body["id"]
        assert body["submissionDate"]
        assert body["firstName"] == "Andre"
        assert body["yearInSchool"] == "4th"
        assert body["programmeMode"] == "Full-time"
        assert body["dateOfBirth"] == "2003-08-21"
        assert len(body["guardians"]) == 2
        assert body["guardians"][0]["applicationId"] == body["id"]
        assert {g["firstName"] for g in body["guardians"]} == {"Denise", "Winston"}
        (affiliation,) = body["affiliations"]
        assert affiliation["applicationId"] == body["id"]
        assert affiliation["name"] == "Harbour View FC"

    @pytest.mark.asyncio
    async def test_submitted_application_is_listed(self, authed_client, application_payload):
        created = (await authed_client.post(APPLICATIONS_URL, json=application_payload)).json()

        response = await authed_client.get(APPLICATIONS_URL)

        assert response.status_code == 200
        assert [a["id"] for a in response.json()] == [created["id"]]

    @pytest.mark.asyncio
    async def test_client_supplied_id_is_ignored(self, authed_client, application_payload):
        supplied_id = str(uuid4())
        application_payload["id"] = supplied_id
        application_payload["submissionDate"] = "1999-01-01T00:00:00Z"

        response = await authed_client.post(APPLICATIONS_URL, json=application_payload)

        assert response.status_code == 201
        assert response.json()["id"] != supplied_id
        assert not response.json()["submissionDate"].startswith("1999")

    @pytest.mark.asyncio
    async def test_invalid_application_is_rejected(self, authed_client, application_payload):
        application_payload["gpa"] = "5.5"
        application_payload["guardians"] = []

        response = await authed_client.post(APPLICATIONS_URL, json=application_payload)

        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["error"] == "VALIDATION_ERROR"
        assert detail["message"].startswith("Validation error: ")
        assert 'at "gpa"' in detail["message"]
        assert {e["path"] for e in detail["errors"]} == {"gpa", "guardians"}

        listing = await authed_client.get(APPLICATIONS_URL)
        assert listing.json() == []

    @pytest.mark.asyncio
    async def test_guardian_error_path(self, authed_client, application_payload):
        application_payload["guardians"][0]["telephone"] = "12345"

        response = await authed_client.post(APPLICATIONS_URL, json=application_payload)

        assert response.status_code == 400
        assert response.json()["detail"]["errors"] == [
            {"path": "guardians[0].telephone", "message": "Please enter a valid phone number"}
        ]

    @pytest.mark.asyncio
    async def test_over_long_text_is_rejected_before_storage(
        self, authed_client, application_payload
    ):
        application_payload["studentId"] = "9" * 201

        response = await authed_client.post(APPLICATIONS_URL, json=application_payload)

        assert response.status_code == 400
        assert [e["path"] for e in response.json()["detail"]["errors"]] == ["studentId"]
        assert (await authed_client.get(APPLICATIONS_URL)).json() == []

    @pytest.mark.asyncio
    async def test_string_typed_numbers_and_flags_are_rejected(
        self, authed_client, application_payload
    ):
        application_payload["age"] = "22"
        application_payload["didTransfer"] = "yes"

        response = await authed_client.post(APPLICATIONS_URL, json=application_payload)

        assert response.status_code == 400
        assert {e["path"] for e in response.json()["detail"]["errors"]} == {"age", "didTransfer"}

    @pytest.mark.asyncio
    async def test_email_is_returned_as_submitted(self, authed_client, application_payload):
        application_payload["email"] = "Andre.Campbell@Example.COM"

        created = (await authed_client.post(APPLICATIONS_URL, json=application_payload)).json()
        fetched = (await authed_client.get(f"{APPLICATIONS_URL}/{created['id']}")).json()

        assert created["email"] == "Andre.Campbell@Example.COM"
        assert fetched["email"] == "Andre.Campbell@Example.COM"

    @pytest.mark.asyncio
    async def test_malformed_json_is_rejected(self, authed_client):
        response = await authed_client.post(
            APPLICATIONS_URL,
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert "Request body must be valid JSON" in response.json()["detail"]["message"]

    @pytest.mark.asyncio
    async def test_non_object_body_is_rejected(self, authed_client):
        response = await authed_client.post(APPLICATIONS_URL, json=[1, 2, 3])

        assert response.status_code == 400
        assert response.json()["detail"]["errors"] == [
            {"path": "", "message": "Expected an application object"}
        ]

    @pytest.mark.asyncio
    async def test_storage_failure_returns_generic_error(self, authed_client, application_payload):
        with patch.object(
            repository,
            "create_application",
            AsyncMock(side_effect=PersistenceError("create application")),
        ):
            response = await authed_client.post(APPLICATIONS_URL, json=application_payload)

        assert response.status_code == 500
        detail = response.json()["detail"]
        assert detail["error"] == "INTERNAL_ERROR"
        assert detail["message"] == "Failed to create application"


class TestSubmissionSessionGate:
    """Tests for the session gate in front of submission."""

    @pytest.mark.asyncio
    async def test_missing_session_is_rejected(self, client, application_payload):
        response = await client.post(APPLICATIONS_URL, json=application_payload)

        assert response.status_code == 401
        assert response.json()["detail"] == {
            "error": "NOT_AUTHENTICATED",
            "message": "Not authenticated",
        }

    @pytest.mark.asyncio
    async def test_gate_runs_before_validation(self, client):
        """An invalid body without a session is a 401, not a 400."""
        response = await client.post(APPLICATIONS_URL, json={"gpa": "9"})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_invalid_session_is_rejected(self, client, application_payload):
        client.cookies.set("session", "not-a-token")

        response = await client.post(APPLICATIONS_URL, json=application_payload)

        assert response.status_code == 401
        assert response.json()["detail"]["message"] == "Invalid session"

    @pytest.mark.asyncio
    async def test_gate_can_be_disabled(self, client, test_settings, application_payload):
        test_settings.require_session_for_submission = False

        response = await client.post(APPLICATIONS_URL, json=application_payload)

        assert response.status_code == 201

    @pytest.mark.asyncio
    async def test_reads_do_not_require_a_session(self, client):
        response = await client.get(APPLICATIONS_URL)

        assert response.status_code == 200
        assert response.json() == []


class TestListApplicationsEndpoint:
    """Tests for GET /api/applications."""

    @pytest.fixture
    def submit(self, authed_client, application_payload):
        async def _submit(**overrides) -> dict:
            response = await authed_client.post(
                APPLICATIONS_URL, json={**application_payload, **overrides}
            )
            assert response.status_code == 201
            return response.json()

        return _submit

    @pytest.mark.asyncio
    async def test_search_filters_results(self, authed_client, submit):
        await submit(surname="Campbell", firstName="Andre", sport="Football")
        await submit(surname="Thompson", firstName="Elaine", sport="Athletics")

        response = await authed_client.get(APPLICATIONS_URL, params={"search": "CAMP"})

        assert response.status_code == 200
        assert [a["surname"] for a in response.json()] == ["Campbell"]

    @pytest.mark.asyncio
    async def test_search_without_match_is_empty_list(self, authed_client, submit):
        await submit()

        response = await authed_client.get(APPLICATIONS_URL, params={"search": "swimming"})

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_blank_search_lists_everything(self, authed_client, submit):
        await submit(studentId="1000001")
        await submit(studentId="1000002")

        response = await authed_client.get(APPLICATIONS_URL, params={"search": "  "})

        assert len(response.json()) == 2

    @pytest.mark.asyncio
    async def test_listing_storage_failure(self, authed_client):
        with patch.object(
            repository,
            "get_all_applications",
            AsyncMock(side_effect=PersistenceError("fetch applications")),
        ):
            response = await authed_client.get(APPLICATIONS_URL)

        assert response.status_code == 500
        assert response.json()["detail"]["message"] == "Failed to fetch applications"


class TestGetApplicationEndpoint:
    """Tests for GET /api/applications/{id}."""

    @pytest.mark.asyncio
    async def test_get_existing(self, authed_client, application_payload):
        created = (await authed_client.post(APPLICATIONS_URL, json=application_payload)).json()

        response = await authed_client.get(f"{APPLICATIONS_URL}/{created['id']}")

        assert response.status_code == 200
        fetched = response.json()
        assert fetched["id"] == created["id"]
        assert fetched["studentId"] == created["studentId"]
        assert fetched["submissionDate"] == created["submissionDate"]
        assert sorted(g["id"] for g in fetched["guardians"]) == sorted(
            g["id"] for g in created["guardians"]
        )
        assert fetched["affiliations"] == created["affiliations"]

    @pytest.mark.asyncio
    async def test_get_unknown_is_404(self, client):
        response = await client.get(f"{APPLICATIONS_URL}/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["detail"]["error"] == "APPLICATION_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_get_malformed_id_is_404(self, client):
        response = await client.get(f"{APPLICATIONS_URL}/12345")

        assert response.status_code == 404


class TestNoMutationRoutes:
    """Applications cannot be changed or removed through the API."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["PUT", "PATCH", "DELETE"])
    async def test_mutation_methods_are_not_allowed(self, authed_client, method):
        response = await authed_client.request(method, f"{APPLICATIONS_URL}/{uuid4()}")

        assert response.status_code == 405
