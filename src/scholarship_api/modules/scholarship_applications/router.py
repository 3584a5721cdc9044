"""
Scholarship Applications Router

API endpoints for submitting and browsing scholarship applications.

Endpoints:
- GET /applications - List applications (optional ?search= free-text filter)
- GET /applications/{id} - Get one application with guardians and affiliations
- POST /applications - Submit a new application

Security:
- Submission sits behind the session gate when REQUIRE_SESSION_FOR_SUBMISSION
  is enabled; the gate runs before the body is read or validated
- Backend errors are reported with a generic message only
"""

import json
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from scholarship_api.core.auth import SessionUser, require_submission_session
from scholarship_api.core.database import get_db
from scholarship_api.modules.scholarship_applications import service
from scholarship_api.modules.scholarship_applications.schemas import (
    ScholarshipApplicationResponse,
)
from scholarship_api.modules.scholarship_applications.service import (
    ApplicationServiceError,
    ApplicationValidationError,
)
from scholarship_api.modules.scholarship_applications.validation import FieldError

logger = logging.getLogger(__name__)

router = APIRouter()


def _handle_service_error(e: ApplicationServiceError) -> HTTPException:
    """Convert a service error into an HTTPException."""
    detail: dict = {"error": e.error_code, "message": e.message}
    if isinstance(e, ApplicationValidationError):
        detail["errors"] = [error.to_dict() for error in e.errors]
    return HTTPException(status_code=e.status_code, detail=detail)


def _internal_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={
            "error": "INTERNAL_ERROR",
            "message": "An unexpected error occurred. Please try again later.",
        },
    )


@router.get(
    "",
    response_model=list[ScholarshipApplicationResponse],
    summary="List Scholarship Applications",
    description="""
List every scholarship application, most recent submission first.

Pass `search` to filter by a case-insensitive substring of first name,
surname, student ID, sport or faculty/school. A blank search returns
everything. No matches is an empty array, not an error.
""",
    responses={
        500: {"description": "Database error"},
    },
)
async def list_applications(
    search: str | None = Query(None, description="Free-text search term"),
    db: AsyncSession = Depends(get_db),
) -> list[ScholarshipApplicationResponse]:
    """List applications, optionally filtered by a search term."""
    try:
        return await service.list_applications(db, search)
    except ApplicationServiceError as e:
        raise _handle_service_error(e) from e
    except Exception as e:
        logger.exception(f"Unexpected error listing applications: {e}")
        raise _internal_error() from e


@router.get(
    "/{application_id}",
    response_model=ScholarshipApplicationResponse,
    summary="Get Scholarship Application",
    responses={
        404: {
            "description": "Application not found",
            "content": {
                "application/json": {
                    "example": {
                        "detail": {
                            "error": "APPLICATION_NOT_FOUND",
                            "message": "Application not found",
                        }
                    }
                }
            },
        },
        500: {"description": "Database error"},
    },
)
async def get_application(
    application_id: str,
    db: AsyncSession = Depends(get_db),
) -> ScholarshipApplicationResponse:
    """
    Get one application with its guardians and affiliations.

    Args:
        application_id: Application UUID (malformed IDs are reported as not found)
        db: Database session (injected)

    Raises:
        HTTPException 404: If the application does not exist
    """
    try:
        return await service.get_application(db, application_id)
    except ApplicationServiceError as e:
        raise _handle_service_error(e) from e
    except Exception as e:
        logger.exception(f"Unexpected error fetching application {application_id}: {e}")
        raise _internal_error() from e


@router.post(
    "",
    response_model=ScholarshipApplicationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit Scholarship Application",
    description="""
Submit a scholarship application with its guardians and affiliations.

The body is the camelCase application object with nested `guardians`
(at least one) and `affiliations` (optional). `id` and `submissionDate`
are assigned by the server and ignored if sent.

The application and all sub-records are stored atomically.
""",
    responses={
        201: {
            "description": "Application created",
            "model": ScholarshipApplicationResponse,
        },
        400: {
            "description": "Validation error",
            "content": {
                "application/json": {
                    "example": {
                        "detail": {
                            "error": "VALIDATION_ERROR",
                            "message": 'Validation error: GPA must be between 0.00 and 4.00 at "gpa"',
                            "errors": [
                                {"path": "gpa", "message": "GPA must be between 0.00 and 4.00"}
                            ],
                        }
                    }
                }
            },
        },
        401: {"description": "Session required and missing, expired or invalid"},
        500: {"description": "Database error"},
    },
)
async def submit_application(
    request: Request,
    session: SessionUser | None = Depends(require_submission_session),
    db: AsyncSession = Depends(get_db),
) -> ScholarshipApplicationResponse:
    """
    Submit a new scholarship application.

    Args:
        request: Incoming request (body read after the session gate passes)
        session: Authenticated session, or None when the gate is disabled
        db: Database session (injected)

    Returns:
        The created application

    Raises:
        HTTPException 400: If the body is not JSON or fails validation
        HTTPException 500: If the application could not be stored
    """
    try:
        candidate = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        error = ApplicationValidationError(
            [FieldError(path="", message="Request body must be valid JSON")]
        )
        raise _handle_service_error(error) from e

    try:
        response = await service.submit_application(db, candidate)
    except ApplicationServiceError as e:
        raise _handle_service_error(e) from e
    except Exception as e:
        logger.exception(f"Unexpected error submitting application: {e}")
        raise _internal_error() from e

    submitted_by = session.id if session else "anonymous"
    logger.info(f"Application submitted successfully: id={response.id}, by={submitted_by}")
    return response
