"""
Scholarship Applications Service Layer

Business logic for the submission pipeline and staff listing/search.
Orchestrates validation and repository operations and owns the error
taxonomy the routers translate into HTTP responses.

This module implements:
1. Submission Flow:
   - Validate the candidate payload (no persistence on failure)
   - Create the application, guardians and affiliations in one transaction
   - Return the enriched created record

2. Listing and Search:
   - All applications, most recent first
   - Free-text search when a non-blank query is supplied
   - Lookup by ID with a not-found signal

Logging policy:
- Validation failures and unknown IDs are expected; logged at INFO at most
- Persistence failures are logged with full context before a generic
  error is returned to the caller
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from scholarship_api.modules.scholarship_applications import repository
from scholarship_api.modules.scholarship_applications.models import ScholarshipApplication
from scholarship_api.modules.scholarship_applications.repository import PersistenceError
from scholarship_api.modules.scholarship_applications.schemas import (
    ScholarshipApplicationResponse,
)
from scholarship_api.modules.scholarship_applications.validation import (
    FieldError,
    format_validation_message,
    validate_application,
)

logger = logging.getLogger(__name__)


class ApplicationServiceError(Exception):
    """Base exception for application service errors."""

    def __init__(self, message: str, error_code: str, status_code: int = 400):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(message)


class ApplicationValidationError(ApplicationServiceError):
    """Raised when a candidate application fails validation."""

    def __init__(self, errors: list[FieldError]):
        self.errors = errors
        super().__init__(
            message=format_validation_message(errors),
            error_code="VALIDATION_ERROR",
            status_code=400,
        )


class ApplicationNotFoundError(ApplicationServiceError):
    """Raised when an application is not found."""

    def __init__(self, application_id: str | UUID | None = None):
        message = (
            f"Application {application_id} not found" if application_id else "Application not found"
        )
        super().__init__(
            message=message,
            error_code="APPLICATION_NOT_FOUND",
            status_code=404,
        )


class ApplicationPersistenceError(ApplicationServiceError):
    """Raised when storage fails. Carries a generic message only."""

    def __init__(self, message: str = "Failed to save application"):
        super().__init__(
            message=message,
            error_code="INTERNAL_ERROR",
            status_code=500,
        )


def _to_response(application: ScholarshipApplication) -> ScholarshipApplicationResponse:
    return ScholarshipApplicationResponse.model_validate(application)


async def submit_application(
    db: AsyncSession,
    candidate: Any,
) -> ScholarshipApplicationResponse:
    """
    Validate and store a new scholarship application.

    Args:
        db: Database session
        candidate: Untyped request payload

    Returns:
        The created application with its guardians and affiliations

    Raises:
        ApplicationValidationError: If the payload is invalid (nothing is written)
        ApplicationPersistenceError: If the database write fails
    """
    result = validate_application(candidate)
    data = result.data

    if data is None:
        logger.info(f"Application rejected by validation: {len(result.errors)} field error(s)")
        raise ApplicationValidationError(result.errors)

    try:
        application = await repository.create_application(db, data)
    except PersistenceError as e:
        logger.exception(
            f"Failed to create application: student_id={data.student_id}, "
            f"guardians={len(data.guardians)}, affiliations={len(data.affiliations)}: {e}"
        )
        raise ApplicationPersistenceError("Failed to create application") from e

    logger.info(
        f"Created application {application.id}: guardians={len(application.guardians)}, "
        f"affiliations={len(application.affiliations)}"
    )
    return _to_response(application)


async def list_applications(
    db: AsyncSession,
    search: str | None = None,
) -> list[ScholarshipApplicationResponse]:
    """
    List applications, optionally filtered by a free-text query.

    Args:
        db: Database session
        search: Search term; blank or None returns everything

    Returns:
        Enriched applications, most recent submission first (possibly empty)

    Raises:
        ApplicationPersistenceError: If the database read fails
    """
    try:
        if search and search.strip():
            applications = await repository.search_applications(db, search.strip())
        else:
            applications = await repository.get_all_applications(db)
    except PersistenceError as e:
        logger.exception(f"Failed to fetch applications (search={search!r}): {e}")
        raise ApplicationPersistenceError("Failed to fetch applications") from e

    return [_to_response(application) for application in applications]


async def get_application(
    db: AsyncSession,
    application_id: str | UUID,
) -> ScholarshipApplicationResponse:
    """
    Get one enriched application by ID.

    Malformed IDs are treated the same as unknown ones.

    Raises:
        ApplicationNotFoundError: If no application has this ID
        ApplicationPersistenceError: If the database read fails
    """
    if not isinstance(application_id, UUID):
        try:
            application_id = UUID(str(application_id))
        except ValueError:
            raise ApplicationNotFoundError(application_id) from None

    try:
        application = await repository.get_application_by_id(db, application_id)
    except PersistenceError as e:
        logger.exception(f"Failed to fetch application {application_id}: {e}")
        raise ApplicationPersistenceError("Failed to fetch application") from e

    if application is None:
        raise ApplicationNotFoundError(application_id)

    return _to_response(application)
