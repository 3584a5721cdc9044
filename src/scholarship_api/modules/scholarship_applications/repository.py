"""
Scholarship Applications Repository

Storage operations for scholarship applications and their guardian and
affiliation sub-records. Every function takes the AsyncSession as its first
argument; the session (and therefore the backend) is chosen by the caller.

Design Principles:
- An application and all of its sub-records are written in one transaction
- Reads always return enriched records (guardians and affiliations loaded)
- Results are ordered by submission date, most recent first
- Backend failures surface as PersistenceError, never raw driver errors
"""

from uuid import UUID

from sqlalchemy import Select, desc, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Affiliation, Guardian, ScholarshipApplication
from .schemas import ScholarshipApplicationCreate

# Columns matched by free-text search (OR across all of them)
SEARCH_COLUMNS = (
    ScholarshipApplication.first_name,
    ScholarshipApplication.surname,
    ScholarshipApplication.student_id,
    ScholarshipApplication.sport,
    ScholarshipApplication.faculty_school,
)


class PersistenceError(Exception):
    """Raised when the database fails or rejects a storage operation."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Failed to {operation}")


def _applications_query() -> Select[tuple[ScholarshipApplication]]:
    # guardians/affiliations are lazy="selectin": each result set triggers one
    # extra query per relationship, independent of each other
    return select(ScholarshipApplication).order_by(desc(ScholarshipApplication.submission_date))


async def create_application(
    db: AsyncSession,
    data: ScholarshipApplicationCreate,
) -> ScholarshipApplication:
    """
    Create an application together with its guardians and affiliations.

    The application row is inserted first; the guardian and affiliation rows
    follow with its id as their foreign key. Everything is committed at once,
    and any failure rolls the whole unit back so no partial application is
    ever visible to other readers.

    Args:
        db: Database session
        data: Validated application

    Returns:
        The created application with guardians and affiliations populated

    Raises:
        PersistenceError: If any insert or the commit fails
    """
    application = ScholarshipApplication(
        **data.model_dump(exclude={"guardians", "affiliations"}),
        guardians=[Guardian(**guardian.model_dump()) for guardian in data.guardians],
        affiliations=[
            Affiliation(**affiliation.model_dump()) for affiliation in data.affiliations
        ],
    )

    db.add(application)
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise PersistenceError("create application") from e

    return application


async def get_all_applications(db: AsyncSession) -> list[ScholarshipApplication]:
    """Get every application, most recent submission first."""
    try:
        result = await db.execute(_applications_query())
    except SQLAlchemyError as e:
        raise PersistenceError("fetch applications") from e
    return list(result.scalars().all())


async def get_application_by_id(
    db: AsyncSession,
    application_id: UUID,
) -> ScholarshipApplication | None:
    """Get one application by ID, or None if it does not exist."""
    try:
        return await db.get(ScholarshipApplication, application_id)
    except SQLAlchemyError as e:
        raise PersistenceError("fetch application") from e


async def search_applications(db: AsyncSession, query: str) -> list[ScholarshipApplication]:
    """
    Case-insensitive substring search across name, student ID, sport and faculty.

    A blank or whitespace-only query returns every application. LIKE
    wildcards in the query ("%", "_") are passed through unescaped.

    Args:
        db: Database session
        query: Free-text search term

    Returns:
        Matching applications, most recent submission first
    """
    if not query or not query.strip():
        return await get_all_applications(db)

    pattern = f"%{query}%"
    statement = _applications_query().where(
        or_(*(column.ilike(pattern) for column in SEARCH_COLUMNS))
    )

    try:
        result = await db.execute(statement)
    except SQLAlchemyError as e:
        raise PersistenceError("search applications") from e
    return list(result.scalars().all())


async def count_applications(db: AsyncSession) -> int:
    """Count stored applications."""
    try:
        result = await db.execute(select(func.count()).select_from(ScholarshipApplication))
    except SQLAlchemyError as e:
        raise PersistenceError("count applications") from e
    return result.scalar() or 0
