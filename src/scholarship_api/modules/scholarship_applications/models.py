"""
Scholarship Applications Models

Database models for scholarship applications and their guardian and
affiliation sub-records. An application and all of its sub-records are
written in a single transaction and never updated afterwards.

Column types are backend-neutral so the same models run on PostgreSQL,
SQL Server and SQLite.
"""

import enum
import uuid
from datetime import UTC, date, datetime

from sqlalchemy import (
    Boolean,
    Date,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Uuid,
    false,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from scholarship_api.core.database import Base, UTCDateTime


class Gender(str, enum.Enum):
    """Applicant gender as recorded on the form."""

    MALE = "M"
    FEMALE = "F"


class ProgrammeType(str, enum.Enum):
    """Type of programme the applicant is enrolled in."""

    UNDERGRADUATE = "Undergraduate"
    GRADUATE = "Graduate"
    DIPLOMA = "Diploma"
    CERTIFICATE = "Certificate"


class ProgrammeMode(str, enum.Enum):
    """Attendance mode."""

    FULL_TIME = "Full-time"
    PART_TIME = "Part-time"


class YearInSchool(str, enum.Enum):
    """Current year of study."""

    FIRST = "1st"
    SECOND = "2nd"
    THIRD = "3rd"
    FOURTH = "4th"
    FIFTH = "5th"


def _enum_column(enum_cls: type[enum.Enum], name: str) -> Enum:
    # Store the wire values ("Full-time"), not the member names, as plain strings
    return Enum(
        enum_cls,
        name=name,
        native_enum=False,
        values_callable=lambda members: [member.value for member in members],
    )


def _utcnow() -> datetime:
    return datetime.now(UTC)


# Column widths, also enforced on submission
NAME_LENGTH = 200
SHORT_TEXT_LENGTH = 100
YEAR_LENGTH = 50
INITIAL_LENGTH = 10
EMAIL_LENGTH = 255
GPA_LENGTH = 20


class ScholarshipApplication(Base):
    """
    A student-athlete scholarship application.

    Always read together with its guardians and affiliations
    (both relationships load eagerly with selectin queries).
    """

    __tablename__ = "scholarship_applications"

    # Primary key
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    # Application details
    submission_date: Mapped[datetime] = mapped_column(
        UTCDateTime,
        default=_utcnow,
        server_default=func.now(),
        nullable=False,
    )
    semester1_amount: Mapped[int | None] = mapped_column(Integer, nullable=True)
    semester2_amount: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # Personal information
    surname: Mapped[str] = mapped_column(String(NAME_LENGTH), nullable=False)
    first_name: Mapped[str] = mapped_column(String(NAME_LENGTH), nullable=False)
    middle_name: Mapped[str | None] = mapped_column(String(NAME_LENGTH), nullable=True)
    gender: Mapped[Gender] = mapped_column(_enum_column(Gender, "gender"), nullable=False)
    nationality: Mapped[str] = mapped_column(String(SHORT_TEXT_LENGTH), nullable=False)
    date_of_birth: Mapped[date] = mapped_column(Date, nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False)

    # Contact information
    student_id: Mapped[str] = mapped_column(String(NAME_LENGTH), nullable=False)
    projected_graduation_year: Mapped[str] = mapped_column(String(YEAR_LENGTH), nullable=False)
    telephone: Mapped[str] = mapped_column(String(SHORT_TEXT_LENGTH), nullable=False)
    email: Mapped[str] = mapped_column(String(EMAIL_LENGTH), nullable=False)
    home_address: Mapped[str] = mapped_column(Text, nullable=False)

    # Academic information
    faculty_school: Mapped[str] = mapped_column(String(NAME_LENGTH), nullable=False)
    course_of_study: Mapped[str] = mapped_column(String(NAME_LENGTH), nullable=False)
    year_started: Mapped[str] = mapped_column(String(YEAR_LENGTH), nullable=False)
    gpa: Mapped[str] = mapped_column(String(GPA_LENGTH), nullable=False)
    programme_type: Mapped[ProgrammeType] = mapped_column(
        _enum_column(ProgrammeType, "programme_type"), nullable=False
    )
    programme_mode: Mapped[ProgrammeMode] = mapped_column(
        _enum_column(ProgrammeMode, "programme_mode"), nullable=False
    )
    year_in_school: Mapped[YearInSchool] = mapped_column(
        _enum_column(YearInSchool, "year_in_school"), nullable=False
    )
    did_transfer: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false(), nullable=False
    )
    transfer_programme_name: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Athletic information
    sport: Mapped[str] = mapped_column(String(NAME_LENGTH), nullable=False)
    event_position: Mapped[str] = mapped_column(String(NAME_LENGTH), nullable=False)
    major_accomplishments: Mapped[str | None] = mapped_column(Text, nullable=True)
    national_representative: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false(), nullable=False
    )
    national_rep_details: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Scholarship categories (independent flags)
    scholarship_tuition: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false(), nullable=False
    )
    scholarship_accommodation: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false(), nullable=False
    )
    scholarship_books: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false(), nullable=False
    )

    # Relationships
    guardians: Mapped[list["Guardian"]] = relationship(
        "Guardian",
        back_populates="application",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )
    affiliations: Mapped[list["Affiliation"]] = relationship(
        "Affiliation",
        back_populates="application",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )

    __table_args__ = (
        Index("ix_scholarship_applications_submission_date", "submission_date"),
        Index("ix_scholarship_applications_student_id", "student_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<ScholarshipApplication(id={self.id}, student_id={self.student_id}, "
            f"sport={self.sport})>"
        )


class Guardian(Base):
    """Parent, guardian or contact person attached to an application."""

    __tablename__ = "guardians"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    application_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("scholarship_applications.id", ondelete="CASCADE"),
        nullable=False,
    )

    surname: Mapped[str] = mapped_column(String(NAME_LENGTH), nullable=False)
    first_name: Mapped[str] = mapped_column(String(NAME_LENGTH), nullable=False)
    middle_initial: Mapped[str | None] = mapped_column(String(INITIAL_LENGTH), nullable=True)
    relation: Mapped[str] = mapped_column(String(SHORT_TEXT_LENGTH), nullable=False)
    telephone: Mapped[str] = mapped_column(String(SHORT_TEXT_LENGTH), nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)

    application: Mapped["ScholarshipApplication"] = relationship(
        "ScholarshipApplication", back_populates="guardians"
    )

    __table_args__ = (Index("ix_guardians_application_id", "application_id"),)


class Affiliation(Base):
    """Club or organisation the applicant belongs to."""

    __tablename__ = "affiliations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    application_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("scholarship_applications.id", ondelete="CASCADE"),
        nullable=False,
    )

    name: Mapped[str] = mapped_column(Text, nullable=False)

    application: Mapped["ScholarshipApplication"] = relationship(
        "ScholarshipApplication", back_populates="affiliations"
    )

    __table_args__ = (Index("ix_affiliations_application_id", "application_id"),)
