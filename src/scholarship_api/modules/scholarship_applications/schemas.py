"""
Scholarship Applications Schemas

Pydantic schemas for request validation and response serialization.
Field names are snake_case and match the ORM columns one-to-one; the wire
format is camelCase through CamelModel aliases.

Validation rules:
- email: valid email address, stored exactly as submitted
- text fields: no longer than their database columns
- age, amounts and flags: JSON numbers and booleans only, no coercion from strings
- gpa: "^[0-4](\\.\\d{1,2})?$" (only the leading digit is bounded, so "4.99" passes)
- telephone (applicant and guardian): at least 7 characters
- age: 16 to 50 inclusive
- guardians: at least one
- affiliations: optional, defaults to empty
"""

import re
from datetime import date, datetime
from typing import Annotated
from uuid import UUID

from email_validator import EmailNotValidError, validate_email
from pydantic import ConfigDict, Field, StrictBool, StrictInt, field_validator
from pydantic_core import PydanticCustomError

from scholarship_api.modules.scholarship_applications.models import (
    EMAIL_LENGTH,
    INITIAL_LENGTH,
    NAME_LENGTH,
    SHORT_TEXT_LENGTH,
    YEAR_LENGTH,
    Gender,
    ProgrammeMode,
    ProgrammeType,
    YearInSchool,
)
from scholarship_api.modules.shared import CamelModel

GPA_PATTERN = re.compile(r"[0-4](\.\d{1,2})?", re.ASCII)
MIN_TELEPHONE_LENGTH = 7
MIN_AGE = 16
MAX_AGE = 50

RequiredText = Annotated[str, Field(min_length=1)]
RequiredName = Annotated[str, Field(min_length=1, max_length=NAME_LENGTH)]
RequiredShortText = Annotated[str, Field(min_length=1, max_length=SHORT_TEXT_LENGTH)]
RequiredYear = Annotated[str, Field(min_length=1, max_length=YEAR_LENGTH)]
Telephone = Annotated[str, Field(max_length=SHORT_TEXT_LENGTH)]


def _check_telephone(value: str) -> str:
    if len(value) < MIN_TELEPHONE_LENGTH:
        raise PydanticCustomError("telephone_too_short", "Please enter a valid phone number")
    return value


# ============================================
# Request Schemas
# ============================================


class GuardianCreate(CamelModel):
    """Parent/guardian/contact sub-record of a submission."""

    surname: RequiredName
    first_name: RequiredName
    middle_initial: str | None = Field(None, max_length=INITIAL_LENGTH)
    relation: RequiredShortText
    telephone: Telephone
    address: RequiredText

    @field_validator("telephone")
    @classmethod
    def validate_telephone(cls, value: str) -> str:
        return _check_telephone(value)


class AffiliationCreate(CamelModel):
    """Club or organisation sub-record of a submission."""

    name: RequiredText


class ScholarshipApplicationBase(CamelModel):
    """Flat application fields shared by requests and responses."""

    semester1_amount: int | None = None
    semester2_amount: int | None = None

    # Personal information
    surname: str
    first_name: str
    middle_name: str | None = None
    gender: Gender
    nationality: str
    date_of_birth: date
    age: int

    # Contact information
    student_id: str
    projected_graduation_year: str
    telephone: str
    email: str
    home_address: str

    # Academic information
    faculty_school: str
    course_of_study: str
    year_started: str
    gpa: str
    programme_type: ProgrammeType
    programme_mode: ProgrammeMode
    year_in_school: YearInSchool
    did_transfer: bool = False
    transfer_programme_name: str | None = None

    # Athletic information
    sport: str
    event_position: str
    major_accomplishments: str | None = None
    national_representative: bool = False
    national_rep_details: str | None = None

    # Scholarship categories
    scholarship_tuition: bool = False
    scholarship_accommodation: bool = False
    scholarship_books: bool = False


class ScholarshipApplicationCreate(ScholarshipApplicationBase):
    """
    Candidate application as submitted by the form client.

    Server-assigned fields (id, submissionDate) are not part of this schema;
    unknown keys are ignored. Numbers and flags are strict: "22" or "yes"
    is rejected rather than coerced.
    """

    model_config = ConfigDict(extra="ignore")

    semester1_amount: StrictInt | None = Field(None, ge=0)
    semester2_amount: StrictInt | None = Field(None, ge=0)

    surname: RequiredName
    first_name: RequiredName
    middle_name: str | None = Field(None, max_length=NAME_LENGTH)
    nationality: RequiredShortText
    age: StrictInt

    student_id: RequiredName
    projected_graduation_year: RequiredYear
    telephone: Telephone
    email: Annotated[str, Field(max_length=EMAIL_LENGTH)]
    home_address: RequiredText

    faculty_school: RequiredName
    course_of_study: RequiredName
    year_started: RequiredYear
    did_transfer: StrictBool = False

    sport: RequiredName
    event_position: RequiredName
    national_representative: StrictBool = False

    scholarship_tuition: StrictBool = False
    scholarship_accommodation: StrictBool = False
    scholarship_books: StrictBool = False

    guardians: list[GuardianCreate]
    affiliations: list[AffiliationCreate] = Field(default_factory=list)

    @field_validator("email")
    @classmethod
    def validate_email_address(cls, value: str) -> str:
        # Checked only; the stored address keeps the submitted spelling and case
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError as e:
            raise PydanticCustomError("email_invalid", "Please enter a valid email address") from e
        return value

    @field_validator("gpa")
    @classmethod
    def validate_gpa(cls, value: str) -> str:
        if not GPA_PATTERN.fullmatch(value):
            raise PydanticCustomError("gpa_format", "GPA must be between 0.00 and 4.00")
        return value

    @field_validator("telephone")
    @classmethod
    def validate_telephone(cls, value: str) -> str:
        return _check_telephone(value)

    @field_validator("age")
    @classmethod
    def validate_age(cls, value: int) -> int:
        if value < MIN_AGE:
            raise PydanticCustomError(
                "age_too_low", "Applicant must be at least {min_age} years old", {"min_age": MIN_AGE}
            )
        if value > MAX_AGE:
            raise PydanticCustomError("age_too_high", "Please enter a valid age")
        return value

    @field_validator("guardians")
    @classmethod
    def validate_guardians(cls, value: list[GuardianCreate]) -> list[GuardianCreate]:
        if not value:
            raise PydanticCustomError("guardians_empty", "At least one guardian is required")
        return value


# ============================================
# Response Schemas
# ============================================


class GuardianResponse(CamelModel):
    """Stored guardian row."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    application_id: UUID
    surname: str
    first_name: str
    middle_initial: str | None = None
    relation: str
    telephone: str
    address: str


class AffiliationResponse(CamelModel):
    """Stored affiliation row."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    application_id: UUID
    name: str


class ScholarshipApplicationResponse(ScholarshipApplicationBase):
    """Enriched application: the stored row plus its guardians and affiliations."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    submission_date: datetime
    guardians: list[GuardianResponse]
    affiliations: list[AffiliationResponse]
