"""create scholarship tables

Revision ID: 0001
Revises:
Create Date: 2026-10-17 09:00:00.000000

This migration:
1. Creates the users table (unique username)
2. Creates the scholarship_applications table
3. Creates the guardians and affiliations tables, each referencing an
   application with ON DELETE CASCADE

Enumerated columns are stored as plain strings so the same schema works on
PostgreSQL and SQL Server.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create users, scholarship_applications, guardians and affiliations."""
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("username", sa.String(length=255), nullable=False),
        sa.Column("password", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    op.create_table(
        "scholarship_applications",
        sa.Column("id", sa.Uuid(), nullable=False),
        # Application details
        sa.Column(
            "submission_date",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column("semester1_amount", sa.Integer(), nullable=True),
        sa.Column("semester2_amount", sa.Integer(), nullable=True),
        # Personal information
        sa.Column("surname", sa.String(length=200), nullable=False),
        sa.Column("first_name", sa.String(length=200), nullable=False),
        sa.Column("middle_name", sa.String(length=200), nullable=True),
        sa.Column(
            "gender",
            sa.Enum("M", "F", name="gender", native_enum=False),
            nullable=False,
        ),
        sa.Column("nationality", sa.String(length=100), nullable=False),
        sa.Column("date_of_birth", sa.Date(), nullable=False),
        sa.Column("age", sa.Integer(), nullable=False),
        # Contact information
        sa.Column("student_id", sa.String(length=200), nullable=False),
        sa.Column("projected_graduation_year", sa.String(length=50), nullable=False),
        sa.Column("telephone", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("home_address", sa.Text(), nullable=False),
        # Academic information
        sa.Column("faculty_school", sa.String(length=200), nullable=False),
        sa.Column("course_of_study", sa.String(length=200), nullable=False),
        sa.Column("year_started", sa.String(length=50), nullable=False),
        sa.Column("gpa", sa.String(length=20), nullable=False),
        sa.Column(
            "programme_type",
            sa.Enum(
                "Undergraduate",
                "Graduate",
                "Diploma",
                "Certificate",
                name="programme_type",
                native_enum=False,
            ),
            nullable=False,
        ),
        sa.Column(
            "programme_mode",
            sa.Enum("Full-time", "Part-time", name="programme_mode", native_enum=False),
            nullable=False,
        ),
        sa.Column(
            "year_in_school",
            sa.Enum("1st", "2nd", "3rd", "4th", "5th", name="year_in_school", native_enum=False),
            nullable=False,
        ),
        sa.Column("did_transfer", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("transfer_programme_name", sa.Text(), nullable=True),
        # Athletic information
        sa.Column("sport", sa.String(length=200), nullable=False),
        sa.Column("event_position", sa.String(length=200), nullable=False),
        sa.Column("major_accomplishments", sa.Text(), nullable=True),
        sa.Column(
            "national_representative", sa.Boolean(), server_default=sa.false(), nullable=False
        ),
        sa.Column("national_rep_details", sa.Text(), nullable=True),
        # Scholarship categories
        sa.Column("scholarship_tuition", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column(
            "scholarship_accommodation", sa.Boolean(), server_default=sa.false(), nullable=False
        ),
        sa.Column("scholarship_books", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_scholarship_applications_submission_date",
        "scholarship_applications",
        ["submission_date"],
    )
    op.create_index(
        "ix_scholarship_applications_student_id",
        "scholarship_applications",
        ["student_id"],
    )

    op.create_table(
        "guardians",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("application_id", sa.Uuid(), nullable=False),
        sa.Column("surname", sa.String(length=200), nullable=False),
        sa.Column("first_name", sa.String(length=200), nullable=False),
        sa.Column("middle_initial", sa.String(length=10), nullable=True),
        sa.Column("relation", sa.String(length=100), nullable=False),
        sa.Column("telephone", sa.String(length=100), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(
            ["application_id"],
            ["scholarship_applications.id"],
            name="fk_guardians_application_id",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_guardians_application_id", "guardians", ["application_id"])

    op.create_table(
        "affiliations",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("application_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(
            ["application_id"],
            ["scholarship_applications.id"],
            name="fk_affiliations_application_id",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_affiliations_application_id", "affiliations", ["application_id"])


def downgrade() -> None:
    """Drop all scholarship tables (children first)."""
    op.drop_index("ix_affiliations_application_id", table_name="affiliations")
    op.drop_table("affiliations")

    op.drop_index("ix_guardians_application_id", table_name="guardians")
    op.drop_table("guardians")

    op.drop_index(
        "ix_scholarship_applications_student_id", table_name="scholarship_applications"
    )
    op.drop_index(
        "ix_scholarship_applications_submission_date", table_name="scholarship_applications"
    )
    op.drop_table("scholarship_applications")

    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")
