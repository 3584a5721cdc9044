"""
Seed Sample Application

Creates the tables (if missing) and stores one sample scholarship
application so the listing and search endpoints have something to show in
a fresh development database.

Usage:
    python scripts/seed_sample_application.py
"""

import asyncio
import sys
from pathlib import Path

# Add the src directory to the path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sqlalchemy.ext.asyncio import create_async_engine

from scholarship_api.core.config import settings
from scholarship_api.core.database import build_session_maker, create_tables
from scholarship_api.modules.scholarship_applications import repository
from scholarship_api.modules.scholarship_applications.validation import validate_application

SAMPLE_APPLICATION = {
    "semester1Amount": 150000,
    "semester2Amount": 150000,
    "surname": "Campbell",
    "firstName": "Shericka",
    "gender": "F",
    "nationality": "Jamaican",
    "dateOfBirth": "2004-05-14",
    "age": 21,
    "studentId": "2201234",
    "projectedGraduationYear": "2027",
    "telephone": "876-555-0142",
    "email": "shericka.campbell@example.com",
    "homeAddress": "12 Hope Road, Kingston 6",
    "facultySchool": "Faculty of Science and Sport",
    "courseOfStudy": "BSc Sports Science",
    "yearStarted": "2023",
    "gpa": "3.45",
    "programmeType": "Undergraduate",
    "programmeMode": "Full-time",
    "yearInSchool": "3rd",
    "sport": "Athletics",
    "eventPosition": "400m",
    "majorAccomplishments": "National junior champion, 400m",
    "nationalRepresentative": True,
    "nationalRepDetails": "CARIFTA Games 2022",
    "scholarshipTuition": True,
    "scholarshipAccommodation": True,
    "guardians": [
        {
            "surname": "Campbell",
            "firstName": "Marcia",
            "relation": "Mother",
            "telephone": "876-555-0199",
            "address": "12 Hope Road, Kingston 6",
        }
    ],
    "affiliations": [{"name": "MVP Track Club"}],
}


async def seed_sample_application() -> None:
    """Store the sample application."""
    result = validate_application(SAMPLE_APPLICATION)
    if not result.success:
        print(f"Sample application is invalid: {result.message}")
        return

    engine = create_async_engine(settings.sqlalchemy_database_url, echo=False)
    await create_tables(engine)
    async_session = build_session_maker(engine)

    async with async_session() as db:
        application = await repository.create_application(db, result.data)

        print("Sample application created successfully!")
        print(f"  ID: {application.id}")
        print(f"  Name: {application.first_name} {application.surname}")
        print(f"  Sport: {application.sport}")
        print(f"  Guardians: {len(application.guardians)}")
        print(f"Applications stored: {await repository.count_applications(db)}")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed_sample_application())
