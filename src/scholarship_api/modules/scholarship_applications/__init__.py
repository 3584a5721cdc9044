"""
Scholarship Applications Module

Handles the student-athlete scholarship submission pipeline:
1. Candidate validation (field rules, at least one guardian)
2. Atomic storage of the application, its guardians and affiliations
3. Enriched listing, search and lookup by ID for staff

API Endpoints:
- POST /applications - Submit a new application
- GET /applications - List applications (optional ?search=)
- GET /applications/{id} - Get one application

Applications are never updated or deleted through the API.
"""

from .router import router

__all__ = ["router"]
