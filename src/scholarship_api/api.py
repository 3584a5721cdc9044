from fastapi import APIRouter

from scholarship_api.modules.auth import router as auth_router
from scholarship_api.modules.scholarship_applications import router as applications_router

api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])

api_router.include_router(
    applications_router, prefix="/applications", tags=["Scholarship Applications"]
)
