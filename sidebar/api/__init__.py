"""
API routes.
"""

from fastapi import APIRouter

from sidebar.api import ai, auth, jobtread

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
router.include_router(ai.router, tags=["AI"])
router.include_router(jobtread.router, tags=["JobTread"])
