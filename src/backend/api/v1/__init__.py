"""
API v1 router aggregating all endpoints.
"""

from fastapi import APIRouter

from api.v1.voting import router as voting_router

router = APIRouter()

router.include_router(voting_router, prefix="/voting", tags=["Voting"])
