"""APIRouter registration for the questionnaire service."""

from __future__ import annotations

from fastapi import APIRouter

from clinicshield.routes.answers import router as answers_router
from clinicshield.routes.organisations import router as organisations_router
from clinicshield.routes.questionnaire import router as questionnaire_router
from clinicshield.routes.users import router as users_router

api_router = APIRouter()
api_router.include_router(organisations_router, tags=["Organisations"])
api_router.include_router(questionnaire_router, tags=["Questionnaire"])
api_router.include_router(answers_router, tags=["Answers"])
api_router.include_router(users_router, tags=["Users"])

__all__ = ["api_router"]
