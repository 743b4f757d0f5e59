"""
Routers API pour 21 Points.

Ce module regroupe tous les sous-routers et expose un router principal
a inclure dans l'application FastAPI.
"""
from fastapi import APIRouter

from healthpoints.api.routers.account_router import router as account_router
from healthpoints.api.routers.points_router import router as points_router
from healthpoints.api.routers._shared import limiter

router = APIRouter()

router.include_router(account_router)
router.include_router(points_router)

__all__ = ["router", "limiter"]
