from fastapi import APIRouter

from .features.dashboard.router import router as dashboard_router
from .features.login.router import router as login_router
from .features.manage_guests.router import router as manage_guests_router

router = APIRouter()

router.include_router(login_router)
router.include_router(dashboard_router)
router.include_router(manage_guests_router)
