from fastapi import APIRouter

from .features.get_guest_info.router import router as get_guest_info_router
from .features.search_guests.router import router as search_guests_router
from .features.submit_rsvp.router import router as submit_rsvp_router

router = APIRouter()

router.include_router(search_guests_router)
router.include_router(get_guest_info_router)
router.include_router(submit_rsvp_router)
