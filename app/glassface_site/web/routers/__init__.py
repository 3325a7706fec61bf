from fastapi import APIRouter

from glassface_site.web.routers.api import router as api_router
from glassface_site.web.routers.pages import router as pages_router


router = APIRouter()
router.include_router(api_router)
router.include_router(pages_router)
