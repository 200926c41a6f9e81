from fastapi import APIRouter

from app.api.routers.admin import admin_routers
from app.api.routers.contact_form import router as contact_form_router
from app.api.routers.health import router as health_router
from app.api.routers.pages import router as pages_router


api_routers = APIRouter(prefix="/api")
api_routers.include_router(contact_form_router, prefix="/contact", tags=["contact_form"])
api_routers.include_router(admin_routers)

__all__ = ["api_routers", "health_router", "pages_router"]
