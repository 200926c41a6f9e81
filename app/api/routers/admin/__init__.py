from fastapi import APIRouter, Depends

from app.api.dependencies import get_current_admin_dependency
from app.api.routers.admin.stats_router import router as stats_router
from app.infrastructure.errors.auth_errors import InvalidCredentials
from app.utils.error_extra import error_response


PROTECTED = Depends(get_current_admin_dependency)
AUTH_ERRORS = {
    **error_response(InvalidCredentials),
}
admin_routers = APIRouter(prefix="/admin")


admin_routers.include_router(
    stats_router,
    tags=["admin"],
    prefix="/stats",
    dependencies=[PROTECTED],
    responses=AUTH_ERRORS,
)
