from fastapi import APIRouter
from fastapi.responses import FileResponse

from app.infrastructure.config.config import APP_CONFIG


router = APIRouter()


@router.get("/", include_in_schema=False)
async def index() -> FileResponse:
    return FileResponse(APP_CONFIG.index_path)
