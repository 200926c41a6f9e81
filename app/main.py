from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi.errors import RateLimitExceeded

from app.api.routers import api_routers, health_router, pages_router
from app.core.repositories.submission_repository import SubmissionRepository
from app.infrastructure.config.config import APP_CONFIG
from app.infrastructure.errors.base import InternalServerError
from app.infrastructure.errors.contact_errors import ContactFormError
from app.infrastructure.logging.logger import configure_logging, get_logger
from app.infrastructure.middleware import LoggingMiddleware, SecurityHeadersMiddleware
from app.infrastructure.rate_limit import (
    GlobalRateLimitMiddleware,
    limiter,
    rate_limit_exceeded_handler,
)


configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app):
    logger.info(
        "application_startup",
        app_name=APP_CONFIG.APP_NAME,
        environment=APP_CONFIG.ENVIRONMENT,
        port=APP_CONFIG.PORT,
    )

    app.state.submission_repository = SubmissionRepository(APP_CONFIG.submissions_path)
    logger.info("submission_store_ready", path=str(APP_CONFIG.submissions_path))

    yield

    logger.info("application_shutdown")


app = FastAPI(
    title=APP_CONFIG.APP_NAME,
    debug=APP_CONFIG.DEBUG,
    lifespan=lifespan
)

app.state.limiter = limiter


app.add_middleware(GlobalRateLimitMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=APP_CONFIG.CORS_ALLOWED_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(LoggingMiddleware)


@app.exception_handler(ContactFormError)
async def contact_form_error_handler(request: Request, exc: ContactFormError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.as_content())


@app.exception_handler(status.HTTP_404_NOT_FOUND)
async def not_found_handler(request: Request, exc: Exception):
    if APP_CONFIG.index_path.is_file():
        return FileResponse(APP_CONFIG.index_path, status_code=status.HTTP_404_NOT_FOUND)
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": "Not Found"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": InternalServerError.detail,
            "message": "请稍后重试" if APP_CONFIG.is_production else str(exc),
        },
    )


app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

static_dir = Path(APP_CONFIG.STATIC_DIR)
if not static_dir.exists():
    static_dir.mkdir(parents=True, exist_ok=True)
    logger.info("static_directory_created", path=str(static_dir))

app.mount("/static", StaticFiles(directory=APP_CONFIG.STATIC_DIR), name="static")
logger.info("static_files_mounted", directory=APP_CONFIG.STATIC_DIR)

app.include_router(pages_router)
app.include_router(health_router, prefix="/health", tags=["health"])
app.include_router(api_routers)


def run() -> None:
    uvicorn.run(
        "app.main:app",
        host=APP_CONFIG.HOST,
        port=APP_CONFIG.PORT,
        log_config=None,
    )


if __name__ == "__main__":
    run()
