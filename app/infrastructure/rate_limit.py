from fastapi import Request
from fastapi.responses import JSONResponse
from limits import parse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from app.infrastructure.config.config import APP_CONFIG
from app.infrastructure.logging import get_logger


logger = get_logger(__name__)

GLOBAL_LIMIT_MESSAGE = "请求过于频繁，请稍后再试"
CONTACT_LIMIT_MESSAGE = "表单提交过于频繁，请1小时后再试"

GLOBAL_LIMIT = parse(APP_CONFIG.RATE_LIMIT_GLOBAL)
GLOBAL_LIMIT_SCOPE = "global"


limiter = Limiter(
    key_func=get_remote_address,
    enabled=APP_CONFIG.RATE_LIMIT_ENABLED,
)


def _too_many_requests(request: Request, message: str, limit: str) -> JSONResponse:
    logger.warning(
        "rate_limit_exceeded",
        path=request.url.path,
        client=get_remote_address(request),
        limit=limit,
    )
    return JSONResponse(
        status_code=429,
        content={"success": False, "message": message},
    )


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    message = exc.detail if exc.detail == CONTACT_LIMIT_MESSAGE else GLOBAL_LIMIT_MESSAGE
    return _too_many_requests(request, message, str(exc.limit.limit) if exc.limit else "")


class GlobalRateLimitMiddleware(BaseHTTPMiddleware):
    """
    Общий лимит запросов с одного адреса.

    Считает каждый запрос, включая отправку формы и несуществующие пути,
    поэтому не зависит от поиска обработчика маршрута. Лимит формы
    проверяется отдельно декоратором на роуте.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if limiter.enabled:
            key = get_remote_address(request)
            if not limiter.limiter.hit(GLOBAL_LIMIT, GLOBAL_LIMIT_SCOPE, key):
                return _too_many_requests(request, GLOBAL_LIMIT_MESSAGE, str(GLOBAL_LIMIT))
        return await call_next(request)
