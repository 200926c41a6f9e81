from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.repositories.submission_repository import SubmissionRepository
from app.infrastructure.config.config import APP_CONFIG
import app.core.services as services


token_scheme = HTTPBearer(auto_error=False)


async def get_submission_repository(request: Request) -> SubmissionRepository:
    return request.app.state.submission_repository


async def get_contact_form_service(
    repository: Annotated[SubmissionRepository, Depends(get_submission_repository)],
) -> services.ContactFormService:
    return services.ContactFormService(repository=repository)


async def get_stats_service(
    repository: Annotated[SubmissionRepository, Depends(get_submission_repository)],
) -> services.StatsService:
    return services.StatsService(repository=repository)


async def get_admin_authenticator() -> services.AdminAuthenticator:
    return services.StaticTokenAuthenticator(APP_CONFIG.ADMIN_TOKEN)


async def get_current_admin_dependency(
    authenticator: Annotated[services.AdminAuthenticator, Depends(get_admin_authenticator)],
    auth_scheme: Annotated[HTTPAuthorizationCredentials | None, Depends(token_scheme)],
) -> None:
    token = auth_scheme.credentials if auth_scheme else None
    authenticator.authenticate(token)
