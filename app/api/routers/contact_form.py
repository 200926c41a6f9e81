from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, Request, status

from app.api.dependencies import get_contact_form_service
from app.core.dto.contact_form import ContactFormErrorModel, ContactFormResponseModel
from app.core.services.contact_form_service import ContactFormService
from app.infrastructure.config.config import APP_CONFIG
from app.infrastructure.rate_limit import CONTACT_LIMIT_MESSAGE, limiter


router = APIRouter()

SUCCESS_MESSAGE = "感谢您的咨询！我们已收到您的信息，会尽快与您联系。"


async def read_form_fields(request: Request) -> dict:
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            payload = await request.json()
        except ValueError:
            return {}
        return payload if isinstance(payload, dict) else {}

    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}


@router.post(
    "",
    response_model=ContactFormResponseModel,
    status_code=status.HTTP_200_OK,
    summary="提交咨询表单",
    description="校验并保存客户咨询，随后异步发送邮件通知",
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ContactFormErrorModel},
        status.HTTP_429_TOO_MANY_REQUESTS: {"model": ContactFormErrorModel},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ContactFormErrorModel},
    },
)
@limiter.limit(APP_CONFIG.RATE_LIMIT_CONTACT, error_message=CONTACT_LIMIT_MESSAGE)
async def create_contact_form(
    request: Request,
    background_tasks: BackgroundTasks,
    service: Annotated[ContactFormService, Depends(get_contact_form_service)],
) -> ContactFormResponseModel:
    fields = await read_form_fields(request)
    submission = await service.create_submission(
        fields,
        ip=request.client.host if request.client else "",
        user_agent=request.headers.get("User-Agent", ""),
        background_tasks=background_tasks,
    )
    return ContactFormResponseModel(message=SUCCESS_MESSAGE, submission_id=submission.id)
