import time
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from fastapi import BackgroundTasks

from app.core.dto.contact_form import ContactFormCreateModel, SubmissionModel
from app.core.repositories.submission_repository import SubmissionRepository
from app.core.validation import validate_contact_form
from app.infrastructure.email.sender import send_submission_notifications
from app.infrastructure.errors.contact_errors import (
    ContactFormValidationError,
    SubmissionPersistenceError,
    SubmissionStoreError,
)
from app.infrastructure.logging import get_logger


logger = get_logger(__name__)

_last_submission_id = 0


def new_submission_id() -> str:
    """Миллисекундная метка времени, строго возрастающая в пределах процесса"""
    global _last_submission_id
    _last_submission_id = max(time.time_ns() // 1_000_000, _last_submission_id + 1)
    return str(_last_submission_id)


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ContactFormService:

    def __init__(self, repository: SubmissionRepository):
        self.repository = repository

    def build_submission(
        self,
        data: ContactFormCreateModel,
        ip: str,
        user_agent: str,
    ) -> SubmissionModel:
        return SubmissionModel(
            id=new_submission_id(),
            timestamp=utc_timestamp(),
            ip=ip,
            user_agent=user_agent,
            **data.model_dump(),
        )

    async def create_submission(
        self,
        raw_data: Mapping[str, Any],
        ip: str,
        user_agent: str,
        background_tasks: BackgroundTasks,
    ) -> SubmissionModel:
        data, errors = validate_contact_form(raw_data)
        if errors:
            logger.info("contact_form_rejected", errors=errors, ip=ip)
            raise ContactFormValidationError(errors)

        submission = self.build_submission(data, ip=ip, user_agent=user_agent)

        try:
            await self.repository.add_item(submission)
        except SubmissionStoreError as exc:
            logger.error("submission_save_failed", submission_id=submission.id, error=str(exc))
            raise SubmissionPersistenceError() from exc

        logger.info(
            "submission_saved",
            submission_id=submission.id,
            service_type=submission.service_type or None,
        )

        background_tasks.add_task(send_submission_notifications, submission)

        return submission
