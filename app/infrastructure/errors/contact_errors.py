from fastapi import HTTPException, status


class ContactFormError(HTTPException):
    """Базовая ошибка формы обратной связи, отдаётся как {success: false, ...}"""

    def as_content(self) -> dict:
        return {"success": False, "message": self.detail}


class ContactFormValidationError(ContactFormError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "表单验证失败"

    def __init__(self, errors: list[str]):
        super().__init__(status_code=self.status_code, detail=self.detail)
        self.errors = errors

    def as_content(self) -> dict:
        return {**super().as_content(), "errors": self.errors}


class SubmissionPersistenceError(ContactFormError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "系统繁忙，请稍后重试或直接联系我们的客服。"

    def __init__(self):
        super().__init__(status_code=self.status_code, detail=self.detail)


class SubmissionStoreError(Exception):
    """Документ с заявками не удалось прочитать или записать"""
