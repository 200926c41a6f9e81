from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from app.core.dto.contact_form import ContactFormCreateModel


def validate_contact_form(
    data: Mapping[str, Any],
) -> tuple[ContactFormCreateModel | None, list[str]]:
    """
    Проверяет сырые поля формы.

    Возвращает нормализованную модель и пустой список, либо None и
    сообщения об ошибках в порядке полей формы (по одному на правило).
    """
    try:
        return ContactFormCreateModel.model_validate(dict(data)), []
    except ValidationError as exc:
        return None, [error["msg"] for error in exc.errors()]
