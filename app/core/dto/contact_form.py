import re
from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from app.utils.enums import ServiceTypeEnum


NAME_PATTERN = re.compile(r"[\u4e00-\u9fa5a-zA-Z\s]+")
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
MOBILE_PATTERN = re.compile(r"1[3-9][0-9]{9}")

OPTIONAL_TEXT_MAX_LENGTH = 100


def _clean(value) -> str:
    if value is None:
        return ""
    return str(value).strip()


def is_email(value: str) -> bool:
    return EMAIL_PATTERN.fullmatch(value) is not None


def is_mobile(value: str) -> bool:
    return MOBILE_PATTERN.fullmatch(value) is not None


class ContactFormCreateModel(BaseModel):
    """
    Нормализованные данные формы.

    Все строки обрезаются по краям; каждое поле проверяется независимо,
    поэтому ValidationError содержит по одной ошибке на каждое нарушенное
    правило.
    """
    model_config = ConfigDict(validate_default=True, populate_by_name=True)

    name: str = ""
    contact: str = ""
    company: str = ""
    service_type: str = Field(
        "", validation_alias=AliasChoices("service-type", "serviceType", "service_type")
    )
    cargo_type: str = Field(
        "", validation_alias=AliasChoices("cargo-type", "cargoType", "cargo_type")
    )
    destination: str = ""
    message: str = ""

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, value) -> str:
        value = " ".join(_clean(value).split())
        if not 2 <= len(value) <= 50:
            raise PydanticCustomError("name_length", "姓名必须在2-50个字符之间")
        if not NAME_PATTERN.fullmatch(value):
            raise PydanticCustomError("name_format", "姓名只能包含中文、英文和空格")
        return value

    @field_validator("contact", mode="before")
    @classmethod
    def validate_contact(cls, value) -> str:
        value = _clean(value)
        if not (is_email(value) or is_mobile(value)):
            raise PydanticCustomError("contact_format", "请输入有效的邮箱地址或手机号码")
        return value

    @field_validator("company", mode="before")
    @classmethod
    def validate_company(cls, value) -> str:
        value = _clean(value)
        if len(value) > OPTIONAL_TEXT_MAX_LENGTH:
            raise PydanticCustomError("company_length", "公司名称不能超过100个字符")
        return value

    @field_validator("service_type", mode="before")
    @classmethod
    def validate_service_type(cls, value) -> str:
        value = _clean(value)
        if value and value not in {item.value for item in ServiceTypeEnum}:
            raise PydanticCustomError("service_type_choice", "请选择有效的服务类型")
        return value

    @field_validator("cargo_type", mode="before")
    @classmethod
    def validate_cargo_type(cls, value) -> str:
        value = _clean(value)
        if len(value) > OPTIONAL_TEXT_MAX_LENGTH:
            raise PydanticCustomError("cargo_type_length", "货物类型不能超过100个字符")
        return value

    @field_validator("destination", mode="before")
    @classmethod
    def validate_destination(cls, value) -> str:
        value = _clean(value)
        if len(value) > OPTIONAL_TEXT_MAX_LENGTH:
            raise PydanticCustomError("destination_length", "目的地不能超过100个字符")
        return value

    @field_validator("message", mode="before")
    @classmethod
    def validate_message(cls, value) -> str:
        value = _clean(value)
        if not 10 <= len(value) <= 2000:
            raise PydanticCustomError("message_length", "需求描述必须在10-2000个字符之间")
        return value


class SubmissionModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    timestamp: str
    name: str = ""
    contact: str = ""
    company: str = ""
    service_type: str = ""
    cargo_type: str = ""
    destination: str = ""
    message: str = ""
    ip: str = ""
    user_agent: str = ""

    @property
    def created_at(self) -> datetime | None:
        try:
            return datetime.fromisoformat(self.timestamp)
        except ValueError:
            return None

    @property
    def contact_is_email(self) -> bool:
        return is_email(self.contact)


class ContactFormResponseModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    message: str
    submission_id: str


class ContactFormErrorModel(BaseModel):
    success: bool = False
    message: str
    errors: list[str] | None = None
