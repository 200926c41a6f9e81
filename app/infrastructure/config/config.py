from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parents[3]


class AppConfig(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "环博物流"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    CORS_ALLOWED_ORIGINS: str = "http://localhost:3000,http://127.0.0.1:3000"
    STATIC_DIR: str = str(BASE_DIR / "static")
    DATA_DIR: str = str(BASE_DIR / "data")
    SUBMISSIONS_FILE: str = "submissions.json"

    ADMIN_TOKEN: str = "admin-secret-token"

    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_GLOBAL: str = "100/15minutes"
    RATE_LIMIT_CONTACT: str = "5/hour"

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def submissions_path(self) -> Path:
        return Path(self.DATA_DIR) / self.SUBMISSIONS_FILE

    @property
    def index_path(self) -> Path:
        return Path(self.STATIC_DIR) / "index.html"


class SMTPConfig(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    SMTP_HOST: str = "smtp.qq.com"
    SMTP_PORT: int = 587
    SMTP_USER: str = "info@huanbo-logistics.com"
    SMTP_PASS: str | None = None
    SMTP_FROM: str | None = None
    SMTP_USE_TLS: bool = True
    SMTP_TIMEOUT: float = 30.0

    @property
    def from_address(self) -> str:
        return self.SMTP_FROM or self.SMTP_USER


class CompanyConfig(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    COMPANY_NAME: str = "环博物流"
    COMPANY_EMAIL: str = "info@huanbo-logistics.com"
    COMPANY_PHONE: str = "+86 400-123-4567"
    COMPANY_ADDRESS: str = "上海市浦东新区物流大道123号"
    COMPANY_WORK_HOURS: str = "周一至周日 8:00-20:00"


APP_CONFIG = AppConfig()
SMTP_CONFIG = SMTPConfig()
COMPANY_CONFIG = CompanyConfig()
