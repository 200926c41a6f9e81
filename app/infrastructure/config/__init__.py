from app.infrastructure.config.config import APP_CONFIG, COMPANY_CONFIG, SMTP_CONFIG


__all__ = ["APP_CONFIG", "COMPANY_CONFIG", "SMTP_CONFIG"]
