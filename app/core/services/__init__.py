from app.core.services.auth_service import AdminAuthenticator, StaticTokenAuthenticator
from app.core.services.contact_form_service import ContactFormService
from app.core.services.stats_service import StatsService


__all__ = [
    "AdminAuthenticator",
    "ContactFormService",
    "StaticTokenAuthenticator",
    "StatsService",
]
