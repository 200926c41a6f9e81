import hmac
from typing import Protocol

from app.infrastructure.errors.auth_errors import InvalidCredentials


class AdminAuthenticator(Protocol):

    def authenticate(self, token: str | None) -> None:
        """Бросает InvalidCredentials, если токен не даёт доступа"""
        ...


class StaticTokenAuthenticator:
    """Сверяет bearer-токен с одним секретом из конфигурации"""

    def __init__(self, secret: str):
        self._secret = secret.encode("utf-8")

    def authenticate(self, token: str | None) -> None:
        if not token or not self._secret:
            raise InvalidCredentials()
        if not hmac.compare_digest(token.encode("utf-8"), self._secret):
            raise InvalidCredentials()
