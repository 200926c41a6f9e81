"""
Shared pytest fixtures: temp submission store, stubbed SMTP, rate limiter off.
"""
import asyncio

import pytest
from fastapi.testclient import TestClient

from app.api.dependencies import get_submission_repository
from app.core.repositories.submission_repository import SubmissionRepository
from app.infrastructure.email import sender
from app.infrastructure.rate_limit import limiter
from app.main import app


ADMIN_TOKEN = "test-admin-token"


@pytest.fixture
def valid_form():
    return {
        "name": "张三 Zhang",
        "contact": "zhang@example.com",
        "company": "上海贸易有限公司",
        "service-type": "海运",
        "cargo-type": "电子产品",
        "destination": "汉堡",
        "message": "需要从上海到汉堡的整柜海运报价，每月两柜。",
    }


@pytest.fixture
def submissions_path(tmp_path):
    return tmp_path / "data" / "submissions.json"


@pytest.fixture
def repository(submissions_path):
    return SubmissionRepository(submissions_path)


@pytest.fixture
def stored(repository):
    """Reads the store from synchronous tests that drive the app through TestClient."""
    def read():
        return asyncio.run(repository.get_all_items())
    return read


@pytest.fixture(autouse=True)
def disable_rate_limit():
    limiter.reset()
    limiter.enabled = False
    yield
    limiter.enabled = True
    limiter.reset()


@pytest.fixture
def sent_messages(monkeypatch):
    """Captures outgoing mail instead of talking to an SMTP server."""
    messages = []

    async def fake_send(message, **kwargs):
        messages.append(message)

    monkeypatch.setattr(sender.aiosmtplib, "send", fake_send)
    monkeypatch.setattr(sender.SMTP_CONFIG, "SMTP_PASS", "smtp-password")
    return messages


@pytest.fixture
def admin_token(monkeypatch):
    from app.infrastructure.config.config import APP_CONFIG

    monkeypatch.setattr(APP_CONFIG, "ADMIN_TOKEN", ADMIN_TOKEN)
    return ADMIN_TOKEN


@pytest.fixture
def client(repository, sent_messages):
    app.dependency_overrides[get_submission_repository] = lambda: repository
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
