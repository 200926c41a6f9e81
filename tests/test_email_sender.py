from datetime import datetime

from app.core.dto.contact_form import SubmissionModel
from app.infrastructure.config.config import COMPANY_CONFIG
from app.infrastructure.email import sender


def make_submission(**overrides) -> SubmissionModel:
    data = {
        "id": "1700000000123",
        "timestamp": "2026-03-18T04:05:06.000Z",
        "name": "陈七",
        "contact": "chen@example.com",
        "company": "",
        "service_type": "仓储",
        "cargo_type": "",
        "destination": "",
        "message": "需要在宁波港附近租用仓库 <一个月>。",
        "ip": "10.0.0.8",
        "user_agent": "pytest",
    }
    data.update(overrides)
    return SubmissionModel(**data)


def html_part(message) -> str:
    return message.get_body(preferencelist=("html",)).get_content()


def text_part(message) -> str:
    return message.get_body(preferencelist=("plain",)).get_content()


def test_company_message_contents():
    submission = make_submission()

    message = sender.build_company_message(submission)

    assert message["To"] == COMPANY_CONFIG.COMPANY_EMAIL
    assert message["Subject"] == "【新客户咨询】来自 陈七 的物流需求"
    text = text_part(message)
    assert "公司名称: 未填写" in text
    assert "服务类型: 仓储" in text
    assert "提交ID: 1700000000123" in text
    assert "客户端IP: 10.0.0.8" in text


def test_company_html_escapes_user_input():
    message = sender.build_company_message(make_submission())

    body = html_part(message)
    assert "&lt;一个月&gt;" in body
    assert "<一个月>" not in body


def test_customer_message_contents():
    submission = make_submission(service_type="")

    message = sender.build_customer_message(submission)

    assert message["To"] == "chen@example.com"
    assert message["Subject"] == f"感谢您的咨询 - {COMPANY_CONFIG.COMPANY_NAME}"
    body = html_part(message)
    assert "1700000000123" in body
    assert "未选择" in body
    assert COMPANY_CONFIG.COMPANY_PHONE in body


def test_submitted_at_uses_local_time():
    submission = make_submission()
    local = datetime.fromisoformat("2026-03-18T04:05:06+00:00").astimezone()

    assert sender.format_submitted_at(submission) == (
        f"{local.year}/{local.month}/{local.day} {local:%H:%M:%S}"
    )


def test_unparseable_timestamp_is_shown_verbatim():
    assert sender.format_submitted_at(make_submission(timestamp="soon")) == "soon"


async def test_send_both_messages_for_email_contact(sent_messages):
    await sender.send_submission_notifications(make_submission())

    assert [message["To"] for message in sent_messages] == [
        COMPANY_CONFIG.COMPANY_EMAIL,
        "chen@example.com",
    ]


async def test_phone_contact_gets_no_acknowledgment(sent_messages):
    await sender.send_submission_notifications(make_submission(contact="13812345678"))

    assert len(sent_messages) == 1


async def test_company_failure_still_sends_acknowledgment(sent_messages, monkeypatch):
    calls = []

    async def flaky_send(message, **kwargs):
        calls.append(message["To"])
        if message["To"] == COMPANY_CONFIG.COMPANY_EMAIL:
            raise ConnectionRefusedError("smtp down")

    monkeypatch.setattr(sender.aiosmtplib, "send", flaky_send)

    await sender.send_submission_notifications(make_submission())

    assert calls == [COMPANY_CONFIG.COMPANY_EMAIL, "chen@example.com"]


async def test_implicit_tls_on_port_465(sent_messages, monkeypatch):
    captured = {}

    async def capture_send(message, **kwargs):
        captured.update(kwargs)

    monkeypatch.setattr(sender.aiosmtplib, "send", capture_send)
    monkeypatch.setattr(sender.SMTP_CONFIG, "SMTP_PORT", 465)

    await sender.send_company_notification(make_submission())

    assert captured["use_tls"] is True
    assert captured["start_tls"] is False


def test_company_subject_folds_line_breaks_in_name():
    message = sender.build_company_message(make_submission(name="张\n三"))

    assert message["Subject"] == "【新客户咨询】来自 张 三 的物流需求"


async def test_multiline_name_still_notifies_company(sent_messages):
    await sender.send_submission_notifications(make_submission(name="张\r\n三"))

    assert [message["To"] for message in sent_messages] == [
        COMPANY_CONFIG.COMPANY_EMAIL,
        "chen@example.com",
    ]
