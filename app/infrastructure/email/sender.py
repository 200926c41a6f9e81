from email.message import EmailMessage
from pathlib import Path
import html

import aiosmtplib

from app.core.dto.contact_form import SubmissionModel
from app.infrastructure.config.config import COMPANY_CONFIG, SMTP_CONFIG
from app.infrastructure.logging import get_logger
from app.utils.enums import UNSELECTED_SERVICE_TYPE


logger = get_logger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
COMPANY_TEMPLATE_PATH = TEMPLATES_DIR / "company_notification.html"
CUSTOMER_TEMPLATE_PATH = TEMPLATES_DIR / "customer_acknowledgment.html"

NOT_FILLED = "未填写"


def _smtp_configured() -> bool:
    return bool(
        SMTP_CONFIG.SMTP_HOST
        and SMTP_CONFIG.SMTP_PORT
        and SMTP_CONFIG.SMTP_USER
        and SMTP_CONFIG.SMTP_PASS
        and COMPANY_CONFIG.COMPANY_EMAIL
    )


def format_submitted_at(submission: SubmissionModel) -> str:
    created_at = submission.created_at
    if created_at is None:
        return submission.timestamp
    local = created_at.astimezone()
    return f"{local.year}/{local.month}/{local.day} {local:%H:%M:%S}"


def _company_subject(submission: SubmissionModel) -> str:
    name = " ".join(submission.name.split())
    return f"【新客户咨询】来自 {name} 的物流需求"


def _customer_subject() -> str:
    return f"感谢您的咨询 - {COMPANY_CONFIG.COMPANY_NAME}"


def _render_company_html(submission: SubmissionModel) -> str:
    template = COMPANY_TEMPLATE_PATH.read_text(encoding="utf-8")
    return template.format(
        name=html.escape(submission.name),
        contact=html.escape(submission.contact),
        company=html.escape(submission.company or NOT_FILLED),
        service_type=html.escape(submission.service_type or UNSELECTED_SERVICE_TYPE),
        cargo_type=html.escape(submission.cargo_type or NOT_FILLED),
        destination=html.escape(submission.destination or NOT_FILLED),
        message=html.escape(submission.message),
        submitted_at=format_submitted_at(submission),
        ip=html.escape(submission.ip),
        submission_id=submission.id,
    )


def _render_customer_html(submission: SubmissionModel) -> str:
    template = CUSTOMER_TEMPLATE_PATH.read_text(encoding="utf-8")
    return template.format(
        company_name=html.escape(COMPANY_CONFIG.COMPANY_NAME),
        name=html.escape(submission.name),
        submission_id=submission.id,
        submitted_at=format_submitted_at(submission),
        service_type=html.escape(submission.service_type or UNSELECTED_SERVICE_TYPE),
        phone=html.escape(COMPANY_CONFIG.COMPANY_PHONE),
        email=html.escape(COMPANY_CONFIG.COMPANY_EMAIL),
        address=html.escape(COMPANY_CONFIG.COMPANY_ADDRESS),
        work_hours=html.escape(COMPANY_CONFIG.COMPANY_WORK_HOURS),
    )


def build_company_message(submission: SubmissionModel) -> EmailMessage:
    message = EmailMessage()
    message["From"] = SMTP_CONFIG.from_address
    message["To"] = COMPANY_CONFIG.COMPANY_EMAIL
    message["Subject"] = _company_subject(submission)
    message.set_content(
        "\n".join(
            [
                "新的客户咨询",
                f"姓名: {submission.name}",
                f"联系方式: {submission.contact}",
                f"公司名称: {submission.company or NOT_FILLED}",
                f"服务类型: {submission.service_type or UNSELECTED_SERVICE_TYPE}",
                f"货物类型: {submission.cargo_type or NOT_FILLED}",
                f"目的地: {submission.destination or NOT_FILLED}",
                "详细需求:",
                submission.message,
                "",
                f"提交时间: {format_submitted_at(submission)}",
                f"客户端IP: {submission.ip}",
                f"提交ID: {submission.id}",
            ]
        )
    )
    message.add_alternative(_render_company_html(submission), subtype="html")
    return message


def build_customer_message(submission: SubmissionModel) -> EmailMessage:
    message = EmailMessage()
    message["From"] = SMTP_CONFIG.from_address
    message["To"] = submission.contact
    message["Subject"] = _customer_subject()
    message.set_content(
        "\n".join(
            [
                f"尊敬的 {submission.name}，您好！",
                f"感谢您选择{COMPANY_CONFIG.COMPANY_NAME}！我们已经收到您的咨询信息，"
                "我们的专业团队会在24小时内与您联系。",
                "",
                f"咨询编号: {submission.id}",
                f"提交时间: {format_submitted_at(submission)}",
                f"服务类型: {submission.service_type or UNSELECTED_SERVICE_TYPE}",
                "",
                f"客服电话: {COMPANY_CONFIG.COMPANY_PHONE}",
                f"邮箱: {COMPANY_CONFIG.COMPANY_EMAIL}",
                f"地址: {COMPANY_CONFIG.COMPANY_ADDRESS}",
                f"营业时间: {COMPANY_CONFIG.COMPANY_WORK_HOURS}",
            ]
        )
    )
    message.add_alternative(_render_customer_html(submission), subtype="html")
    return message


async def _send(message: EmailMessage) -> None:
    use_tls_direct = bool(SMTP_CONFIG.SMTP_USE_TLS) and SMTP_CONFIG.SMTP_PORT == 465
    start_tls = bool(SMTP_CONFIG.SMTP_USE_TLS) and not use_tls_direct

    await aiosmtplib.send(
        message,
        hostname=SMTP_CONFIG.SMTP_HOST,
        port=SMTP_CONFIG.SMTP_PORT,
        username=SMTP_CONFIG.SMTP_USER,
        password=SMTP_CONFIG.SMTP_PASS,
        use_tls=use_tls_direct,
        start_tls=start_tls,
        timeout=SMTP_CONFIG.SMTP_TIMEOUT,
    )


async def send_company_notification(submission: SubmissionModel) -> None:
    try:
        await _send(build_company_message(submission))
        logger.info(
            "company_email_sent",
            recipient=COMPANY_CONFIG.COMPANY_EMAIL,
            submission_id=submission.id,
        )
    except Exception as exc:
        logger.error("company_email_failed", submission_id=submission.id, error=str(exc))


async def send_customer_acknowledgment(submission: SubmissionModel) -> None:
    if not submission.contact_is_email:
        logger.info("customer_email_skipped", reason="phone_contact", submission_id=submission.id)
        return

    try:
        await _send(build_customer_message(submission))
        logger.info("customer_email_sent", submission_id=submission.id)
    except Exception as exc:
        logger.error("customer_email_failed", submission_id=submission.id, error=str(exc))


async def send_submission_notifications(submission: SubmissionModel) -> None:
    """
    Уведомления о новой заявке: письмо компании и подтверждение клиенту.

    Best-effort: ошибки только логируются и никогда не выходят наружу,
    заявка к этому моменту уже сохранена.
    """
    if not _smtp_configured():
        logger.warning(
            "submission_email_skipped",
            reason="smtp_not_configured",
            submission_id=submission.id,
        )
        return

    await send_company_notification(submission)
    await send_customer_acknowledgment(submission)
