# app/services/email_service.py
"""Outbound email for case events.

Every ``send_*`` helper raises on failure. Callers treat email as a side
effect: they wrap the call, log the error and carry on with the request.
"""
import html
import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from typing import Iterable, List, Optional, Union

from app.core.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)

SUBJECT_PREFIX = "[Legal Case Management]"


class EmailConfigError(RuntimeError):
    """Raised when the SMTP configuration is incomplete."""


@dataclass
class SMTPConfig:
    host: str
    port: int
    username: Optional[str]
    password: Optional[str]
    use_tls: bool
    from_email: str
    timeout_seconds: float


def _as_list(recipient: Union[str, Iterable[str]]) -> List[str]:
    if isinstance(recipient, str):
        return [recipient]
    return [r for r in recipient if r]


def _wrap_html(subject: str, content: str) -> str:
    return (
        "<!DOCTYPE html><html><head><meta charset=\"utf-8\">"
        f"<title>{html.escape(subject)}</title></head>"
        "<body style=\"font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;\">"
        "<h1 style=\"font-size: 20px;\">Legal Case Management</h1>"
        f"{content}"
        "<p style=\"color: #64748b; font-size: 13px;\">"
        "This is an automated notification. Please do not reply to this email.</p>"
        "</body></html>"
    )


class EmailService:
    def __init__(self, settings: Settings = None):
        self.settings = settings or default_settings

    def load_config(self) -> SMTPConfig:
        s = self.settings
        if not s.SMTP_HOST or not s.SMTP_FROM_EMAIL:
            raise EmailConfigError("SMTP host and from-address must be configured before sending email.")
        if s.SMTP_PORT <= 0:
            raise EmailConfigError("SMTP port must be a positive integer.")
        if s.SMTP_USERNAME and not s.SMTP_PASSWORD:
            raise EmailConfigError("SMTP password is not available.")
        timeout = s.SMTP_TIMEOUT_SECONDS if s.SMTP_TIMEOUT_SECONDS > 0 else 10.0
        return SMTPConfig(
            host=s.SMTP_HOST,
            port=s.SMTP_PORT,
            username=s.SMTP_USERNAME or None,
            password=s.SMTP_PASSWORD or None,
            use_tls=s.SMTP_USE_TLS,
            from_email=s.SMTP_FROM_EMAIL,
            timeout_seconds=timeout,
        )

    def send_email(
        self,
        recipient: Union[str, Iterable[str]],
        subject: str,
        body: str,
        html_body: Optional[str] = None,
    ) -> None:
        recipients = _as_list(recipient)
        if not recipients:
            raise ValueError("At least one recipient must be provided")
        config = self.load_config()

        msg = EmailMessage()
        msg["Subject"] = f"{SUBJECT_PREFIX} {subject}"
        msg["From"] = f"Legal Case Management <{config.from_email}>"
        msg["To"] = ", ".join(recipients)
        msg.set_content(body)
        if html_body:
            msg.add_alternative(_wrap_html(subject, html_body), subtype="html")

        try:
            with smtplib.SMTP(config.host, config.port, timeout=config.timeout_seconds) as smtp:
                if config.use_tls:
                    smtp.starttls()
                if config.username and config.password:
                    smtp.login(config.username, config.password)
                smtp.send_message(msg)
        except Exception:
            logger.error("Failed to send email to %s", recipients)
            raise
        logger.info("Email sent to %s: %s", recipients, subject)

    # ------------------------------------------------------------------
    # templated messages
    # ------------------------------------------------------------------
    def send_case_approval(self, client_email: str, lawyer_email: Optional[str], case_title: str, pnr: str, hearing_date: str):
        subject = f"Case Approved - {case_title}"
        text = f'Your case "{case_title}" has been approved. PNR: {pnr}. Hearing Date: {hearing_date}'
        content = (
            f"<h2>Case Approved</h2><p>Your case <strong>{html.escape(case_title)}</strong> has been approved "
            f"by the police department.</p><p><strong>PNR:</strong> {html.escape(pnr)}<br>"
            f"<strong>Hearing date:</strong> {html.escape(hearing_date)}</p>"
        )
        self.send_email(client_email, subject, text, content)
        if lawyer_email:
            self.send_email(lawyer_email, subject, text, content)

    def send_case_rejection(self, client_email: str, lawyer_email: Optional[str], case_title: str, reason: Optional[str] = None):
        subject = f"Case Rejected - {case_title}"
        text = f'Your case "{case_title}" has been rejected.'
        content = f"<h2>Case Rejected</h2><p>Your case <strong>{html.escape(case_title)}</strong> has been rejected.</p>"
        if reason:
            text += f" Reason: {reason}"
            content += f"<p><strong>Reason:</strong> {html.escape(reason)}</p>"
        self.send_email(client_email, subject, text, content)
        if lawyer_email:
            self.send_email(lawyer_email, subject, text, content)

    def send_document_upload(self, document_name: str, case_title: str, uploader_name: str, recipient_email: str, recipient_role: str):
        subject = f"New Document: {document_name}"
        text = f'{uploader_name} uploaded "{document_name}" to case "{case_title}".'
        if recipient_role == "client":
            text += " You can view it in your document vault."
        content = (
            f"<h2>New Document Uploaded</h2><p><strong>{html.escape(uploader_name)}</strong> has uploaded "
            f"a new document for case <strong>{html.escape(case_title)}</strong>.</p>"
            f"<p><strong>Document:</strong> {html.escape(document_name)}</p>"
        )
        self.send_email(recipient_email, subject, text, content)

    def send_case_request(self, case_title: str, client_name: str, lawyer_email: str):
        subject = f"New Case Request: {case_title}"
        text = f'You have received a new case request "{case_title}" from {client_name}.'
        content = (
            f"<h2>New Case Request</h2><p>You have received a new case request from "
            f"<strong>{html.escape(client_name)}</strong>.</p>"
            f"<p><strong>Case:</strong> {html.escape(case_title)}</p>"
        )
        self.send_email(lawyer_email, subject, text, content)

    def send_new_message(self, sender_name: str, recipient_email: str, message_preview: str):
        subject = f"New Message from {sender_name}"
        preview = message_preview[:100]
        text = f'You have received a new message from {sender_name}: "{preview}"'
        content = (
            f"<h2>New Message</h2><p>You have received a new message from "
            f"<strong>{html.escape(sender_name)}</strong>.</p>"
            f"<blockquote>{html.escape(preview)}</blockquote>"
        )
        self.send_email(recipient_email, subject, text, content)


def send_quietly(send, *args, **kwargs) -> bool:
    """Run an email helper without letting its failure reach the caller."""
    try:
        send(*args, **kwargs)
        return True
    except EmailConfigError as exc:
        logger.warning("Email not sent: %s", exc)
    except Exception:
        logger.exception("Email sending failed")
    return False
