# ivisitor/services/notification_service.py
"""
Notification Sender — best-effort email over SMTP.

Bodies are rendered while the request still owns the DB session; the SMTP
round-trip itself is scheduled on FastAPI BackgroundTasks so it runs after the
response is sent. send_email() never raises: failures are logged and reported
as False, and nothing is retried.
"""

import smtplib
from email.message import EmailMessage
from fastapi import BackgroundTasks
from ivisitor.config import settings
from ivisitor.models.visitor import Visitor
from ivisitor.utils.templates import render
from ivisitor.utils.logger import get_logger

logger = get_logger(__name__)


def _open_smtp() -> smtplib.SMTP:
    if settings.SMTP_USE_SSL:
        return smtplib.SMTP_SSL(settings.SMTP_HOST, settings.SMTP_PORT, timeout=settings.SMTP_TIMEOUT)
    smtp = smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=settings.SMTP_TIMEOUT)
    smtp.ehlo()
    smtp.starttls()
    return smtp


def send_email(to_email: str, subject: str, html_body: str, text_body: str | None = None) -> bool:
    """Send one HTML email. Returns True on success, False otherwise."""
    if not settings.mail_configured:
        logger.info(f"[MAIL] Transport not configured — skipping '{subject}' to {to_email}")
        return False

    msg = EmailMessage()
    msg["Subject"] = subject
    msg["From"] = settings.mail_sender
    msg["To"] = to_email
    msg.set_content(text_body or "This message requires an HTML-capable mail client.")
    msg.add_alternative(html_body, subtype="html")

    smtp = None
    try:
        smtp = _open_smtp()
        smtp.login(settings.EMAIL_USER, settings.EMAIL_PASS)
        smtp.send_message(msg)
        logger.info(f"[MAIL] Sent '{subject}' to {to_email}")
        return True
    except smtplib.SMTPAuthenticationError as e:
        logger.error(f"[MAIL] Authentication failed sending to {to_email}: {e}")
        return False
    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"[MAIL] Failed to send '{subject}' to {to_email}: {e}")
        return False
    finally:
        if smtp is not None:
            try:
                smtp.quit()
            except (smtplib.SMTPException, OSError) as e:
                logger.debug(f"[MAIL] Error closing SMTP connection: {e}")


def approval_links(visitor: Visitor) -> tuple[str, str]:
    base = settings.BACKEND_URL.rstrip("/")
    return (
        f"{base}/api/approve/{visitor.id}/{visitor.approval_token}",
        f"{base}/api/reject/{visitor.id}/{visitor.approval_token}",
    )


def queue_resident_request(background_tasks: BackgroundTasks, visitor: Visitor):
    """Email the resident a new request with one-click approve/reject links."""
    approve_url, reject_url = approval_links(visitor)
    html = render("emails/resident_request.html", visitor=visitor,
                  approve_url=approve_url, reject_url=reject_url)
    text = (f"{visitor.visitor_name} ({visitor.visitor_email}) wants to visit: {visitor.visit_reason}\n"
            f"Approve: {approve_url}\nReject: {reject_url}\n")
    background_tasks.add_task(send_email, visitor.resident_email,
                              "New Visitor Request - iVisitor", html, text)


def queue_visit_approved(background_tasks: BackgroundTasks, visitor: Visitor):
    """Email the visitor their verification code."""
    html = render("emails/visit_approved.html", visitor=visitor)
    text = (f"Your visit has been approved. Verification code: {visitor.verification_code}\n"
            "Show this code to the guard upon arrival.\n")
    background_tasks.add_task(send_email, visitor.visitor_email,
                              "Visit Approved - Verification Code", html, text)


def queue_visit_rejected(background_tasks: BackgroundTasks, visitor: Visitor):
    html = render("emails/visit_rejected.html", visitor=visitor)
    background_tasks.add_task(send_email, visitor.visitor_email, "Visit Request Update", html,
                              "Your visit request has not been approved at this time.\n")
