# === portfolio/services/contact.py ===
import time
import logging
from html import escape
from typing import Optional

import httpx

from portfolio.core.config import Settings
from portfolio.core.exceptions import ServiceUnavailableError
from portfolio.schemas.contact import ContactSubmission
from portfolio.services.metrics import MetricsCollector

logger = logging.getLogger(__name__)

SEND_FAILED = "Failed to send email. Please try again later."
EMAILS_ENDPOINT = "/emails"


def build_email_html(submission: ContactSubmission) -> str:
    name = escape(submission.name)
    email = escape(submission.email)
    subject = escape(submission.subject)
    message = escape(submission.message)
    return f"""<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>New Contact Form Submission</title></head>
<body>
  <h1>New Contact Form Submission</h1>
  <table>
    <tr><td><strong>Name:</strong></td><td>{name}</td></tr>
    <tr><td><strong>Email:</strong></td><td><a href="mailto:{email}">{email}</a></td></tr>
    <tr><td><strong>Subject:</strong></td><td>{subject}</td></tr>
  </table>
  <h2>Message:</h2>
  <div style="white-space: pre-wrap;">{message}</div>
  <p>This message was sent via the portfolio contact form.</p>
</body>
</html>"""


def build_email_text(submission: ContactSubmission) -> str:
    return (
        "New Contact Form Submission\n"
        "============================\n\n"
        f"Name: {submission.name}\n"
        f"Email: {submission.email}\n"
        f"Subject: {submission.subject}\n\n"
        "Message:\n"
        "--------\n"
        f"{submission.message}\n\n"
        "---\n"
        "This message was sent via the portfolio contact form."
    )


class ContactService:
    """Relays contact form submissions to the Resend email API."""

    def __init__(
        self,
        settings: Settings,
        metrics: Optional[MetricsCollector] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings
        self.metrics = metrics
        self.transport = transport
        if not settings.RESEND_API_KEY:
            logger.warning("RESEND_API_KEY not configured - contact form will not send emails")

    def _payload(self, submission: ContactSubmission) -> dict:
        return {
            "from": self.settings.CONTACT_FORM_FROM,
            "to": [self.settings.CONTACT_FORM_TO],
            "reply_to": submission.email,
            "subject": f"[Contact Form] {submission.subject}",
            "html": build_email_html(submission),
            "text": build_email_text(submission),
        }

    def _record(self, status_code: int, start_time: float):
        if self.metrics:
            self.metrics.record_api_call(EMAILS_ENDPOINT, "POST", status_code, time.perf_counter() - start_time)

    async def send(self, submission: ContactSubmission) -> str:
        """Sends the email and returns the provider's message id."""
        logger.info(f"Processing contact form submission from {submission.email}")

        timeout = httpx.Timeout(self.settings.EMAIL_TIMEOUT, connect=min(5.0, self.settings.EMAIL_TIMEOUT))
        start_time = time.perf_counter()
        try:
            async with httpx.AsyncClient(
                base_url=self.settings.RESEND_API_URL,
                timeout=timeout,
                transport=self.transport,
            ) as client:
                response = await client.post(
                    EMAILS_ENDPOINT,
                    json=self._payload(submission),
                    headers={"Authorization": f"Bearer {self.settings.RESEND_API_KEY}"},
                )
        except httpx.HTTPError as e:
            self._record(0, start_time)
            logger.error(f"Email provider request failed: {e!r}")
            raise ServiceUnavailableError(SEND_FAILED) from e

        self._record(response.status_code, start_time)

        if response.is_error:
            logger.error(f"Email provider error {response.status_code}: {response.text}")
            raise ServiceUnavailableError(SEND_FAILED)

        try:
            message_id = response.json()["id"]
        except (ValueError, KeyError, TypeError) as e:
            logger.error(f"Unexpected email provider response: {response.text}")
            raise ServiceUnavailableError(SEND_FAILED) from e

        logger.info(f"Contact form email sent successfully. Message ID: {message_id}")
        return message_id
