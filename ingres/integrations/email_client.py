# ingres/integrations/email_client.py

"""
Contact-form mail through the Resend REST API.

Two messages per submission: a notification to the team inbox and a
confirmation to the sender. Both carry an HTML body and a plain-text
alternative rendered from it.
"""

import html
import logging
from typing import Dict, List, Optional

import requests
from bs4 import BeautifulSoup

from ingres.config import (
    CONTACT_INBOX,
    EMAIL_FROM_CONTACT,
    EMAIL_FROM_TEAM,
    HTTP_TIMEOUT_SECONDS,
    LINKEDIN_URL,
    RESEND_API_KEY,
    RESEND_API_URL,
)
from ingres.errors import ConfigurationError, UpstreamError


logger = logging.getLogger(__name__)


def html_to_text(body: str) -> str:

    soup = BeautifulSoup(body, "html.parser")

    for br in soup.find_all("br"):
        br.replace_with("\n")

    lines = (line.strip() for line in soup.get_text(separator="\n").splitlines())

    return "\n".join(line for line in lines if line)


def team_notification_html(name: str, email: str, message: str) -> str:

    name = html.escape(name)
    email = html.escape(email)
    message = html.escape(message).replace("\n", "<br>")

    return f"""
        <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
          <h2 style="color: #2563eb; border-bottom: 2px solid #e5e7eb; padding-bottom: 10px;">
            New Contact Form Submission
          </h2>
          <div style="margin: 20px 0;">
            <p><strong>Name:</strong> {name}</p>
            <p><strong>Email:</strong> {email}</p>
          </div>
          <div style="margin: 20px 0;">
            <p><strong>Message:</strong></p>
            <div style="background-color: #f9fafb; padding: 15px; border-left: 4px solid #2563eb; margin-top: 10px;">
              {message}
            </div>
          </div>
          <div style="margin-top: 30px; padding-top: 20px; border-top: 1px solid #e5e7eb; font-size: 12px; color: #6b7280;">
            <p>This message was sent through the INGRES-AI contact form.</p>
          </div>
        </div>
    """


def confirmation_html(name: str, message: str) -> str:

    name = html.escape(name)
    message = html.escape(message)

    return f"""
        <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
          <h2 style="color: #2563eb; border-bottom: 2px solid #e5e7eb; padding-bottom: 10px;">
            Thank you for reaching out!
          </h2>
          <div style="margin: 20px 0;">
            <p>Dear {name},</p>
            <p>Thank you for contacting the INGRES-AI team. We have received your message and will get back to you as soon as possible.</p>
            <div style="background-color: #f0f9ff; padding: 15px; border-radius: 8px; margin: 20px 0;">
              <p><strong>Your message:</strong></p>
              <p style="font-style: italic;">"{message}"</p>
            </div>
            <p>Our team typically responds within 24-48 hours during business days.</p>
            <p>In the meantime, feel free to explore our groundwater analysis tools and connect with us on LinkedIn.</p>
          </div>
          <div style="margin-top: 30px; padding-top: 20px; border-top: 1px solid #e5e7eb;">
            <p>Best regards,<br>
            <strong>The INGRES-AI Team</strong><br>
            <em>Indian Groundwater Research &amp; Environmental Systems</em></p>
            <p style="margin-top: 15px;">
              <a href="{LINKEDIN_URL}" style="color: #2563eb; text-decoration: none;">
                🔗 Connect with us on LinkedIn
              </a>
            </p>
          </div>
        </div>
    """


class ResendEmailClient:

    def __init__(self, api_key: Optional[str] = RESEND_API_KEY):
        self._api_key = api_key

    def send(self, sender: str, to: List[str], subject: str, body_html: str) -> Dict:

        if not self._api_key:
            raise ConfigurationError("RESEND_API_KEY is not configured")

        resp = requests.post(
            RESEND_API_URL,
            headers={"Authorization": f"Bearer {self._api_key}"},
            json={
                "from": sender,
                "to": to,
                "subject": subject,
                "html": body_html,
                "text": html_to_text(body_html),
            },
            timeout=HTTP_TIMEOUT_SECONDS,
        )

        if not resp.ok:

            try:
                detail = resp.json().get("message")
            except ValueError:
                detail = None

            raise UpstreamError(
                f"Email API error: {resp.status_code} - {detail or resp.reason}"
            )

        return resp.json()

    def send_contact_messages(self, name: str, email: str, message: str) -> Dict:

        notification = self.send(
            sender=EMAIL_FROM_CONTACT,
            to=[CONTACT_INBOX],
            subject=f"New Contact Form Message from {name}",
            body_html=team_notification_html(name, email, message),
        )

        confirmation = self.send(
            sender=EMAIL_FROM_TEAM,
            to=[email],
            subject="Thank you for contacting INGRES-AI",
            body_html=confirmation_html(name, message),
        )

        logger.info(
            "Emails sent successfully",
            extra={
                "notification_id": notification.get("id"),
                "confirmation_id": confirmation.get("id"),
            },
        )

        return {"notification": notification, "confirmation": confirmation}
