"""
Email service for order confirmations.

Sends multipart (HTML + text) messages over SMTP. When SMTP is not
configured the message is logged and skipped.
"""

import logging
import smtplib
from datetime import datetime
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

from jinja2 import Template

from .config import settings

logger = logging.getLogger(__name__)

ORDER_CONFIRMATION_HTML_TEMPLATE = """
<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <title>Order Confirmed - {{ app_name }}</title>
    <style>
        body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; }
        .container { max-width: 600px; margin: 0 auto; padding: 20px; }
        .header { background: #e85d04; color: white; padding: 20px; text-align: center; }
        .content { padding: 30px 20px; background: #f9f9f9; }
        .footer { padding: 20px; text-align: center; font-size: 12px; color: #666; }
    </style>
</head>
<body>
    <div class="container">
        <div class="header">
            <h1>{{ app_name }}</h1>
            <h2>Your order is confirmed</h2>
        </div>
        <div class="content">
            <p>Hi {{ name }},</p>
            <p>We received your payment for order <strong>#{{ order_id }}</strong>.</p>
            <p>Total paid: <strong>${{ total }}</strong></p>
            <p>Current status: {{ status }}</p>
            <p>You can follow your order live from the app.</p>
        </div>
        <div class="footer">
            <p>&copy; {{ current_year }} {{ app_name }}</p>
        </div>
    </div>
</body>
</html>
"""

ORDER_CONFIRMATION_TEXT_TEMPLATE = """
Hi {{ name }},

We received your payment for order #{{ order_id }}.
Total paid: ${{ total }}
Current status: {{ status }}

You can follow your order live from the app.

(c) {{ current_year }} {{ app_name }}
"""


class EmailService:
    """Service for sending transactional emails."""

    def __init__(self):
        self.smtp_host = settings.smtp_server
        self.smtp_port = settings.smtp_port
        self.smtp_username = settings.smtp_username
        self.smtp_password = settings.smtp_password
        self.smtp_use_tls = settings.smtp_use_tls
        self.from_email = settings.smtp_from_email
        self.from_name = settings.app_name

    def _create_smtp_connection(self) -> Optional[smtplib.SMTP]:
        try:
            server = smtplib.SMTP(self.smtp_host, self.smtp_port)

            if self.smtp_use_tls:
                server.starttls()

            if self.smtp_username and self.smtp_password:
                server.login(self.smtp_username, self.smtp_password)

            return server
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to create SMTP connection: {e}")
            return None

    def _send_email(
        self, to_email: str, subject: str, html_content: str, text_content: str
    ) -> bool:
        """Send email with both HTML and text content."""
        if not settings.email_enabled:
            logger.info(f"Email not sent to {to_email} - SMTP not configured")
            return False

        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = f"{self.from_name} <{self.from_email}>"
        msg["To"] = to_email
        msg.attach(MIMEText(text_content, "plain"))
        msg.attach(MIMEText(html_content, "html"))

        server = self._create_smtp_connection()
        if not server:
            return False

        try:
            server.send_message(msg)
        except smtplib.SMTPException as e:
            logger.error(f"Failed to send email to {to_email}: {e}")
            return False
        finally:
            server.quit()

        logger.info(f"Email sent successfully to {to_email}")
        return True

    def send_order_confirmation_email(self, email: str, name: str, order) -> bool:
        """
        Send the payment/order confirmation email.

        Args:
            email: Recipient email address
            name: Recipient display name
            order: Paid order

        Returns:
            True if email sent successfully, False otherwise
        """
        context = {
            "app_name": settings.app_name,
            "name": name or "there",
            "order_id": order.id,
            "total": f"{order.total_amount:.2f}",
            "status": order.status,
            "current_year": datetime.utcnow().year,
        }
        html_content = Template(ORDER_CONFIRMATION_HTML_TEMPLATE).render(**context)
        text_content = Template(ORDER_CONFIRMATION_TEXT_TEMPLATE).render(**context)

        return self._send_email(
            to_email=email,
            subject=f"{settings.app_name} - Order #{order.id} confirmed",
            html_content=html_content,
            text_content=text_content,
        )


email_service = EmailService()


def send_order_confirmation_email(email: str, name: str, order) -> bool:
    """Convenience function for sending the order confirmation email."""
    return email_service.send_order_confirmation_email(email, name, order)
