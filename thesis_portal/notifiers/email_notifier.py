import logging
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

import aiosmtplib

from thesis_portal.core.config import settings
from thesis_portal.notifiers.templates import render_html

logger = logging.getLogger(__name__)


class EmailNotifier:
    """Outbound SMTP delivery of student notifications."""

    def __init__(self, host: str | None = None, port: int | None = None,
                 user: str | None = None, password: str | None = None,
                 start_tls: bool | None = None):
        self.smtp_host = host if host is not None else settings.SMTP_HOST
        self.smtp_port = port if port is not None else settings.SMTP_PORT
        self.smtp_user = user if user is not None else settings.SMTP_USER
        self.smtp_password = password if password is not None else settings.SMTP_PASSWORD
        self.start_tls = start_tls if start_tls is not None else settings.SMTP_START_TLS
        self.from_email = settings.EMAIL_FROM
        self.from_name = settings.EMAIL_FROM_NAME

    @property
    def is_configured(self) -> bool:
        return bool(self.smtp_host)

    def build_message(self, notification_id: int, to_email: str, subject: str, body: str) -> MIMEMultipart:
        message = MIMEMultipart("alternative")
        message["From"] = f"{self.from_name} <{self.from_email}>"
        message["To"] = to_email
        message["Subject"] = subject
        message["X-Notification-Id"] = str(notification_id)
        message.attach(MIMEText(body, "plain"))
        message.attach(MIMEText(render_html(body), "html"))
        return message

    async def send_email_notification(self, notification_id: int, to_email: str,
                                      subject: str, body: str) -> bool:
        """Returns True when the relay accepted the message."""
        if not self.is_configured:
            logger.warning("[Email] SMTP not configured, notification %s not sent", notification_id)
            return False

        message = self.build_message(notification_id, to_email, subject, body)
        try:
            await aiosmtplib.send(
                message,
                hostname=self.smtp_host,
                port=self.smtp_port,
                username=self.smtp_user or None,
                password=self.smtp_password or None,
                start_tls=self.start_tls,
            )
        except aiosmtplib.SMTPException as e:
            logger.error("[Email] Failed to send notification %s to %s: %s", notification_id, to_email, e)
            return False

        logger.info("[Email] Notification %s sent to %s: %s", notification_id, to_email, subject)
        return True
