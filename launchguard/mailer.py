"""
Outgoing mail for notifications.

A small SMTP client. It is only considered configured when it knows the server
to talk to and the sender address to use.
"""

import logging
import smtplib
from email.message import EmailMessage

logger = logging.getLogger(__name__)


class MailClient:
    """Sends plain text mails through an SMTP server."""

    def __init__(
        self,
        host: str = "",
        port: int = 25,
        username: str = "",
        password: str = "",
        mail_from: str = "",
        use_tls: bool = False,
        timeout: float = 30,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.mail_from = mail_from
        self.use_tls = use_tls
        self.timeout = timeout

    @classmethod
    def from_config(cls, config) -> "MailClient":
        return cls(
            host=config.smtp_host,
            port=config.smtp_port,
            username=config.smtp_username,
            password=config.smtp_password,
            mail_from=config.mail_from,
            use_tls=config.smtp_use_tls,
        )

    def is_configured(self) -> bool:
        return bool(self.host) and bool(self.mail_from)

    def send(self, subject: str, body: str, *recipients: str):
        """Deliver one mail to all recipients. Raises on delivery failure."""
        if not recipients:
            raise ValueError("at least one recipient is required")

        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = self.mail_from
        message["To"] = ", ".join(recipients)
        message.set_content(body)

        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
            if self.use_tls:
                smtp.starttls()
            if self.username:
                smtp.login(self.username, self.password)
            smtp.send_message(message)
        logger.info(f"Sent mail '{subject}' to {len(recipients)} recipient(s)")
