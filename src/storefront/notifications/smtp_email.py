"""SMTP email adapter for deployments with a mail relay."""

import os
import smtplib
from email.message import EmailMessage
from email.utils import make_msgid

from storefront.notifications.email_port import DeliveryResult, EmailPort


class SmtpEmailAdapter(EmailPort):
    def __init__(self, host, port=587, username=None, password=None, sender="no-reply@storefront.local", timeout=10):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender
        self.timeout = timeout

    @classmethod
    def from_env(cls):
        return cls(
            host=os.environ["SMTP_HOST"],
            port=int(os.environ.get("SMTP_PORT", "587")),
            username=os.environ.get("SMTP_USER"),
            password=os.environ.get("SMTP_PASSWORD"),
            sender=os.environ.get("SMTP_SENDER", "no-reply@storefront.local"),
        )

    def send(self, to: str, subject: str, body: str, html_body: str | None = None) -> DeliveryResult:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to
        message["Subject"] = subject
        message["Message-ID"] = make_msgid()
        message.set_content(body)
        if html_body:
            message.add_alternative(html_body, subtype="html")

        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as client:
                client.starttls()
                if self.username:
                    client.login(self.username, self.password or "")
                client.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            return {"message_id": None, "status": "failed", "error": str(exc)}

        return {"message_id": message["Message-ID"], "status": "sent"}
