"""SMTP email adapter with the SMTP client replaced."""

import smtplib

import pytest
from storefront.notifications import get_email_channel, reset_email_channel
from storefront.notifications.smtp_email import SmtpEmailAdapter


class RecordingSMTP:
    instances = []

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.logged_in = None
        self.messages = []
        RecordingSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        pass

    def login(self, username, password):
        self.logged_in = (username, password)

    def send_message(self, message):
        self.messages.append(message)


@pytest.fixture(autouse=True)
def smtp(monkeypatch):
    RecordingSMTP.instances = []
    monkeypatch.setattr(smtplib, "SMTP", RecordingSMTP)
    return RecordingSMTP


class TestSmtpEmailAdapter:
    def test_sends_multipart_message(self, smtp):
        adapter = SmtpEmailAdapter("mail.local", port=2525, username="shop", password="secret")

        result = adapter.send("jane@example.com", "Hello", "plain body", html_body="<p>html body</p>")

        assert result["status"] == "sent"
        client = smtp.instances[0]
        assert (client.host, client.port) == ("mail.local", 2525)
        assert client.logged_in == ("shop", "secret")
        message = client.messages[0]
        assert message["To"] == "jane@example.com"
        assert message.is_multipart()

    def test_failure_reported_in_result(self, monkeypatch):
        def refuse(self, message):
            raise smtplib.SMTPRecipientsRefused({"jane@example.com": (550, b"no such user")})

        monkeypatch.setattr(RecordingSMTP, "send_message", refuse)

        result = SmtpEmailAdapter("mail.local").send("jane@example.com", "Hello", "body")

        assert result["status"] == "failed"
        assert result["message_id"] is None

    def test_selected_when_smtp_host_set(self, monkeypatch):
        monkeypatch.setenv("SMTP_HOST", "mail.local")
        monkeypatch.setenv("SMTP_PORT", "2525")
        reset_email_channel()

        channel = get_email_channel()

        assert isinstance(channel, SmtpEmailAdapter)
        assert channel.port == 2525
