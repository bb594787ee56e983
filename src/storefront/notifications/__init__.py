"""Email channel registry.

Uses the fake adapter by default; an SMTP adapter is configured when
``SMTP_HOST`` is set in the environment.
"""

import os

from storefront.notifications.email_port import EmailPort

_email_channel: EmailPort | None = None


def get_email_channel() -> EmailPort:
    """Return the configured email adapter (singleton)."""
    global _email_channel
    if _email_channel is None:
        if os.environ.get("SMTP_HOST"):
            from storefront.notifications.smtp_email import SmtpEmailAdapter

            _email_channel = SmtpEmailAdapter.from_env()
        else:
            from storefront.notifications.fake_email import FakeEmailAdapter

            _email_channel = FakeEmailAdapter()
    return _email_channel


def set_email_channel(channel: EmailPort) -> None:
    """Override the active email adapter (useful for tests)."""
    global _email_channel
    _email_channel = channel


def reset_email_channel() -> None:
    """Reset to the default adapter."""
    global _email_channel
    _email_channel = None
