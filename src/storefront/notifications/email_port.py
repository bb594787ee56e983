"""Outbound email port used for customer notifications."""

from abc import ABC, abstractmethod
from typing import NotRequired, TypedDict


class DeliveryResult(TypedDict):
    message_id: str | None
    status: str  # "sent" or "failed"
    error: NotRequired[str]


def delivered(result: DeliveryResult) -> bool:
    return result.get("status") == "sent"


class EmailPort(ABC):
    """Delivers one message to one customer address.

    Adapters report failures in the returned result instead of raising, so a
    broken mail relay never rolls back the operation that triggered the email.
    """

    @abstractmethod
    def send(self, to: str, subject: str, body: str, html_body: str | None = None) -> DeliveryResult: ...
