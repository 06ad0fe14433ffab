"""Webhook sender factory.

get_sender() builds the sender named by the ``webhook_sender`` setting on
first use; set_sender() and reset_sender() swap it out in tests.
"""

from storefront.config import get_settings
from storefront.webhook.delivery.fake_adapter import FakeSender
from storefront.webhook.delivery.http_adapter import HttpSender
from storefront.webhook.delivery.port import WebhookSender

_current_sender: WebhookSender | None = None


def _build_sender() -> WebhookSender:
    settings = get_settings()
    if settings.webhook_sender == "fake":
        return FakeSender()
    return HttpSender(timeout=settings.webhook_timeout_seconds)


def get_sender() -> WebhookSender:
    global _current_sender
    if _current_sender is None:
        _current_sender = _build_sender()
    return _current_sender


def set_sender(sender: WebhookSender) -> None:
    global _current_sender
    _current_sender = sender


def reset_sender() -> None:
    global _current_sender
    _current_sender = None
