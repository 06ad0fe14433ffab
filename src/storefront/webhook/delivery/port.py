"""Webhook sender port (abstract interface).

Adapters deliver a JSON payload to a URL and raise ``DeliveryError`` when
the endpoint cannot be reached or answers with an error status.
"""

from abc import ABC, abstractmethod


class DeliveryError(Exception):
    """A webhook payload could not be delivered."""


class WebhookSender(ABC):
    @abstractmethod
    def send(self, url: str, payload: dict) -> None:
        """POST ``payload`` as JSON to ``url``."""
        ...
