"""Webhook sender that POSTs over HTTP with ``requests``."""

import requests

from storefront.webhook.delivery.port import DeliveryError, WebhookSender


class HttpSender(WebhookSender):
    def __init__(self, timeout: float = 5.0) -> None:
        self.timeout = timeout
        self.session = requests.Session()

    def send(self, url: str, payload: dict) -> None:
        try:
            response = self.session.post(url, json=payload, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise DeliveryError(str(exc)) from exc
