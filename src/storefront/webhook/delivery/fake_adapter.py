"""In-memory webhook sender for development and testing.

Records every delivery instead of making a request. Can be configured to
fail, to exercise the failure path of the checkout notification.
"""

from storefront.webhook.delivery.port import DeliveryError, WebhookSender


class FakeSender(WebhookSender):
    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Connection refused"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Connection refused") -> None:
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def send(self, url: str, payload: dict) -> None:
        self.calls.append({"url": url, "payload": payload})
        if not self.should_succeed:
            raise DeliveryError(self.failure_reason)
