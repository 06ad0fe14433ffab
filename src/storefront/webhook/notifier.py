"""Checkout notification — posts a summary to the user's webhook.

Runs after the checkout's unit of work has committed. Delivery is best
effort: a failure is logged and the checkout stands.
"""

import structlog
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from storefront.domain import storefront
from storefront.user.events import CheckoutCompleted
from storefront.user.user import User
from storefront.webhook.delivery import get_sender
from storefront.webhook.delivery.port import DeliveryError
from storefront.webhook.webhook import Webhook

logger = structlog.get_logger(__name__)


def checkout_payload(event: CheckoutCompleted) -> dict:
    return {
        "event": "checkout.completed",
        "user_id": str(event.user_id),
        "total_price": event.total_price,
        "balance": event.balance,
    }


@storefront.event_handler(part_of=User)
class WebhookNotifier:
    @handle(CheckoutCompleted)
    def on_checkout_completed(self, event: CheckoutCompleted) -> None:
        try:
            self._notify(event)
        except DeliveryError as exc:
            logger.error("Webhook delivery failed", user_id=str(event.user_id), error=str(exc))
        except Exception:
            # The checkout has already committed; nothing here may fail it.
            logger.exception("Webhook notification crashed", user_id=str(event.user_id))

    def _notify(self, event: CheckoutCompleted) -> None:
        webhook = current_domain.repository_for(Webhook).find_for_user(event.user_id)
        if webhook is None:
            return

        get_sender().send(webhook.url, checkout_payload(event))
        logger.info("Webhook delivered", user_id=str(event.user_id), url=webhook.url)
