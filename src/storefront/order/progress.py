"""Order payment and delivery — commands and handler.

Who may mark an order is decided at the HTTP layer; these handlers only
guard against setting a flag twice.
"""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import Order

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class MarkOrderPaid:
    order_id = Identifier(required=True)


@storefront.command(part_of="Order")
class MarkOrderDelivered:
    order_id = Identifier(required=True)


@storefront.command_handler(part_of=Order)
class OrderProgressHandler:
    @handle(MarkOrderPaid)
    def mark_paid(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.mark_paid()
        repo.add(order)
        logger.info("Order paid", order_id=str(command.order_id))

    @handle(MarkOrderDelivered)
    def mark_delivered(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.mark_delivered()
        repo.add(order)
        logger.info("Order delivered", order_id=str(command.order_id))
