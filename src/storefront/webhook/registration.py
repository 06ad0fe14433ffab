"""Webhook registration — commands and handler.

Registering again replaces the URL of the user's existing webhook.
"""

from urllib.parse import urlparse

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.webhook.webhook import Webhook

logger = structlog.get_logger(__name__)


def _check_url(url):
    try:
        parsed = urlparse(url)
    except ValueError:
        raise ValidationError({"url": ["Webhook URL is malformed."]}) from None
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValidationError({"url": ["Webhook URL must be an absolute http(s) URL."]})


@storefront.command(part_of="Webhook")
class RegisterWebhook:
    user_id = Identifier(required=True)
    url = String(required=True, max_length=2048)


@storefront.command(part_of="Webhook")
class RemoveWebhook:
    user_id = Identifier(required=True)


@storefront.command_handler(part_of=Webhook)
class ManageWebhookHandler:
    @handle(RegisterWebhook)
    def register_webhook(self, command):
        _check_url(command.url)

        repo = current_domain.repository_for(Webhook)
        webhook = repo.find_for_user(command.user_id)
        if webhook is None:
            webhook = Webhook.register(user_id=command.user_id, url=command.url)
        else:
            webhook.change_url(command.url)
        repo.add(webhook)

        logger.info("Webhook registered", user_id=str(command.user_id), url=command.url)
        return str(webhook.id)

    @handle(RemoveWebhook)
    def remove_webhook(self, command):
        repo = current_domain.repository_for(Webhook)
        webhook = repo.find_for_user(command.user_id)
        if webhook is None:
            raise ObjectNotFoundError({"_entity": "No webhook registered"})

        repo._dao.delete(webhook)
        logger.info("Webhook removed", user_id=str(command.user_id))
