"""Account removal — command and handler.

Deleting a user also drops the sessions issued to it and its webhook.
"""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.auth.session import Session
from storefront.domain import storefront
from storefront.user.user import User
from storefront.webhook.webhook import Webhook

logger = structlog.get_logger(__name__)


@storefront.command(part_of="User")
class DeleteUser:
    user_id = Identifier(required=True)


@storefront.command_handler(part_of=User)
class DeleteUserHandler:
    @handle(DeleteUser)
    def delete_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)

        session_repo = current_domain.repository_for(Session)
        for session in session_repo.find_for_user(user.id):
            session_repo._dao.delete(session)

        webhook_repo = current_domain.repository_for(Webhook)
        webhook = webhook_repo.find_for_user(user.id)
        if webhook is not None:
            webhook_repo._dao.delete(webhook)

        repo._dao.delete(user)
        logger.info("User deleted", user_id=str(command.user_id))
