import logging
from datetime import datetime

from osas_connect.app.services.invitation_tokens import build_accept_url
from osas_connect.app.services.notification_dispatcher import (
    InvitationNotification,
    NotificationDispatcher,
)
from osas_connect.domain.entities import User

logger = logging.getLogger(__name__)


def build_invitation_notification(
    inviter: User, base_url: str, token: str, expires_at: datetime
) -> InvitationNotification:
    return InvitationNotification(
        inviter_name=inviter.full_name or inviter.email,
        accept_url=build_accept_url(base_url, token),
        expires_at=expires_at.isoformat(),
    )


async def dispatch_invitation(
    dispatcher: NotificationDispatcher, recipient: str, payload: InvitationNotification
) -> bool:
    """
    Hand the invitation email to the dispatcher after the transaction committed.

    Delivery failures are logged and reported as False; the invitation stays
    valid and can be resent.
    """
    try:
        await dispatcher.send_invitation(recipient, payload)
    except Exception:
        logger.exception("Failed to dispatch invitation email to %s", recipient)
        return False
    return True
