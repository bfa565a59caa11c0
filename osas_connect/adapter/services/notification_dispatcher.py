"""
Notification dispatchers.

The default dispatcher writes each message to the application log; an SMTP
or provider-backed dispatcher plugs in through the same interface.
"""

import logging

from osas_connect.app.services.notification_dispatcher import (
    ApplicationStatusNotification,
    InvitationNotification,
    NotificationDispatcher,
)

logger = logging.getLogger(__name__)


class LoggingNotificationDispatcher(NotificationDispatcher):
    """Delivers notifications to the log instead of a mailbox"""

    async def send_invitation(self, recipient: str, payload: InvitationNotification) -> None:
        logger.info(
            "Invitation for %s from %s (expires %s): %s",
            recipient,
            payload.inviter_name,
            payload.expires_at,
            payload.accept_url,
        )

    async def send_status_changed(
        self, recipient: str, payload: ApplicationStatusNotification
    ) -> None:
        logger.info(
            "Application %s for %s: %s -> %s at %s",
            payload.application_id,
            recipient,
            payload.previous_status or "(new)",
            payload.new_status,
            payload.changed_at,
        )
