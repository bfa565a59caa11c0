import logging
from datetime import datetime
from typing import Iterable, Optional

from osas_connect.app.services.notification_dispatcher import (
    ApplicationStatusNotification,
    NotificationDispatcher,
)
from osas_connect.domain.entities import ApplicationStatus, ScholarshipApplication

logger = logging.getLogger(__name__)


def build_status_notification(
    application: ScholarshipApplication,
    previous_status: Optional[ApplicationStatus],
    changed_at: datetime,
    notes: Optional[str] = None,
) -> ApplicationStatusNotification:
    return ApplicationStatusNotification(
        application_id=str(application.id),
        previous_status=previous_status.value if previous_status else None,
        new_status=application.status.value,
        changed_at=changed_at.isoformat(),
        notes=notes,
    )


async def dispatch_status_change(
    dispatcher: NotificationDispatcher,
    recipients: Iterable[str],
    payload: ApplicationStatusNotification,
) -> int:
    """
    Send the status email to each recipient after the change committed.

    A failed delivery is logged and skipped; the transition stands either way.
    Returns the number of recipients the dispatcher accepted.
    """
    delivered = 0
    for recipient in recipients:
        try:
            await dispatcher.send_status_changed(recipient, payload)
        except Exception:
            logger.exception(
                "Failed to dispatch status email for application %s to %s",
                payload.application_id,
                recipient,
            )
            continue
        delivered += 1
    return delivered
