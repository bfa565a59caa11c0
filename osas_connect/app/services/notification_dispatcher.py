"""
Notification Dispatcher interface.

The workflows only produce the message payload; delivery (templating, SMTP,
queues) belongs to the dispatcher implementation.
"""

from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel


class InvitationNotification(BaseModel):
    """Content contract of the staff invitation email"""

    inviter_name: str
    accept_url: str
    expires_at: str  # ISO 8601


class ApplicationStatusNotification(BaseModel):
    """Content contract of the application status email"""

    application_id: str
    previous_status: Optional[str] = None  # None for a new submission
    new_status: str
    changed_at: str  # ISO 8601
    notes: Optional[str] = None


class NotificationDispatcher(ABC):
    @abstractmethod
    async def send_invitation(
        self, recipient: str, payload: InvitationNotification
    ) -> None:
        """Deliver an invitation email to `recipient`"""
        pass

    @abstractmethod
    async def send_status_changed(
        self, recipient: str, payload: ApplicationStatusNotification
    ) -> None:
        """Deliver an application status email to `recipient`"""
        pass
