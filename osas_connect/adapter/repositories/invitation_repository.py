from datetime import datetime
from typing import Any, List, Optional
from uuid import UUID

from sqlalchemy import and_, func, or_, update
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from osas_connect.app.repositories.invitation_repository import (
    DuplicatePendingInvitation,
    IInvitationRepository,
)
from osas_connect.domain.entities import InvitationStatus, StaffInvitation


class InvitationRepository(IInvitationRepository):
    """Staff invitation repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, invitation_id: UUID) -> Optional[StaffInvitation]:
        """Get invitation by ID, always reflecting the stored row"""
        stmt = (
            select(StaffInvitation)
            .where(StaffInvitation.id == invitation_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_token_hash(self, token_hash: str) -> Optional[StaffInvitation]:
        stmt = select(StaffInvitation).where(StaffInvitation.token_hash == token_hash)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_pending_by_email(self, email: str) -> Optional[StaffInvitation]:
        stmt = select(StaffInvitation).where(
            StaffInvitation.email == email.lower(),
            StaffInvitation.status == InvitationStatus.pending,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, invitation: StaffInvitation) -> StaffInvitation:
        self.session.add(invitation)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise DuplicatePendingInvitation(str(exc.orig)) from exc
        await self.session.refresh(invitation)
        return invitation

    async def compare_and_set(
        self,
        invitation_id: UUID,
        expected_status: InvitationStatus,
        expected_token_hash: Optional[str] = None,
        **values: Any,
    ) -> Optional[StaffInvitation]:
        conditions = [
            StaffInvitation.id == invitation_id,
            StaffInvitation.status == expected_status,
        ]
        if expected_token_hash is not None:
            conditions.append(StaffInvitation.token_hash == expected_token_hash)

        stmt = (
            update(StaffInvitation)
            .where(*conditions)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount != 1:
            return None
        return await self.get_by_id(invitation_id)

    async def list(
        self,
        status: Optional[InvitationStatus] = None,
        now: Optional[datetime] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[StaffInvitation]:
        stmt = select(StaffInvitation)
        if status is not None:
            stmt = stmt.where(self._status_filter(status, now))

        stmt = stmt.order_by(StaffInvitation.created_at.desc()).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_pending(self, now: datetime) -> int:
        stmt = select(func.count(StaffInvitation.id)).where(
            self._status_filter(InvitationStatus.pending, now)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    @staticmethod
    def _status_filter(status: InvitationStatus, now: Optional[datetime]):
        stored = StaffInvitation.status == status
        if now is None:
            return stored
        stale = and_(
            StaffInvitation.status == InvitationStatus.pending,
            StaffInvitation.expires_at < now,
        )
        if status == InvitationStatus.pending:
            return and_(stored, StaffInvitation.expires_at >= now)
        if status == InvitationStatus.expired:
            return or_(stored, stale)
        return stored
