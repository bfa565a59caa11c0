"""
Reporting DTOs

Read-only aggregates over applications and invitations for dashboards.
"""

from typing import Dict, List

from pydantic import BaseModel

from osas_connect.app.use_cases.applications.dtos import ApplicationResponse
from osas_connect.app.use_cases.invitations.dtos import InvitationResponse


class DashboardStats(BaseModel):
    total_applications: int
    applications_by_status: Dict[str, int]
    pending_applications: int
    approved_applications: int
    rejected_applications: int
    pending_invitations: int
    total_funds_allocated: str
    application_success_rate: int  # percent, rounded


class DashboardResponse(BaseModel):
    stats: DashboardStats
    recent_applications: List[ApplicationResponse]
    pending_invitations: List[InvitationResponse]
