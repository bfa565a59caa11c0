"""
Reporting Use Cases
"""

from .dtos import DashboardResponse, DashboardStats
from .get_dashboard_stats_use_case import GetDashboardStatsUseCase

__all__ = ["GetDashboardStatsUseCase", "DashboardResponse", "DashboardStats"]
