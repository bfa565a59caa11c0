"""
Scholarship Application Use Cases

The application status workflow: submission, review transitions,
reviewer assignment and reads.
"""

from .advance_application_use_case import AdvanceApplicationUseCase
from .approve_application_use_case import ApproveApplicationUseCase
from .assign_reviewer_use_case import AssignReviewerUseCase
from .dtos import (
    ApplicationDetailResponse,
    ApplicationListResponse,
    ApplicationResponse,
)
from .get_application_use_case import GetApplicationUseCase
from .list_applications_use_case import ListApplicationsUseCase
from .reject_application_use_case import RejectApplicationUseCase
from .submit_application_use_case import SubmitApplicationUseCase

__all__ = [
    "SubmitApplicationUseCase",
    "AdvanceApplicationUseCase",
    "ApproveApplicationUseCase",
    "RejectApplicationUseCase",
    "AssignReviewerUseCase",
    "GetApplicationUseCase",
    "ListApplicationsUseCase",
    "ApplicationResponse",
    "ApplicationDetailResponse",
    "ApplicationListResponse",
]
