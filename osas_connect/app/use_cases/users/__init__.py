"""
User Management Use Cases
"""

from .delete_user_use_case import DeleteUserUseCase
from .dtos import DeleteUserResponse

__all__ = ["DeleteUserUseCase", "DeleteUserResponse"]
