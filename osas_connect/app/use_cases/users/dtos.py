from pydantic import BaseModel


class DeleteUserResponse(BaseModel):
    """Response for delete user use case"""

    user_id: str
    status: str
