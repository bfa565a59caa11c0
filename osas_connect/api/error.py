from fastapi import status

from osas_connect.libs.result import Error

ERROR_STATUS_CODES = {
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
    "APPLICATION_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "INVITATION_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "SCHOLARSHIP_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "TOKEN_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "INVALID_TRANSITION": status.HTTP_409_CONFLICT,
    "DUPLICATE_APPLICATION": status.HTTP_409_CONFLICT,
    "ALREADY_INVITED": status.HTTP_409_CONFLICT,
    "ALREADY_STAFF": status.HTTP_409_CONFLICT,
    "EMAIL_ALREADY_REGISTERED": status.HTTP_409_CONFLICT,
    "STAFF_ID_TAKEN": status.HTTP_409_CONFLICT,
    "ALREADY_CONSUMED": status.HTTP_409_CONFLICT,
    "TOKEN_EXPIRED": status.HTTP_410_GONE,
    "INVALID_AMOUNT": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "REVIEWER_NOT_STAFF": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "INVALID_ROLE": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "INVALID_STATUS": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "INVALID_PASSWORD": status.HTTP_422_UNPROCESSABLE_ENTITY,
}


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def raise_for_error(error: Error):
    """Raise the HTTP exception matching a use case error code"""
    status_code = ERROR_STATUS_CODES.get(error.code)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)
