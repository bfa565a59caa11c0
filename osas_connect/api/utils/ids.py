from uuid import UUID

from fastapi import status

from osas_connect.api.error import ClientError
from osas_connect.libs.result import Error


def parse_uuid(value: str, code: str, label: str) -> UUID:
    """Parse a path/query identifier, failing with 400 on a malformed value"""
    try:
        return UUID(value)
    except ValueError:
        raise ClientError(
            Error(code, f"Invalid {label} format"),
            status_code=status.HTTP_400_BAD_REQUEST,
        )
