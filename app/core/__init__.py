"""Core module exports."""

from .exceptions import (
    InternalException,
    InvalidArgumentException,
    MessagingException,
    NotFoundException,
    UnauthorizedException,
)
from .security import (
    create_access_token,
    decode_token,
    ALGORITHM,
    ACCESS_TOKEN_EXPIRE_DAYS,
)

__all__ = [
    "InternalException",
    "InvalidArgumentException",
    "MessagingException",
    "NotFoundException",
    "UnauthorizedException",
    "create_access_token",
    "decode_token",
    "ALGORITHM",
    "ACCESS_TOKEN_EXPIRE_DAYS",
]
