"""Custom exceptions for the messaging service."""

from fastapi import HTTPException, status


class MessagingException(HTTPException):
    """Base exception for messaging operations."""
    pass


class InvalidArgumentException(MessagingException):
    """Exception for malformed ids, empty content, self-messaging or a malformed meeting proposal."""

    def __init__(self, detail: str = "Invalid argument"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
        )


class NotFoundException(MessagingException):
    """Exception when a recipient, product or message cannot be resolved."""

    def __init__(self, detail: str = "Resource not found"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
        )


class UnauthorizedException(MessagingException):
    """
    Exception when the actor may not act on a message.

    Raised when someone other than the recipient tries to mark a
    message as read.

    Status Code: 403 Forbidden

    Response Body:
        {
            "detail": "Not authorized to mark this message as read"
        }
    """

    def __init__(self, detail: str = "Not authorized to mark this message as read"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
        )


class InternalException(MessagingException):
    """Exception when the message store fails to persist a change."""

    def __init__(self, detail: str = "Internal server error"):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
        )


__all__ = [
    "MessagingException",
    "InvalidArgumentException",
    "NotFoundException",
    "UnauthorizedException",
    "InternalException",
]
