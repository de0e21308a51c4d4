# =========================================================================
# CUSTOM EXCEPTIONS
# =========================================================================

from enum import Enum


class ErrorKind(str, Enum):
    """Failure categories reported in service results."""
    NOT_FOUND = 'not_found'
    UNAUTHORIZED = 'unauthorized'
    CONFLICT = 'conflict'
    VALIDATION = 'validation'
    EXPIRED = 'expired'


class HomefinderError(Exception):
    """Base exception for service-level failures"""
    kind = ErrorKind.VALIDATION

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(HomefinderError):
    """Entity absent for the given id or key"""
    kind = ErrorKind.NOT_FOUND


class UnauthorizedError(HomefinderError):
    """Credentials or participant check failed"""
    kind = ErrorKind.UNAUTHORIZED


class ConflictError(HomefinderError):
    """Duplicate email or favorite"""
    kind = ErrorKind.CONFLICT


class ValidationError(HomefinderError):
    """Missing or malformed input"""
    kind = ErrorKind.VALIDATION


class ExpiredError(HomefinderError):
    """Password reset token past its deadline"""
    kind = ErrorKind.EXPIRED
