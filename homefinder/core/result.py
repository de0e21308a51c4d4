"""Uniform result envelope returned by every service call."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar

from .exceptions import ErrorKind

T = TypeVar('T')


def _serialize(value: Any) -> Any:
    if hasattr(value, 'to_dict'):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_serialize(v) for v in value]
    if isinstance(value, dict):
        return {k: _serialize(v) for k, v in value.items()}
    if isinstance(value, Enum):
        return value.value
    return value


@dataclass
class ServiceResult(Generic[T]):
    """Success/failure envelope: `{success, data?, message?}` plus an error kind."""
    success: bool
    data: Optional[T] = None
    message: Optional[str] = None
    error: Optional[ErrorKind] = None

    @classmethod
    def ok(cls, data: Optional[T] = None, message: Optional[str] = None) -> 'ServiceResult[T]':
        return cls(success=True, data=data, message=message)

    @classmethod
    def fail(cls, kind: ErrorKind, message: str) -> 'ServiceResult[T]':
        return cls(success=False, message=message, error=kind)

    def __bool__(self) -> bool:
        return self.success

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {'success': self.success}
        if self.data is not None:
            d['data'] = _serialize(self.data)
        if self.message is not None:
            d['message'] = self.message
        if self.error is not None:
            d['error'] = self.error.value
        return d
