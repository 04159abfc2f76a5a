"""
Error Types for Lambda Invocation

This module defines the exceptions raised while invoking a remote function,
from transport failures through to errors reported by the function itself.
"""

from typing import Any, Optional


# Status code reported on an InvocationError when the transport did not
# supply one. It carries no meaning beyond "unknown".
UNKNOWN_STATUS_CODE = -1


class InvokerError(Exception):
    """Base exception for invoker operations."""
    pass


class InvocationError(InvokerError):
    """
    Raised when the remote function ran but reported a function error.

    Attributes:
        message: Error text reported by the remote side
        status_code: Status code of the invocation, or UNKNOWN_STATUS_CODE
    """

    def __init__(self, message: str, status_code: int = UNKNOWN_STATUS_CODE):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __repr__(self) -> str:
        return f"InvocationError({self.message!r}, status_code={self.status_code})"


class MutatorError(InvokerError):
    """Exception raised when a mutator returns something other than an envelope."""
    pass


class EnvelopeError(InvokerError):
    """Exception raised when a procedure envelope cannot be built or parsed."""

    def __init__(self, message: str, payload: Optional[bytes] = None):
        super().__init__(message)
        self.payload = payload


class RemoteProcedureError(InvokerError):
    """
    Error reconstructed from a procedure error payload by the default
    unmarshaler.

    Attributes:
        value: Decoded JSON value of the error, or None if it was not JSON
        payload: Raw error bytes as received
    """

    def __init__(self, message: str, value: Any = None, payload: bytes = b""):
        super().__init__(message)
        self.value = value
        self.payload = payload


class TransportError(InvokerError):
    """Exception raised when the transport fails to complete an invocation."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class TransportTimeoutError(TransportError):
    """Exception raised when an invocation times out in the transport."""

    def __init__(self, message: str = "Invocation timed out"):
        super().__init__(message)
