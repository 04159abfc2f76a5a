"""
Invocation Envelopes

Request and response envelopes exchanged with the transport. Both are frozen:
mutators produce new envelopes instead of changing the ones they receive.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class InvocationType(Enum):
    """How the remote function should be invoked."""
    REQUEST_RESPONSE = "RequestResponse"
    EVENT = "Event"
    DRY_RUN = "DryRun"


@dataclass(frozen=True)
class InvokeRequest:
    """
    Outgoing invocation request.

    Attributes:
        function_name: Name or ARN of the target function
        invocation_type: How the function should be invoked
        payload: Opaque request body
        qualifier: Optional version or alias of the function
    """
    function_name: str
    invocation_type: InvocationType = InvocationType.REQUEST_RESPONSE
    payload: bytes = b""
    qualifier: Optional[str] = None

    def with_payload(self, payload: bytes) -> 'InvokeRequest':
        """Return a copy of this request carrying a different payload."""
        return replace(self, payload=payload)


@dataclass(frozen=True)
class InvokeResponse:
    """
    Incoming invocation response.

    Attributes:
        payload: Opaque response body, may be None or empty
        function_error: Set when the remote function reported an error
        status_code: Status code, meaningful when function_error is set
        executed_version: Version of the function that handled the call
    """
    payload: Optional[bytes] = None
    function_error: Optional[str] = None
    status_code: Optional[int] = None
    executed_version: Optional[str] = None

    def with_payload(self, payload: Optional[bytes]) -> 'InvokeResponse':
        """Return a copy of this response carrying a different payload."""
        return replace(self, payload=payload)
