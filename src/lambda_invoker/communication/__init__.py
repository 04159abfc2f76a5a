"""
Communication Module

This module provides the transport interface used by the invoker, an HTTP
transport for the Lambda Invoke API, and the procedure protocol adapter.
"""

from .transport import (
    Transport,
    TransportFunc
)

from .http_transport import (
    HttpTransport
)

from .procedure import (
    ProcedureRequest,
    ProcedureResponse,
    ErrorUnmarshaler,
    as_procedure,
    default_unmarshal_error
)

__all__ = [
    # Transport classes
    "Transport",
    "TransportFunc",
    "HttpTransport",

    # Procedure protocol
    "ProcedureRequest",
    "ProcedureResponse",
    "ErrorUnmarshaler",
    "as_procedure",
    "default_unmarshal_error"
]
