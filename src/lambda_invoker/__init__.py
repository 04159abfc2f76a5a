"""
lambda_invoker - synchronous client for remote functions.

An Invoker calls one remote function through a transport, passing requests
and responses through ordered mutator chains. The procedure protocol adapter
(as_procedure) uses those chains to call named procedures and rebuild typed
errors on the caller's side.
"""

from .core import (
    UNKNOWN_STATUS_CODE,
    EnvelopeError,
    InvocationContext,
    InvocationError,
    InvocationType,
    Invoker,
    InvokerBuilder,
    InvokerError,
    InvokeRequest,
    InvokeResponse,
    MutatorError,
    Option,
    RemoteProcedureError,
    TransportError,
    TransportTimeoutError,
    background,
    with_input_mutator,
    with_invocation_type,
    with_output_mutator,
    with_qualifier
)
from .communication import (
    HttpTransport,
    ProcedureRequest,
    ProcedureResponse,
    Transport,
    TransportFunc,
    as_procedure,
    default_unmarshal_error
)

__version__ = "0.1.0"

__all__ = [
    "Invoker",
    "InvokerBuilder",
    "Option",
    "InvocationContext",
    "InvocationType",
    "InvokeRequest",
    "InvokeResponse",
    "background",
    "with_input_mutator",
    "with_output_mutator",
    "with_invocation_type",
    "with_qualifier",
    "Transport",
    "TransportFunc",
    "HttpTransport",
    "ProcedureRequest",
    "ProcedureResponse",
    "as_procedure",
    "default_unmarshal_error",
    "UNKNOWN_STATUS_CODE",
    "InvokerError",
    "InvocationError",
    "MutatorError",
    "EnvelopeError",
    "RemoteProcedureError",
    "TransportError",
    "TransportTimeoutError",
]
