"""
Core module for the Lambda invoker

This module provides the invoker, its envelopes, the mutator options used to
configure it, and the errors it raises.
"""

from .envelopes import (
    InvocationType,
    InvokeRequest,
    InvokeResponse
)

from .errors import (
    UNKNOWN_STATUS_CODE,
    InvokerError,
    InvocationError,
    MutatorError,
    EnvelopeError,
    RemoteProcedureError,
    TransportError,
    TransportTimeoutError
)

from .context import (
    InvocationContext,
    background
)

from .options import (
    InvokerBuilder,
    InputMutator,
    OutputMutator,
    Option,
    with_input_mutator,
    with_output_mutator,
    with_invocation_type,
    with_qualifier
)

from .invoker import Invoker

__all__ = [
    'InvocationType',
    'InvokeRequest',
    'InvokeResponse',
    'UNKNOWN_STATUS_CODE',
    'InvokerError',
    'InvocationError',
    'MutatorError',
    'EnvelopeError',
    'RemoteProcedureError',
    'TransportError',
    'TransportTimeoutError',
    'InvocationContext',
    'background',
    'InvokerBuilder',
    'InputMutator',
    'OutputMutator',
    'Option',
    'with_input_mutator',
    'with_output_mutator',
    'with_invocation_type',
    'with_qualifier',
    'Invoker'
]
