"""
Invoker for Remote Functions

This module provides the Invoker, a thin layer over a transport that invokes
one remote function synchronously. Requests and responses pass through
ordered chains of mutators, which is where protocol behavior such as the
procedure convention is layered on.
"""

import logging
from typing import Optional, TYPE_CHECKING

from .context import InvocationContext, background
from .envelopes import InvocationType, InvokeRequest, InvokeResponse
from .errors import InvocationError, MutatorError, UNKNOWN_STATUS_CODE
from .options import InvokerBuilder, Option

if TYPE_CHECKING:
    from ..communication.transport import Transport


logger = logging.getLogger(__name__)


class Invoker:
    """
    Invokes a single remote function through a transport.

    The target function and mutator chains are fixed at construction, so one
    Invoker can be shared between threads without locking.
    """

    def __init__(self, transport: 'Transport', function_name: str, *options: Option):
        """
        Initialize the invoker.

        Args:
            transport: Transport that performs the remote call
            function_name: Name or ARN of the function to invoke
            options: Options registering mutators, applied in order
        """
        if not function_name:
            raise ValueError("function_name is required")

        builder = InvokerBuilder()
        for option in options:
            option(builder)

        self._transport = transport
        self._function_name = function_name
        self._input_mutators = tuple(builder.input_mutators)
        self._output_mutators = tuple(builder.output_mutators)

    @property
    def function_name(self) -> str:
        return self._function_name

    @property
    def input_mutators(self) -> tuple:
        return self._input_mutators

    @property
    def output_mutators(self) -> tuple:
        return self._output_mutators

    def invoke(self,
               payload: Optional[bytes] = None,
               context: Optional[InvocationContext] = None) -> bytes:
        """
        Invoke the function with payload and return the response payload.

        By default the function is invoked as RequestResponse; input mutators
        may change the invocation type or any other request field.

        Args:
            payload: Request body, None is sent as an empty body
            context: Timeout and cancellation, passed through untouched; the
                transport is responsible for honoring them

        Returns:
            Response payload, empty bytes if the response carried none

        Raises:
            InvocationError: If the response reports a function error
            Exception: Whatever a mutator or the transport raised, unchanged
        """
        if context is None:
            context = background()

        request = InvokeRequest(
            function_name=self._function_name,
            invocation_type=InvocationType.REQUEST_RESPONSE,
            payload=bytes(payload) if payload else b"",
        )
        for mutate in self._input_mutators:
            request = mutate(request)
            if not isinstance(request, InvokeRequest):
                raise MutatorError(
                    f"Input mutator {_name_of(mutate)} returned {type(request).__name__}"
                )

        logger.debug(
            f"Invoking {request.function_name} ({request.invocation_type.value}, "
            f"{len(request.payload)} bytes)"
        )
        response = self._transport.invoke(request, context)

        for mutate in self._output_mutators:
            response = mutate(response)
            if not isinstance(response, InvokeResponse):
                raise MutatorError(
                    f"Output mutator {_name_of(mutate)} returned {type(response).__name__}"
                )

        if response.function_error is not None:
            status_code = response.status_code
            if status_code is None:
                status_code = UNKNOWN_STATUS_CODE
            logger.debug(
                f"Function {request.function_name} reported an error (status {status_code})"
            )
            raise InvocationError(response.function_error, status_code)

        return response.payload or b""


def _name_of(mutator) -> str:
    return getattr(mutator, "__qualname__", None) or repr(mutator)
