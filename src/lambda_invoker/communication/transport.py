"""
Transport Interface

A transport performs the actual remote call for an Invoker. Anything that
implements invoke(request, context) can be used, including test doubles.
"""

from abc import ABC, abstractmethod
from typing import Callable

from ..core.context import InvocationContext
from ..core.envelopes import InvokeRequest, InvokeResponse


class Transport(ABC):
    """
    Abstract base class for transports.

    Implementations are responsible for honoring the context's timeout and
    cancellation, and for any retry or pooling they want to offer.
    """

    @abstractmethod
    def invoke(self, request: InvokeRequest, context: InvocationContext) -> InvokeResponse:
        """
        Perform one synchronous invocation.

        Args:
            request: Fully mutated request envelope
            context: Timeout and cancellation for the call

        Returns:
            Response envelope

        Raises:
            Exception: Any transport-level failure
        """
        pass


class TransportFunc(Transport):
    """Adapts a plain function to the Transport interface."""

    def __init__(self, func: Callable[[InvokeRequest, InvocationContext], InvokeResponse]):
        self.func = func

    def invoke(self, request: InvokeRequest, context: InvocationContext) -> InvokeResponse:
        return self.func(request, context)
