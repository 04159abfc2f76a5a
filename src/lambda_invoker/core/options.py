"""
Mutators and Invoker Options

Options are plain functions applied once while an Invoker is constructed.
Each one registers input and/or output mutators on the builder it receives.
Mutators run in registration order and signal failure by raising.
"""

from dataclasses import replace
from typing import Callable, List

from .envelopes import InvocationType, InvokeRequest, InvokeResponse


InputMutator = Callable[[InvokeRequest], InvokeRequest]
OutputMutator = Callable[[InvokeResponse], InvokeResponse]


class InvokerBuilder:
    """Collects mutators while an Invoker is being constructed."""

    def __init__(self):
        self.input_mutators: List[InputMutator] = []
        self.output_mutators: List[OutputMutator] = []

    def add_input_mutator(self, mutator: InputMutator):
        """Append a mutator applied to every outgoing request."""
        self.input_mutators.append(mutator)

    def add_output_mutator(self, mutator: OutputMutator):
        """Append a mutator applied to every incoming response."""
        self.output_mutators.append(mutator)


Option = Callable[[InvokerBuilder], None]


def with_input_mutator(mutator: InputMutator) -> Option:
    """Register a single input mutator."""
    def option(builder: InvokerBuilder):
        builder.add_input_mutator(mutator)
    return option


def with_output_mutator(mutator: OutputMutator) -> Option:
    """Register a single output mutator."""
    def option(builder: InvokerBuilder):
        builder.add_output_mutator(mutator)
    return option


def with_invocation_type(invocation_type: InvocationType) -> Option:
    """
    Invoke the function with a different invocation type.

    Event invocations return no body, so any procedure output mutator
    registered alongside this option leaves the response untouched.
    """
    def set_invocation_type(request: InvokeRequest) -> InvokeRequest:
        return replace(request, invocation_type=invocation_type)
    return with_input_mutator(set_invocation_type)


def with_qualifier(qualifier: str) -> Option:
    """Invoke a specific version or alias of the function."""
    if not qualifier:
        raise ValueError("qualifier must not be empty")

    def set_qualifier(request: InvokeRequest) -> InvokeRequest:
        return replace(request, qualifier=qualifier)
    return with_input_mutator(set_qualifier)
