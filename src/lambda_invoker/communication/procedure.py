"""
Procedure Protocol

This module layers a named-procedure convention on top of a raw invocation,
so one remote function can serve several logical procedures. Requests are
wrapped as {"procedure": <name>, "body": <payload>} and responses are
unwrapped from {"body": <result>} or {"error": <error>}.

Payloads are raw JSON values. They are spliced into and cut out of the
envelopes byte for byte rather than being decoded and re-encoded.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from ..core.envelopes import InvokeRequest, InvokeResponse
from ..core.errors import EnvelopeError, RemoteProcedureError
from ..core.options import InvokerBuilder, Option


logger = logging.getLogger(__name__)

ErrorUnmarshaler = Callable[[bytes], Exception]

_WHITESPACE = " \t\n\r"
_NULL = b"null"


@dataclass
class ProcedureRequest:
    """
    Outbound procedure envelope.

    Attributes:
        procedure: Name of the procedure to call
        body: Raw JSON request body, empty for null
    """
    procedure: str
    body: bytes = b""

    def to_bytes(self) -> bytes:
        """Serialize the envelope, keeping the body bytes unchanged."""
        body = _validate_raw(self.body, "request body")
        return (
            b'{"procedure":' + json.dumps(self.procedure).encode("utf-8") +
            b',"body":' + (body or _NULL) + b'}'
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> 'ProcedureRequest':
        """Parse an outbound envelope, as a dispatcher would."""
        fields = _split_object(data) or {}
        procedure = fields.get("procedure")
        if procedure is None:
            raise EnvelopeError("procedure request has no procedure", payload=data)
        name = json.loads(procedure.decode("utf-8"))
        if not isinstance(name, str):
            raise EnvelopeError("procedure name must be a string", payload=data)
        body = fields.get("body")
        if body == _NULL:
            body = b""
        return cls(procedure=name, body=body or b"")


@dataclass
class ProcedureResponse:
    """
    Inbound procedure envelope.

    Attributes:
        body: Raw JSON result, set on success
        error: Raw JSON error, set on failure
    """
    body: Optional[bytes] = None
    error: Optional[bytes] = None

    def to_bytes(self) -> bytes:
        """Serialize the envelope, omitting unset fields."""
        parts = []
        if self.body:
            parts.append(b'"body":' + _validate_raw(self.body, "response body"))
        if self.error:
            parts.append(b'"error":' + _validate_raw(self.error, "response error"))
        return b'{' + b','.join(parts) + b'}'

    @classmethod
    def from_bytes(cls, data: bytes) -> 'ProcedureResponse':
        """
        Parse an inbound envelope.

        A JSON null document and an error field holding null are treated
        as unset. A null body is kept as the raw bytes b"null".

        Raises:
            EnvelopeError: If data is not a JSON object or null
        """
        fields = _split_object(data)
        if fields is None:
            return cls()
        error = fields.get("error")
        if error == _NULL:
            error = None
        return cls(body=fields.get("body"), error=error)


def default_unmarshal_error(payload: bytes) -> Exception:
    """
    Build an error from a procedure error payload.

    The payload is decoded as generic JSON and rendered as text; if it is not
    valid JSON the raw bytes become the message verbatim.
    """
    text = payload.decode("utf-8", errors="replace")
    try:
        value = _loads(text)
    except ValueError:
        return RemoteProcedureError(text, payload=payload)
    return RemoteProcedureError(_render(value), value=value, payload=payload)


def as_procedure(procedure: str,
                 unmarshal_error: Optional[ErrorUnmarshaler] = None) -> Option:
    """
    Configure an Invoker to call procedure through the procedure protocol.

    Installs one input mutator, which wraps the request payload in a
    procedure envelope, and one output mutator, which unwraps the response
    and raises the error produced by unmarshal_error when the envelope
    carries one.

    Args:
        procedure: Name of the procedure to call
        unmarshal_error: Turns the raw error payload into an exception,
            default_unmarshal_error if None

    Returns:
        Option to pass to the Invoker
    """
    if not procedure:
        raise ValueError("procedure name is required")
    if unmarshal_error is None:
        unmarshal_error = default_unmarshal_error

    def wrap_request(request: InvokeRequest) -> InvokeRequest:
        envelope = ProcedureRequest(procedure=procedure, body=request.payload)
        return request.with_payload(envelope.to_bytes())

    def unwrap_response(response: InvokeResponse) -> InvokeResponse:
        if not response.payload:
            return response
        envelope = ProcedureResponse.from_bytes(response.payload)
        if envelope.error is None:
            return response.with_payload(envelope.body or b"")
        logger.debug(f"Procedure {procedure} returned an error")
        error = unmarshal_error(envelope.error)
        if not isinstance(error, BaseException):
            raise EnvelopeError(
                f"error unmarshaler for procedure {procedure} returned "
                f"{type(error).__name__}, not an exception",
                payload=envelope.error
            )
        raise error

    def option(builder: InvokerBuilder):
        builder.add_input_mutator(wrap_request)
        builder.add_output_mutator(unwrap_response)
    return option


def _render(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, sort_keys=True, ensure_ascii=False)


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def _loads(text: str) -> Any:
    """Decode JSON, rejecting the NaN and Infinity literals json accepts."""
    return json.loads(text, parse_constant=_reject_constant)


def _decode(data: bytes, what: str) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise EnvelopeError(f"{what} is not valid UTF-8: {e}", payload=data)


def _validate_raw(raw: bytes, what: str) -> bytes:
    """Check that raw holds exactly one JSON value; return it trimmed."""
    if not raw:
        return b""
    text = _decode(raw, what)
    try:
        _loads(text)
    except ValueError as e:
        raise EnvelopeError(f"{what} is not valid JSON: {e}", payload=raw)
    return raw.strip(_WHITESPACE.encode("ascii"))


def _skip_whitespace(text: str, index: int) -> int:
    while index < len(text) and text[index] in _WHITESPACE:
        index += 1
    return index


def _split_object(data: bytes) -> Optional[Dict[str, bytes]]:
    """
    Split a JSON object into its raw field values.

    Returns None for a null document.
    """
    text = _decode(data, "envelope")
    try:
        document = _loads(text)
    except ValueError as e:
        raise EnvelopeError(f"envelope is not valid JSON: {e}", payload=data)
    if document is None:
        return None
    if not isinstance(document, dict):
        raise EnvelopeError(
            f"envelope must be a JSON object, got {type(document).__name__}",
            payload=data
        )

    # The document is known to be a valid object from here on.
    decoder = json.JSONDecoder()
    fields = {}
    index = _skip_whitespace(text, text.index("{") + 1)
    while text[index] != "}":
        key, index = decoder.raw_decode(text, index)
        index = _skip_whitespace(text, index)
        index = _skip_whitespace(text, index + 1)  # ':'
        start = index
        _, index = decoder.raw_decode(text, index)
        fields[key] = text[start:index].encode("utf-8")
        index = _skip_whitespace(text, index)
        if text[index] == ",":
            index = _skip_whitespace(text, index + 1)
    return fields
