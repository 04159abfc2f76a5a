"""
HTTP Transport for Lambda Invocations

This module provides a transport that speaks the Lambda Invoke REST API over
plain HTTP, as served by local Lambda runtimes and emulators. Requests are
not signed; credential handling is left to whatever sits in front of the
endpoint.
"""

import logging
import socket
import urllib.error
import urllib.parse
import urllib.request
from typing import Optional

from .transport import Transport
from ..core.context import InvocationContext
from ..core.envelopes import InvokeRequest, InvokeResponse
from ..core.errors import TransportError, TransportTimeoutError


INVOKE_PATH = "/2015-03-31/functions/{function_name}/invocations"

INVOCATION_TYPE_HEADER = "X-Amz-Invocation-Type"
FUNCTION_ERROR_HEADER = "X-Amz-Function-Error"
EXECUTED_VERSION_HEADER = "X-Amz-Executed-Version"


class HttpTransport(Transport):
    """
    Transport invoking functions through the Lambda Invoke HTTP API.
    """

    def __init__(self,
                 endpoint_url: str,
                 timeout_seconds: float = 30.0):
        """
        Initialize the HTTP transport.

        Args:
            endpoint_url: Base URL of the Lambda API, e.g. http://127.0.0.1:9001
            timeout_seconds: Timeout used when the context has no deadline
        """
        if not endpoint_url:
            raise ValueError("endpoint_url is required")
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")

        self.endpoint_url = endpoint_url.rstrip("/")
        self.timeout_seconds = timeout_seconds

        # Set up logging
        self.logger = logging.getLogger(__name__)

    def get_invoke_url(self, request: InvokeRequest) -> str:
        """
        Get the invocation URL for a request.

        Args:
            request: Request whose function and qualifier select the URL

        Returns:
            Full URL string
        """
        path = INVOKE_PATH.format(
            function_name=urllib.parse.quote(request.function_name, safe="")
        )
        url = self.endpoint_url + path
        if request.qualifier:
            url += "?" + urllib.parse.urlencode({"Qualifier": request.qualifier})
        return url

    def invoke(self, request: InvokeRequest, context: InvocationContext) -> InvokeResponse:
        """
        Invoke the function over HTTP.

        Raises:
            TransportTimeoutError: If the call does not finish within the
                context deadline or the default timeout
            TransportError: If the endpoint cannot be reached or rejects the call
        """
        if context.is_cancelled():
            raise TransportTimeoutError(f"Invocation of {request.function_name} cancelled")

        timeout = context.remaining()
        if timeout is None:
            timeout = self.timeout_seconds

        url = self.get_invoke_url(request)
        headers = {
            "Content-Type": "application/json",
            INVOCATION_TYPE_HEADER: request.invocation_type.value,
        }
        http_request = urllib.request.Request(
            url, data=request.payload, headers=headers, method="POST"
        )

        self.logger.debug(f"POST {url} ({len(request.payload)} bytes, timeout {timeout:.1f}s)")

        try:
            with urllib.request.urlopen(http_request, timeout=timeout) as response:
                body = response.read()
                return InvokeResponse(
                    payload=body,
                    function_error=response.headers.get(FUNCTION_ERROR_HEADER),
                    status_code=response.status,
                    executed_version=response.headers.get(EXECUTED_VERSION_HEADER),
                )

        except urllib.error.HTTPError as e:
            message = _read_error_message(e)
            raise TransportError(
                f"Invoke API error (HTTP {e.code}): {message or e.reason}",
                status_code=e.code
            )

        except urllib.error.URLError as e:
            if isinstance(e.reason, socket.timeout):
                raise TransportTimeoutError(
                    f"Invocation of {request.function_name} timed out after {timeout:.1f}s"
                )
            raise TransportError(f"Connection failed: {e.reason}")

        except socket.timeout:
            raise TransportTimeoutError(
                f"Invocation of {request.function_name} timed out after {timeout:.1f}s"
            )


def _read_error_message(error: urllib.error.HTTPError) -> Optional[str]:
    try:
        body = error.read()
    except OSError:
        return None
    finally:
        error.close()
    return body.decode("utf-8", errors="replace").strip() or None
