#!/usr/bin/env python3
"""
Lambda Invoker - Command Line Driver

Invokes a remote function once and prints the result payload.

Usage Examples:
    # Invoke a function with a JSON payload
    lambda-invoker my-function --payload '{"key": "value"}'

    # Call a named procedure through the procedure protocol
    lambda-invoker my-function --procedure GetUser --payload '{"id": 7}'

    # Fire and forget
    lambda-invoker my-function --invocation-type Event --payload-file event.json
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import Config, config as default_config
from .communication import HttpTransport, as_procedure
from .core import (
    InvocationContext, InvocationError, InvocationType, Invoker, InvokerError,
    with_invocation_type, with_qualifier
)


logger = logging.getLogger(__name__)


def build_parser(config: Config) -> argparse.ArgumentParser:
    """Build the argument parser, taking defaults from config."""
    parser = argparse.ArgumentParser(
        prog="lambda-invoker",
        description="Invoke a remote function synchronously"
    )
    parser.add_argument("function", nargs="?", default=config.invoker.function_name or None,
                        help="Function name or ARN (default: $LAMBDA_FUNCTION_NAME)")

    payload = parser.add_mutually_exclusive_group()
    payload.add_argument("--payload", help="JSON payload to send")
    payload.add_argument("--payload-file", help="Read the JSON payload from a file")

    parser.add_argument("--procedure", help="Call this procedure through the procedure protocol")
    parser.add_argument("--invocation-type", choices=[t.value for t in InvocationType],
                        default=config.invoker.invocation_type.value)
    parser.add_argument("--qualifier", default=config.invoker.qualifier,
                        help="Function version or alias")
    parser.add_argument("--endpoint", default=config.transport.endpoint_url,
                        help="Base URL of the Lambda Invoke API")
    parser.add_argument("--timeout", type=float, default=config.transport.timeout_seconds,
                        help="Invocation timeout in seconds")
    parser.add_argument("--log-level", default=None,
                        help="Logging level (default: $LOG_LEVEL)")
    return parser


def create_invoker(args: argparse.Namespace) -> Invoker:
    """Create an Invoker over the HTTP transport from parsed arguments."""
    options = []
    invocation_type = InvocationType(args.invocation_type)
    if invocation_type != InvocationType.REQUEST_RESPONSE:
        options.append(with_invocation_type(invocation_type))
    if args.qualifier:
        options.append(with_qualifier(args.qualifier))
    # Wrap last so earlier mutators see the raw payload.
    if args.procedure:
        options.append(as_procedure(args.procedure))

    transport = HttpTransport(args.endpoint, timeout_seconds=args.timeout)
    return Invoker(transport, args.function, *options)


def read_payload(args: argparse.Namespace) -> bytes:
    """Read the payload from the arguments, empty if none was given."""
    if args.payload_file:
        with open(args.payload_file, "rb") as f:
            return f.read()
    if args.payload:
        return args.payload.encode("utf-8")
    return b""


def main(argv: Optional[List[str]] = None, config: Optional[Config] = None) -> int:
    """Run the driver and return the process exit code."""
    config = config or default_config
    parser = build_parser(config)
    args = parser.parse_args(argv)
    if not args.function:
        parser.error("a function name is required")

    config.configure_logging(args.log_level)

    try:
        invoker = create_invoker(args)
        payload = read_payload(args)
        result = invoker.invoke(payload, InvocationContext(timeout_seconds=args.timeout))
    except InvocationError as e:
        print(f"Function error (status {e.status_code}): {e}", file=sys.stderr)
        return 1
    except InvokerError as e:
        logger.debug(f"Invocation failed: {e!r}")
        print(f"Invocation failed: {e}", file=sys.stderr)
        return 2
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if result:
        print(result.decode("utf-8", errors="replace"))
    return 0


if __name__ == "__main__":
    sys.exit(main())
