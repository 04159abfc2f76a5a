"""
Test suite for configuration and the command line driver
"""

import io
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest.mock import patch

from lambda_invoker import InvocationType, InvokeResponse
from lambda_invoker.config import Config
from lambda_invoker import main as driver


ENV_KEYS = [
    "LAMBDA_ENDPOINT_URL", "LAMBDA_TIMEOUT_SECONDS", "LAMBDA_FUNCTION_NAME",
    "LAMBDA_INVOCATION_TYPE", "LAMBDA_QUALIFIER", "LOG_LEVEL", "LOG_FORMAT",
]


def clean_environ():
    return {k: v for k, v in os.environ.items() if k not in ENV_KEYS}


class TestConfig(unittest.TestCase):
    """Test environment-based configuration."""

    def test_defaults(self):
        """Test defaults when nothing is set."""
        with patch.dict(os.environ, clean_environ(), clear=True):
            config = Config(env_file="/nonexistent/.env")

        self.assertEqual(config.transport.endpoint_url, "http://127.0.0.1:9001")
        self.assertEqual(config.transport.timeout_seconds, 30.0)
        self.assertEqual(config.invoker.function_name, "")
        self.assertEqual(config.invoker.invocation_type, InvocationType.REQUEST_RESPONSE)
        self.assertIsNone(config.invoker.qualifier)
        self.assertEqual(config.logging.level, "WARNING")

    def test_environment_overrides(self):
        """Test values read from the environment."""
        env = clean_environ()
        env.update({
            "LAMBDA_ENDPOINT_URL": "http://lambda.local:3001",
            "LAMBDA_TIMEOUT_SECONDS": "2.5",
            "LAMBDA_FUNCTION_NAME": "orders",
            "LAMBDA_INVOCATION_TYPE": "Event",
            "LAMBDA_QUALIFIER": "prod",
        })
        with patch.dict(os.environ, env, clear=True):
            config = Config(env_file="/nonexistent/.env")

        self.assertEqual(config.transport.endpoint_url, "http://lambda.local:3001")
        self.assertEqual(config.transport.timeout_seconds, 2.5)
        self.assertEqual(config.invoker.function_name, "orders")
        self.assertEqual(config.invoker.invocation_type, InvocationType.EVENT)
        self.assertEqual(config.invoker.qualifier, "prod")

        data = config.to_dict()
        self.assertEqual(data["invoker"]["invocation_type"], "Event")
        self.assertEqual(data["transport"]["timeout_seconds"], 2.5)

    def test_invalid_values_fall_back(self):
        """Test that unparseable values fall back to defaults."""
        env = clean_environ()
        env.update({"LAMBDA_TIMEOUT_SECONDS": "soon", "LAMBDA_INVOCATION_TYPE": "Later"})
        with patch.dict(os.environ, env, clear=True):
            config = Config(env_file="/nonexistent/.env")

        self.assertEqual(config.transport.timeout_seconds, 30.0)
        self.assertEqual(config.invoker.invocation_type, InvocationType.REQUEST_RESPONSE)

    def test_out_of_range_timeout_falls_back(self):
        """Test that a timeout must be a positive, finite number of seconds."""
        for value in ["0", "-1", "nan", "inf"]:
            with self.subTest(value=value):
                env = clean_environ()
                env["LAMBDA_TIMEOUT_SECONDS"] = value
                with patch.dict(os.environ, env, clear=True):
                    with self.assertLogs("lambda_invoker.config", "WARNING") as logs:
                        config = Config(env_file="/nonexistent/.env")

                self.assertEqual(config.transport.timeout_seconds, 30.0)
                self.assertIn("LAMBDA_TIMEOUT_SECONDS", logs.output[0])

    def test_env_file(self):
        """Test loading settings from a .env file."""
        with tempfile.TemporaryDirectory() as temp_dir:
            env_file = os.path.join(temp_dir, ".env")
            with open(env_file, "w") as f:
                f.write("# local settings\nLAMBDA_FUNCTION_NAME=from-file\nLAMBDA_TIMEOUT_SECONDS=7\n")

            with patch.dict(os.environ, clean_environ(), clear=True):
                config = Config(env_file=env_file)

        self.assertEqual(config.invoker.function_name, "from-file")
        self.assertEqual(config.transport.timeout_seconds, 7.0)


class TestDriver(unittest.TestCase):
    """Test the command line driver with a stubbed transport."""

    def setUp(self):
        with patch.dict(os.environ, clean_environ(), clear=True):
            self.config = Config(env_file="/nonexistent/.env")

    def run_driver(self, argv, response=None, error=None):
        calls = []

        def invoke(transport, request, context):
            calls.append(request)
            if error is not None:
                raise error
            return response

        stdout, stderr = io.StringIO(), io.StringIO()
        with patch.object(driver.HttpTransport, "invoke", autospec=True, side_effect=invoke), \
                patch.object(self.config, "configure_logging"), \
                redirect_stdout(stdout), redirect_stderr(stderr):
            code = driver.main(argv, config=self.config)
        return code, stdout.getvalue(), stderr.getvalue(), calls

    def test_plain_invocation(self):
        """Test invoking a function and printing its result."""
        code, out, err, calls = self.run_driver(
            ["orders", "--payload", '{"id": 1}'],
            response=InvokeResponse(payload=b'{"status":"ok"}', status_code=200)
        )

        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), '{"status":"ok"}')
        self.assertEqual(calls[0].function_name, "orders")
        self.assertEqual(calls[0].payload, b'{"id": 1}')
        self.assertEqual(calls[0].invocation_type, InvocationType.REQUEST_RESPONSE)

    def test_procedure_invocation(self):
        """Test the --procedure flag wraps the payload."""
        code, out, err, calls = self.run_driver(
            ["orders", "--procedure", "Get", "--qualifier", "live", "--payload", "[1]"],
            response=InvokeResponse(payload=b'{"body":{"id":1}}')
        )

        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), '{"id":1}')
        self.assertEqual(calls[0].payload, b'{"procedure":"Get","body":[1]}')
        self.assertEqual(calls[0].qualifier, "live")

    def test_payload_file(self):
        """Test reading the payload from a file."""
        with tempfile.NamedTemporaryFile("wb", suffix=".json", delete=False) as f:
            f.write(b'{"from":"file"}')
        try:
            code, out, err, calls = self.run_driver(
                ["orders", "--payload-file", f.name, "--invocation-type", "Event"],
                response=InvokeResponse(payload=b"", status_code=202)
            )
        finally:
            os.unlink(f.name)

        self.assertEqual(code, 0)
        self.assertEqual(out, "")
        self.assertEqual(calls[0].payload, b'{"from":"file"}')
        self.assertEqual(calls[0].invocation_type, InvocationType.EVENT)

    def test_function_error_exit_code(self):
        """Test that function errors exit with status 1."""
        code, out, err, calls = self.run_driver(
            ["orders"],
            response=InvokeResponse(function_error="Unhandled", status_code=200)
        )

        self.assertEqual(code, 1)
        self.assertIn("status 200", err)
        self.assertIn("Unhandled", err)

    def test_procedure_error_exit_code(self):
        """Test that procedure errors exit with status 2."""
        code, out, err, calls = self.run_driver(
            ["orders", "--procedure", "Get"],
            response=InvokeResponse(payload=b'{"error":"no such order"}')
        )

        self.assertEqual(code, 2)
        self.assertIn("no such order", err)

    def test_missing_function(self):
        """Test that a function name is required."""
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                driver.main([], config=self.config)


if __name__ == "__main__":
    unittest.main(verbosity=2)
