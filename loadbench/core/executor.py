"""Single request execution and latency capture."""

import asyncio
import json
import logging
import time

import aiohttp

from .models import TestSpec, AttemptOutcome


class RequestExecutor:
    """
    Issues one HTTP request for a test spec and times it.

    The executor holds no state between attempts; every call to execute()
    builds a fresh request from the spec.
    """

    def __init__(self, spec: TestSpec):
        self.spec = spec
        self.logger = logging.getLogger(__name__)

    def build_body(self) -> bytes:
        """JSON-encode the request body for POST/PUT, empty otherwise."""
        if not self.spec.sends_body:
            return b""
        return json.dumps(self.spec.request_body).encode("utf-8")

    def build_headers(self) -> dict:
        headers = {}
        if self.spec.sends_body:
            headers["Content-Type"] = "application/json"
        # Configured headers overwrite defaults of the same name
        for key, value in self.spec.headers.items():
            for existing in [k for k in headers if k.lower() == key.lower()]:
                del headers[existing]
            headers[key] = value
        return headers

    async def execute(self, session: aiohttp.ClientSession) -> AttemptOutcome:
        """Send a single request and classify its outcome."""
        try:
            body = self.build_body()
        except (TypeError, ValueError) as e:
            self.logger.warning(
                f"Error serializing body for {self.spec.target_uri}: {e}"
            )
            return AttemptOutcome(elapsed=None, error=f"serialization error: {e}")

        headers = self.build_headers()
        start_time = time.perf_counter()

        try:
            async with session.request(
                self.spec.method, self.spec.target_uri, data=body or None, headers=headers
            ) as response:
                elapsed = time.perf_counter() - start_time
                status = response.status
        except asyncio.TimeoutError:
            self.logger.warning(f"Request error for {self.spec.target_uri}: timed out")
            return AttemptOutcome(elapsed=None, error="timeout")
        except aiohttp.ClientError as e:
            self.logger.warning(f"Request error for {self.spec.target_uri}: {e}")
            return AttemptOutcome(elapsed=None, error=str(e) or type(e).__name__)

        if status >= 400:
            self.logger.warning(
                f"Unsuccessful HTTP response from {self.spec.target_uri}: {status}"
            )

        return AttemptOutcome(elapsed=elapsed, status=status)
