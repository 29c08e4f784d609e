"""Data models for load tests."""

import math
import re
from dataclasses import dataclass, field
from typing import Optional, Dict, Any

from yarl import URL

# Methods whose requests carry the JSON-encoded body
BODY_METHODS = {"POST", "PUT"}

# RFC 7230 token characters allowed in a request method
METHOD_TOKEN = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")


@dataclass
class TestSpec:
    """Configuration for a single load test run."""

    __test__ = False  # not a pytest test class

    name: str
    target_uri: str
    method: str = "GET"
    request_body: Any = None
    headers: Dict[str, str] = field(default_factory=dict)

    # Count mode settings
    request_count: int = 0
    concurrency: int = 1

    # Duration mode settings
    duration_seconds: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TestSpec":
        """Build a spec from one entry of a suite file."""
        if not isinstance(data, dict):
            raise ValueError(f"Test entry must be an object, got {type(data).__name__}")

        headers = data.get("headers") or {}
        if not isinstance(headers, dict):
            raise ValueError("Field 'headers' must be an object")

        return cls(
            name=str(data.get("name", "")),
            target_uri=str(data.get("uri", "")),
            method=str(data.get("method") or "GET").upper(),
            request_body=data.get("body"),
            headers={str(k): str(v) for k, v in headers.items()},
            request_count=_as_int(data, "requests", 0),
            concurrency=_as_int(data, "concurrency", 1),
            duration_seconds=_as_int(data, "duration", 0),
        )

    @property
    def is_duration_mode(self) -> bool:
        """Check if this spec runs for a fixed wall-clock duration."""
        return self.duration_seconds > 0

    @property
    def sends_body(self) -> bool:
        return self.method in BODY_METHODS

    def validate(self) -> None:
        """
        Reject configurations that cannot be dispatched.

        Raises:
            ValueError: If any field is out of range or the URI is malformed
        """
        if not METHOD_TOKEN.fullmatch(self.method):
            raise ValueError(f"Invalid HTTP method: {self.method!r}")

        try:
            url = URL(self.target_uri)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Malformed URI {self.target_uri!r}: {e}") from e
        if url.scheme not in ("http", "https") or not url.host:
            raise ValueError(
                f"Malformed URI {self.target_uri!r}: expected an absolute http(s) URL"
            )

        if self.request_count < 0:
            raise ValueError("Request count must not be negative")
        if self.duration_seconds < 0:
            raise ValueError("Duration must not be negative")
        if not self.is_duration_mode and self.concurrency < 1:
            raise ValueError(
                f"Concurrency must be at least 1 in count mode, got {self.concurrency}"
            )


def _as_int(data: Dict[str, Any], key: str, default: int) -> int:
    value = data.get(key, default)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Field '{key}' must be a number, got {value!r}")
    if not math.isfinite(value):
        raise ValueError(f"Field '{key}' must be a finite number, got {value!r}")
    if int(value) != value:
        raise ValueError(f"Field '{key}' must be a whole number, got {value!r}")
    return int(value)


@dataclass
class AttemptOutcome:
    """Outcome of one request attempt."""

    # Seconds from send to response; None when no response was received
    elapsed: Optional[float]
    status: Optional[int] = None
    error: Optional[str] = None

    @property
    def has_sample(self) -> bool:
        return self.elapsed is not None

    @property
    def success(self) -> bool:
        """A response arrived and its status is below 400."""
        return self.has_sample and self.status is not None and self.status < 400


@dataclass(frozen=True)
class ResultSummary:
    """Reduced statistics from a single load test run."""

    name: str
    method: str

    # Request counters
    completed_requests: int
    attempts: int = 0
    errors: int = 0
    http_errors: int = 0

    # Timing (seconds)
    wall_duration: float = 0.0
    throughput_rps: float = 0.0

    # Latency metrics (milliseconds), zero when no samples were collected
    avg_latency_ms: float = 0.0
    min_latency_ms: float = 0.0
    max_latency_ms: float = 0.0

    failed: bool = False
    error: Optional[str] = None

    @classmethod
    def for_failure(cls, name: str, method: str, error: str) -> "ResultSummary":
        """Summary for a test that could not be run."""
        return cls(
            name=name,
            method=method,
            completed_requests=0,
            failed=True,
            error=error,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        data = {
            "name": self.name,
            "method": self.method,
            "requests": self.completed_requests,
            "duration": self.wall_duration,
            "rps": self.throughput_rps,
            "avg_latency": self.avg_latency_ms,
            "max_latency": self.max_latency_ms,
            "min_latency": self.min_latency_ms,
            "attempts": self.attempts,
            "errors": self.errors,
            "http_errors": self.http_errors,
        }
        if self.failed:
            data["failed"] = True
            data["error"] = self.error
        return data
