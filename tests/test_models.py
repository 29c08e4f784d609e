"""
Unit tests for ``TestSpec`` parsing and validation and ``ResultSummary``
serialization.
"""

import pytest

from loadbench.core.models import TestSpec, ResultSummary, AttemptOutcome


def test_from_dict_maps_suite_fields():
    spec = TestSpec.from_dict(
        {
            "name": "create",
            "uri": "https://example.com/items",
            "requests": 50,
            "duration": 0,
            "method": "post",
            "body": {"id": 1},
            "headers": {"X-Token": "abc"},
            "concurrency": 5,
        }
    )
    assert spec.name == "create"
    assert spec.target_uri == "https://example.com/items"
    assert spec.method == "POST"
    assert spec.request_body == {"id": 1}
    assert spec.headers == {"X-Token": "abc"}
    assert spec.request_count == 50
    assert spec.concurrency == 5
    assert not spec.is_duration_mode
    assert spec.sends_body


def test_from_dict_defaults():
    spec = TestSpec.from_dict({"name": "ping", "uri": "http://localhost/"})
    assert spec.method == "GET"
    assert spec.request_body is None
    assert spec.headers == {}
    assert spec.request_count == 0
    assert spec.duration_seconds == 0
    assert spec.concurrency == 1
    assert not spec.sends_body


def test_duration_selects_duration_mode():
    spec = TestSpec.from_dict(
        {"name": "soak", "uri": "http://localhost/", "duration": 3, "requests": 10}
    )
    assert spec.is_duration_mode


@pytest.mark.parametrize(
    "entry",
    [
        {"name": "x", "uri": "http://localhost/", "requests": "10"},
        {"name": "x", "uri": "http://localhost/", "concurrency": 1.5},
        {"name": "x", "uri": "http://localhost/", "headers": ["a"]},
        ["not", "an", "object"],
    ],
)
def test_from_dict_rejects_bad_shapes(entry):
    with pytest.raises(ValueError):
        TestSpec.from_dict(entry)


@pytest.mark.parametrize(
    "kwargs, message",
    [
        ({"concurrency": 0, "request_count": 5}, "Concurrency"),
        ({"request_count": -1}, "Request count"),
        ({"duration_seconds": -2}, "Duration"),
        ({"target_uri": "not a url"}, "Malformed URI"),
        ({"target_uri": "ftp://example.com/file"}, "Malformed URI"),
        ({"method": "GE T"}, "Invalid HTTP method"),
    ],
)
def test_validate_rejects_invalid_config(kwargs, message):
    fields = {"name": "bad", "target_uri": "http://localhost/"}
    fields.update(kwargs)
    with pytest.raises(ValueError, match=message):
        TestSpec(**fields).validate()


def test_zero_concurrency_allowed_in_duration_mode():
    spec = TestSpec(
        name="soak", target_uri="http://localhost/", duration_seconds=1, concurrency=0
    )
    spec.validate()


def test_attempt_outcome_classification():
    assert AttemptOutcome(elapsed=0.01, status=200).success
    assert AttemptOutcome(elapsed=0.01, status=404).has_sample
    assert not AttemptOutcome(elapsed=0.01, status=404).success
    assert not AttemptOutcome(elapsed=None, error="refused").has_sample


def test_summary_to_dict_uses_report_field_names():
    summary = ResultSummary(
        name="t1",
        method="GET",
        completed_requests=10,
        attempts=10,
        wall_duration=0.5,
        throughput_rps=20.0,
        avg_latency_ms=10.0,
        min_latency_ms=9.0,
        max_latency_ms=12.0,
    )
    data = summary.to_dict()
    assert data["name"] == "t1"
    assert data["requests"] == 10
    assert data["duration"] == 0.5
    assert data["rps"] == 20.0
    assert data["avg_latency"] == 10.0
    assert data["min_latency"] == 9.0
    assert data["max_latency"] == 12.0
    assert "failed" not in data


def test_failure_summary_is_marked():
    summary = ResultSummary.for_failure("t1", "GET", "boom")
    data = summary.to_dict()
    assert data["failed"] is True
    assert data["error"] == "boom"
    assert data["requests"] == 0
    assert data["rps"] == 0.0


@pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
def test_from_dict_rejects_non_finite_numbers(value):
    with pytest.raises(ValueError, match="finite"):
        TestSpec.from_dict({"name": "x", "uri": "http://localhost/", "requests": value})


@pytest.mark.parametrize("method", ["M-SEARCH", "PROPFIND", "X_CUSTOM"])
def test_validate_accepts_token_methods(method):
    TestSpec(name="ok", target_uri="http://localhost/", method=method).validate()


@pytest.mark.parametrize("method", ["GÉT", "GET\n", "", "GET/1"])
def test_validate_rejects_non_token_methods(method):
    spec = TestSpec(name="bad", target_uri="http://localhost/", method=method)
    with pytest.raises(ValueError, match="Invalid HTTP method"):
        spec.validate()
