"""
Unit tests for ``load_suite``: reading the JSON suite file into specs.
"""

import asyncio
import json

import pytest

from loadbench.core.suite_loader import load_suite


def _write(tmp_path, content):
    path = tmp_path / "config.json"
    path.write_text(content, encoding="utf-8")
    return path


def test_loads_specs_in_file_order(tmp_path):
    path = _write(
        tmp_path,
        json.dumps(
            [
                {
                    "name": "list",
                    "uri": "http://localhost:8080/items",
                    "requests": 100,
                    "concurrency": 10,
                    "method": "GET",
                },
                {
                    "name": "create",
                    "uri": "http://localhost:8080/items",
                    "duration": 5,
                    "method": "POST",
                    "body": {"name": "widget"},
                    "headers": {"Authorization": "Bearer t"},
                },
            ]
        ),
    )

    specs = asyncio.run(load_suite(path))

    assert [s.name for s in specs] == ["list", "create"]
    assert specs[0].request_count == 100
    assert specs[0].concurrency == 10
    assert specs[1].is_duration_mode
    assert specs[1].request_body == {"name": "widget"}
    assert specs[1].headers == {"Authorization": "Bearer t"}


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        asyncio.run(load_suite(tmp_path / "missing.json"))


def test_malformed_json_raises(tmp_path):
    path = _write(tmp_path, "[{")
    with pytest.raises(ValueError, match="Error parsing suite file"):
        asyncio.run(load_suite(path))


def test_top_level_must_be_array(tmp_path):
    path = _write(tmp_path, json.dumps({"name": "t1"}))
    with pytest.raises(ValueError, match="JSON array"):
        asyncio.run(load_suite(path))
