"""Core load testing components."""

from .models import TestSpec, AttemptOutcome, ResultSummary
from .executor import RequestExecutor
from .load_tester import LoadTester
from .suite import run_suite
from .suite_loader import load_suite

__all__ = [
    "TestSpec",
    "AttemptOutcome",
    "ResultSummary",
    "RequestExecutor",
    "LoadTester",
    "run_suite",
    "load_suite",
]
