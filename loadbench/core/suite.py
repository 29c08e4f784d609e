"""Concurrent execution of a whole test suite."""

import asyncio
import logging
from typing import List, Optional

from .load_tester import LoadTester
from .models import TestSpec, ResultSummary

logger = logging.getLogger(__name__)


async def run_suite(
    specs: List[TestSpec],
    request_timeout: Optional[float] = 1200,
    max_in_flight: Optional[int] = None,
) -> List[ResultSummary]:
    """
    Run every test in the suite concurrently.

    Args:
        specs: Tests to run
        request_timeout: Total timeout for each request, in seconds
        max_in_flight: Optional in-flight cap for duration-mode tests

    Returns:
        One summary per spec. A test that fails does not affect the others;
        it is reported as a failed summary instead.
    """
    logger.info(f"Running {len(specs)} tests concurrently")

    testers = [
        LoadTester(spec, request_timeout=request_timeout, max_in_flight=max_in_flight)
        for spec in specs
    ]
    outcomes = await asyncio.gather(
        *(tester.run() for tester in testers), return_exceptions=True
    )

    summaries = []
    for spec, outcome in zip(specs, outcomes):
        if isinstance(outcome, BaseException):
            if isinstance(outcome, asyncio.CancelledError):
                raise outcome
            logger.error(f"Test '{spec.name}' failed: {outcome}")
            outcome = ResultSummary.for_failure(spec.name, spec.method, str(outcome))
        summaries.append(outcome)

    return summaries
