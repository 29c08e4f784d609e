"""Core load testing functionality."""

import asyncio
import logging
import statistics
import time
from typing import List, Optional

import aiohttp

from .executor import RequestExecutor
from .models import TestSpec, AttemptOutcome, ResultSummary


class LoadTester:
    """
    Runs one load test against a single endpoint.

    Supports two modes:
    - Count: Sends exactly `request_count` requests, at most `concurrency`
      in flight at once
    - Duration: Launches requests as fast as possible until `duration_seconds`
      have elapsed, then waits for everything already launched

    Duration mode places no bound on in-flight requests unless
    `max_in_flight` is given. Against a slow endpoint it will keep opening
    connections until the deadline, which can exhaust sockets or memory on
    the load-generating host.
    """

    def __init__(
        self,
        spec: TestSpec,
        request_timeout: Optional[float] = 1200,
        max_in_flight: Optional[int] = None,
    ):
        self.spec = spec
        self.request_timeout = request_timeout
        self.max_in_flight = max_in_flight
        self.executor = RequestExecutor(spec)

        logging.basicConfig(
            level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
        )
        self.logger = logging.getLogger(__name__)

    async def run(self) -> ResultSummary:
        """Run the test in the mode selected by its spec and summarize it."""
        try:
            self.spec.validate()
        except ValueError as e:
            self.logger.error(f"Invalid configuration for test '{self.spec.name}': {e}")
            return ResultSummary.for_failure(self.spec.name, self.spec.method, str(e))

        timeout = aiohttp.ClientTimeout(total=self.request_timeout)
        # limit=0 leaves the in-flight bound to the dispatch mode
        connector = aiohttp.TCPConnector(ssl=False, limit=0)

        async with aiohttp.ClientSession(
            timeout=timeout, connector=connector
        ) as session:
            start_time = time.perf_counter()
            if self.spec.is_duration_mode:
                outcomes = await self.run_duration_mode(session)
            else:
                outcomes = await self.run_count_mode(session)
            wall_duration = time.perf_counter() - start_time

        return self.summarize(outcomes, wall_duration)

    async def run_count_mode(
        self, session: aiohttp.ClientSession
    ) -> List[AttemptOutcome]:
        """Send `request_count` requests with at most `concurrency` in flight."""
        total_requests = self.spec.request_count
        # run() validates first; direct callers would otherwise block on a
        # zero-capacity semaphore
        if self.spec.concurrency < 1:
            raise ValueError("Concurrency must be at least 1 in count mode")

        self.logger.info(f"Starting count test '{self.spec.name}':")
        self.logger.info(
            f"  Sending {total_requests} {self.spec.method} requests to "
            f"{self.spec.target_uri} with concurrency {self.spec.concurrency}"
        )

        slots = asyncio.Semaphore(self.spec.concurrency)
        progress_step = max(1, total_requests // 10)
        tasks = []

        for i in range(total_requests):
            await slots.acquire()
            tasks.append(asyncio.create_task(self._attempt(session, slots)))

            if (i + 1) % progress_step == 0:
                self.logger.info(
                    f"'{self.spec.name}': launched {i + 1}/{total_requests} requests"
                )

        return list(await asyncio.gather(*tasks))

    async def run_duration_mode(
        self, session: aiohttp.ClientSession
    ) -> List[AttemptOutcome]:
        """Launch requests until the duration elapses, then wait for all of them."""
        duration = self.spec.duration_seconds

        self.logger.info(f"Starting duration test '{self.spec.name}':")
        self.logger.info(
            f"  Sending {self.spec.method} requests to {self.spec.target_uri} "
            f"for {duration} seconds"
        )
        if self.max_in_flight:
            self.logger.info(f"  In-flight cap: {self.max_in_flight}")

        loop = asyncio.get_running_loop()
        deadline = loop.time() + duration
        slots = asyncio.Semaphore(self.max_in_flight) if self.max_in_flight else None
        tasks = []

        while loop.time() < deadline:
            if slots is not None:
                try:
                    await asyncio.wait_for(slots.acquire(), deadline - loop.time())
                except asyncio.TimeoutError:
                    break
                if loop.time() >= deadline:
                    slots.release()
                    break

            tasks.append(asyncio.create_task(self._attempt(session, slots)))
            # Yield so launched requests make progress between launches
            await asyncio.sleep(0)

        self.logger.info(
            f"'{self.spec.name}': duration elapsed after {len(tasks)} launches, "
            "waiting for in-flight requests to complete..."
        )
        return list(await asyncio.gather(*tasks))

    async def _attempt(
        self,
        session: aiohttp.ClientSession,
        slots: Optional[asyncio.Semaphore],
    ) -> AttemptOutcome:
        """Run the executor once and free the admission slot afterwards."""
        try:
            return await self.executor.execute(session)
        except Exception as e:
            self.logger.exception(
                f"Unexpected error requesting {self.spec.target_uri}: {e}"
            )
            return AttemptOutcome(elapsed=None, error=str(e))
        finally:
            if slots is not None:
                slots.release()

    def summarize(
        self, outcomes: List[AttemptOutcome], wall_duration: float
    ) -> ResultSummary:
        """Reduce attempt outcomes into a result summary."""
        samples = [o.elapsed for o in outcomes if o.has_sample]
        http_errors = sum(
            1 for o in outcomes if o.has_sample and o.status is not None and o.status >= 400
        )

        if samples:
            avg_latency = statistics.mean(samples) * 1000
            min_latency = min(samples) * 1000
            max_latency = max(samples) * 1000
        else:
            avg_latency = min_latency = max_latency = 0.0

        throughput = len(samples) / wall_duration if wall_duration > 0 else 0.0

        return ResultSummary(
            name=self.spec.name,
            method=self.spec.method,
            completed_requests=len(samples),
            attempts=len(outcomes),
            errors=len(outcomes) - len(samples),
            http_errors=http_errors,
            wall_duration=wall_duration,
            throughput_rps=throughput,
            avg_latency_ms=avg_latency,
            min_latency_ms=min_latency,
            max_latency_ms=max_latency,
        )
