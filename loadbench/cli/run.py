"""CLI for running a load test suite."""

import argparse
import asyncio
import sys
from typing import List, Optional

from ..core.models import ResultSummary
from ..core.suite import run_suite
from ..core.suite_loader import load_suite
from ..results.aggregator import ResultAggregator


async def run_suite_file(
    config_path: str,
    request_timeout: Optional[float] = 1200,
    max_in_flight: Optional[int] = None,
) -> List[ResultSummary]:
    """Load a suite file and run every test in it concurrently."""
    specs = await load_suite(config_path)

    print(f"\nStarting load test suite with {len(specs)} tests")
    for spec in specs:
        mode = (
            f"{spec.duration_seconds}s duration"
            if spec.is_duration_mode
            else f"{spec.request_count} requests, concurrency {spec.concurrency}"
        )
        print(f"  {spec.name}: {spec.method} {spec.target_uri} ({mode})")

    return await run_suite(
        specs, request_timeout=request_timeout, max_in_flight=max_in_flight
    )


def main():
    """Main entry point for run CLI."""
    parser = argparse.ArgumentParser(
        description="Run a suite of concurrent HTTP load tests"
    )
    parser.add_argument(
        "config",
        nargs="?",
        default="config.json",
        help="Suite file with a JSON array of tests (default: config.json)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="results.json",
        help="Path of the JSON report (default: results.json)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=1200,
        help="Total timeout per request in seconds (default: 1200)",
    )
    parser.add_argument(
        "--max-in-flight",
        type=int,
        default=None,
        help="Cap on in-flight requests for duration-mode tests (default: unbounded)",
    )
    parser.add_argument(
        "--csv",
        type=str,
        default=None,
        help="Also export the summary table as CSV to this path",
    )
    parser.add_argument(
        "--tsv",
        type=str,
        default=None,
        help="Also export the summary table as TSV to this path",
    )
    parser.add_argument(
        "--chart",
        type=str,
        default=None,
        help="Save a throughput/latency chart to this PNG path",
    )

    args = parser.parse_args()

    if args.timeout <= 0:
        print("Error: timeout must be positive")
        sys.exit(1)
    if args.max_in_flight is not None and args.max_in_flight <= 0:
        print("Error: max-in-flight must be positive")
        sys.exit(1)

    aggregator = ResultAggregator()

    try:
        results = asyncio.run(
            run_suite_file(
                args.config,
                request_timeout=args.timeout,
                max_in_flight=args.max_in_flight,
            )
        )
    except KeyboardInterrupt:
        print("\nLoad test interrupted by user")
        sys.exit(1)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading suite: {e}")
        sys.exit(1)
    except Exception as e:
        print(f"Error running load test suite: {e}")
        sys.exit(1)

    aggregator.add_results(results)

    print()
    aggregator.print_result_lines()
    aggregator.print_summary_table(
        title="LOAD TEST SUITE RESULTS",
        description=f"Suite: {args.config} | Tests: {len(results)}",
    )

    try:
        aggregator.to_json(args.output)
        print(f"Results saved in {args.output}")
        if args.csv:
            aggregator.to_csv(args.csv)
            print(f"Summary table saved in {args.csv}")
        if args.tsv:
            aggregator.to_tsv(args.tsv)
            print(f"Summary table saved in {args.tsv}")
    except OSError as e:
        print(f"Error writing results: {e}")
        sys.exit(1)

    if args.chart and results:
        from ..results.charts import generate_charts

        generate_charts(results, output_path=args.chart)


if __name__ == "__main__":
    main()
