"""Result aggregation and reporting."""

import json
import pandas as pd
from pathlib import Path
from typing import List, Optional, Union

from ..core.models import ResultSummary


class ResultAggregator:
    """Aggregates and formats test summaries for export."""

    def __init__(self):
        self.results: List[ResultSummary] = []

    def add_results(self, results: List[ResultSummary]) -> None:
        """Add multiple test summaries."""
        self.results.extend(results)

    def to_dataframe(self) -> pd.DataFrame:
        """Convert results to pandas DataFrame."""
        data = []
        for result in self.results:
            data.append({
                "Name": result.name,
                "Method": result.method,
                "Requests": result.completed_requests,
                "Attempts": result.attempts,
                "Errors": result.errors,
                "HTTP_Errors": result.http_errors,
                "Duration_s": f"{result.wall_duration:.2f}",
                "RPS": f"{result.throughput_rps:.2f}",
                "Avg_ms": f"{result.avg_latency_ms:.2f}",
                "Min_ms": f"{result.min_latency_ms:.2f}",
                "Max_ms": f"{result.max_latency_ms:.2f}",
                "Status": "FAILED" if result.failed else "OK",
            })
        return pd.DataFrame(data)

    def to_json(self, path: Union[str, Path]) -> None:
        """Write the persisted JSON report."""
        data = [result.to_dict() for result in self.results]
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    def to_csv(self, path: str) -> None:
        df = self.to_dataframe()
        df.to_csv(path, index=False)

    def to_tsv(self, path: str) -> None:
        df = self.to_dataframe()
        df.to_csv(path, sep="\t", index=False)

    def get_tsv_string(self) -> str:
        """Get results as TSV string for easy copy/paste to spreadsheet."""
        df = self.to_dataframe()
        return df.to_csv(sep="\t", index=False)

    def print_summary_table(
        self,
        title: Optional[str] = None,
        description: Optional[str] = None,
    ) -> None:
        """Print formatted summary table to console."""
        if not self.results:
            print("No results to display.")
            return

        print()
        print("=" * 100)
        if title:
            print(title.center(100))
        else:
            print("LOAD TEST RESULTS SUMMARY".center(100))
        print("=" * 100)

        if description:
            print(description)
            print("-" * 100)

        df = self.to_dataframe()
        print(df.to_string(index=False))
        print("=" * 100)

    @staticmethod
    def format_result_line(result: ResultSummary) -> str:
        """One-line progress message for a finished test."""
        if result.failed:
            return f"Test '{result.name}': FAILED ({result.error})"
        return (
            f"Test '{result.name}': RPS = {result.throughput_rps:.2f}, "
            f"Avg latency = {result.avg_latency_ms:.2f}ms"
        )

    def print_result_lines(self) -> None:
        for result in self.results:
            print(self.format_result_line(result))
