"""Chart generation for load test results."""

import matplotlib.pyplot as plt
from datetime import datetime
from typing import List, Optional

from ..core.models import ResultSummary


def generate_charts(
    results: List[ResultSummary],
    output_path: Optional[str] = None,
    show: bool = False,
) -> Optional[str]:
    """
    Generate per-test throughput and latency charts.

    Args:
        results: Test summaries to plot
        output_path: Path to save the chart (auto-generated if None)
        show: Whether to display the chart

    Returns:
        Path to saved chart file, or None if there was nothing to plot
    """
    if not results:
        print("No results to chart.")
        return None

    names = [r.name or f"#{i + 1}" for i, r in enumerate(results)]
    positions = list(range(len(results)))
    throughput = [r.throughput_rps for r in results]
    avg_latency = [r.avg_latency_ms for r in results]
    min_latency = [r.min_latency_ms for r in results]
    max_latency = [r.max_latency_ms for r in results]

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(15, 6))
    fig.suptitle("Load Test Results", fontsize=16, fontweight="bold")

    # Throughput chart
    ax1.bar(positions, throughput, color="tab:blue")
    ax1.set_xticks(positions)
    ax1.set_xticklabels(names, rotation=30, ha="right")
    ax1.set_ylabel("Throughput (requests/second)")
    ax1.set_title("Throughput per Test")
    ax1.grid(True, axis="y", alpha=0.3)

    # Latency chart, average with min-max range as error bars
    lower = [avg - lo for avg, lo in zip(avg_latency, min_latency)]
    upper = [hi - avg for avg, hi in zip(avg_latency, max_latency)]
    ax2.bar(positions, avg_latency, color="tab:green", label="Average")
    ax2.errorbar(
        positions, avg_latency, yerr=[lower, upper], fmt="none",
        ecolor="black", capsize=4, label="Min-Max Range",
    )
    ax2.set_xticks(positions)
    ax2.set_xticklabels(names, rotation=30, ha="right")
    ax2.set_ylabel("Latency (ms)")
    ax2.set_title("Latency per Test")
    ax2.legend()
    ax2.grid(True, axis="y", alpha=0.3)

    plt.tight_layout()

    if output_path:
        saved_path = output_path
    else:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        saved_path = f"load_test_results_{timestamp}.png"

    plt.savefig(saved_path, dpi=150, bbox_inches="tight")
    print(f"\nChart saved as: {saved_path}")

    if show:
        plt.show()
    plt.close(fig)

    return saved_path
