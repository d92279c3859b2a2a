#!/usr/bin/env python3
"""
Report rendering and persistence.

Turns a BenchmarkReport into the sectioned text comparison and writes both the
text and the JSON form to a results directory.
"""

from pathlib import Path

from . import constants
from .benchmark_results import BenchmarkReport, EngineResults
from .system_info import get_system_info

Emojis = constants.Emojis


def relative_slowdown(leader: EngineResults, other: EngineResults) -> float:
    """Percentage of the leader's average throughput that ``other`` falls short by."""
    if leader.average_tokens_per_second <= 0:
        return 0.0
    gap = leader.average_tokens_per_second - other.average_tokens_per_second
    return gap / leader.average_tokens_per_second * 100


def generate_report(report: BenchmarkReport) -> str:
    """Render the human readable comparison."""
    width = constants.REPORT_WIDTH
    section = constants.SECTION_WIDTH
    lines = [
        f"{Emojis.CHART} INFERENCE ENGINE BENCHMARK REPORT",
        "=" * width,
        "",
        f"Timestamp: {report.timestamp.isoformat(timespec='seconds')}",
        f"Prompt: {report.config.prompt}",
        f"Max Tokens: {report.config.max_tokens}",
        f"Temperature: {report.config.temperature}",
        f"Iterations: {report.config.iterations}",
        f"Total Benchmark Time: {report.total_benchmark_time_ms / 1000:.2f}s",
        "",
    ]

    # Performance comparison table
    lines += [
        "PERFORMANCE COMPARISON",
        "-" * width,
        f"{'Rank':<5} {'Engine':<28} {'Avg tok/s':<10} {'Best':<9} {'Worst':<9} {'StdDev':<8}",
        "-" * width,
    ]
    ranked = report.ranked()
    if not ranked:
        lines.append("No engine completed a successful run.")
    for rank, (name, results) in enumerate(ranked, 1):
        lines.append(
            f"{rank:<5} {name:<28} {results.average_tokens_per_second:<10.2f} "
            f"{results.best_tokens_per_second:<9.2f} {results.worst_tokens_per_second:<9.2f} "
            f"{results.standard_deviation:<8.2f}"
        )
    lines.append("")

    # Relative performance analysis
    if len(ranked) >= 2:
        leader_name, leader = ranked[0]
        lines += [
            "RELATIVE PERFORMANCE",
            "-" * section,
            f"{Emojis.TARGET} Best: {leader_name} ({leader.average_tokens_per_second:.2f} tok/s)",
        ]
        for name, results in ranked[1:]:
            lines.append(f"{name}: {relative_slowdown(leader, results):.1f}% slower than {leader_name}")
        lines.append("")

    # Detailed statistics per engine, in requested order
    for name, results in report.results.items():
        lines += [
            f"DETAILED STATS: {name}",
            "-" * section,
            f"Successful Runs: {len(results.runs)}/{report.config.iterations}",
            f"Total Tokens Generated: {results.total_tokens}",
            f"Total Inference Time: {results.total_inference_time_ms / 1000:.2f}s",
            f"Average Latency: {results.average_latency_ms:.2f}ms",
            f"Tokens/Second Range: {results.worst_tokens_per_second:.2f} - {results.best_tokens_per_second:.2f}",
            f"Consistency (1σ): ±{results.standard_deviation:.2f} tok/s",
            "",
        ]

    info = get_system_info()
    lines += [
        "SYSTEM INFORMATION",
        "-" * section,
        f"OS: {info['os']} {info['os_release']}",
        f"Architecture: {info['architecture']}",
        f"Python: {info['python']}",
        f"Available Processors: {info['cpu_count']}",
        f"Total Memory: {info['total_memory_mb']}MB",
        "",
    ]

    return "\n".join(lines)


def save_report(report: BenchmarkReport, output_dir: str | Path = constants.RESULTS_DIR) -> tuple[Path, Path]:
    """
    Write ``benchmark-<timestamp>.txt`` and ``.json`` into ``output_dir``.

    The directory is created if needed; OSError propagates when it cannot be written.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    stamp = report.timestamp.strftime("%Y%m%d-%H%M%S")
    report_file = output_dir / f"benchmark-{stamp}.txt"
    json_file = output_dir / f"benchmark-{stamp}.json"

    report_file.write_text(generate_report(report), encoding="utf-8")
    json_file.write_text(report.to_json(), encoding="utf-8")

    print(f"{Emojis.PACKAGE} Reports saved:")
    print(f"  Text: {report_file.resolve()}")
    print(f"  JSON: {json_file.resolve()}")
    return report_file, json_file


def load_report(path: str | Path) -> BenchmarkReport:
    """Read a report previously written by save_report()."""
    return BenchmarkReport.from_json(Path(path).read_text(encoding="utf-8"))
