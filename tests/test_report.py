"""Tests for report rendering and persistence."""

from datetime import datetime

import pytest

from enginebench.benchmark_config import BenchmarkConfig
from enginebench.benchmark_results import BenchmarkReport, EngineResults
from enginebench.benchmark_run import BenchmarkRun
from enginebench.report import generate_report, load_report, relative_slowdown, save_report


def results_at(*throughputs):
    return EngineResults.from_runs(
        [BenchmarkRun.create(int(tps), 1000.0, 1050.0, reported_tokens_per_second=tps) for tps in throughputs]
    )


@pytest.fixture
def report():
    return BenchmarkReport(
        config=BenchmarkConfig(prompt="Explain entropy", max_tokens=50, iterations=3),
        results={
            "llama.cpp (GPU)": results_at(40.0, 40.0, 40.0),
            "Native Engine (pytorch)": results_at(50.0, 60.0, 70.0),
        },
        total_benchmark_time_ms=12340.0,
        timestamp=datetime(2025, 8, 14, 10, 30, 15),
    )


def test_relative_slowdown():
    assert relative_slowdown(results_at(50.0), results_at(40.0)) == pytest.approx(20.0)
    assert relative_slowdown(results_at(60.0), results_at(40.0)) == pytest.approx(100 / 3)
    assert relative_slowdown(results_at(60.0), results_at(60.0)) == 0.0


def test_report_sections(report):
    text = generate_report(report)

    assert text.startswith("📊 INFERENCE ENGINE BENCHMARK REPORT")
    for heading in (
        "PERFORMANCE COMPARISON",
        "RELATIVE PERFORMANCE",
        "DETAILED STATS: llama.cpp (GPU)",
        "DETAILED STATS: Native Engine (pytorch)",
        "SYSTEM INFORMATION",
    ):
        assert heading in text
    assert "Prompt: Explain entropy" in text
    assert "Total Benchmark Time: 12.34s" in text


def test_report_ranks_by_average_throughput(report):
    lines = generate_report(report).splitlines()
    ranking = [line for line in lines if line[:1] in ("1", "2")]
    assert ranking[0].split()[1:3] == ["Native", "Engine"]
    assert ranking[1].split()[1] == "llama.cpp"


def test_report_relative_performance(report):
    text = generate_report(report)
    assert "🎯 Best: Native Engine (pytorch) (60.00 tok/s)" in text
    assert "llama.cpp (GPU): 33.3% slower than Native Engine (pytorch)" in text


def test_report_detailed_stats(report):
    text = generate_report(report)
    assert "Successful Runs: 3/3" in text
    assert "Tokens/Second Range: 50.00 - 70.00" in text
    assert "Consistency (1σ): ±0.00 tok/s" in text


def test_single_engine_has_no_relative_section():
    report = BenchmarkReport(
        config=BenchmarkConfig(prompt="Hello", iterations=2),
        results={"Solo": results_at(10.0)},
        total_benchmark_time_ms=100.0,
    )
    text = generate_report(report)
    assert "RELATIVE PERFORMANCE" not in text
    assert "Successful Runs: 1/2" in text


def test_empty_report_is_still_rendered():
    report = BenchmarkReport(config=BenchmarkConfig(prompt="Hello"), results={}, total_benchmark_time_ms=0.0)
    text = generate_report(report)
    assert "No engine completed a successful run." in text
    assert "SYSTEM INFORMATION" in text


def test_save_and_load_report(report, tmp_path):
    output_dir = tmp_path / "nested" / "results"

    text_file, json_file = save_report(report, output_dir)

    assert text_file == output_dir / "benchmark-20250814-103015.txt"
    assert json_file == output_dir / "benchmark-20250814-103015.json"
    assert text_file.read_text(encoding="utf-8").startswith("📊 INFERENCE ENGINE BENCHMARK REPORT")

    restored = load_report(json_file)
    assert restored.config == report.config
    assert list(restored.results) == list(report.results)
    assert restored.total_benchmark_time_ms == report.total_benchmark_time_ms


def test_save_report_into_a_file_path_fails(report, tmp_path):
    blocker = tmp_path / "results"
    blocker.write_text("not a directory")
    with pytest.raises(OSError):
        save_report(report, blocker)
