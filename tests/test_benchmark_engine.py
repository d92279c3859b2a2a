"""Tests for the benchmark orchestrator."""

import dataclasses

import pytest

from conftest import MockProcessAdapter, ScriptedAdapter
from enginebench import constants
from enginebench.benchmark_adapter import AdapterNotReadyError, BackendError
from enginebench.benchmark_config import BenchmarkConfig, ConfigurationError
from enginebench.benchmark_engine import BenchmarkEngine

GOOD_OUTPUT = "print('Generated tokens: 5'); print('Tokens per second: 10.0')"


def make_engine(no_sleep, settle_seconds=1.0):
    return BenchmarkEngine(settle_seconds=settle_seconds, sleep=no_sleep)


def test_mock_process_single_iteration(config, no_sleep):
    engine = make_engine(no_sleep)
    engine.register_adapter("mock", MockProcessAdapter(GOOD_OUTPUT))

    report = engine.run_comparison_benchmark(config, ["mock"])

    results = report.results["Mock Process Engine"]
    assert len(results.runs) == 1
    run = results.runs[0]
    assert run.tokens_generated == 5
    assert run.tokens_per_second == pytest.approx(10.0)
    assert run.inference_time_ms == pytest.approx(500.0)
    assert run.latency_ms > 0


def test_mock_process_hang_omits_engine(config, no_sleep):
    adapter = MockProcessAdapter(
        "import time; time.sleep(30)",
        warmup_script=GOOD_OUTPUT,
        inference_timeout=0.5,
    )
    engine = make_engine(no_sleep)
    engine.register_adapter("mock", adapter)

    report = engine.run_comparison_benchmark(config, ["mock"])

    assert report.results == {}
    assert adapter.is_verified is False


def test_warmup_failure_isolated_to_one_engine(config, no_sleep):
    config = dataclasses.replace(config, iterations=3)
    broken = ScriptedAdapter("Broken", warmup_error=BackendError("no binary"))
    healthy = ScriptedAdapter("Healthy", outcomes=[10.0, 12.0, 14.0])
    engine = make_engine(no_sleep)
    engine.register_adapter("broken", broken)
    engine.register_adapter("healthy", healthy)

    report = engine.run_comparison_benchmark(config, ["broken", "healthy"])

    assert list(report.results) == ["Healthy"]
    assert len(report.results["Healthy"].runs) == 3
    assert broken.calls == ["is_available", "warmup", "cleanup"]
    assert "run_inference" not in broken.calls


def test_failed_iterations_are_dropped_in_order(no_sleep):
    config = BenchmarkConfig(prompt="Hello", iterations=5, delay_between_runs_ms=0)
    adapter = ScriptedAdapter("Flaky", outcomes=[10.0, BackendError("timeout"), 30.0, BackendError("exit 1"), 50.0])
    engine = make_engine(no_sleep)
    engine.register_adapter("flaky", adapter)

    report = engine.run_comparison_benchmark(config, ["flaky"])

    results = report.results["Flaky"]
    assert [run.tokens_per_second for run in results.runs] == [10.0, 30.0, 50.0]
    assert results.total_tokens == 90


def test_all_iterations_failing_omits_engine(no_sleep):
    config = BenchmarkConfig(prompt="Hello", iterations=2, delay_between_runs_ms=0)
    adapter = ScriptedAdapter("Dead", outcomes=[BackendError("a"), RuntimeError("b")])
    engine = make_engine(no_sleep)
    engine.register_adapter("dead", adapter)

    report = engine.run_comparison_benchmark(config, ["dead"])

    assert report.results == {}
    assert adapter.calls[-1] == "cleanup"


def test_unavailable_and_unregistered_engines_are_skipped(config, no_sleep):
    offline = ScriptedAdapter("Offline", available=False)
    online = ScriptedAdapter("Online")
    engine = make_engine(no_sleep)
    engine.register_adapter("offline", offline)
    engine.register_adapter("online", online)

    report = engine.run_comparison_benchmark(config, ["offline", "missing", "online"])

    assert list(report.results) == ["Online"]
    assert offline.calls == ["is_available"]


def test_results_follow_requested_order(config, no_sleep):
    engine = make_engine(no_sleep)
    engine.register_adapter("a", ScriptedAdapter("A", outcomes=[5.0]))
    engine.register_adapter("b", ScriptedAdapter("B", outcomes=[50.0]))

    report = engine.run_comparison_benchmark(config, ["b", "a"])

    assert list(report.results) == ["B", "A"]


def test_delay_only_between_iterations_and_after_cleanup(sleeps, no_sleep):
    config = BenchmarkConfig(prompt="Hello", iterations=3, delay_between_runs_ms=250)
    engine = make_engine(no_sleep, settle_seconds=2.0)
    engine.register_adapter("a", ScriptedAdapter("A"))

    engine.run_comparison_benchmark(config, ["a"])

    assert sleeps == [0.25, 0.25, 2.0]


def test_cleanup_errors_are_swallowed_and_settle_still_happens(config, sleeps, no_sleep):
    messy = ScriptedAdapter("Messy", cleanup_error=RuntimeError("pkill missing"))
    tidy = ScriptedAdapter("Tidy")
    engine = make_engine(no_sleep, settle_seconds=2.0)
    engine.register_adapter("messy", messy)
    engine.register_adapter("tidy", tidy)

    report = engine.run_comparison_benchmark(config, ["messy", "tidy"])

    assert list(report.results) == ["Messy", "Tidy"]
    assert sleeps == [2.0, 2.0]


def test_availability_check_errors_skip_only_that_engine(config, no_sleep, capsys):
    broken = ScriptedAdapter("Broken", available=PermissionError("models directory unreadable"))
    healthy = ScriptedAdapter("Healthy")
    engine = make_engine(no_sleep)
    engine.register_adapter("broken", broken)
    engine.register_adapter("healthy", healthy)

    report = engine.run_comparison_benchmark(config, ["broken", "healthy"])

    assert list(report.results) == ["Healthy"]
    assert broken.calls == ["is_available"]
    assert "models directory unreadable" in capsys.readouterr().out


def test_non_zero_exit_iteration_is_dropped(config, no_sleep, capsys):
    adapter = MockProcessAdapter("import sys; sys.exit(2)", warmup_script=GOOD_OUTPUT)
    engine = make_engine(no_sleep)
    engine.register_adapter("mock", adapter)

    report = engine.run_comparison_benchmark(config, ["mock"])

    assert report.results == {}
    out = capsys.readouterr().out
    assert f"{constants.Emojis.GEAR} [MOCK] Verifying installation..." in out
    assert "inference failed" in out


def test_output_without_metrics_is_dropped(config, no_sleep, capsys):
    adapter = MockProcessAdapter("print('hello world')")
    engine = make_engine(no_sleep)
    engine.register_adapter("mock", adapter)

    report = engine.run_comparison_benchmark(config, ["mock"])

    assert report.results == {}
    assert "produced no parsable metrics" in capsys.readouterr().out


def test_invalid_config_is_fatal_before_any_engine_runs(no_sleep):
    adapter = ScriptedAdapter("Never")
    engine = make_engine(no_sleep)
    engine.register_adapter("never", adapter)

    with pytest.raises(ConfigurationError):
        engine.run_comparison_benchmark(BenchmarkConfig(prompt="Hello", iterations=0), ["never"])

    assert adapter.calls == []


class SkipsWarmupAdapter(ScriptedAdapter):
    def warmup(self, config):
        self.calls.append("warmup")


def test_inference_without_warmup_is_fatal(config, no_sleep):
    adapter = SkipsWarmupAdapter("Buggy")
    engine = make_engine(no_sleep)
    engine.register_adapter("buggy", adapter)

    with pytest.raises(AdapterNotReadyError):
        engine.run_comparison_benchmark(config, ["buggy"])

    assert adapter.calls[-1] == "cleanup"


def test_report_carries_config_and_timing(config, no_sleep):
    engine = make_engine(no_sleep)
    engine.register_adapter("a", ScriptedAdapter("A"))

    report = engine.run_comparison_benchmark(config, ["a"])

    assert report.config is config
    assert report.total_benchmark_time_ms >= 0
