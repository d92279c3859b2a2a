# conftest.py - Pytest configuration for the engine benchmark suite

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from enginebench.adapters.subprocess_adapter import SubprocessAdapter  # noqa: E402
from enginebench.benchmark_adapter import BackendError, BenchmarkAdapter  # noqa: E402
from enginebench.benchmark_config import BenchmarkConfig  # noqa: E402
from enginebench.benchmark_run import BenchmarkRun  # noqa: E402
from enginebench.output_parser import parse_gpt_oss_output  # noqa: E402

# Matches no real process; used for the best-effort cleanup in mock adapters.
MOCK_PROCESS_PATTERN = "enginebench-mock-process-that-does-not-exist"


class ScriptedAdapter(BenchmarkAdapter):
    """In-memory adapter whose iterations follow a script of throughputs or errors."""

    def __init__(self, name, outcomes=None, available=True, warmup_error=None, cleanup_error=None):
        self.name = name
        self.outcomes = list(outcomes or [])
        self.available = available
        self.warmup_error = warmup_error
        self.cleanup_error = cleanup_error
        self.ready = False
        self.calls = []

    def get_display_name(self):
        return self.name

    def is_available(self):
        self.calls.append("is_available")
        if isinstance(self.available, Exception):
            raise self.available
        return self.available

    def warmup(self, config):
        self.calls.append("warmup")
        if self.warmup_error is not None:
            raise self.warmup_error
        self.ready = True

    def run_inference(self, config):
        self._require_ready(self.ready)
        self.calls.append("run_inference")
        outcome = self.outcomes.pop(0) if self.outcomes else 10.0
        if isinstance(outcome, Exception):
            raise outcome
        return BenchmarkRun.create(
            tokens_generated=int(outcome),
            inference_time_ms=1000.0,
            latency_ms=1100.0,
            reported_tokens_per_second=outcome,
        )

    def cleanup(self):
        self.calls.append("cleanup")
        self.ready = False
        if self.cleanup_error is not None:
            raise self.cleanup_error


class MockProcessAdapter(SubprocessAdapter):
    """Subprocess adapter that runs a Python one-liner instead of a real engine."""

    tag = "MOCK"

    def __init__(self, script, warmup_script=None, **kwargs):
        super().__init__(**kwargs)
        self.script = script
        self.warmup_script = warmup_script or script

    def get_display_name(self):
        return "Mock Process Engine"

    def is_available(self):
        return True

    def process_pattern(self):
        return MOCK_PROCESS_PATTERN

    def verify_installation(self):
        if not Path(sys.executable).exists():
            raise BackendError("interpreter missing")

    def build_command(self, prompt, max_tokens, temperature, config):
        script = self.script if self.is_verified else self.warmup_script
        return [sys.executable, "-c", script]

    def parse_output(self, result):
        return parse_gpt_oss_output(result.stdout)


@pytest.fixture
def config():
    return BenchmarkConfig(prompt="Hello", max_tokens=5, iterations=1, delay_between_runs_ms=0)


@pytest.fixture
def sleeps():
    """Records requested sleeps instead of sleeping."""
    return []


@pytest.fixture
def no_sleep(sleeps):
    return sleeps.append
