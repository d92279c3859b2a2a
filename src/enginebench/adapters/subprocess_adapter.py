#!/usr/bin/env python3
"""
Shared behaviour for engines that run as external processes.

Subclasses provide installation checks, command construction and output
parsing; this class handles timing, timeouts, failure reporting and cleanup.
"""

import time
from abc import abstractmethod
from pathlib import Path

from .. import constants
from ..benchmark_adapter import BackendError, BenchmarkAdapter
from ..benchmark_config import BenchmarkConfig
from ..benchmark_run import BenchmarkRun
from ..output_parser import ParsedMetrics, has_metrics
from ..process_runner import CommandResult, execute_command, kill_processes_matching


class SubprocessAdapter(BenchmarkAdapter):
    """Base adapter for engines invoked once per inference as a child process."""

    # Tag used in console output, e.g. "LLAMA.CPP"
    tag = "SUBPROCESS"

    def __init__(
        self,
        warmup_timeout: float = constants.WARMUP_TIMEOUT_SECONDS,
        inference_timeout: float = constants.INFERENCE_TIMEOUT_SECONDS,
    ):
        self.warmup_timeout = warmup_timeout
        self.inference_timeout = inference_timeout
        self.is_verified = False

    @abstractmethod
    def verify_installation(self) -> None:
        """Raise BackendError when the engine cannot be run."""

    @abstractmethod
    def build_command(self, prompt: str, max_tokens: int, temperature: float, config: BenchmarkConfig) -> list[str]:
        """Argument vector for one inference."""

    @abstractmethod
    def parse_output(self, result: CommandResult) -> ParsedMetrics:
        """Extract metrics from a successful invocation."""

    @abstractmethod
    def process_pattern(self) -> str:
        """Command-line pattern identifying stray engine processes."""

    def working_dir(self) -> Path | None:
        return None

    def memory_usage_mb(self, metrics: ParsedMetrics, result: CommandResult) -> int:
        """Engine-reported memory, else the measured peak of this invocation."""
        return metrics.memory_usage_mb or result.peak_memory_mb

    def warmup(self, config: BenchmarkConfig) -> None:
        if self.is_verified:
            return

        print(f"{constants.Emojis.GEAR} [{self.tag}] Verifying installation...")
        self.verify_installation()

        command = self.build_command(
            constants.WARMUP_PROMPT, constants.SUBPROCESS_WARMUP_TOKENS, constants.DEFAULT_TEMPERATURE, config
        )
        result = execute_command(command, timeout_seconds=self.warmup_timeout, working_dir=self.working_dir())
        if not result.succeeded:
            raise BackendError(f"{self.get_display_name()} warmup failed: {result.stderr.strip()}")

        self.is_verified = True

    def run_inference(self, config: BenchmarkConfig) -> BenchmarkRun:
        self._require_ready(self.is_verified)

        command = self.build_command(config.prompt, config.max_tokens, config.temperature, config)

        start_time = time.perf_counter()
        result = execute_command(command, timeout_seconds=self.inference_timeout, working_dir=self.working_dir())
        latency_ms = (time.perf_counter() - start_time) * 1000

        if not result.succeeded:
            raise BackendError(f"{self.get_display_name()} inference failed: {result.stderr.strip()}")

        metrics = self.parse_output(result)
        if not has_metrics(metrics):
            raise BackendError(f"{self.get_display_name()} produced no parsable metrics")

        return BenchmarkRun.create(
            tokens_generated=metrics.tokens_generated,
            inference_time_ms=metrics.inference_time_ms or latency_ms,
            latency_ms=latency_ms,
            reported_tokens_per_second=metrics.tokens_per_second,
            memory_usage_mb=self.memory_usage_mb(metrics, result),
            gpu_usage_mb=metrics.gpu_memory_mb,
        )

    def cleanup(self) -> None:
        self.is_verified = False
        try:
            kill_processes_matching(self.process_pattern())
        except Exception as e:
            print(f"{constants.Emojis.WARNING}  {self.get_display_name()} process cleanup failed: {e}")
