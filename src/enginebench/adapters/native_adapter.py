#!/usr/bin/env python3
"""
In-process engine adapter.
"""

import time

from .. import constants
from ..benchmark_adapter import BackendError, BenchmarkAdapter
from ..benchmark_config import BenchmarkConfig
from ..benchmark_run import BenchmarkRun
from ..engines.base import InferenceEngine
from ..system_info import get_process_memory_mb


class NativeEngineAdapter(BenchmarkAdapter):
    """Adapter that calls an in-process engine handle directly; no subprocess, no parsing."""

    def __init__(self, engine: InferenceEngine):
        self.engine = engine
        self.is_initialized = False

    def get_display_name(self) -> str:
        return f"Native Engine ({self.engine.get_name()})"

    def is_available(self) -> bool:
        try:
            return self.engine.is_available()
        except Exception:
            return False

    def warmup(self, config: BenchmarkConfig) -> None:
        if self.is_initialized:
            return

        print(f"{constants.Emojis.GEAR} [NATIVE] Warming up {self.engine.get_name()}...")
        try:
            result = self.engine.generate_once(
                constants.WARMUP_PROMPT, constants.WARMUP_TOKENS, constants.DEFAULT_TEMPERATURE
            )
        except Exception as e:
            raise BackendError(f"Native engine warmup failed: {e}") from e

        if result.tokens_generated == 0:
            raise BackendError("Native engine warmup failed - no tokens generated")

        self.is_initialized = True

    def run_inference(self, config: BenchmarkConfig) -> BenchmarkRun:
        self._require_ready(self.is_initialized)

        start_time = time.perf_counter()
        try:
            result = self.engine.generate_once(config.prompt, config.max_tokens, config.temperature)
        except Exception as e:
            raise BackendError(f"Native engine inference failed: {e}") from e
        elapsed_ms = (time.perf_counter() - start_time) * 1000

        if result.tokens_generated <= 0:
            raise BackendError("Native engine produced no tokens")

        return BenchmarkRun.create(
            tokens_generated=result.tokens_generated,
            inference_time_ms=elapsed_ms,
            latency_ms=elapsed_ms,
            memory_usage_mb=get_process_memory_mb(),
            gpu_usage_mb=result.gpu_memory_mb,
        )

    def cleanup(self) -> None:
        # Weights may be resident even after a failed warmup.
        self.is_initialized = False
        try:
            self.engine.close()
        except Exception as e:
            print(f"   Native engine cleanup failed: {e}")
