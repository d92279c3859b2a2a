#!/usr/bin/env python3
"""
Benchmark orchestration and execution.

Drives each engine through warmup, N measured iterations and cleanup, one
engine at a time, and collects the results into a BenchmarkReport. A failure in
one engine never stops the others.
"""

import gc
import time
from collections.abc import Callable, Hashable

from . import constants
from .benchmark_adapter import AdapterNotReadyError, BenchmarkAdapter
from .benchmark_config import BenchmarkConfig
from .benchmark_results import BenchmarkReport, EngineResults
from .benchmark_run import BenchmarkRun

Emojis = constants.Emojis


class BenchmarkEngine:
    """
    Runs the same workload against every registered engine, sequentially.

    Engines and iterations never overlap so that GPU and CPU contention cannot
    skew the comparison.
    """

    def __init__(
        self,
        settle_seconds: float = constants.ENGINE_SETTLE_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.adapters: dict[Hashable, BenchmarkAdapter] = {}
        self.settle_seconds = settle_seconds
        self._sleep = sleep

    def register_adapter(self, engine: Hashable, adapter: BenchmarkAdapter) -> None:
        """Register the adapter used for ``engine``."""
        self.adapters[engine] = adapter

    def run_comparison_benchmark(self, config: BenchmarkConfig, engines: list[Hashable]) -> BenchmarkReport:
        """
        Benchmark ``engines`` in order with ``config``.

        Raises ConfigurationError before touching any engine if the config is invalid.
        Engines without a single successful run are left out of the report.
        """
        config.validate()

        start_time = time.perf_counter()
        results: dict[str, EngineResults] = {}

        print(f"{Emojis.ROCKET} Starting benchmark comparison...")
        print(f'Prompt: "{config.prompt_preview()}"')
        print(f"Engines: {', '.join(_engine_label(engine) for engine in engines)}")
        print(f"Iterations: {config.iterations}")
        print(f"Max tokens: {config.max_tokens}")
        print()

        for engine in engines:
            adapter = self.adapters.get(engine)
            if adapter is None:
                print(f"{Emojis.WARNING}  No adapter found for {_engine_label(engine)}, skipping...")
                continue

            try:
                name = adapter.get_display_name()
                available = adapter.is_available()
            except Exception as e:
                print(f"{Emojis.WARNING}  {_engine_label(engine)} availability check failed: {e}, skipping...")
                print()
                continue

            if not available:
                print(f"{Emojis.WARNING}  {name} is not available, skipping...")
                print()
                continue

            print(f"{Emojis.GEAR} Benchmarking {name}...")
            try:
                engine_results = self.run_engine_benchmark(adapter, config)
                if engine_results is None:
                    print(f"{Emojis.ERROR} {name} produced no successful runs")
                else:
                    results[name] = engine_results
                    print(f"{Emojis.CHECKMARK} {name} completed")
                    print(f"  Average: {engine_results.average_tokens_per_second:.2f} tokens/sec")
                    print(f"  Best: {engine_results.best_tokens_per_second:.2f} tokens/sec")
                    print(f"  Total tokens: {engine_results.total_tokens}")
            except AdapterNotReadyError:
                raise
            except Exception as e:
                print(f"{Emojis.ERROR} {name} failed: {e}")
            finally:
                self._cleanup_adapter(name, adapter)
            print()

        total_time_ms = (time.perf_counter() - start_time) * 1000
        return BenchmarkReport(config=config, results=results, total_benchmark_time_ms=total_time_ms)

    def run_engine_benchmark(self, adapter: BenchmarkAdapter, config: BenchmarkConfig) -> EngineResults | None:
        """
        Warm up and run every iteration for one engine.

        Warmup errors propagate; iteration errors drop that iteration only.
        Returns None when no iteration succeeded.
        """
        print(f"  {Emojis.LIGHTNING} Warmup...")
        adapter.warmup(config)

        runs: list[BenchmarkRun] = []
        for i in range(1, config.iterations + 1):
            try:
                run = adapter.run_inference(config)
            except AdapterNotReadyError:
                raise
            except Exception as e:
                print(f"  Run {i}/{config.iterations}... {Emojis.ERROR} failed: {e}")
            else:
                runs.append(run)
                print(f"  Run {i}/{config.iterations}... {run.tokens_per_second:.2f} tokens/sec")

            if i < config.iterations:
                self._sleep(config.delay_between_runs_ms / 1000)

        if not runs:
            return None
        return EngineResults.from_runs(runs)

    def _cleanup_adapter(self, name: str, adapter: BenchmarkAdapter) -> None:
        print(f"  {Emojis.BROOM} Cleaning up {name}...")
        try:
            adapter.cleanup()
        except Exception as e:
            print(f"  {Emojis.WARNING}  Cleanup warning for {name}: {e}")
        finally:
            # The next engine always starts after the settle delay.
            gc.collect()
            self._sleep(self.settle_seconds)


def _engine_label(engine: Hashable) -> str:
    return getattr(engine, "cli_name", str(engine))
