#!/usr/bin/env python3
"""
Benchmark results storage and metrics.

Contains the per-engine aggregates and the full comparison report.
"""

import json
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .benchmark_config import BenchmarkConfig
from .benchmark_run import BenchmarkRun


def standard_deviation(values: list[float]) -> float:
    """Population standard deviation, 0.0 for fewer than two values."""
    if len(values) < 2:
        return 0.0
    mean = sum(values) / len(values)
    variance = sum((value - mean) ** 2 for value in values) / len(values)
    return math.sqrt(variance)


@dataclass(frozen=True)
class EngineResults:
    """
    Aggregate of all successful runs for one engine.
    """

    runs: tuple[BenchmarkRun, ...]
    total_tokens: int
    average_tokens_per_second: float
    best_tokens_per_second: float
    worst_tokens_per_second: float
    standard_deviation: float
    average_latency_ms: float
    total_inference_time_ms: float

    @classmethod
    def from_runs(cls, runs: list[BenchmarkRun]) -> "EngineResults":
        """Aggregate runs in execution order. Requires at least one run."""
        if not runs:
            raise ValueError("Cannot aggregate an empty run sequence")

        throughputs = [run.tokens_per_second for run in runs]
        return cls(
            runs=tuple(runs),
            total_tokens=sum(run.tokens_generated for run in runs),
            average_tokens_per_second=sum(throughputs) / len(throughputs),
            best_tokens_per_second=max(throughputs),
            worst_tokens_per_second=min(throughputs),
            standard_deviation=standard_deviation(throughputs),
            average_latency_ms=sum(run.latency_ms for run in runs) / len(runs),
            total_inference_time_ms=sum(run.inference_time_ms for run in runs),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "runs": [run.to_dict() for run in self.runs],
            "total_tokens": self.total_tokens,
            "average_tokens_per_second": self.average_tokens_per_second,
            "best_tokens_per_second": self.best_tokens_per_second,
            "worst_tokens_per_second": self.worst_tokens_per_second,
            "standard_deviation": self.standard_deviation,
            "average_latency_ms": self.average_latency_ms,
            "total_inference_time_ms": self.total_inference_time_ms,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EngineResults":
        return cls(
            runs=tuple(BenchmarkRun.from_dict(run) for run in data["runs"]),
            total_tokens=int(data["total_tokens"]),
            average_tokens_per_second=float(data["average_tokens_per_second"]),
            best_tokens_per_second=float(data["best_tokens_per_second"]),
            worst_tokens_per_second=float(data["worst_tokens_per_second"]),
            standard_deviation=float(data["standard_deviation"]),
            average_latency_ms=float(data["average_latency_ms"]),
            total_inference_time_ms=float(data["total_inference_time_ms"]),
        )


@dataclass(frozen=True)
class BenchmarkReport:
    """
    Full comparison artifact: one entry per engine with at least one successful run.

    Keys of ``results`` are engine display names in the order they were requested.
    """

    config: BenchmarkConfig
    results: dict[str, EngineResults]
    total_benchmark_time_ms: float
    timestamp: datetime = field(default_factory=datetime.now)

    def ranked(self) -> list[tuple[str, EngineResults]]:
        """Engines sorted by average throughput, fastest first."""
        return sorted(self.results.items(), key=lambda item: item[1].average_tokens_per_second, reverse=True)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "config": self.config.to_dict(),
            "results": {name: results.to_dict() for name, results in self.results.items()},
            "total_benchmark_time_ms": self.total_benchmark_time_ms,
            "timestamp": self.timestamp.isoformat(),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BenchmarkReport":
        return cls(
            config=BenchmarkConfig.from_dict(data["config"]),
            results={name: EngineResults.from_dict(results) for name, results in data["results"].items()},
            total_benchmark_time_ms=float(data["total_benchmark_time_ms"]),
            timestamp=datetime.fromisoformat(data["timestamp"]),
        )

    @classmethod
    def from_json(cls, text: str) -> "BenchmarkReport":
        return cls.from_dict(json.loads(text))
