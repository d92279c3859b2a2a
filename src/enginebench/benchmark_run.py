#!/usr/bin/env python3
"""
Single measured inference sample.

Defines the BenchmarkRun class produced by every adapter for one iteration.
"""

from dataclasses import dataclass
from typing import Any


def tokens_per_second(tokens_generated: int, inference_time_ms: float) -> float:
    """Throughput from a token count and an inference time, 0.0 when undefined."""
    if tokens_generated <= 0 or inference_time_ms <= 0:
        return 0.0
    return tokens_generated * 1000.0 / inference_time_ms


@dataclass(frozen=True)
class BenchmarkRun:
    """
    One measured inference attempt.

    inference_time_ms is what the engine spent generating; latency_ms is the
    wall-clock time seen by the harness, including process start-up.
    """

    tokens_generated: int
    inference_time_ms: float
    tokens_per_second: float
    latency_ms: float
    memory_usage_mb: int = 0
    gpu_usage_mb: int = 0

    @classmethod
    def create(
        cls,
        tokens_generated: int,
        inference_time_ms: float,
        latency_ms: float,
        reported_tokens_per_second: float = 0.0,
        memory_usage_mb: int = 0,
        gpu_usage_mb: int = 0,
    ) -> "BenchmarkRun":
        """Build a run, deriving throughput only when the engine reported none."""
        throughput = reported_tokens_per_second
        if throughput <= 0:
            throughput = tokens_per_second(tokens_generated, inference_time_ms)
        return cls(
            tokens_generated=tokens_generated,
            inference_time_ms=inference_time_ms,
            tokens_per_second=throughput,
            latency_ms=latency_ms,
            memory_usage_mb=memory_usage_mb,
            gpu_usage_mb=gpu_usage_mb,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "tokens_generated": self.tokens_generated,
            "inference_time_ms": self.inference_time_ms,
            "tokens_per_second": self.tokens_per_second,
            "latency_ms": self.latency_ms,
            "memory_usage_mb": self.memory_usage_mb,
            "gpu_usage_mb": self.gpu_usage_mb,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BenchmarkRun":
        return cls(
            tokens_generated=int(data["tokens_generated"]),
            inference_time_ms=float(data["inference_time_ms"]),
            tokens_per_second=float(data["tokens_per_second"]),
            latency_ms=float(data["latency_ms"]),
            memory_usage_mb=int(data.get("memory_usage_mb", 0)),
            gpu_usage_mb=int(data.get("gpu_usage_mb", 0)),
        )
