#!/usr/bin/env python3
"""
Abstract benchmark adapter interface.

Defines the contract that every inference engine under test must follow.
The orchestrator only ever talks to engines through this interface.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .benchmark_config import BenchmarkConfig
    from .benchmark_run import BenchmarkRun


class BackendError(RuntimeError):
    """A warmup or inference attempt failed. Not fatal to the benchmark."""


class AdapterNotReadyError(RuntimeError):
    """run_inference() was called before a successful warmup()."""


class BenchmarkAdapter(ABC):
    """
    Abstract base class for engine-specific benchmark execution.

    Each engine (in-process, llama.cpp, gpt-oss reference, ...) implements this interface.
    """

    @abstractmethod
    def warmup(self, config: "BenchmarkConfig") -> None:
        """
        Prepare the engine and run one unmeasured inference.

        Raises BackendError on failure.
        """

    @abstractmethod
    def run_inference(self, config: "BenchmarkConfig") -> "BenchmarkRun":
        """
        Run one measured inference.

        Raises AdapterNotReadyError if warmup() has not succeeded,
        BackendError if the attempt failed.
        """

    @abstractmethod
    def cleanup(self) -> None:
        """
        Release engine resources.

        Idempotent, safe without a prior warmup, and must not raise.
        """

    @abstractmethod
    def is_available(self) -> bool:
        """Cheap, side-effect free check that the engine can be used."""

    @abstractmethod
    def get_display_name(self) -> str:
        """Human readable engine name."""

    def _require_ready(self, ready: bool) -> None:
        if not ready:
            raise AdapterNotReadyError(f"{self.get_display_name()} adapter not warmed up")
