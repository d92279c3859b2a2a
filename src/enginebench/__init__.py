#!/usr/bin/env python3
"""
Benchmark framework for inference engine comparison.

Runs an identical generation workload against several independently
implemented engines and produces a statistically sound comparison.
"""

from .adapter_factory import EngineType, create_adapter, get_available_engines, parse_engines
from .benchmark_adapter import AdapterNotReadyError, BackendError, BenchmarkAdapter
from .benchmark_config import BenchmarkConfig, ConfigurationError
from .benchmark_engine import BenchmarkEngine
from .benchmark_results import BenchmarkReport, EngineResults
from .benchmark_run import BenchmarkRun
from .process_runner import CommandResult, execute_command
from .report import generate_report, load_report, save_report

__all__ = [
    "AdapterNotReadyError",
    "BackendError",
    "BenchmarkAdapter",
    "BenchmarkConfig",
    "BenchmarkEngine",
    "BenchmarkReport",
    "BenchmarkRun",
    "CommandResult",
    "ConfigurationError",
    "EngineResults",
    "EngineType",
    "create_adapter",
    "execute_command",
    "generate_report",
    "get_available_engines",
    "load_report",
    "parse_engines",
    "save_report",
]
