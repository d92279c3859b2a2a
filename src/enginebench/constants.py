#!/usr/bin/env python3
"""
Shared constants for the engine benchmark suite.

Defaults, timeouts and filesystem locations used by the orchestrator and the
engine adapters. Paths can be overridden through environment variables.
"""

import os
from pathlib import Path


class Emojis:
    """Console status markers."""

    ROCKET = "🚀"
    GEAR = "🔧"
    CHECKMARK = "✅"
    WARNING = "⚠️"
    ERROR = "❌"
    LIGHTNING = "⚡"
    CHART = "📊"
    PACKAGE = "📦"
    TARGET = "🎯"
    FLAG = "🏁"
    BROOM = "🧹"


# Generation defaults
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 100
DEFAULT_CONTEXT_LENGTH = 2048

# Benchmark defaults
DEFAULT_ITERATIONS = 5
DEFAULT_DELAY_MS = 1000
QUICK_ITERATIONS = 3
QUICK_MAX_TOKENS = 50
QUICK_DELAY_MS = 500
FULL_SUITE_COOLDOWN_SECONDS = 2.0
ENGINE_SETTLE_SECONDS = 1.0

# Warmup workload
WARMUP_PROMPT = "Hello"
WARMUP_TOKENS = 10
SUBPROCESS_WARMUP_TOKENS = 5

# Timeouts (seconds)
WARMUP_TIMEOUT_SECONDS = 30
INFERENCE_TIMEOUT_SECONDS = 120
PROBE_TIMEOUT_SECONDS = 5
MODULE_CHECK_TIMEOUT_SECONDS = 10

# Child process memory polling
MEMORY_SAMPLE_INTERVAL_SECONDS = 0.05

# Validation limits
MAX_PROMPT_LENGTH = 4096
MAX_TOKENS_LIMIT = 2048
MAX_ITERATIONS = 100
MIN_TEMPERATURE = 0.0
MAX_TEMPERATURE = 2.0

# llama.cpp
LLAMA_CPP_PATH = os.environ.get("ENGINEBENCH_LLAMA_CPP_PATH", "/usr/local/bin/llama-cli")
LLAMA_CPP_SEARCH_PATHS = [
    "/usr/local/bin/llama-cli",
    "/usr/local/bin/llama-cpp",
    "/usr/local/bin/llama",
    "/usr/local/bin/main",
    "./llama.cpp/build/bin/llama-cli",
    "./llama.cpp/main",
    "./llama.cpp/llama",
    "/opt/homebrew/bin/llama-cli",
    "/opt/homebrew/bin/llama",
]
LLAMA_CPP_PATH_NAMES = ["llama-cli", "llama", "main"]
LLAMA_CPP_PROCESS_PATTERN = "llama"
LLAMA_CPP_BATCH_SIZE = 512
LLAMA_CPP_GPU_LAYERS_ALL = 99

# gpt-oss reference implementation
GPT_OSS_PATH = os.environ.get("ENGINEBENCH_GPT_OSS_PATH", "../gpt_oss")
GPT_OSS_PYTHON = os.environ.get("ENGINEBENCH_PYTHON", "python3")
GPT_OSS_MODULE = "gpt_oss.generate"
GPT_OSS_SCRIPTS = ["generate.py", "chat.py"]
GPT_OSS_REQUIRED_MODULES = ["torch", "numpy", "transformers"]
GPT_OSS_PROCESS_PATTERN = "gpt_oss"

# Reports
RESULTS_DIR = Path(os.environ.get("ENGINEBENCH_RESULTS_DIR", "benchmark-results"))
REPORT_WIDTH = 60
SECTION_WIDTH = 30
