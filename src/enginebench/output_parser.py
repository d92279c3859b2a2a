#!/usr/bin/env python3
"""
Metric extraction from engine console output.

Subprocess engines only report performance as free-form text. Each engine has
its own set of labeled lines; values are pulled out line by line and missing
values are derived from the ones that were found.
"""

import dataclasses
import re
from dataclasses import dataclass

from .benchmark_run import tokens_per_second

_NUMBER = re.compile(r"\d+(?:\.\d+)?")
_SECONDS_OR_MS = re.compile(r"(\d+(?:\.\d+)?)\s*(ms|s)?\b")

# llama.cpp timing lines
_LLAMA_TIMING_PREFIXES = ("llama_print_timings:", "llama_perf_context_print:")
_LLAMA_EVAL_TIME = re.compile(r"eval time\s*=\s*(\d+(?:\.\d+)?)\s*ms")
_LLAMA_EVAL_RUNS = re.compile(r"/\s*(\d+)\s*(?:runs|tokens)")
_LLAMA_LEGACY_EVAL_TOKENS = re.compile(r"eval:\s*(\d+)\s*tokens")
_LLAMA_TOKENS_PER_SECOND = re.compile(r"(\d+(?:\.\d+)?)\s*tokens per second")

# Prefixes of llama.cpp diagnostic lines; anything else is generated text.
_LLAMA_LOG_PREFIXES = (
    "llama",
    "llm_",
    "ggml",
    "gguf",
    "main:",
    "build:",
    "system_info",
    "sampler",
    "sampling",
    "generate:",
    "load_",
    "print_info",
    "common_",
    "log_",
    "clip_",
    "warning:",
    "error:",
)


@dataclass(frozen=True)
class ParsedMetrics:
    """Normalized metrics recovered from one engine invocation."""

    tokens_generated: int = 0
    inference_time_ms: float = 0.0
    tokens_per_second: float = 0.0
    memory_usage_mb: int = 0
    gpu_memory_mb: int = 0


def extract_number(line: str) -> float:
    """First decimal number on the line, 0.0 when there is none."""
    match = _NUMBER.search(line)
    return float(match.group()) if match else 0.0


def _extract_duration_ms(line: str) -> float:
    """Duration on a labeled line; bare numbers are seconds."""
    match = _SECONDS_OR_MS.search(line)
    if not match:
        return 0.0
    value = float(match.group(1))
    return value if match.group(2) == "ms" else value * 1000.0


def derive_missing(metrics: ParsedMetrics) -> ParsedMetrics:
    """
    Fill throughput or inference time from the other two values.

    A reported throughput is never overwritten, even when it disagrees with
    tokens / time.
    """
    if metrics.tokens_per_second <= 0 and metrics.tokens_generated > 0 and metrics.inference_time_ms > 0:
        return dataclasses.replace(
            metrics, tokens_per_second=tokens_per_second(metrics.tokens_generated, metrics.inference_time_ms)
        )
    if metrics.inference_time_ms <= 0 and metrics.tokens_generated > 0 and metrics.tokens_per_second > 0:
        return dataclasses.replace(
            metrics, inference_time_ms=metrics.tokens_generated / metrics.tokens_per_second * 1000.0
        )
    return metrics


def has_metrics(metrics: ParsedMetrics) -> bool:
    """False when the output yielded nothing a run can be built from."""
    return metrics.tokens_generated > 0 or metrics.tokens_per_second > 0


def parse_gpt_oss_output(output: str) -> ParsedMetrics:
    """
    Parse the benchmark summary printed by the gpt-oss reference generator.

    Every label may appear more than once; the last occurrence wins.
    """
    tokens_generated = 0
    inference_time_ms = 0.0
    throughput = 0.0
    memory_usage_mb = 0
    gpu_memory_mb = 0

    for line in output.splitlines():
        if "Generated tokens:" in line:
            tokens_generated = int(extract_number(line.split(":", 1)[1]))
        elif "Inference time:" in line:
            inference_time_ms = _extract_duration_ms(line.split(":", 1)[1])
        elif "Tokens per second:" in line:
            throughput = extract_number(line.split(":", 1)[1])
        elif "GPU memory:" in line:
            gpu_memory_mb = int(extract_number(line.split(":", 1)[1]))
        elif "Memory usage:" in line:
            memory_usage_mb = int(extract_number(line.split(":", 1)[1]))

    return derive_missing(
        ParsedMetrics(
            tokens_generated=tokens_generated,
            inference_time_ms=inference_time_ms,
            tokens_per_second=throughput,
            memory_usage_mb=memory_usage_mb,
            gpu_memory_mb=gpu_memory_mb,
        )
    )


def parse_llama_cpp_output(output: str) -> ParsedMetrics:
    """
    Parse llama.cpp stdout+stderr.

    Uses the generation "eval time" timing line (prompt eval lines are skipped);
    the last one wins. Without an explicit token count, the word count of the
    generated text stands in for it.
    """
    tokens_generated = 0
    inference_time_ms = 0.0
    throughput = 0.0
    generated_words = 0

    for raw_line in output.splitlines():
        line = raw_line.strip()
        if not line or raw_line.startswith("\t"):
            continue

        if line.startswith(_LLAMA_TIMING_PREFIXES):
            if "prompt eval" in line:
                continue
            time_match = _LLAMA_EVAL_TIME.search(line)
            if time_match:
                inference_time_ms = float(time_match.group(1))
                runs_match = _LLAMA_EVAL_RUNS.search(line)
                if runs_match:
                    tokens_generated = int(runs_match.group(1))
                speed_match = _LLAMA_TOKENS_PER_SECOND.search(line)
                if speed_match:
                    throughput = float(speed_match.group(1))
                continue

        legacy_match = _LLAMA_LEGACY_EVAL_TOKENS.search(line)
        if legacy_match and "prompt eval" not in line and "tokens per second" in line:
            tokens_generated = int(legacy_match.group(1))
            speed_match = _LLAMA_TOKENS_PER_SECOND.search(line)
            if speed_match:
                throughput = float(speed_match.group(1))
            continue

        if _is_llama_log_line(line):
            continue
        generated_words += len(line.split())

    if tokens_generated == 0:
        tokens_generated = generated_words

    return derive_missing(
        ParsedMetrics(
            tokens_generated=tokens_generated,
            inference_time_ms=inference_time_ms,
            tokens_per_second=throughput,
        )
    )


def _is_llama_log_line(line: str) -> bool:
    if line.lower().startswith(_LLAMA_LOG_PREFIXES):
        return True
    if line.startswith("[") and line.endswith("]"):
        # "[end of text]"
        return True
    return set(line) <= {"."}
