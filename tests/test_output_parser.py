"""Tests for metric extraction against captured engine output."""

import pytest

from enginebench.output_parser import (
    ParsedMetrics,
    derive_missing,
    extract_number,
    has_metrics,
    parse_gpt_oss_output,
    parse_llama_cpp_output,
)

LLAMA_CPP_STDERR = """\
build: 3467 (dc0d0b8b) with cc (Ubuntu 11.4.0-1ubuntu1~22.04) 11.4.0 for x86_64-linux-gnu
main: seed  = 1722334455
llama_model_loader: loaded meta data with 26 key-value pairs and 291 tensors from model.gguf (version GGUF V3 (latest))
llm_load_tensors: offloaded 33/33 layers to GPU
system_info: n_threads = 16 / 32 | AVX = 1 | AVX2 = 1 | FMA = 1 |
sampling:
\trepeat_last_n = 64, repeat_penalty = 1.000
generate: n_ctx = 2048, n_batch = 512, n_predict = 64, n_keep = 1

llama_print_timings:        load time =     735.32 ms
llama_print_timings:      sample time =      31.27 ms /    64 runs   (    0.49 ms per token,  2046.71 tokens per second)
llama_print_timings: prompt eval time =     226.43 ms /    10 tokens (   22.64 ms per token,    44.16 tokens per second)
llama_print_timings:        eval time =    2518.35 ms /    63 runs   (   39.97 ms per token,    25.02 tokens per second)
llama_print_timings:       total time =    2830.66 ms /    73 tokens
"""

LLAMA_CPP_PERF_STDERR = """\
llama_perf_sampler_print:    sampling time =       4.10 ms /    42 runs   (    0.10 ms per token, 10243.90 tokens per second)
llama_perf_context_print:        load time =     512.00 ms
llama_perf_context_print: prompt eval time =      80.00 ms /     8 tokens (   10.00 ms per token,   100.00 tokens per second)
llama_perf_context_print:        eval time =     500.00 ms /    40 runs   (   12.50 ms per token,    80.00 tokens per second)
llama_perf_context_print:       total time =     600.00 ms /    48 tokens
"""

GPT_OSS_STDOUT = """\
Loading checkpoint from /models/gpt-oss-20b
The capital of France is Paris.
==== Benchmark ====
Generated tokens: 64
Inference time: 3.2s
Tokens per second: 20.0
Memory usage: 14210 MB
GPU memory: 13120 MB
"""


def test_extract_number_takes_first_decimal():
    assert extract_number("eval: 100 tokens, 50.5 ms per token") == 100.0
    assert extract_number("Tokens per second: 12.75") == 12.75
    assert extract_number("no digits here") == 0.0


def test_gpt_oss_summary_is_parsed():
    metrics = parse_gpt_oss_output(GPT_OSS_STDOUT)
    assert metrics == ParsedMetrics(
        tokens_generated=64,
        inference_time_ms=3200.0,
        tokens_per_second=20.0,
        memory_usage_mb=14210,
        gpu_memory_mb=13120,
    )


def test_gpt_oss_derives_throughput_when_reported_as_zero():
    output = "Generated tokens: 40\nInference time: 2.0\nTokens per second: 0\n"
    metrics = parse_gpt_oss_output(output)
    assert metrics.tokens_per_second == pytest.approx(20.0)


def test_gpt_oss_inference_time_in_milliseconds():
    metrics = parse_gpt_oss_output("Generated tokens: 40\nInference time: 2000 ms\n")
    assert metrics.inference_time_ms == pytest.approx(2000.0)
    assert metrics.tokens_per_second == pytest.approx(20.0)


def test_gpt_oss_last_match_wins():
    output = "Generated tokens: 10\nTokens per second: 5.0\nGenerated tokens: 12\nTokens per second: 6.0\n"
    metrics = parse_gpt_oss_output(output)
    assert metrics.tokens_generated == 12
    assert metrics.tokens_per_second == 6.0


def test_gpt_oss_reported_throughput_is_trusted_over_derived():
    output = "Generated tokens: 40\nInference time: 2.0\nTokens per second: 33.0\n"
    assert parse_gpt_oss_output(output).tokens_per_second == 33.0


def test_gpt_oss_without_labels_yields_nothing():
    metrics = parse_gpt_oss_output("Once upon a time there was a model.\n")
    assert metrics == ParsedMetrics()
    assert not has_metrics(metrics)


def test_gpt_oss_does_not_count_words():
    metrics = parse_gpt_oss_output("one two three four five\n")
    assert metrics.tokens_generated == 0


def test_llama_cpp_print_timings():
    stdout = "Paris is the capital and most populous city of France.\n"
    metrics = parse_llama_cpp_output(stdout + LLAMA_CPP_STDERR)
    assert metrics.tokens_generated == 63
    assert metrics.inference_time_ms == pytest.approx(2518.35)
    assert metrics.tokens_per_second == pytest.approx(25.02)


def test_llama_cpp_perf_context_lines():
    metrics = parse_llama_cpp_output(LLAMA_CPP_PERF_STDERR)
    assert metrics.tokens_generated == 40
    assert metrics.inference_time_ms == pytest.approx(500.0)
    assert metrics.tokens_per_second == pytest.approx(80.0)


def test_llama_cpp_legacy_eval_line():
    output = "llama_print_timings:        eval: 100 tokens, 50.0 ms per token, 20.0 tokens per second\n"
    metrics = parse_llama_cpp_output(output)
    assert metrics.tokens_generated == 100
    assert metrics.tokens_per_second == pytest.approx(20.0)
    # time derived from tokens and throughput
    assert metrics.inference_time_ms == pytest.approx(5000.0)


def test_llama_cpp_ignores_prompt_eval_line():
    output = "llama_print_timings: prompt eval time =     226.43 ms /    10 tokens (   22.64 ms per token,    44.16 tokens per second)\n"
    metrics = parse_llama_cpp_output(output)
    assert metrics.inference_time_ms == 0.0
    assert metrics.tokens_per_second == 0.0


def test_llama_cpp_word_count_fallback():
    output = (
        "main: seed = 42\n"
        "llama_model_loader: loaded meta data\n"
        "The quick brown fox\n"
        "jumps over the lazy dog\n"
        "[end of text]\n"
    )
    metrics = parse_llama_cpp_output(output)
    assert metrics.tokens_generated == 9
    assert metrics.tokens_per_second == 0.0
    assert has_metrics(metrics)


def test_llama_cpp_word_count_fallback_with_timing():
    output = "one two three four\nllama_print_timings:        eval time =    1000.00 ms\n"
    metrics = parse_llama_cpp_output(output)
    assert metrics.tokens_generated == 4
    assert metrics.tokens_per_second == pytest.approx(4.0)


def test_derive_missing_fills_time_from_throughput():
    metrics = derive_missing(ParsedMetrics(tokens_generated=50, tokens_per_second=25.0))
    assert metrics.inference_time_ms == pytest.approx(2000.0)


def test_derive_missing_leaves_complete_metrics_alone():
    metrics = ParsedMetrics(tokens_generated=10, inference_time_ms=1000.0, tokens_per_second=99.0)
    assert derive_missing(metrics) is metrics
