#!/usr/bin/env python3
"""
Command-line interface parser for the engine benchmark suite.

Defines and parses all command-line arguments for benchmark configuration.
"""

import argparse
from pathlib import Path

from . import constants
from .adapter_factory import get_available_engines

DEFAULT_ENGINES = ",".join(get_available_engines())
DEFAULT_PROMPT = "Explain the concept of machine learning in simple terms."


def _add_engine_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--engines",
        "-e",
        default=DEFAULT_ENGINES,
        help=f"Comma-separated list of engines to benchmark (default: {DEFAULT_ENGINES})",
    )
    parser.add_argument("--model-path", "-m", type=Path, help="Path to model file or directory")
    parser.add_argument("--cpu", action="store_true", help="Disable GPU offload where the engine supports it")
    parser.add_argument("--llama-cpp-path", help="Path to the llama.cpp executable")
    parser.add_argument("--gpt-oss-path", help="Path to the gpt-oss reference checkout")
    parser.add_argument("--python", dest="python_command", help="Interpreter used for the gpt-oss reference")


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="enginebench",
        description="Benchmark and compare inference performance across engines",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Quick comparison of two engines
  enginebench quick --engines native,llama-cpp --model-path ~/models/llama3-1b-instruct

  # Custom prompt and parameters
  enginebench compare "Explain quantum computing" --iterations 10 --max-tokens 200

  # Full multi-prompt suite, reports written to ./results
  enginebench full --model-path ~/models/gpt-oss-20b --output ./results

  # Show which engines are installed
  enginebench list

Available engines:
  - native     : In-process PyTorch + Transformers engine
  - gpt-oss    : gpt-oss Python reference implementation (subprocess)
  - llama-cpp  : llama.cpp command-line runtime (subprocess)
""",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    quick = subparsers.add_parser(
        "quick",
        help=f"Quick comparison ({constants.QUICK_ITERATIONS} iterations, {constants.QUICK_MAX_TOKENS} tokens)",
    )
    quick.add_argument("prompt", nargs="?", default=DEFAULT_PROMPT, help="Prompt to benchmark with")
    quick.add_argument("--output", "-o", type=Path, help="Directory for saved reports")
    _add_engine_options(quick)

    compare = subparsers.add_parser("compare", help="Compare engines with custom parameters")
    compare.add_argument("prompt", help="Prompt to benchmark with")
    compare.add_argument(
        "--max-tokens", "-n", type=int, default=constants.DEFAULT_MAX_TOKENS,
        help=f"Maximum tokens to generate (default: {constants.DEFAULT_MAX_TOKENS})",
    )
    compare.add_argument(
        "--temperature", "-t", type=float, default=constants.DEFAULT_TEMPERATURE,
        help=f"Sampling temperature (default: {constants.DEFAULT_TEMPERATURE})",
    )
    compare.add_argument(
        "--iterations", "-i", type=int, default=constants.DEFAULT_ITERATIONS,
        help=f"Number of benchmark iterations (default: {constants.DEFAULT_ITERATIONS})",
    )
    compare.add_argument(
        "--delay", type=int, default=constants.DEFAULT_DELAY_MS,
        help=f"Delay between runs in milliseconds (default: {constants.DEFAULT_DELAY_MS})",
    )
    compare.add_argument(
        "--context-length", type=int, default=constants.DEFAULT_CONTEXT_LENGTH,
        help=f"Context length (default: {constants.DEFAULT_CONTEXT_LENGTH})",
    )
    compare.add_argument("--output", "-o", type=Path, help="Directory for saved reports")
    _add_engine_options(compare)

    full = subparsers.add_parser("full", help="Multi-prompt benchmark suite")
    full.add_argument(
        "--iterations", "-i", type=int, default=constants.DEFAULT_ITERATIONS,
        help=f"Number of iterations per test (default: {constants.DEFAULT_ITERATIONS})",
    )
    full.add_argument(
        "--output", "-o", type=Path, default=constants.RESULTS_DIR,
        help=f"Directory for saved reports (default: {constants.RESULTS_DIR})",
    )
    _add_engine_options(full)

    engines = subparsers.add_parser("list", help="List benchmark engines and their availability")
    _add_engine_options(engines)

    return parser
