#!/usr/bin/env python3
"""
Inference Engine Benchmark Suite - Main Entry Point

Compares text-generation throughput and latency of an in-process engine,
llama.cpp and the gpt-oss reference implementation on an identical workload.
"""

from .benchmark_runner import run_benchmarks
from .cli_parser import create_parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the benchmark suite."""
    # Parse command-line arguments
    parser = create_parser()
    args = parser.parse_args(argv)

    # Run the benchmarks
    run_benchmarks(args)


if __name__ == "__main__":
    main()
