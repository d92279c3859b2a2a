#!/usr/bin/env python3
"""
Benchmark runner for the command line.

Turns parsed arguments into benchmark configurations, runs them and handles
reporting and final cleanup.
"""

import argparse
import gc
import sys
import time
import traceback

from . import constants
from .adapter_factory import EngineType, create_adapter, parse_engines
from .benchmark_config import BenchmarkConfig, ConfigurationError
from .benchmark_engine import BenchmarkEngine
from .report import generate_report, save_report

Emojis = constants.Emojis

FULL_SUITE = [
    # (prompt, max_tokens, temperature, iteration multiplier)
    ("Hello, world!", 20, 0.7, 1),
    ("Explain quantum computing in detail, covering the fundamental principles.", 150, 0.7, 1),
    ("Write a creative story about artificial intelligence and the future of humanity.", 300, 1.0, 1),
    ("1 + 1 = ", 5, 0.0, 2),
]


def build_configs(args: argparse.Namespace) -> list[BenchmarkConfig]:
    """Benchmark configurations for the selected subcommand."""
    model_path = str(args.model_path.expanduser().resolve()) if args.model_path else None
    use_gpu = not args.cpu

    if args.command == "quick":
        return [
            BenchmarkConfig(
                prompt=args.prompt,
                max_tokens=constants.QUICK_MAX_TOKENS,
                temperature=constants.DEFAULT_TEMPERATURE,
                iterations=constants.QUICK_ITERATIONS,
                delay_between_runs_ms=constants.QUICK_DELAY_MS,
                model_path=model_path,
                use_gpu=use_gpu,
            )
        ]

    if args.command == "compare":
        return [
            BenchmarkConfig(
                prompt=args.prompt,
                max_tokens=args.max_tokens,
                temperature=args.temperature,
                iterations=args.iterations,
                delay_between_runs_ms=args.delay,
                model_path=model_path,
                use_gpu=use_gpu,
                context_length=args.context_length,
            )
        ]

    if args.command == "full":
        return [
            BenchmarkConfig(
                prompt=prompt,
                max_tokens=max_tokens,
                temperature=temperature,
                iterations=args.iterations * multiplier,
                model_path=model_path,
                use_gpu=use_gpu,
            )
            for prompt, max_tokens, temperature, multiplier in FULL_SUITE
        ]

    raise ValueError(f"No benchmark configurations for command: {args.command}")


def create_benchmark_engine(args: argparse.Namespace, config: BenchmarkConfig) -> BenchmarkEngine:
    """Register a fresh adapter for every known engine."""
    benchmark_engine = BenchmarkEngine()
    for engine in EngineType:
        benchmark_engine.register_adapter(
            engine,
            create_adapter(
                engine,
                model_path=config.model_path,
                use_gpu=config.use_gpu,
                llama_cpp_path=args.llama_cpp_path,
                gpt_oss_path=args.gpt_oss_path,
                python_command=args.python_command,
            ),
        )
    return benchmark_engine


def list_engines(args: argparse.Namespace) -> None:
    """Print every engine with its availability."""
    print(f"{Emojis.GEAR} Available Benchmark Engines")
    print("=" * 50)
    print()

    model_path = str(args.model_path) if args.model_path else None
    for engine in EngineType:
        adapter = create_adapter(
            engine,
            model_path=model_path,
            use_gpu=not args.cpu,
            llama_cpp_path=args.llama_cpp_path,
            gpt_oss_path=args.gpt_oss_path,
            python_command=args.python_command,
        )
        status = f"{Emojis.CHECKMARK} Available" if adapter.is_available() else f"{Emojis.ERROR} Not Available"
        print(f"{engine.cli_name:<15} {status:<18} {adapter.get_display_name()}")

    print()
    print('Usage: enginebench compare "Your prompt" --engines native,gpt-oss')


def run_benchmarks(args: argparse.Namespace) -> None:
    """
    Execute benchmarks based on parsed command-line arguments.

    Args:
        args: Parsed command-line arguments from argparse
    """
    if args.command == "list":
        list_engines(args)
        return

    engines = parse_engines(args.engines)
    if not engines:
        print(f"{Emojis.ERROR} No valid engines selected")
        sys.exit(1)

    try:
        configs = [config.validate() for config in build_configs(args)]
    except ConfigurationError as e:
        print(f"{Emojis.ERROR} {e}")
        sys.exit(1)

    if len(configs) > 1:
        print(f"{Emojis.ROCKET} Running benchmark suite...")
        print(f"{len(configs)} test configurations, {len(engines)} engines")
        print()

    try:
        for index, config in enumerate(configs):
            if len(configs) > 1:
                print(f"{Emojis.TARGET} Test {index + 1}/{len(configs)}")
                print(f"Max tokens: {config.max_tokens}, Temperature: {config.temperature}")
                print()

            benchmark_engine = create_benchmark_engine(args, config)
            report = benchmark_engine.run_comparison_benchmark(config, engines)
            print(generate_report(report))

            if args.output is not None:
                save_report(report, args.output)

            if index < len(configs) - 1:
                print(f"{Emojis.GEAR} Cooling down before next test...")
                time.sleep(constants.FULL_SUITE_COOLDOWN_SECONDS)
                print()

        if len(configs) > 1:
            print(f"{Emojis.FLAG} Benchmark suite completed!")

    except KeyboardInterrupt:
        print(f"\n{Emojis.WARNING}  Benchmark interrupted by user")
        sys.exit(1)
    except OSError as e:
        print(f"\n{Emojis.ERROR} Could not write results: {e}")
        sys.exit(1)
    except Exception as e:
        print(f"\n{Emojis.ERROR} Benchmark suite failed: {e}")
        traceback.print_exc()
        sys.exit(1)
    finally:
        perform_final_cleanup()


def perform_final_cleanup() -> None:
    """Perform final system and framework-specific cleanup."""
    print(f"\n{Emojis.BROOM} Final system cleanup...")

    for _ in range(3):
        gc.collect()
        time.sleep(0.1)

    try:
        import torch

        if torch.cuda.is_available():
            torch.cuda.empty_cache()
            torch.cuda.synchronize()
            torch.cuda.ipc_collect()
    except ImportError:
        pass

    print(f"{Emojis.CHECKMARK} Final cleanup completed")
