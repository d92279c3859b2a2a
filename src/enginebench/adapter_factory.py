#!/usr/bin/env python3
"""
Engine adapter factory.

Creates engine-specific adapter instances with proper lazy loading.
"""

from enum import Enum

from . import constants
from .benchmark_adapter import BenchmarkAdapter


class EngineType(Enum):
    """Engines the suite knows how to benchmark."""

    NATIVE = ("native", "Native Engine (PyTorch)")
    GPT_OSS_REFERENCE = ("gpt-oss", "GPT-OSS Reference")
    LLAMA_CPP = ("llama-cpp", "llama.cpp")

    def __init__(self, cli_name: str, display_name: str):
        self.cli_name = cli_name
        self.display_name = display_name


_ALIASES = {
    "native": EngineType.NATIVE,
    "native-engine": EngineType.NATIVE,
    "pytorch": EngineType.NATIVE,
    "gpt-oss": EngineType.GPT_OSS_REFERENCE,
    "gptoss": EngineType.GPT_OSS_REFERENCE,
    "gpt-oss-reference": EngineType.GPT_OSS_REFERENCE,
    "llama": EngineType.LLAMA_CPP,
    "llama-cpp": EngineType.LLAMA_CPP,
    "llama.cpp": EngineType.LLAMA_CPP,
    "llamacpp": EngineType.LLAMA_CPP,
}


def parse_engines(engines: str) -> list[EngineType]:
    """Parse a comma-separated engine list, skipping unknown names with a warning."""
    parsed = []
    for name in engines.split(","):
        key = name.strip().lower()
        if not key:
            continue
        engine = _ALIASES.get(key)
        if engine is None:
            print(f"{constants.Emojis.WARNING}  Unknown engine: {name.strip()}")
            continue
        if engine not in parsed:
            parsed.append(engine)
    return parsed


def create_adapter(
    engine: EngineType,
    model_path: str | None = None,
    use_gpu: bool = True,
    llama_cpp_path: str | None = None,
    gpt_oss_path: str | None = None,
    python_command: str | None = None,
) -> BenchmarkAdapter:
    """Create an adapter for the given engine."""

    if engine is EngineType.NATIVE:
        from .adapters.native_adapter import NativeEngineAdapter
        from .engines.torch_engine import TorchInferenceEngine

        device = "auto" if use_gpu else "cpu"
        return NativeEngineAdapter(TorchInferenceEngine(model_path, device=device))

    if engine is EngineType.GPT_OSS_REFERENCE:
        from .adapters.gpt_oss_adapter import GptOssAdapter

        return GptOssAdapter(
            gpt_oss_path=gpt_oss_path or constants.GPT_OSS_PATH,
            model_path=model_path,
            python_command=python_command or constants.GPT_OSS_PYTHON,
        )

    if engine is EngineType.LLAMA_CPP:
        from .adapters.llama_cpp_adapter import LlamaCppAdapter

        return LlamaCppAdapter(
            executable_path=llama_cpp_path or constants.LLAMA_CPP_PATH,
            model_path=model_path,
            use_gpu=use_gpu,
        )

    raise ValueError(f"Unknown engine: {engine}. Available: {', '.join(get_available_engines())}")


def get_available_engines() -> list[str]:
    """Get list of engine names accepted on the command line."""
    return [engine.cli_name for engine in EngineType]
