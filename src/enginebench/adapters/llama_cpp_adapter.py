#!/usr/bin/env python3
"""
llama.cpp adapter.

Runs the llama.cpp CLI once per inference and reads the timing summary it
prints on exit.
"""

import os

from .. import constants
from ..benchmark_adapter import BackendError
from ..benchmark_config import BenchmarkConfig
from ..output_parser import ParsedMetrics, parse_llama_cpp_output
from ..process_runner import CommandResult, find_executable, is_executable_file
from .subprocess_adapter import SubprocessAdapter


class LlamaCppAdapter(SubprocessAdapter):
    """Adapter for the llama.cpp command-line runtime."""

    tag = "LLAMA.CPP"

    def __init__(
        self,
        executable_path: str | None = constants.LLAMA_CPP_PATH,
        model_path: str | None = None,
        use_gpu: bool = True,
        threads: int | None = None,
        batch_size: int = constants.LLAMA_CPP_BATCH_SIZE,
        search_paths: list[str] | None = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.executable_path = executable_path
        self.model_path = model_path
        self.use_gpu = use_gpu
        self.threads = threads or os.cpu_count() or 1
        self.batch_size = batch_size
        self.search_paths = constants.LLAMA_CPP_SEARCH_PATHS if search_paths is None else search_paths
        self.resolved_executable: str | None = None

    def get_display_name(self) -> str:
        return f"llama.cpp ({'GPU' if self.use_gpu else 'CPU'})"

    def process_pattern(self) -> str:
        return constants.LLAMA_CPP_PROCESS_PATTERN

    def candidate_paths(self) -> list[str]:
        """Explicit executable first, then the well-known install locations."""
        candidates = [self.executable_path] if self.executable_path else []
        candidates.extend(path for path in self.search_paths if path not in candidates)
        return candidates

    def find_executable(self) -> str | None:
        if self.resolved_executable:
            return self.resolved_executable

        for path in self.candidate_paths():
            if is_executable_file(path):
                self.resolved_executable = path
                return path

        for name in constants.LLAMA_CPP_PATH_NAMES:
            found = find_executable(name)
            if found:
                self.resolved_executable = found
                return found

        return None

    def is_available(self) -> bool:
        return self.find_executable() is not None

    def verify_installation(self) -> None:
        if self.find_executable() is None:
            tried = "\n  ".join(self.candidate_paths())
            raise BackendError(
                f"llama.cpp executable not found. Tried:\n  {tried}\n"
                f"and {', '.join(constants.LLAMA_CPP_PATH_NAMES)} on PATH.\n"
                "Build it from https://github.com/ggerganov/llama.cpp or install with your package manager."
            )
        if not self.model_path:
            raise BackendError("Model path is required for llama.cpp")

    def build_command(self, prompt: str, max_tokens: int, temperature: float, config: BenchmarkConfig) -> list[str]:
        if self.resolved_executable is None or not self.model_path:
            raise BackendError("llama.cpp command requested before installation was verified")

        command = [
            self.resolved_executable,
            "--model", self.model_path,
            "--prompt", prompt,
            "--n-predict", str(max_tokens),
            "--temp", str(temperature),
            "--threads", str(self.threads),
            "--batch-size", str(self.batch_size),
            "--ctx-size", str(config.context_length),
            "--no-display-prompt",
        ]

        if self.use_gpu:
            command.extend(["--n-gpu-layers", str(constants.LLAMA_CPP_GPU_LAYERS_ALL)])

        return command

    def parse_output(self, result: CommandResult) -> ParsedMetrics:
        # Timing summary goes to stderr, generated text to stdout.
        return parse_llama_cpp_output(result.combined_output)

    def memory_usage_mb(self, metrics: ParsedMetrics, result: CommandResult) -> int:
        # llama.cpp prints no memory figure
        return result.peak_memory_mb

    def cleanup(self) -> None:
        super().cleanup()
        self.resolved_executable = None
