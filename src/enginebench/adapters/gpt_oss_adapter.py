#!/usr/bin/env python3
"""
gpt-oss reference implementation adapter.

Runs the reference Python generator in benchmark mode and parses the labeled
summary lines it prints.
"""

from pathlib import Path

from .. import constants
from ..benchmark_adapter import BackendError
from ..benchmark_config import BenchmarkConfig
from ..output_parser import ParsedMetrics, parse_gpt_oss_output
from ..process_runner import CommandResult, execute_command
from .subprocess_adapter import SubprocessAdapter


class GptOssAdapter(SubprocessAdapter):
    """Adapter for the gpt-oss Python reference generator."""

    tag = "GPT-OSS"

    def __init__(
        self,
        gpt_oss_path: str | Path = constants.GPT_OSS_PATH,
        model_path: str | None = None,
        python_command: str = constants.GPT_OSS_PYTHON,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.gpt_oss_path = Path(gpt_oss_path).expanduser()
        self.model_path = model_path
        self.python_command = python_command

    def get_display_name(self) -> str:
        return "GPT-OSS Reference (Python)"

    def process_pattern(self) -> str:
        return constants.GPT_OSS_PROCESS_PATTERN

    def working_dir(self) -> Path:
        return self.gpt_oss_path

    def is_available(self) -> bool:
        if not self.gpt_oss_path.is_dir():
            return False
        return any((self.gpt_oss_path / script).is_file() for script in constants.GPT_OSS_SCRIPTS)

    def verify_installation(self) -> None:
        if not self.gpt_oss_path.is_dir():
            raise BackendError(f"GPT-OSS directory not found at: {self.gpt_oss_path}")

        python_check = execute_command(
            [self.python_command, "--version"], timeout_seconds=constants.PROBE_TIMEOUT_SECONDS
        )
        if not python_check.succeeded:
            raise BackendError(
                f"Python not found. Install Python 3 and ensure '{self.python_command}' is in PATH"
            )

        modules = ", ".join(constants.GPT_OSS_REQUIRED_MODULES)
        module_check = execute_command(
            [self.python_command, "-c", f"import {modules}"],
            timeout_seconds=constants.MODULE_CHECK_TIMEOUT_SECONDS,
            working_dir=self.gpt_oss_path,
        )
        if not module_check.succeeded:
            raise BackendError(
                f"Required Python modules not installed. Run: pip install {' '.join(constants.GPT_OSS_REQUIRED_MODULES)}"
            )

    def build_command(self, prompt: str, max_tokens: int, temperature: float, config: BenchmarkConfig) -> list[str]:
        command = [
            self.python_command,
            "-m", constants.GPT_OSS_MODULE,
            "--prompt", prompt,
            "--max-tokens", str(max_tokens),
            "--temperature", str(temperature),
            "--benchmark",
            "--no-stream",
        ]

        if self.model_path:
            command.extend(["--model-path", self.model_path])

        return command

    def parse_output(self, result: CommandResult) -> ParsedMetrics:
        return parse_gpt_oss_output(result.stdout)
