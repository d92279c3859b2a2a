#!/usr/bin/env python3
"""
Benchmark request configuration.

Defines the BenchmarkConfig class that describes one comparison workload.
"""

from dataclasses import dataclass
from typing import Any

from . import constants


class ConfigurationError(ValueError):
    """Raised when a benchmark configuration is out of range."""


@dataclass(frozen=True)
class BenchmarkConfig:
    """
    One benchmark request, shared unchanged by every engine under test.
    """

    prompt: str
    max_tokens: int = constants.DEFAULT_MAX_TOKENS
    temperature: float = constants.DEFAULT_TEMPERATURE
    iterations: int = constants.DEFAULT_ITERATIONS
    delay_between_runs_ms: int = constants.DEFAULT_DELAY_MS
    model_path: str | None = None
    use_gpu: bool = True
    context_length: int = constants.DEFAULT_CONTEXT_LENGTH

    def validation_errors(self) -> list[str]:
        """Return every problem with this configuration (empty when valid)."""
        errors = []

        if self.max_tokens <= 0:
            errors.append(f"max_tokens must be positive, got: {self.max_tokens}")
        elif self.max_tokens > constants.MAX_TOKENS_LIMIT:
            errors.append(f"max_tokens too large (max {constants.MAX_TOKENS_LIMIT}), got: {self.max_tokens}")

        if not constants.MIN_TEMPERATURE <= self.temperature <= constants.MAX_TEMPERATURE:
            errors.append(
                f"temperature must be in range [{constants.MIN_TEMPERATURE}, {constants.MAX_TEMPERATURE}], "
                f"got: {self.temperature}"
            )

        if self.iterations <= 0:
            errors.append(f"iterations must be positive, got: {self.iterations}")
        elif self.iterations > constants.MAX_ITERATIONS:
            errors.append(f"iterations too large (max {constants.MAX_ITERATIONS}), got: {self.iterations}")

        if not self.prompt or not self.prompt.strip():
            errors.append("prompt cannot be blank")
        elif len(self.prompt) > constants.MAX_PROMPT_LENGTH:
            errors.append(f"prompt too long (max {constants.MAX_PROMPT_LENGTH} chars), got: {len(self.prompt)}")

        if self.delay_between_runs_ms < 0:
            errors.append(f"delay_between_runs_ms cannot be negative, got: {self.delay_between_runs_ms}")

        if self.context_length <= 0:
            errors.append(f"context_length must be positive, got: {self.context_length}")

        return errors

    def validate(self) -> "BenchmarkConfig":
        """Raise ConfigurationError listing all problems, or return self."""
        errors = self.validation_errors()
        if errors:
            raise ConfigurationError(f"Configuration errors: {'; '.join(errors)}")
        return self

    def prompt_preview(self, limit: int = 50) -> str:
        """Prompt shortened for console headers."""
        if len(self.prompt) <= limit:
            return self.prompt
        return f"{self.prompt[:limit]}..."

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "prompt": self.prompt,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "iterations": self.iterations,
            "delay_between_runs_ms": self.delay_between_runs_ms,
            "model_path": self.model_path,
            "use_gpu": self.use_gpu,
            "context_length": self.context_length,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BenchmarkConfig":
        return cls(
            prompt=data["prompt"],
            max_tokens=data.get("max_tokens", constants.DEFAULT_MAX_TOKENS),
            temperature=data.get("temperature", constants.DEFAULT_TEMPERATURE),
            iterations=data.get("iterations", constants.DEFAULT_ITERATIONS),
            delay_between_runs_ms=data.get("delay_between_runs_ms", constants.DEFAULT_DELAY_MS),
            model_path=data.get("model_path"),
            use_gpu=data.get("use_gpu", True),
            context_length=data.get("context_length", constants.DEFAULT_CONTEXT_LENGTH),
        )
