#!/usr/bin/env python3
"""
In-process inference engine interface.

Engines that live in the harness process implement this so the native
adapter can drive them without any textual parsing.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class GenerationResult:
    """Structured outcome of a single non-streaming generation."""

    tokens_generated: int
    gpu_memory_mb: int = 0
    text: str = ""


class InferenceEngine(ABC):
    """
    Long-lived engine handle owned by one adapter.

    Construction must stay cheap: heavy loading happens on first use.
    """

    @abstractmethod
    def generate_once(self, prompt: str, max_tokens: int, temperature: float) -> GenerationResult:
        """Generate up to ``max_tokens`` tokens for ``prompt`` and return when done."""

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the engine's runtime and weights can be found."""

    def get_name(self) -> str:
        return type(self).__name__

    def close(self) -> None:
        """Release weights and device memory. Default implementation does nothing."""
