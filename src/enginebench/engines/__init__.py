"""In-process inference engines driven by the native adapter."""

from .base import GenerationResult, InferenceEngine
from .torch_engine import TorchInferenceEngine

__all__ = ["GenerationResult", "InferenceEngine", "TorchInferenceEngine"]
