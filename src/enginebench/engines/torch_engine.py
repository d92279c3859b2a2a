#!/usr/bin/env python3
"""
PyTorch + Hugging Face Transformers in-process engine.
"""

import gc
import importlib.util
from pathlib import Path
from typing import Any

from .. import constants
from .base import GenerationResult, InferenceEngine


class TorchInferenceEngine(InferenceEngine):
    """Causal LM loaded with transformers and run directly on the local GPU (or CPU)."""

    def __init__(self, model_path: str | Path | None, device: str = "auto", use_half: bool = True):
        """
        Initialize the engine handle. Weights are loaded lazily.

        Args:
            model_path: Hugging Face model directory (config.json + weights)
            device: "auto", "cuda" or "cpu"
            use_half: Load weights in float16 when running on CUDA
        """
        self.model_path = Path(model_path).expanduser() if model_path else None
        self.device = device
        self.use_half = use_half
        self.model: Any | None = None
        self.tokenizer: Any | None = None

    def get_name(self) -> str:
        return "pytorch"

    def is_available(self) -> bool:
        if importlib.util.find_spec("torch") is None or importlib.util.find_spec("transformers") is None:
            return False
        return self.model_path is not None and (self.model_path / "config.json").is_file()

    def _resolve_device(self) -> str:
        import torch

        if self.device == "auto":
            return "cuda" if torch.cuda.is_available() else "cpu"
        return self.device

    def _load(self) -> None:
        if self.model is not None:
            return
        if self.model_path is None:
            raise RuntimeError("A model path is required for the in-process engine")

        import torch
        from transformers import AutoModelForCausalLM, AutoTokenizer

        device = self._resolve_device()
        dtype = torch.float16 if self.use_half and device == "cuda" else torch.float32

        print(f"{constants.Emojis.GEAR} [PYTORCH] Loading {self.model_path.name} on {device} ({dtype})...")
        self.tokenizer = AutoTokenizer.from_pretrained(str(self.model_path))
        model = AutoModelForCausalLM.from_pretrained(str(self.model_path), torch_dtype=dtype)
        self.model = model.to(device)
        self.model.eval()
        self.device = device

    def generate_once(self, prompt: str, max_tokens: int, temperature: float) -> GenerationResult:
        import torch

        self._load()
        inputs = self.tokenizer(prompt, return_tensors="pt").to(self.device)
        prompt_length = inputs["input_ids"].shape[-1]

        if self.device == "cuda":
            torch.cuda.reset_peak_memory_stats()

        generate_kwargs: dict[str, Any] = {
            "max_new_tokens": max_tokens,
            "pad_token_id": pad_token_id(self.tokenizer),
        }
        if temperature > 0:
            generate_kwargs.update(do_sample=True, temperature=temperature)
        else:
            generate_kwargs.update(do_sample=False)

        with torch.no_grad():
            output = self.model.generate(**inputs, **generate_kwargs)

        gpu_memory_mb = 0
        if self.device == "cuda":
            torch.cuda.synchronize()
            gpu_memory_mb = int(torch.cuda.max_memory_allocated() / (1024 * 1024))

        new_tokens = output[0][prompt_length:]
        return GenerationResult(
            tokens_generated=int(new_tokens.shape[-1]),
            gpu_memory_mb=gpu_memory_mb,
            text=self.tokenizer.decode(new_tokens, skip_special_tokens=True),
        )

    def close(self) -> None:
        if self.model is None:
            return

        self.model = None
        self.tokenizer = None
        gc.collect()

        import torch

        if torch.cuda.is_available():
            torch.cuda.empty_cache()
            torch.cuda.synchronize()


def pad_token_id(tokenizer: Any) -> int | None:
    """Tokenizer's pad id, or its EOS id for models that define no pad token."""
    if tokenizer.pad_token_id is not None:
        return tokenizer.pad_token_id
    return tokenizer.eos_token_id
