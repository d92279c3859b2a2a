"""
Engine adapter implementations.

One module per engine family: the in-process native engine and the two
subprocess-based engines sharing SubprocessAdapter.
"""

from .gpt_oss_adapter import GptOssAdapter
from .llama_cpp_adapter import LlamaCppAdapter
from .native_adapter import NativeEngineAdapter
from .subprocess_adapter import SubprocessAdapter

__all__ = ["GptOssAdapter", "LlamaCppAdapter", "NativeEngineAdapter", "SubprocessAdapter"]
