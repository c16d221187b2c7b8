"""
Completion Provider Abstraction.

업스트림 모델/SDK 교체 가능하게 설계.
모델명은 config(Settings)만 SSOT.
"""

from .base import CompletionParams, CompletionProvider, CompletionStream, compute_hash
from .openai import OpenAICompletionStream, OpenAIProvider

__all__ = [
    "CompletionParams",
    "CompletionProvider",
    "CompletionStream",
    "compute_hash",
    "OpenAICompletionStream",
    "OpenAIProvider",
]
