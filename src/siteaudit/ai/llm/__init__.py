"""LLM client used for report summarization."""

from __future__ import annotations

from .client import LLMClient

__all__ = ["LLMClient"]
