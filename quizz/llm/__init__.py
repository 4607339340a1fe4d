"""Quiz LLM - Clientes do Claude Agent SDK."""

from .client import LLMError, QuizLLMClient, extract_json
from .factory import LLMClientFactory

__all__ = ["LLMClientFactory", "LLMError", "QuizLLMClient", "extract_json"]
