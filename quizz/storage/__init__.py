"""Quiz Storage - Persistencia de sessoes via AgentFS."""

from .quiz_store import QuizStore

__all__ = ["QuizStore"]
