"""Quizz - Geracao, avaliacao e sessoes de quiz com LLM.

Arquitetura:
- models/: Enums, Schemas Pydantic, QuizSession
- engine/: Dificuldade, Scoring, Grading (LLM), Sessao, Geracao, Stats, Tutor
- llm/: QuizLLMClient e LLMClientFactory (Claude Agent SDK)
- storage/: QuizStore (AgentFS)
- prompts/: Templates de prompts
- tools.py: Handlers compartilhados por MCP e HTTP
- router.py: FastAPI endpoints
"""

from .engine import (
    DifficultyPolicy,
    LLMGradingEngine,
    QuizGenerator,
    QuizScoringEngine,
    QuizSessionEngine,
)
from .errors import QuizError
from .llm import LLMClientFactory
from .models import QuizDifficulty, QuizQuestion, QuizQuestionType, QuizSession
from .storage import QuizStore

__all__ = [
    # Models
    "QuizDifficulty",
    "QuizQuestionType",
    "QuizQuestion",
    "QuizSession",
    # Engines
    "DifficultyPolicy",
    "QuizScoringEngine",
    "LLMGradingEngine",
    "QuizSessionEngine",
    "QuizGenerator",
    # LLM
    "LLMClientFactory",
    # Storage
    "QuizStore",
    # Errors
    "QuizError",
]
