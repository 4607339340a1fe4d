"""Quiz Engine - Avaliacao, sessao, geracao e estatisticas."""

from .analyzer import ContentAnalyzer
from .difficulty import DifficultyPolicy
from .generator import QuizGenerator, content_hash, content_preview
from .grading_engine import LLMGradingEngine
from .scoring_engine import QuizScoringEngine, option_letter
from .session_engine import QuizSessionEngine, SubmissionResult
from .stats import compute_stats, quiz_stats
from .tutor import QuizTutor

__all__ = [
    "ContentAnalyzer",
    "DifficultyPolicy",
    "LLMGradingEngine",
    "QuizGenerator",
    "QuizScoringEngine",
    "QuizSessionEngine",
    "QuizTutor",
    "SubmissionResult",
    "compute_stats",
    "content_hash",
    "content_preview",
    "option_letter",
    "quiz_stats",
]
