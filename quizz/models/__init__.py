"""Quiz Models - Enums, Schemas e State."""

from .enums import QuizDifficulty, QuizQuestionType, SessionStatus
from .schemas import (
    AnalyzeContentRequest,
    AnswerEvaluation,
    AnswerRequest,
    ChatMessage,
    ChatRequest,
    CodeSnippet,
    CodeWritingQuestion,
    ContentAnalysis,
    DisplayQuestion,
    EvaluationPayload,
    FinalResults,
    GenerateQuizRequest,
    GenerateQuizResponse,
    MultipleChoiceQuestion,
    MultiSelectQuestion,
    OpenEndedQuestion,
    QuestionSummary,
    QuizAnswer,
    QuizConfig,
    QuizQuestion,
    QuizScore,
    QuizStats,
    QuizStatsRequest,
)
from .state import QuizSession

__all__ = [
    # Enums
    "QuizDifficulty",
    "QuizQuestionType",
    "SessionStatus",
    # Questoes
    "CodeSnippet",
    "MultipleChoiceQuestion",
    "MultiSelectQuestion",
    "OpenEndedQuestion",
    "CodeWritingQuestion",
    "QuizQuestion",
    # Sessao
    "QuizConfig",
    "QuizAnswer",
    "QuizScore",
    "QuizSession",
    "AnswerEvaluation",
    # Requests
    "GenerateQuizRequest",
    "AnalyzeContentRequest",
    "AnswerRequest",
    "QuizStatsRequest",
    "ChatMessage",
    "ChatRequest",
    # Responses
    "EvaluationPayload",
    "DisplayQuestion",
    "QuestionSummary",
    "FinalResults",
    "ContentAnalysis",
    "QuizStats",
    "GenerateQuizResponse",
]
