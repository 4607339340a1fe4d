"""Quiz Enums - Dificuldade e tipos de questao."""

from enum import Enum


class QuizDifficulty(str, Enum):
    """Niveis de dificuldade do quiz, em ordem crescente."""

    EASY = "easy"  # 50% para passar
    MEDIUM = "medium"  # 60%
    HARD = "hard"  # 75%
    EXPERT = "expert"  # 85%


class QuizQuestionType(str, Enum):
    """Tipos de questao suportados (discriminador `type`)."""

    MULTIPLE_CHOICE = "multiple-choice"
    MULTI_SELECT = "multi-select"
    OPEN_ENDED = "open-ended"
    CODE_WRITING = "code-writing"


class SessionStatus(str, Enum):
    """Estados da maquina de estados da sessao."""

    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"
