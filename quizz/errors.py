"""Quiz Errors - Taxonomia de erros do quiz.

Cada erro carrega um `code` estavel (usado pelas tools MCP) e um
`status_code` HTTP (usado pelo router). Os handlers convertem qualquer
`QuizError` em payload estruturado via `to_dict()`.
"""

from typing import Any


class QuizError(Exception):
    """Erro base do quiz."""

    code = "internal_error"
    status_code = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message, "code": self.code, "details": self.details}


class ValidationError(QuizError):
    """Entrada malformada ou fora do intervalo."""

    code = "invalid_params"
    status_code = 400


class InvalidAnswerFormatError(ValidationError):
    """Resposta de multipla escolha que nao e letra A-D nem indice 0-3."""


class InvalidSelectionError(ValidationError):
    """Token de multi-select que nao corresponde a uma alternativa."""

    def __init__(self, token: Any, option_count: int, duplicate: bool = False):
        if duplicate:
            message = f'Duplicate selection: "{token}". Select each option at most once.'
        else:
            last_letter = chr(ord("A") + option_count - 1)
            message = f'Invalid selection: "{token}". Use A-{last_letter} or 0-{option_count - 1}.'
        super().__init__(
            message,
            details={"token": str(token), "option_count": option_count, "duplicate": duplicate},
        )


class EmptyAnswerError(ValidationError):
    """Resposta textual vazia para open-ended ou code-writing."""


class SessionNotFoundError(QuizError):
    code = "not_found"
    status_code = 404

    def __init__(self, session_id: str):
        super().__init__(
            f"Quiz session not found: {session_id}", details={"session_id": session_id}
        )


class AlreadyCompletedError(QuizError):
    code = "already_completed"
    status_code = 409

    def __init__(self, session_id: str):
        super().__init__(
            f"Quiz already completed: {session_id}", details={"session_id": session_id}
        )


class AnswerSlotConflictError(QuizError):
    """A posicao da sessao mudou durante a avaliacao (outra resposta ou retry)."""

    code = "conflict"
    status_code = 409

    def __init__(self, session_id: str, expected_index: int, actual_index: int):
        super().__init__(
            f"Quiz session {session_id} moved from question {expected_index + 1} "
            f"to question {actual_index + 1} while the answer was being graded. "
            "Submit the answer again.",
            details={
                "session_id": session_id,
                "expected_index": expected_index,
                "actual_index": actual_index,
            },
        )


class GradingFailure(QuizError):
    """O avaliador LLM nao retornou um resultado estruturado utilizavel."""

    code = "grading_failure"
    status_code = 502


class GenerationError(QuizError):
    """O gerador/analisador LLM nao retornou um resultado utilizavel."""

    code = "generation_failure"
    status_code = 502


class StoreFailure(QuizError):
    """Falha de leitura/escrita no store de sessoes."""

    code = "store_failure"
    status_code = 500
