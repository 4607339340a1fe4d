"""Quiz State - Sessao do quiz (aggregate root) e suas transicoes."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from .enums import SessionStatus
from .schemas import QUESTIONS_ADAPTER, QuizAnswer, QuizConfig, QuizQuestion, QuizScore


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class QuizSession:
    """Estado completo de uma sessao de quiz.

    As questoes sao fixadas na criacao. As respostas sao append-only e
    alinhadas por posicao: `answers[i]` responde `questions[i]`. A posicao
    atual e sempre `len(answers)`; nunca e informada pelo cliente.

    Attributes:
        id: ID unico da sessao (uuid4)
        created_at: Momento de criacao
        config: Dificuldade, tipos, quantidade e foco
        content_hash: Fingerprint do conteudo (16 hex de SHA-256)
        content_preview: Preview truncado do conteudo
        questions: Sequencia imutavel de questoes
        answers: Respostas registradas ate o momento
        completed_at: Preenchido uma unica vez, quando todas foram respondidas
        score: Placar final, presente apenas junto com completed_at
    """

    id: str
    created_at: datetime
    config: QuizConfig
    content_hash: str
    content_preview: str
    questions: tuple[QuizQuestion, ...]
    answers: list[QuizAnswer] = field(default_factory=list)
    completed_at: datetime | None = None
    score: QuizScore | None = None

    def __post_init__(self) -> None:
        self.questions = tuple(self.questions)
        if len(self.answers) > len(self.questions):
            raise ValueError("answers cannot outnumber questions")
        if (self.completed_at is None) != (self.score is None):
            raise ValueError("score and completed_at must be set together")

    @property
    def next_index(self) -> int:
        """Posicao da proxima questao sem resposta."""
        return len(self.answers)

    @property
    def is_complete(self) -> bool:
        return self.next_index >= len(self.questions)

    @property
    def status(self) -> SessionStatus:
        return SessionStatus.COMPLETE if self.is_complete else SessionStatus.IN_PROGRESS

    @property
    def current_question(self) -> QuizQuestion | None:
        if self.is_complete:
            return None
        return self.questions[self.next_index]

    def append_answer(self, answer: QuizAnswer) -> None:
        """Registra a resposta do slot atual."""
        if self.is_complete:
            raise ValueError(f"session {self.id} has no remaining question slots")
        if answer.question_index != self.next_index:
            raise ValueError(
                f"answer for slot {answer.question_index} does not match slot {self.next_index}"
            )
        self.answers.append(answer)

    def complete(self, score: QuizScore, now: datetime | None = None) -> None:
        """Fecha a sessao com o placar final (uma unica vez)."""
        if not self.is_complete:
            raise ValueError(f"session {self.id} still has unanswered questions")
        if self.completed_at is not None:
            raise ValueError(f"session {self.id} is already completed")

        self.score = score
        self.completed_at = now or utc_now()

    def reset(self) -> None:
        """Retry: limpa respostas e placar, mantendo questoes, config e id."""
        self.answers = []
        self.completed_at = None
        self.score = None

    def to_dict(self) -> dict[str, Any]:
        """Converte para dicionario JSON-compatible (para persistencia)."""
        return {
            "id": self.id,
            "created_at": self.created_at.isoformat(),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "config": self.config.model_dump(mode="json"),
            "content_hash": self.content_hash,
            "content_preview": self.content_preview,
            "questions": QUESTIONS_ADAPTER.dump_python(list(self.questions), mode="json"),
            "answers": [a.model_dump(mode="json") for a in self.answers],
            "score": self.score.model_dump() if self.score else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "QuizSession":
        """Cria instancia a partir de dicionario."""
        completed_at = data.get("completed_at")
        score = data.get("score")

        return cls(
            id=data["id"],
            created_at=datetime.fromisoformat(data["created_at"]),
            config=QuizConfig.model_validate(data["config"]),
            content_hash=data.get("content_hash", ""),
            content_preview=data.get("content_preview", ""),
            questions=tuple(QUESTIONS_ADAPTER.validate_python(data.get("questions", []))),
            answers=[QuizAnswer.model_validate(a) for a in data.get("answers", [])],
            completed_at=datetime.fromisoformat(completed_at) if completed_at else None,
            score=QuizScore.model_validate(score) if score else None,
        )
