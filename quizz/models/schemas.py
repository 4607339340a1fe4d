"""Quiz Schemas - Modelos Pydantic para questoes, respostas e request/response."""

import uuid
from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, TypeAdapter, model_validator

from .enums import QuizDifficulty, QuizQuestionType


def _check_session_id(value: str) -> str:
    try:
        uuid.UUID(value)
    except ValueError:
        raise ValueError("must be a valid UUID") from None
    return value


SessionId = Annotated[str, AfterValidator(_check_session_id)]

# Resposta bruta do usuario: indice, lista de indices (web) ou texto
RawAnswer = Union[int, list[int], str]


# =============================================================================
# QUESTOES (tagged union pelo campo `type`)
# =============================================================================


class CodeSnippet(BaseModel):
    """Trecho de codigo exibido junto com a questao."""

    model_config = ConfigDict(frozen=True)

    language: str = Field(..., description="Linguagem (ex: typescript, python)")
    code: str = Field(..., description="O trecho de codigo")
    label: str | None = Field(default=None, description="Rotulo para comparacoes (Before/After)")


class MultipleChoiceQuestion(BaseModel):
    """Multipla escolha com exatamente 4 alternativas e 1 correta."""

    model_config = ConfigDict(frozen=True)

    type: Literal["multiple-choice"] = "multiple-choice"
    question: str = Field(..., description="Enunciado da questao")
    options: list[str] = Field(..., min_length=4, max_length=4, description="4 alternativas")
    correct_index: int = Field(..., ge=0, le=3, description="Indice da resposta correta (0-3)")
    explanation: str = Field(..., description="Por que a resposta esta correta")
    source: str | None = Field(default=None, description="Referencia ao conteudo")
    code_context: list[CodeSnippet] | None = Field(default=None, min_length=1)


class MultiSelectQuestion(BaseModel):
    """Multi-select com 4-6 alternativas e uma ou mais corretas."""

    model_config = ConfigDict(frozen=True)

    type: Literal["multi-select"] = "multi-select"
    question: str
    options: list[str] = Field(..., min_length=4, max_length=6, description="4-6 alternativas")
    correct_indices: list[int] = Field(..., min_length=1, description="Indices corretos")
    explanation: str
    source: str | None = None
    code_context: list[CodeSnippet] | None = Field(default=None, min_length=1)

    @model_validator(mode="after")
    def validar_indices(self) -> "MultiSelectQuestion":
        """Indices corretos devem ser unicos e existir nas alternativas."""
        if len(set(self.correct_indices)) != len(self.correct_indices):
            raise ValueError("correct_indices must not contain duplicates")
        for index in self.correct_indices:
            if index < 0 or index >= len(self.options):
                raise ValueError(
                    f"correct index {index} out of range for {len(self.options)} options"
                )
        return self


class OpenEndedQuestion(BaseModel):
    """Questao aberta avaliada por LLM contra pontos-chave."""

    model_config = ConfigDict(frozen=True)

    type: Literal["open-ended"] = "open-ended"
    question: str
    expected_answer: str = Field(..., description="Resposta modelo")
    key_points: list[str] = Field(..., description="Pontos que a resposta deve cobrir")
    explanation: str
    source: str | None = None
    code_context: list[CodeSnippet] | None = Field(default=None, min_length=1)


class CodeWritingQuestion(BaseModel):
    """Questao de escrita de codigo avaliada por LLM."""

    model_config = ConfigDict(frozen=True)

    type: Literal["code-writing"] = "code-writing"
    question: str
    language: str = Field(..., description="Linguagem da solucao")
    starter_code: str | None = Field(default=None, description="Esqueleto opcional")
    expected_solution: str = Field(..., description="Solucao modelo")
    key_points: list[str]
    explanation: str
    source: str | None = None


QuizQuestion = Annotated[
    Union[MultipleChoiceQuestion, MultiSelectQuestion, OpenEndedQuestion, CodeWritingQuestion],
    Field(discriminator="type"),
]

QUESTIONS_ADAPTER = TypeAdapter(list[QuizQuestion])


class QuizQuestionsResponse(BaseModel):
    """Formato JSON esperado do gerador."""

    questions: list[QuizQuestion]


# =============================================================================
# CONFIG, RESPOSTAS E PLACAR
# =============================================================================


class QuizConfig(BaseModel):
    """Configuracao imutavel escolhida na criacao da sessao."""

    model_config = ConfigDict(frozen=True)

    question_count: int = Field(..., ge=1, le=20)
    question_types: list[QuizQuestionType] = Field(..., min_length=1)
    difficulty: QuizDifficulty
    focus: str | None = None


class AnswerEvaluation(BaseModel):
    """Resultado da avaliacao de uma resposta."""

    is_correct: bool
    score: int = Field(..., ge=0, le=100)
    feedback: str
    matched_points: list[str] = Field(default_factory=list)


class QuizAnswer(BaseModel):
    """Uma resposta registrada; criada uma vez e nunca alterada."""

    model_config = ConfigDict(frozen=True)

    question_index: int = Field(..., ge=0)
    user_answer: RawAnswer
    is_correct: bool
    score: int = Field(..., ge=0, le=100)
    evaluation: str = ""
    answered_at: datetime


class QuizScore(BaseModel):
    model_config = ConfigDict(frozen=True)

    correct: int = Field(..., ge=0)
    total: int = Field(..., ge=1)
    percentage: int = Field(..., ge=0, le=100)


# =============================================================================
# REQUESTS
# =============================================================================


class GenerateQuizRequest(BaseModel):
    """Request para geracao de quiz."""

    content: str = Field(..., min_length=50, description="Conteudo base (min 50 caracteres)")
    question_count: int = Field(..., ge=1, le=20, description="Numero de questoes (1-20)")
    difficulty: QuizDifficulty
    question_types: list[QuizQuestionType] = Field(..., min_length=1)
    focus: str | None = Field(default=None, description="Topico especifico (opcional)")


class AnalyzeContentRequest(BaseModel):
    content: str = Field(..., min_length=50)


class AnswerRequest(BaseModel):
    """Request para responder a proxima questao da sessao."""

    session_id: SessionId
    answer: RawAnswer = Field(..., description="Indice, letra, lista de indices ou texto")


class QuizStatsRequest(BaseModel):
    days: int = Field(default=30, ge=1, le=365)
    difficulty: QuizDifficulty | None = None


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    """Request de conversa com o tutor sobre uma questao ja respondida."""

    session_id: SessionId
    question_index: int = Field(..., ge=0)
    message: str = Field(..., min_length=1)
    chat_history: list[ChatMessage] = Field(default_factory=list)


# =============================================================================
# RESPONSES
# =============================================================================


class EvaluationPayload(BaseModel):
    """Avaliacao devolvida ao cliente apos cada resposta."""

    is_correct: bool
    score: int
    feedback: str
    matched_points: list[str] = Field(default_factory=list)
    explanation: str
    correct_answer: str


class DisplayQuestion(BaseModel):
    """Questao formatada para exibicao; nunca inclui o gabarito."""

    question_number: int
    total_questions: int
    type: QuizQuestionType
    question: str
    source: str | None = None
    options: list[str] | None = None
    language: str | None = None
    starter_code: str | None = None
    code_context: list[CodeSnippet] | None = None
    hint: str


class QuestionSummary(BaseModel):
    question: str
    correct: bool
    your_answer: str


class FinalResults(BaseModel):
    """Resultado final entregue quando a ultima questao e respondida."""

    score: str = Field(..., description="correct/total")
    correct: int
    total: int
    percentage: int
    passed: bool
    threshold: int
    difficulty: QuizDifficulty
    summary: list[QuestionSummary]


class ContentAnalysis(BaseModel):
    """Recomendacoes do analisador para gerar o quiz."""

    topics: list[str]
    complexity: Literal["low", "medium", "high"]
    suggested_question_count: int = Field(..., ge=1, le=20)
    suggested_difficulty: QuizDifficulty
    content_type: Literal["code", "documentation", "conversation", "mixed"]


class DifficultyStats(BaseModel):
    attempts: int
    average_score: float


class RecentSession(BaseModel):
    id: str
    date: datetime
    score: int
    difficulty: QuizDifficulty


class QuizStats(BaseModel):
    """Estatisticas agregadas de historico."""

    total_quizzes: int
    total_questions: int
    correct_answers: int
    average_score: int
    by_difficulty: dict[QuizDifficulty, DifficultyStats]
    recent_sessions: list[RecentSession]


class GenerateQuizResponse(BaseModel):
    session_id: str
    question_count: int
    difficulty: QuizDifficulty
    url: str
    message: str
