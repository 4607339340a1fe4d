"""Quiz Tools - Handlers independentes de transporte (MCP e HTTP).

Cada handler recebe argumentos brutos (dict), valida com Pydantic,
delega aos engines e devolve dicts JSON-compatible. Erros de validacao do
Pydantic viram `ValidationError` do quiz; os demais `QuizError` sobem
intactos para a camada de transporte.
"""

import asyncio
import logging
import webbrowser
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .engine import (
    ContentAnalyzer,
    QuizGenerator,
    QuizSessionEngine,
    QuizTutor,
    SubmissionResult,
    quiz_stats,
)
from .errors import ValidationError
from .models.schemas import (
    AnalyzeContentRequest,
    AnswerRequest,
    ChatRequest,
    GenerateQuizRequest,
    GenerateQuizResponse,
    QuizConfig,
    QuizStatsRequest,
    SessionId,
)
from .models.state import QuizSession
from .sanitize import sanitize_content, validate_content

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class _SessionRef(BaseModel):
    session_id: SessionId


def parse_input(model: type[ModelT], args: dict[str, Any] | None) -> ModelT:
    """Valida argumentos; erros viram ValidationError ("Invalid input: campo: msg")."""
    try:
        return model.model_validate(args or {})
    except PydanticValidationError as e:
        errors = [
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        ]
        raise ValidationError(
            f"Invalid input: {', '.join(errors)}", details={"errors": errors}
        ) from None


def clean_content(content: str) -> str:
    """Rejeita conteudo suspeito e sanitiza o restante."""
    problem = validate_content(content)
    if problem:
        logger.warning(f"Conteudo rejeitado: {problem}")
        raise ValidationError(problem)
    return sanitize_content(content)


def session_summary(session: QuizSession) -> dict[str, Any]:
    """Resumo leve usado em listagens."""
    return {
        "id": session.id,
        "created_at": session.created_at.isoformat(),
        "completed_at": session.completed_at.isoformat() if session.completed_at else None,
        "difficulty": session.config.difficulty.value,
        "question_count": len(session.questions),
        "answered": len(session.answers),
        "status": session.status.value,
        "score": session.score.model_dump() if session.score else None,
        "content_preview": session.content_preview,
    }


def submission_payload(result: SubmissionResult, include_session: bool = False) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "evaluation": result.evaluation.model_dump(mode="json"),
        "quiz_complete": result.quiz_complete,
        "next_question": (
            result.next_question.model_dump(mode="json", exclude_none=True)
            if result.next_question
            else None
        ),
        "final_results": (
            result.final_results.model_dump(mode="json") if result.final_results else None
        ),
    }
    if include_session:
        payload["session"] = result.session.to_dict()
    return payload


class QuizTools:
    """Operacoes expostas pelo servidor MCP e pela API HTTP.

    Example:
        >>> tools = QuizTools(settings, store, sessions, generator, analyzer, tutor)
        >>> await tools.answer_question({"session_id": sid, "answer": "B"})
    """

    def __init__(
        self,
        settings,
        store,
        sessions: QuizSessionEngine,
        generator: QuizGenerator,
        analyzer: ContentAnalyzer,
        tutor: QuizTutor,
    ):
        self.settings = settings
        self.store = store
        self.sessions = sessions
        self.generator = generator
        self.analyzer = analyzer
        self.tutor = tutor

    # =========================================================================
    # GERACAO E ANALISE
    # =========================================================================

    async def generate_quiz(self, args: dict[str, Any]) -> dict[str, Any]:
        """Valida, sanitiza, gera e persiste um quiz novo."""
        request = parse_input(GenerateQuizRequest, args)
        content = clean_content(request.content)

        config = QuizConfig(
            question_count=request.question_count,
            question_types=request.question_types,
            difficulty=request.difficulty,
            focus=request.focus,
        )
        logger.info(
            f"Gerando quiz: {config.question_count} questoes, {config.difficulty.value}, "
            f"tipos {[t.value for t in config.question_types]}"
        )
        session = await self.generator.create_session(content, config)

        url = f"{self.settings.web_url}/quiz/{session.id}"
        auto_open = self.settings.quiz_auto_open
        if auto_open:
            await self._open_browser(url)

        count = len(session.questions)
        hint = "Opening browser..." if auto_open else f"Open {url} in your browser."
        return GenerateQuizResponse(
            session_id=session.id,
            question_count=count,
            difficulty=config.difficulty,
            url=url,
            message=f"Quiz ready! {count} questions at {config.difficulty.value} difficulty. {hint}",
        ).model_dump(mode="json")

    async def _open_browser(self, url: str) -> None:
        try:
            opened = await asyncio.to_thread(webbrowser.open, url)
        except webbrowser.Error as e:
            logger.warning(f"Falha ao abrir navegador: {e}")
            return
        if not opened:
            logger.warning(f"Nenhum navegador disponivel para {url}")

    async def analyze_content(self, args: dict[str, Any]) -> dict[str, Any]:
        request = parse_input(AnalyzeContentRequest, args)
        analysis = await self.analyzer.analyze(clean_content(request.content))
        return analysis.model_dump(mode="json")

    # =========================================================================
    # SESSAO
    # =========================================================================

    async def answer_question(
        self, args: dict[str, Any], include_session: bool = False
    ) -> dict[str, Any]:
        """Responde a proxima questao da sessao."""
        request = parse_input(AnswerRequest, args)
        result = await self.sessions.submit_answer(request.session_id, request.answer)
        return submission_payload(result, include_session=include_session)

    async def retry_quiz(self, session_id: str) -> dict[str, Any]:
        session = await self.sessions.retry(self._session_id(session_id))
        return {"session": session.to_dict()}

    async def get_session(self, session_id: str) -> dict[str, Any]:
        session = await self.sessions.get_session(self._session_id(session_id))
        return {"session": session.to_dict()}

    async def recent_sessions(self, limit: int = 20) -> dict[str, Any]:
        if limit < 1 or limit > 100:
            raise ValidationError("Invalid input: limit: must be between 1 and 100")
        sessions = await self.store.list_recent(limit)
        return {"sessions": [session_summary(s) for s in sessions]}

    @staticmethod
    def _session_id(session_id: str) -> str:
        return parse_input(_SessionRef, {"session_id": session_id}).session_id

    # =========================================================================
    # ESTATISTICAS E TUTOR
    # =========================================================================

    async def quiz_stats(self, args: dict[str, Any] | None = None) -> dict[str, Any]:
        request = parse_input(QuizStatsRequest, args)
        stats = await quiz_stats(self.store, days=request.days, difficulty=request.difficulty)
        return stats.model_dump(mode="json")

    async def chat(self, args: dict[str, Any]) -> dict[str, Any]:
        """Conversa com o tutor sobre uma questao ja respondida."""
        request = parse_input(ChatRequest, args)
        session = await self.sessions.get_session(request.session_id)
        reply = await self.tutor.reply(
            session, request.question_index, request.message, request.chat_history
        )
        return {"reply": reply}


