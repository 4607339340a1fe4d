"""Quiz Session Engine - Maquina de estados da sessao de quiz.

Fluxo de uma resposta:
    load -> normalizar -> avaliar -> append -> (completar) -> persistir

Concorrencia:
    - Um lock por sessao (asyncio.Lock), criado sob demanda
    - Tipos deterministicos sao avaliados e persistidos com o lock
    - Tipos avaliados por LLM liberam o lock durante a chamada externa e
      revalidam a posicao ao readquiri-lo
    - O store recebe o numero de respostas esperado (guarda otimista
      contra escritores em outros processos)
"""

import asyncio
import logging
import weakref
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, assert_never

from ..errors import AlreadyCompletedError, AnswerSlotConflictError, SessionNotFoundError
from ..models.enums import QuizDifficulty
from ..models.schemas import (
    AnswerEvaluation,
    CodeWritingQuestion,
    DisplayQuestion,
    EvaluationPayload,
    FinalResults,
    MultipleChoiceQuestion,
    MultiSelectQuestion,
    OpenEndedQuestion,
    QuizAnswer,
    QuizQuestion,
    RawAnswer,
)
from ..models.state import QuizSession, utc_now
from .answer_normalizer import normalize_answer
from .difficulty import DifficultyPolicy
from .formatting import build_summary, correct_answer_text, format_question_for_display
from .grading_engine import LLMGradingEngine
from .scoring_engine import QuizScoringEngine

logger = logging.getLogger(__name__)


class _SessionGuard:
    """Lock da sessao e contador de mutacoes feitas neste processo."""

    def __init__(self) -> None:
        self.lock = asyncio.Lock()
        self.epoch = 0


@dataclass
class SubmissionResult:
    """Resultado de `submit_answer`."""

    session: QuizSession
    evaluation: EvaluationPayload
    next_question: DisplayQuestion | None = None
    final_results: FinalResults | None = None

    @property
    def quiz_complete(self) -> bool:
        return self.final_results is not None


def build_final_results(session: QuizSession) -> FinalResults:
    """Resultado final de uma sessao completa."""
    if session.score is None:
        raise ValueError(f"session {session.id} is not complete")

    difficulty = session.config.difficulty
    score = session.score
    return FinalResults(
        score=f"{score.correct}/{score.total}",
        correct=score.correct,
        total=score.total,
        percentage=score.percentage,
        passed=DifficultyPolicy.passed(score.percentage, difficulty),
        threshold=DifficultyPolicy.threshold(difficulty),
        difficulty=difficulty,
        summary=build_summary(session.questions, session.answers),
    )


def build_next_question(session: QuizSession) -> DisplayQuestion | None:
    question = session.current_question
    if question is None:
        return None
    return format_question_for_display(question, session.next_index + 1, len(session.questions))


class QuizSessionEngine:
    """Orquestra respostas, conclusao e retry das sessoes.

    Example:
        >>> engine = QuizSessionEngine(store, grader)
        >>> result = await engine.submit_answer(session_id, "B")
        >>> result.evaluation.is_correct
        True
    """

    def __init__(
        self,
        store,
        grader: LLMGradingEngine,
        scoring: QuizScoringEngine | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.store = store
        self.grader = grader
        self.scoring = scoring or QuizScoringEngine()
        self.clock = clock
        self._guards: weakref.WeakValueDictionary[str, _SessionGuard] = (
            weakref.WeakValueDictionary()
        )

    def _guard(self, session_id: str) -> _SessionGuard:
        guard = self._guards.get(session_id)
        if guard is None:
            guard = _SessionGuard()
            self._guards[session_id] = guard
        return guard

    async def get_session(self, session_id: str) -> QuizSession:
        """Carrega a sessao ou levanta SessionNotFoundError."""
        session = await self.store.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    # =========================================================================
    # SUBMIT
    # =========================================================================

    async def submit_answer(self, session_id: str, raw_answer: RawAnswer) -> SubmissionResult:
        """Registra a resposta da proxima questao sem resposta.

        Args:
            session_id: ID da sessao
            raw_answer: Letra, indice, lista de indices ou texto

        Returns:
            SubmissionResult com avaliacao e proxima questao ou resultado final

        Raises:
            SessionNotFoundError: Sessao inexistente
            AlreadyCompletedError: Todas as questoes ja foram respondidas
            ValidationError: Resposta invalida para o tipo da questao
            GradingFailure: Avaliador LLM falhou ou excedeu o timeout
            AnswerSlotConflictError: A sessao mudou durante a avaliacao
        """
        guard = self._guard(session_id)

        async with guard.lock:
            session = await self.get_session(session_id)
            if session.is_complete:
                raise AlreadyCompletedError(session_id)

            index = session.next_index
            question = session.questions[index]
            normalized = normalize_answer(question, raw_answer)
            logger.debug(f"[Quiz {session_id}] Resposta {index + 1} ({question.type})")

            closed = self._evaluate_closed(question, normalized)
            if closed is not None:
                return await self._record(guard, session, question, normalized, closed)

            epoch = guard.epoch

        # Avaliacao por LLM fora do lock
        evaluation = await self._evaluate_with_llm(
            question, normalized, session.config.difficulty
        )

        async with guard.lock:
            session = await self.get_session(session_id)
            if guard.epoch != epoch or session.next_index != index:
                logger.warning(
                    f"[Quiz {session_id}] Sessao mudou durante a avaliacao da questao {index + 1}"
                )
                raise AnswerSlotConflictError(session_id, index, session.next_index)
            return await self._record(guard, session, question, normalized, evaluation)

    def _evaluate_closed(
        self, question: QuizQuestion, normalized: int | list[int] | str
    ) -> AnswerEvaluation | None:
        """Avaliacao deterministica; None para tipos avaliados por LLM."""
        match question:
            case MultipleChoiceQuestion():
                return self.scoring.evaluate_multiple_choice(normalized, question.correct_index)
            case MultiSelectQuestion():
                return self.scoring.evaluate_multi_select(normalized, question.correct_indices)
            case OpenEndedQuestion() | CodeWritingQuestion():
                return None
            case _:
                assert_never(question)

    async def _evaluate_with_llm(
        self,
        question: OpenEndedQuestion | CodeWritingQuestion,
        normalized: str,
        difficulty: QuizDifficulty,
    ) -> AnswerEvaluation:
        match question:
            case OpenEndedQuestion():
                return await self.grader.evaluate_open_ended(question, normalized, difficulty)
            case CodeWritingQuestion():
                return await self.grader.evaluate_code_writing(question, normalized, difficulty)
            case _:
                assert_never(question)

    async def _record(
        self,
        guard: _SessionGuard,
        session: QuizSession,
        question: QuizQuestion,
        normalized: int | list[int] | str,
        evaluation: AnswerEvaluation,
    ) -> SubmissionResult:
        """Append + conclusao + persistencia. Deve ser chamado com o lock."""
        index = session.next_index
        now = self.clock()

        session.append_answer(
            QuizAnswer(
                question_index=index,
                user_answer=normalized,
                is_correct=evaluation.is_correct,
                score=evaluation.score,
                evaluation=evaluation.feedback,
                answered_at=now,
            )
        )

        changes = {"answers": session.answers}
        if session.is_complete:
            session.complete(
                self.scoring.calculate_score(session.answers, len(session.questions)), now
            )
            changes.update(completed_at=session.completed_at, score=session.score)

        updated = await self.store.update(session.id, changes, expected_answer_count=index)
        if updated is None:
            raise SessionNotFoundError(session.id)
        guard.epoch += 1

        payload = EvaluationPayload(
            **evaluation.model_dump(),
            explanation=question.explanation,
            correct_answer=correct_answer_text(question),
        )

        if updated.is_complete:
            results = build_final_results(updated)
            logger.info(
                f"[Quiz {updated.id}] Completo: {results.score} "
                f"({results.percentage}%, {'aprovado' if results.passed else 'reprovado'})"
            )
            return SubmissionResult(session=updated, evaluation=payload, final_results=results)

        return SubmissionResult(
            session=updated, evaluation=payload, next_question=build_next_question(updated)
        )

    # =========================================================================
    # RETRY
    # =========================================================================

    async def retry(self, session_id: str) -> QuizSession:
        """Limpa respostas e placar mantendo questoes, config e id.

        Idempotente: repetir o retry resulta no mesmo estado.
        """
        guard = self._guard(session_id)

        async with guard.lock:
            updated = await self.store.update(
                session_id, {"answers": [], "completed_at": None, "score": None}
            )
            if updated is None:
                raise SessionNotFoundError(session_id)
            guard.epoch += 1

        logger.info(f"[Quiz {session_id}] Retry")
        return updated
