"""Quiz Tutor - Conversa sobre uma questao ja respondida."""

import asyncio
import logging

from ..errors import GenerationError, ValidationError
from ..llm import LLMError
from ..models.schemas import ChatMessage
from ..models.state import QuizSession
from ..prompts import TUTOR_PREVIOUS_QUESTION, TUTOR_SYSTEM_PROMPT
from .formatting import lettered_options, short_user_answer

logger = logging.getLogger(__name__)


def build_tutor_prompt(session: QuizSession, question_index: int) -> str:
    """System prompt do tutor.

    Inclui a questao atual e o historico das anteriores; nunca inclui
    questoes posteriores a `question_index`.
    """
    question = session.questions[question_index]
    answer = session.answers[question_index]

    previous = "\n\n".join(
        TUTOR_PREVIOUS_QUESTION.format(
            number=i + 1,
            question=session.questions[i].question,
            user_answer=short_user_answer(session.answers[i]),
            result="Correct" if session.answers[i].is_correct else "Incorrect",
        )
        for i in range(question_index)
    )

    options = getattr(question, "options", None)

    return TUTOR_SYSTEM_PROMPT.format(
        topic=session.config.focus or "General coding concepts",
        difficulty=session.config.difficulty.value,
        question_number=question_index + 1,
        question=question.question,
        options_line=f"Options: {', '.join(lettered_options(options))}" if options else "",
        user_answer=short_user_answer(answer),
        result="Correct!" if answer.is_correct else "Incorrect",
        feedback_line=f"Feedback: {answer.evaluation}" if answer.evaluation else "",
        explanation=question.explanation,
        previous_context=f"Previous questions context:\n{previous}" if previous else "",
    )


def build_conversation(message: str, history: list[ChatMessage]) -> str:
    turns = [f"{'Student' if m.role == 'user' else 'Tutor'}: {m.content}" for m in history]
    turns.append(f"Student: {message}")
    return "\n\n".join(turns)


class QuizTutor:
    """Tutor LLM restrito as questoes ja respondidas."""

    def __init__(self, llm, timeout: float = 60.0):
        self.llm = llm
        self.timeout = timeout

    async def reply(
        self,
        session: QuizSession,
        question_index: int,
        message: str,
        history: list[ChatMessage] | None = None,
    ) -> str:
        """Resposta do tutor para a mensagem do aluno.

        Raises:
            ValidationError: Questao ainda nao respondida
            GenerationError: Falha do LLM
        """
        if question_index < 0 or question_index >= len(session.answers):
            raise ValidationError(
                "Invalid question index or question not yet answered",
                details={"question_index": question_index, "answered": len(session.answers)},
            )

        system_prompt = build_tutor_prompt(session, question_index)
        prompt = build_conversation(message, history or [])

        try:
            text = await asyncio.wait_for(
                self.llm.generate(prompt, system_prompt=system_prompt), timeout=self.timeout
            )
        except asyncio.TimeoutError:
            raise GenerationError(f"Tutor timed out after {self.timeout:g}s") from None
        except LLMError as e:
            logger.error(f"[Quiz {session.id}] Tutor falhou: {e}")
            raise GenerationError(f"Tutor unavailable: {e}") from e

        return text.strip()
