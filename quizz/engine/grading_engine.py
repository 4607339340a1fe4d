"""LLM Grading Engine - Avaliacao de questoes abertas e de codigo."""

import asyncio
import logging
from typing import Protocol

from ..errors import GradingFailure
from ..llm import LLMError, extract_json
from ..models.enums import QuizDifficulty
from ..models.schemas import AnswerEvaluation, CodeWritingQuestion, OpenEndedQuestion
from ..prompts import CODE_GRADING_PROMPT, OPEN_ENDED_GRADING_PROMPT
from .difficulty import DifficultyPolicy
from .scoring_engine import round_half_up

logger = logging.getLogger(__name__)


class TextGenerator(Protocol):
    async def generate(self, prompt: str, system_prompt: str | None = None) -> str: ...


def _numbered(points: list[str]) -> str:
    return "\n".join(f"{i}. {point}" for i, point in enumerate(points, start=1))


class LLMGradingEngine:
    """Delega a avaliacao ao LLM e reaplica o limiar localmente.

    O booleano devolvido pelo LLM nunca e confiavel: `is_correct` e sempre
    recalculado como `score >= threshold(difficulty)`, com o score limitado
    a [0, 100].

    Example:
        >>> grader = LLMGradingEngine(llm, timeout=60)
        >>> evaluation = await grader.evaluate_open_ended(question, "...", QuizDifficulty.HARD)
    """

    def __init__(self, llm: TextGenerator, timeout: float = 60.0):
        self.llm = llm
        self.timeout = timeout

    def build_open_ended_prompt(
        self, question: OpenEndedQuestion, user_answer: str, difficulty: QuizDifficulty
    ) -> str:
        threshold = DifficultyPolicy.threshold(difficulty)
        return OPEN_ENDED_GRADING_PROMPT.format(
            question=question.question,
            expected_answer=question.expected_answer,
            key_points=_numbered(question.key_points),
            user_answer=user_answer,
            difficulty_label=QuizDifficulty(difficulty).value.upper(),
            strictness=DifficultyPolicy.strictness_guidance(difficulty),
            threshold=threshold,
        )

    def build_code_prompt(
        self, question: CodeWritingQuestion, user_code: str, difficulty: QuizDifficulty
    ) -> str:
        threshold = DifficultyPolicy.threshold(difficulty)
        return CODE_GRADING_PROMPT.format(
            question=question.question,
            language=question.language,
            expected_solution=question.expected_solution,
            key_points=_numbered(question.key_points),
            user_code=user_code,
            difficulty_label=QuizDifficulty(difficulty).value.upper(),
            strictness=DifficultyPolicy.strictness_guidance(difficulty),
            threshold=threshold,
        )

    async def evaluate_open_ended(
        self, question: OpenEndedQuestion, user_answer: str, difficulty: QuizDifficulty
    ) -> AnswerEvaluation:
        prompt = self.build_open_ended_prompt(question, user_answer, difficulty)
        return await self._grade(prompt, difficulty)

    async def evaluate_code_writing(
        self, question: CodeWritingQuestion, user_code: str, difficulty: QuizDifficulty
    ) -> AnswerEvaluation:
        prompt = self.build_code_prompt(question, user_code, difficulty)
        return await self._grade(prompt, difficulty)

    async def _grade(self, prompt: str, difficulty: QuizDifficulty) -> AnswerEvaluation:
        try:
            text = await asyncio.wait_for(self.llm.generate(prompt), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.error(f"Avaliacao LLM excedeu {self.timeout}s")
            raise GradingFailure(
                f"Grading timed out after {self.timeout:g}s", details={"timeout": self.timeout}
            ) from None
        except LLMError as e:
            logger.error(f"Avaliacao LLM falhou: {e}")
            raise GradingFailure(f"Grader unavailable: {e}") from e

        return self.parse_grading(text, difficulty)

    @staticmethod
    def parse_grading(text: str, difficulty: QuizDifficulty) -> AnswerEvaluation:
        """Converte a resposta do LLM em AnswerEvaluation com o limiar local.

        Raises:
            GradingFailure: JSON ausente, score ausente ou nao numerico
        """
        try:
            data = extract_json(text)
        except ValueError as e:
            raise GradingFailure("Grader returned no structured result") from e

        raw_score = data.get("score")
        if isinstance(raw_score, bool) or not isinstance(raw_score, (int, float)):
            raise GradingFailure(
                "Grader returned no numeric score", details={"score": repr(raw_score)}
            )

        clamped = max(0, min(100, raw_score))
        feedback = data.get("feedback")
        matched = data.get("matched_points") or []

        return AnswerEvaluation(
            is_correct=clamped >= DifficultyPolicy.threshold(difficulty),
            score=round_half_up(clamped),
            feedback=feedback if isinstance(feedback, str) else "",
            matched_points=[str(p) for p in matched] if isinstance(matched, list) else [],
        )
