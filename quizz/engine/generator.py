"""Quiz Generator - Geracao de questoes via LLM e criacao da sessao."""

import asyncio
import hashlib
import logging
import re
import uuid

from pydantic import ValidationError as PydanticValidationError

from ..errors import GenerationError
from ..llm import LLMError, extract_json
from ..models.enums import QuizQuestionType
from ..models.schemas import QuizConfig, QuizQuestion, QuizQuestionsResponse
from ..models.state import QuizSession, utc_now
from ..prompts import (
    CODE_COMPARISON_HINT,
    CODE_CONTEXT_HINT,
    CODE_WRITING_INSTRUCTIONS,
    MULTI_SELECT_INSTRUCTIONS,
    MULTIPLE_CHOICE_INSTRUCTIONS,
    OPEN_ENDED_INSTRUCTIONS,
    QUIZ_GENERATION_PROMPT,
)
from .difficulty import DifficultyPolicy

logger = logging.getLogger(__name__)

# Blocos cercados (```...```) ou codigo inline (`...`)
_CODE_PATTERN = re.compile(r"```[\s\S]*?```|`[^`]+`")
_WHITESPACE = re.compile(r"\s+")


def content_hash(content: str) -> str:
    """Fingerprint do conteudo: 16 primeiros hex do SHA-256."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()[:16]


def content_preview(content: str, max_length: int = 100) -> str:
    """Conteudo com espacos colapsados, truncado com '...'."""
    cleaned = _WHITESPACE.sub(" ", content).strip()
    if len(cleaned) <= max_length:
        return cleaned
    return cleaned[: max_length - 3] + "..."


def has_code(content: str) -> bool:
    return bool(_CODE_PATTERN.search(content))


class QuizGenerator:
    """Gera as questoes de um quiz e persiste a sessao resultante.

    Example:
        >>> generator = QuizGenerator(llm, store, timeout=180)
        >>> session = await generator.create_session(content, config)
        >>> len(session.questions)
        5
    """

    def __init__(self, llm, store, timeout: float = 180.0):
        self.llm = llm
        self.store = store
        self.timeout = timeout

    @staticmethod
    def _type_instructions(question_type: QuizQuestionType, code: bool) -> str:
        match question_type:
            case QuizQuestionType.MULTIPLE_CHOICE:
                hints = [CODE_CONTEXT_HINT, CODE_COMPARISON_HINT] if code else []
                return "\n".join([MULTIPLE_CHOICE_INSTRUCTIONS, *hints])
            case QuizQuestionType.MULTI_SELECT:
                return "\n".join([MULTI_SELECT_INSTRUCTIONS, *([CODE_CONTEXT_HINT] if code else [])])
            case QuizQuestionType.OPEN_ENDED:
                return "\n".join([OPEN_ENDED_INSTRUCTIONS, *([CODE_CONTEXT_HINT] if code else [])])
            case QuizQuestionType.CODE_WRITING:
                return CODE_WRITING_INSTRUCTIONS

    def build_prompt(self, content: str, config: QuizConfig) -> str:
        """Monta o prompt de geracao para o conteudo (ja sanitizado)."""
        code = has_code(content)
        types = [QuizQuestionType(t) for t in config.question_types]

        return QUIZ_GENERATION_PROMPT.format(
            question_count=config.question_count,
            difficulty_guide=DifficultyPolicy.instruction_guidance(config.difficulty),
            question_types=", ".join(t.value for t in types),
            mix_instruction="Mix the question types roughly equally." if len(types) > 1 else "",
            type_instructions="\n\n".join(self._type_instructions(t, code) for t in types),
            focus_instruction=(
                f"Focus questions specifically on: {config.focus}" if config.focus else ""
            ),
            content=content,
        )

    async def generate_questions(self, content: str, config: QuizConfig) -> list[QuizQuestion]:
        """Chama o LLM e valida as questoes contra a union de tipos.

        Raises:
            GenerationError: Falha, timeout, JSON invalido ou zero questoes
        """
        prompt = self.build_prompt(content, config)

        try:
            text = await asyncio.wait_for(self.llm.generate(prompt), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.error(f"Geracao excedeu {self.timeout}s")
            raise GenerationError(f"Quiz generation timed out after {self.timeout:g}s") from None
        except LLMError as e:
            logger.error(f"Geracao falhou: {e}")
            raise GenerationError(f"Quiz generator unavailable: {e}") from e

        try:
            parsed = QuizQuestionsResponse.model_validate(extract_json(text))
        except (ValueError, PydanticValidationError) as e:
            logger.error(f"Resposta do gerador invalida: {e}")
            raise GenerationError(
                "Quiz generator returned invalid questions", details={"error": str(e)}
            ) from e

        if not parsed.questions:
            raise GenerationError("Quiz generator returned no questions")

        return parsed.questions

    async def create_session(self, content: str, config: QuizConfig) -> QuizSession:
        """Gera as questoes e persiste uma sessao nova.

        Args:
            content: Conteudo ja validado e sanitizado
            config: Configuracao do quiz

        Returns:
            Sessao criada (sem respostas)
        """
        questions = await self.generate_questions(content, config)

        session = QuizSession(
            id=str(uuid.uuid4()),
            created_at=utc_now(),
            config=config,
            content_hash=content_hash(content),
            content_preview=content_preview(content),
            questions=tuple(questions),
        )
        await self.store.create(session)

        logger.info(
            f"[Quiz {session.id}] Gerado: {len(questions)} questoes, "
            f"dificuldade {config.difficulty.value}"
        )
        return session
