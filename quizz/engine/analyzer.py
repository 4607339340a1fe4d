"""Content Analyzer - Recomendacoes de quiz para um conteudo."""

import asyncio
import logging

from ..errors import GenerationError
from ..llm import LLMError, extract_json
from ..models.schemas import ContentAnalysis
from ..prompts import CONTENT_ANALYSIS_PROMPT

logger = logging.getLogger(__name__)


class ContentAnalyzer:
    """Pede ao LLM topicos, complexidade, quantidade e dificuldade sugeridas."""

    def __init__(self, llm, timeout: float = 180.0):
        self.llm = llm
        self.timeout = timeout

    async def analyze(self, content: str) -> ContentAnalysis:
        """Analisa conteudo ja sanitizado.

        Raises:
            GenerationError: Falha do LLM ou resposta fora do formato
        """
        prompt = CONTENT_ANALYSIS_PROMPT.format(content=content)

        try:
            text = await asyncio.wait_for(self.llm.generate(prompt), timeout=self.timeout)
        except asyncio.TimeoutError:
            raise GenerationError(f"Content analysis timed out after {self.timeout:g}s") from None
        except LLMError as e:
            logger.error(f"Analise falhou: {e}")
            raise GenerationError(f"Content analyzer unavailable: {e}") from e

        try:
            return ContentAnalysis.model_validate(extract_json(text))
        except ValueError as e:
            logger.error(f"Resposta do analisador invalida: {e}")
            raise GenerationError(
                "Content analyzer returned an invalid result", details={"error": str(e)}
            ) from e
