"""App State - Recursos compartilhados do processo (AgentFS, engines, tools).

Criado uma unica vez na inicializacao (lifespan do FastAPI ou do servidor
MCP), injetado nos handlers e fechado no shutdown.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from config import Settings, get_settings
from quizz.engine import ContentAnalyzer, LLMGradingEngine, QuizGenerator, QuizSessionEngine, QuizTutor
from quizz.llm import LLMClientFactory
from quizz.storage import QuizStore
from quizz.tools import QuizTools

if TYPE_CHECKING:
    from agentfs_sdk import AgentFS

logger = logging.getLogger(__name__)


class AppState:
    """Grafo de dependencias do quiz sobre um AgentFS aberto.

    Example:
        >>> state = await AppState.open()
        >>> await state.tools.quiz_stats({"days": 7})
        >>> await state.close()
    """

    def __init__(
        self,
        settings: Settings,
        agentfs: AgentFS,
        llm_factory: LLMClientFactory | None = None,
    ):
        self.settings = settings
        self.agentfs = agentfs
        self.started_at = time.monotonic()

        factory = llm_factory or LLMClientFactory(settings)
        grading_timeout = settings.quiz_grading_timeout
        generation_timeout = settings.quiz_generation_timeout

        self.store = QuizStore(agentfs)
        self.sessions = QuizSessionEngine(
            self.store,
            LLMGradingEngine(factory.create_grading_client(), timeout=grading_timeout),
        )
        self.generator = QuizGenerator(
            factory.create_generation_client(), self.store, timeout=generation_timeout
        )
        self.analyzer = ContentAnalyzer(
            factory.create_analysis_client(), timeout=generation_timeout
        )
        self.tutor = QuizTutor(factory.create_tutor_client(), timeout=grading_timeout)
        self.tools = QuizTools(
            settings, self.store, self.sessions, self.generator, self.analyzer, self.tutor
        )

    @classmethod
    async def open(cls, settings: Settings | None = None) -> AppState:
        """Abre o AgentFS configurado e monta o grafo."""
        from agentfs_sdk import AgentFS, AgentFSOptions

        settings = settings or get_settings()
        agentfs = await AgentFS.open(AgentFSOptions(id=settings.quiz_store_id))
        logger.info(f"AgentFS aberto: {settings.quiz_store_id}")
        return cls(settings, agentfs)

    async def close(self) -> None:
        await self.agentfs.close()
        logger.info("AgentFS fechado")

    @property
    def uptime(self) -> float:
        """Segundos desde a abertura."""
        return time.monotonic() - self.started_at
