# =============================================================================
# MCP SERVER - Tools do Quizz (stdio)
# =============================================================================
# Geracao, resposta, retry, estatisticas e analise de conteudo. O estado
# (AgentFS + engines) e aberto no lifespan e compartilhado com a API web
# pelo mesmo QUIZ_STORE_ID.
# =============================================================================

import json
import logging
from contextlib import asynccontextmanager, contextmanager
from datetime import datetime, timezone
from typing import Any

from fastmcp import FastMCP
from fastmcp.exceptions import ResourceError, ToolError

from app_state import AppState
from config import VERSION, configure_logging, get_settings
from quizz.errors import QuizError
from quizz.models.enums import QuizDifficulty, QuizQuestionType

logger = logging.getLogger(__name__)

_state: AppState | None = None


@asynccontextmanager
async def lifespan(server: FastMCP):
    """Abre o AppState ao iniciar e fecha ao encerrar."""
    global _state
    configure_logging()
    _state = await AppState.open(get_settings())
    logger.info("Quizz MCP server iniciado")
    try:
        yield
    finally:
        await _state.close()
        _state = None


mcp = FastMCP("quizz", lifespan=lifespan)


def get_state() -> AppState:
    if _state is None:
        raise RuntimeError("Quizz state is not open")
    return _state


@contextmanager
def translate_errors():
    """Converte QuizError em ToolError com o payload estruturado."""
    try:
        yield
    except QuizError as e:
        if e.status_code >= 500:
            logger.error(f"Tool falhou: {e.code} - {e.message}")
        raise ToolError(json.dumps(e.to_dict())) from e


# -----------------------------------------------------------------------------
# Tools
# -----------------------------------------------------------------------------


@mcp.tool()
async def generate_quiz(
    content: str,
    question_count: int,
    difficulty: QuizDifficulty,
    question_types: list[QuizQuestionType],
    focus: str | None = None,
) -> dict[str, Any]:
    """Generate a quiz to test understanding of concepts.

    CRITICAL REQUIREMENT: ask the user BEFORE calling this tool:
    (1) what content/topic to quiz on, (2) difficulty: easy (50%), medium (60%),
    hard (75%) or expert (85%), (3) number of questions (1-20), (4) question
    types: multiple-choice, multi-select, open-ended, code-writing, or any
    combination. Do not call it until the user has answered.

    Args:
        content: Session transcript, code, or document to quiz on (min 50 characters)
        question_count: Number of questions (1-20)
        difficulty: easy, medium, hard or expert
        question_types: One or more question types
        focus: Optional specific topic within the content
    """
    with translate_errors():
        return await get_state().tools.generate_quiz(
            {
                "content": content,
                "question_count": question_count,
                "difficulty": difficulty,
                "question_types": question_types,
                "focus": focus,
            }
        )


@mcp.tool()
async def answer_question(session_id: str, answer: int | str) -> dict[str, Any]:
    """Answer the current question of a quiz session.

    Args:
        session_id: Quiz session ID (UUID)
        answer: Letter (A-D) or index (0-3) for multiple-choice; letters or
            numbers separated by commas for multi-select ("A, C"); free text
            for open-ended; code for code-writing
    """
    with translate_errors():
        return await get_state().tools.answer_question(
            {"session_id": session_id, "answer": answer}
        )


@mcp.tool()
async def retry_quiz(session_id: str) -> dict[str, Any]:
    """Restart a quiz session with the same questions, clearing all answers.

    Args:
        session_id: Quiz session ID (UUID)
    """
    with translate_errors():
        return await get_state().tools.retry_quiz(session_id)


@mcp.tool()
async def get_session(session_id: str) -> dict[str, Any]:
    """Get a quiz session with its questions, answers and score.

    Args:
        session_id: Quiz session ID (UUID)
    """
    with translate_errors():
        return await get_state().tools.get_session(session_id)


@mcp.tool()
async def quiz_stats(days: int = 30, difficulty: QuizDifficulty | None = None) -> dict[str, Any]:
    """View quiz history, scores, and learning progress.

    Args:
        days: Lookback period in days (1-365, default 30)
        difficulty: Filter by difficulty level
    """
    with translate_errors():
        return await get_state().tools.quiz_stats({"days": days, "difficulty": difficulty})


@mcp.tool()
async def analyze_content(content: str) -> dict[str, Any]:
    """Analyze content to get recommendations for quiz generation.

    Returns topics, complexity, suggested question count and difficulty.

    Args:
        content: The content to analyze (code, conversation, documentation)
    """
    with translate_errors():
        return await get_state().tools.analyze_content({"content": content})


# -----------------------------------------------------------------------------
# Resources
# -----------------------------------------------------------------------------


@mcp.resource("quiz://health", mime_type="application/json")
async def health() -> dict[str, Any]:
    """Server health status and version info."""
    return {
        "status": "healthy",
        "version": VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": get_state().uptime,
    }


@mcp.resource("quiz://stats/overview", mime_type="application/json")
async def stats_overview() -> dict[str, Any]:
    """Aggregated learning statistics and recent quiz performance."""
    try:
        return await get_state().tools.quiz_stats({})
    except QuizError as e:
        raise ResourceError(e.message) from e


@mcp.resource("quiz://sessions/{session_id}", mime_type="application/json")
async def session_resource(session_id: str) -> dict[str, Any]:
    """A quiz session with its questions, answers and score."""
    try:
        result = await get_state().tools.get_session(session_id)
    except QuizError as e:
        raise ResourceError(e.message) from e
    return result["session"]


if __name__ == "__main__":
    mcp.run()
