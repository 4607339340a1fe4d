"""Quiz Router - Endpoints FastAPI consumidos pela UI web."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Request

from .models.enums import QuizDifficulty
from .tools import QuizTools

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Quiz"])

# =============================================================================
# DEPENDENCY INJECTION
# =============================================================================


def get_quiz_tools(request: Request) -> QuizTools:
    """Tools do AppState aberto no lifespan."""
    return request.app.state.quiz.tools


# =============================================================================
# SESSAO
# =============================================================================


@router.get("/quiz/{session_id}")
async def get_quiz(session_id: str, tools: QuizTools = Depends(get_quiz_tools)):
    """Retorna a sessao completa."""
    return await tools.get_session(session_id)


@router.post("/quiz/{session_id}/retry")
async def retry_quiz(session_id: str, tools: QuizTools = Depends(get_quiz_tools)):
    """Reinicia o quiz mantendo as mesmas questoes."""
    return await tools.retry_quiz(session_id)


@router.post("/answer")
async def submit_answer(
    body: dict[str, Any] = Body(...),
    tools: QuizTools = Depends(get_quiz_tools),
):
    """Responde a proxima questao.

    - `answer`: indice, letra, lista de indices (multi-select) ou texto
    - Retorna avaliacao, sessao atualizada e proxima questao ou resultado final
    """
    return await tools.answer_question(body, include_session=True)


@router.post("/chat")
async def chat(body: dict[str, Any] = Body(...), tools: QuizTools = Depends(get_quiz_tools)):
    """Conversa com o tutor sobre uma questao ja respondida."""
    return await tools.chat(body)


# =============================================================================
# HISTORICO
# =============================================================================


@router.get("/stats")
async def stats(
    days: int = 30,
    difficulty: QuizDifficulty | None = None,
    tools: QuizTools = Depends(get_quiz_tools),
):
    """Estatisticas dos ultimos `days` dias."""
    return await tools.quiz_stats({"days": days, "difficulty": difficulty})


@router.get("/sessions")
async def sessions(limit: int = 20, tools: QuizTools = Depends(get_quiz_tools)):
    """Sessoes mais recentes (resumo)."""
    return await tools.recent_sessions(limit)
