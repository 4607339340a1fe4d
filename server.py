"""
Quizz Web Server - API JSON da UI web do quiz

FastAPI server with:
- Quiz sessions persisted in AgentFS (shared with the MCP server)
- Answer evaluation, retry, tutor chat and statistics
- CORS for the browser UI
- Structured errors ({"error", "code", "details"})
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app_state import AppState
from config import VERSION, configure_logging, get_settings
from quizz.errors import QuizError, ValidationError
from quizz.router import router as quiz_router

logger = logging.getLogger(__name__)

# =============================================================================
# FASTAPI APP
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Abre o AppState no startup e fecha no shutdown.

    Um AppState injetado via `create_app(state)` pertence a quem o abriu e
    nao e fechado aqui.
    """
    configure_logging()
    owned = getattr(app.state, "quiz", None) is None
    if owned:
        app.state.quiz = await AppState.open(get_settings())
    logger.info("Quizz web server iniciado")
    try:
        yield
    finally:
        if owned:
            await app.state.quiz.close()
            app.state.quiz = None
        logger.info("Quizz web server encerrado")


def create_app(state: AppState | None = None) -> FastAPI:
    """Cria o app; `state` permite injetar um AppState ja aberto (testes)."""
    settings = get_settings()

    app = FastAPI(
        title="Quizz",
        description="Quiz generation, grading and session API",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.quiz = state

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(QuizError, quiz_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.include_router(quiz_router)

    # =========================================================================
    # HEALTH ENDPOINTS
    # =========================================================================

    @app.get("/")
    async def root():
        """Health check."""
        return {"status": "ok", "message": f"Quizz v{VERSION}"}

    @app.get("/health")
    async def health_check(request: Request):
        """Detailed health check."""
        state: AppState = request.app.state.quiz
        return {
            "status": "healthy",
            "version": VERSION,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": state.uptime,
            "store": state.settings.quiz_store_id,
        }

    return app


# =============================================================================
# ERROR HANDLERS
# =============================================================================


async def quiz_error_handler(request: Request, exc: QuizError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.code} - {exc.message}")
    else:
        logger.debug(f"{request.method} {request.url.path}: {exc.code} - {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = [f"{'.'.join(str(p) for p in e['loc'])}: {e['msg']}" for e in exc.errors()]
    error = ValidationError(f"Invalid input: {', '.join(errors)}", details={"errors": errors})
    return await quiz_error_handler(request, error)


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.quiz_web_host, port=settings.quiz_web_port)
