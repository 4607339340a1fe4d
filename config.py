# =============================================================================
# CONFIGURACAO DO QUIZZ - variaveis de ambiente e logging
# =============================================================================

import logging
import sys
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

VERSION = "0.1.0"

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# -----------------------------------------------------------------------------
# Settings
# -----------------------------------------------------------------------------


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Modelos - geracao/analise usa o de qualidade, avaliacao/tutor o rapido
    quiz_model: str = Field(default="claude-opus-4-5", validation_alias="QUIZ_MODEL")
    quiz_grading_model: str = Field(
        default="claude-sonnet-4-5", validation_alias="QUIZ_GRADING_MODEL"
    )

    # Web UI
    quiz_web_host: str = Field(default="localhost", validation_alias="QUIZ_WEB_HOST")
    quiz_web_port: int = Field(default=9004, validation_alias="QUIZ_WEB_PORT")
    quiz_auto_open: bool = Field(default=True, validation_alias="QUIZ_AUTO_OPEN")
    quiz_cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:9004",
        validation_alias="QUIZ_CORS_ORIGINS",
    )

    # AgentFS - um store compartilhado entre o servidor MCP e a API
    quiz_store_id: str = Field(default="quizz", validation_alias="QUIZ_STORE_ID")

    # Timeouts das chamadas LLM (segundos)
    quiz_grading_timeout: float = Field(default=60.0, gt=0, validation_alias="QUIZ_GRADING_TIMEOUT")
    quiz_generation_timeout: float = Field(
        default=180.0, gt=0, validation_alias="QUIZ_GENERATION_TIMEOUT"
    )

    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    debug: bool = Field(default=False, validation_alias="DEBUG")

    @property
    def web_url(self) -> str:
        return f"http://{self.quiz_web_host}:{self.quiz_web_port}"

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.quiz_cors_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Settings carregadas uma vez por processo."""
    return Settings()


# -----------------------------------------------------------------------------
# Logging
# -----------------------------------------------------------------------------


def configure_logging(settings: Settings | None = None) -> None:
    """Configura o logging raiz em stderr.

    stdout fica reservado ao transporte stdio do servidor MCP.
    """
    settings = settings or get_settings()
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)
