# =============================================================================
# CONFTEST - Fixtures compartilhadas para todos os testes
# =============================================================================
# Centraliza mocks do AgentFS e do LLM, questoes e sessoes de exemplo
# =============================================================================

import json
import os
import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

# =============================================================================
# FIXTURES DE AMBIENTE
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Configura ambiente de testes globalmente."""
    env_vars = {
        "QUIZ_AUTO_OPEN": "false",
        "QUIZ_STORE_ID": "quizz-test",
        "QUIZ_WEB_PORT": "9004",
        "LOG_LEVEL": "ERROR",  # Reduzir logs em testes
    }
    with patch.dict(os.environ, env_vars):
        from config import get_settings

        get_settings.cache_clear()
        yield
        get_settings.cache_clear()


@pytest.fixture
def settings():
    from config import get_settings

    return get_settings()


# =============================================================================
# FIXTURES DO AGENTFS
# =============================================================================


@pytest.fixture
def mock_agentfs():
    """Mock completo do AgentFS."""
    mock = MagicMock()

    # KV Store
    mock.kv = AsyncMock()
    mock.kv.get = AsyncMock(return_value=None)
    mock.kv.set = AsyncMock()
    mock.kv.delete = AsyncMock()
    mock.kv.list = AsyncMock(return_value=[])

    # Lifecycle
    mock.close = AsyncMock()

    return mock


@pytest.fixture
def mock_agentfs_with_data():
    """Mock do AgentFS com KV em memoria (valores passam por JSON)."""
    mock = MagicMock()
    _storage = {}

    async def mock_get(key):
        return _storage.get(key)

    async def mock_set(key, value):
        _storage[key] = json.loads(json.dumps(value))

    async def mock_delete(key):
        _storage.pop(key, None)

    async def mock_list(prefix=""):
        return [{"key": k} for k in _storage if k.startswith(prefix or "")]

    mock.kv = AsyncMock()
    mock.kv.get = mock_get
    mock.kv.set = mock_set
    mock.kv.delete = mock_delete
    mock.kv.list = mock_list
    mock._storage = _storage

    mock.close = AsyncMock()

    return mock


@pytest.fixture
def store(mock_agentfs_with_data):
    from quizz.storage.quiz_store import QuizStore

    return QuizStore(mock_agentfs_with_data)


# =============================================================================
# FIXTURES DO LLM
# =============================================================================


@pytest.fixture
def mock_llm():
    """Mock do QuizLLMClient (generate retorna texto)."""
    mock = MagicMock()
    mock.generate = AsyncMock(return_value="{}")
    return mock


@pytest.fixture
def make_grading_response():
    """Factory de respostas JSON do avaliador."""

    def _make(score, is_correct=True, feedback="Covers the main points.", matched_points=None):
        return json.dumps(
            {
                "is_correct": is_correct,
                "score": score,
                "feedback": feedback,
                "matched_points": matched_points or [],
            }
        )

    return _make


@pytest.fixture
def mock_llm_factory(mock_llm):
    """LLMClientFactory que devolve o mesmo mock para todas as funcoes."""
    factory = MagicMock()
    factory.create_generation_client.return_value = mock_llm
    factory.create_analysis_client.return_value = mock_llm
    factory.create_grading_client.return_value = mock_llm
    factory.create_tutor_client.return_value = mock_llm
    return factory


# =============================================================================
# FIXTURES DO QUIZ
# =============================================================================


@pytest.fixture
def mc_question():
    from quizz.models.schemas import MultipleChoiceQuestion

    return MultipleChoiceQuestion(
        question="Which hook runs side effects after render?",
        options=["useState", "useEffect", "useMemo", "useRef"],
        correct_index=1,
        explanation="useEffect runs after the component renders.",
        source="in the discussion about hooks",
    )


@pytest.fixture
def ms_question():
    from quizz.models.schemas import MultiSelectQuestion

    return MultiSelectQuestion(
        question="Which of these are Python built-in collection types?",
        options=["list", "vector", "dict", "set", "array_list"],
        correct_indices=[0, 2, 3],
        explanation="list, dict and set are built in.",
    )


@pytest.fixture
def open_question():
    from quizz.models.schemas import OpenEndedQuestion

    return OpenEndedQuestion(
        question="Why use a lock per session instead of a global lock?",
        expected_answer="So different sessions can proceed in parallel.",
        key_points=["parallelism across sessions", "serialization within a session"],
        explanation="Per-session locks only serialize writers of the same session.",
    )


@pytest.fixture
def code_question():
    from quizz.models.schemas import CodeWritingQuestion

    return CodeWritingQuestion(
        question="Write a function that returns the square of a number.",
        language="python",
        starter_code="def square(x):\n    pass",
        expected_solution="def square(x):\n    return x * x",
        key_points=["returns x * x"],
        explanation="Multiplying x by itself gives the square.",
    )


@pytest.fixture
def make_session():
    """Factory de QuizSession (ainda nao persistida)."""
    from quizz.models.enums import QuizDifficulty, QuizQuestionType
    from quizz.models.schemas import QuizConfig
    from quizz.models.state import QuizSession

    def _make(questions, difficulty=QuizDifficulty.MEDIUM, created_at=None, focus=None):
        types = list(dict.fromkeys(QuizQuestionType(q.type) for q in questions))
        return QuizSession(
            id=str(uuid.uuid4()),
            created_at=created_at or datetime.now(timezone.utc),
            config=QuizConfig(
                question_count=len(questions),
                question_types=types,
                difficulty=difficulty,
                focus=focus,
            ),
            content_hash="0123456789abcdef",
            content_preview="Sample content",
            questions=tuple(questions),
        )

    return _make


@pytest.fixture
def session_engine(store, mock_llm):
    from quizz.engine.grading_engine import LLMGradingEngine
    from quizz.engine.session_engine import QuizSessionEngine

    return QuizSessionEngine(store, LLMGradingEngine(mock_llm, timeout=5))


@pytest.fixture
def app_state(settings, mock_agentfs_with_data, mock_llm_factory):
    """AppState montado sobre AgentFS e LLM mockados."""
    from app_state import AppState

    return AppState(settings, mock_agentfs_with_data, llm_factory=mock_llm_factory)


@pytest.fixture
def client(app_state):
    """Cliente de teste FastAPI com AppState injetado."""
    from fastapi.testclient import TestClient
    from server import create_app

    with TestClient(create_app(app_state)) as test_client:
        yield test_client


@pytest.fixture
def sample_content():
    return (
        "In this session we refactored the quiz engine to use a per-session asyncio.Lock. "
        "Deterministic question types are graded under the lock, while LLM grading releases "
        "it and re-validates the slot afterwards.\n\n```python\nasync with guard.lock:\n    ...\n```"
    )
