# =============================================================================
# TESTES - Quiz Store Module
# =============================================================================
# Testes unitarios para persistencia de sessoes no AgentFS
# =============================================================================

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest


class TestQuizStoreKeys:
    """Testes para geracao de chaves."""

    def test_session_key_format(self, mock_agentfs):
        """Verifica formato da chave da sessao."""
        from quizz.storage.quiz_store import QuizStore

        store = QuizStore(mock_agentfs)

        assert store._session_key("abc-123") == "quiz:abc-123:session"


class TestQuizStoreCreate:
    """Testes para criar sessao."""

    @pytest.mark.asyncio
    async def test_create_writes_session_dict(self, mock_agentfs, make_session, mc_question):
        from quizz.storage.quiz_store import QuizStore

        store = QuizStore(mock_agentfs)
        session = make_session([mc_question])

        await store.create(session)

        mock_agentfs.kv.set.assert_called_once()
        key, data = mock_agentfs.kv.set.call_args[0]
        assert key == f"quiz:{session.id}:session"
        assert data["id"] == session.id
        assert data["questions"][0]["type"] == "multiple-choice"
        assert data["answers"] == []
        assert data["completed_at"] is None

    @pytest.mark.asyncio
    async def test_write_failure_raises_store_failure(
        self, mock_agentfs, make_session, mc_question
    ):
        from quizz.errors import StoreFailure
        from quizz.storage.quiz_store import QuizStore

        mock_agentfs.kv.set = AsyncMock(side_effect=RuntimeError("disk full"))
        store = QuizStore(mock_agentfs)

        with pytest.raises(StoreFailure):
            await store.create(make_session([mc_question]))


class TestQuizStoreGet:
    """Testes para carregar sessao."""

    @pytest.mark.asyncio
    async def test_get_not_found(self, mock_agentfs):
        """Verifica retorno None quando nao encontrada."""
        from quizz.storage.quiz_store import QuizStore

        store = QuizStore(mock_agentfs)

        assert await store.get("nonexistent") is None

    @pytest.mark.asyncio
    async def test_get_round_trip(self, store, make_session, mc_question, code_question):
        """Sessao persistida volta com questoes tipadas."""
        from quizz.models.schemas import CodeWritingQuestion

        session = make_session([mc_question, code_question], focus="hooks")
        await store.create(session)

        loaded = await store.get(session.id)

        assert loaded.id == session.id
        assert loaded.questions == session.questions
        assert isinstance(loaded.questions[1], CodeWritingQuestion)
        assert loaded.config.focus == "hooks"
        assert loaded.created_at == session.created_at

    @pytest.mark.asyncio
    async def test_corrupt_data_raises_store_failure(self, mock_agentfs):
        from quizz.errors import StoreFailure
        from quizz.storage.quiz_store import QuizStore

        mock_agentfs.kv.get = AsyncMock(return_value={"id": "x"})
        store = QuizStore(mock_agentfs)

        with pytest.raises(StoreFailure, match="corrupt"):
            await store.get("x")

    @pytest.mark.asyncio
    async def test_read_failure_raises_store_failure(self, mock_agentfs):
        from quizz.errors import StoreFailure
        from quizz.storage.quiz_store import QuizStore

        mock_agentfs.kv.get = AsyncMock(side_effect=OSError("locked"))
        store = QuizStore(mock_agentfs)

        with pytest.raises(StoreFailure):
            await store.get("x")


class TestQuizStoreUpdate:
    """Testes para atualizacao parcial."""

    @pytest.mark.asyncio
    async def test_update_missing_session(self, store):
        assert await store.update("missing", {"answers": []}) is None

    @pytest.mark.asyncio
    async def test_update_rejects_immutable_fields(self, store, make_session, mc_question):
        """Questoes e config nao podem ser alteradas."""
        session = await store.create(make_session([mc_question]))

        with pytest.raises(ValueError, match="questions"):
            await store.update(session.id, {"questions": []})

    @pytest.mark.asyncio
    async def test_update_completion(self, store, make_session, mc_question):
        from quizz.models.schemas import QuizAnswer, QuizScore

        session = await store.create(make_session([mc_question]))
        now = datetime.now(timezone.utc)
        answer = QuizAnswer(
            question_index=0, user_answer=1, is_correct=True, score=100, answered_at=now
        )

        updated = await store.update(
            session.id,
            {
                "answers": [answer],
                "completed_at": now,
                "score": QuizScore(correct=1, total=1, percentage=100),
            },
            expected_answer_count=0,
        )

        assert updated.is_complete
        loaded = await store.get(session.id)
        assert loaded.score.percentage == 100
        assert loaded.completed_at == now

    @pytest.mark.asyncio
    async def test_update_rejects_score_without_completion(
        self, store, make_session, mc_question
    ):
        """score e completed_at andam juntos."""
        from quizz.models.schemas import QuizScore

        session = await store.create(make_session([mc_question]))

        with pytest.raises(ValueError):
            await store.update(
                session.id, {"score": QuizScore(correct=0, total=1, percentage=0)}
            )

    @pytest.mark.asyncio
    async def test_update_conflict(self, store, make_session, mc_question):
        from quizz.errors import AnswerSlotConflictError

        session = await store.create(make_session([mc_question]))

        with pytest.raises(AnswerSlotConflictError) as exc:
            await store.update(session.id, {"answers": []}, expected_answer_count=3)

        assert exc.value.details["expected_index"] == 3
        assert exc.value.details["actual_index"] == 0


class TestQuizStoreDelete:
    @pytest.mark.asyncio
    async def test_delete(self, store, make_session, mc_question):
        session = await store.create(make_session([mc_question]))

        assert await store.delete(session.id) is True
        assert await store.get(session.id) is None
        assert await store.delete(session.id) is False


class TestQuizStoreList:
    """Testes para listagem de sessoes."""

    @pytest.mark.asyncio
    async def test_list_since_newest_first(self, store, make_session, mc_question):
        now = datetime.now(timezone.utc)
        old = await store.create(make_session([mc_question], created_at=now - timedelta(days=40)))
        mid = await store.create(make_session([mc_question], created_at=now - timedelta(days=5)))
        new = await store.create(make_session([mc_question], created_at=now - timedelta(hours=1)))

        sessions = await store.list(now - timedelta(days=30))

        assert [s.id for s in sessions] == [new.id, mid.id]
        assert old.id not in {s.id for s in sessions}

    @pytest.mark.asyncio
    async def test_list_limit(self, store, make_session, mc_question):
        now = datetime.now(timezone.utc)
        for i in range(5):
            await store.create(make_session([mc_question], created_at=now - timedelta(hours=i)))

        assert len(await store.list(now - timedelta(days=1), limit=2)) == 2

    @pytest.mark.asyncio
    async def test_list_recent_ignores_date(self, store, make_session, mc_question):
        now = datetime.now(timezone.utc)
        old = await store.create(make_session([mc_question], created_at=now - timedelta(days=400)))

        sessions = await store.list_recent(limit=10)

        assert [s.id for s in sessions] == [old.id]

    @pytest.mark.asyncio
    async def test_list_uses_inline_values(self, mock_agentfs, make_session, mc_question):
        """Entradas do kv.list com `value` nao geram leituras extras."""
        from quizz.storage.quiz_store import QuizStore

        session = make_session([mc_question])
        mock_agentfs.kv.list = AsyncMock(
            return_value=[
                {"key": f"quiz:{session.id}:session", "value": session.to_dict()},
                {"key": "quiz:other:meta", "value": {}},
            ]
        )
        store = QuizStore(mock_agentfs)

        sessions = await store.list_recent()

        assert [s.id for s in sessions] == [session.id]
        mock_agentfs.kv.get.assert_not_called()
