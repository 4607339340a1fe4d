"""Quiz Store - Abstracao sobre AgentFS para persistencia de sessoes."""

from __future__ import annotations

import dataclasses
import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from agentfs_sdk import AgentFS

from ..errors import AnswerSlotConflictError, StoreFailure
from ..models.state import QuizSession

logger = logging.getLogger(__name__)


class QuizStore:
    """Abstracao sobre o KV store do AgentFS para sessoes de quiz.

    O AgentFS e aberto uma unica vez pelo processo (ver `AppState`) e
    injetado aqui; o store nao gerencia o ciclo de vida dele.

    Estrutura de chaves:
        - quiz:{session_id}:session -> Sessao completa (QuizSession.to_dict)

    Example:
        >>> store = QuizStore(agentfs)
        >>> await store.create(session)
        >>> loaded = await store.get(session.id)
    """

    KEY_PREFIX = "quiz"
    SESSION_SUFFIX = "session"
    UPDATABLE_FIELDS = frozenset({"answers", "completed_at", "score"})

    def __init__(self, agentfs: AgentFS):
        """Inicializa store com instancia do AgentFS.

        Args:
            agentfs: Instancia aberta do AgentFS
        """
        self.agentfs = agentfs

    def _session_key(self, session_id: str) -> str:
        """Gera chave para a sessao."""
        return f"{self.KEY_PREFIX}:{session_id}:{self.SESSION_SUFFIX}"

    async def _read(self, key: str) -> Any:
        try:
            return await self.agentfs.kv.get(key)
        except Exception as e:
            logger.error(f"Falha lendo {key}: {e}")
            raise StoreFailure(f"Failed to read {key}") from e

    async def _write(self, key: str, data: dict[str, Any]) -> None:
        try:
            await self.agentfs.kv.set(key, data)
        except Exception as e:
            logger.error(f"Falha gravando {key}: {e}")
            raise StoreFailure(f"Failed to write {key}") from e

    def _decode(self, data: Any) -> QuizSession:
        try:
            return QuizSession.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise StoreFailure("Stored session is corrupt", details={"error": str(e)}) from e

    async def get(self, session_id: str) -> QuizSession | None:
        """Carrega sessao do KV store.

        Args:
            session_id: ID da sessao

        Returns:
            QuizSession se encontrada, None caso contrario
        """
        data = await self._read(self._session_key(session_id))
        if not data:
            logger.debug(f"Sessao nao encontrada: {session_id}")
            return None
        return self._decode(data)

    async def create(self, session: QuizSession) -> QuizSession:
        """Persiste uma sessao nova."""
        await self._write(self._session_key(session.id), session.to_dict())
        logger.debug(f"Sessao criada: {session.id}")
        return session

    async def update(
        self,
        session_id: str,
        changes: dict[str, Any],
        expected_answer_count: int | None = None,
    ) -> QuizSession | None:
        """Aplica alteracoes parciais (answers, completed_at, score).

        Args:
            session_id: ID da sessao
            changes: Campos a substituir
            expected_answer_count: Se informado, a gravacao so acontece se o
                numero de respostas persistidas ainda for este

        Returns:
            Sessao atualizada, ou None se nao existir

        Raises:
            AnswerSlotConflictError: Outra escrita moveu a sessao
            StoreFailure: Falha do AgentFS
        """
        unknown = set(changes) - self.UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields cannot be updated: {sorted(unknown)}")

        current = await self.get(session_id)
        if current is None:
            return None

        if expected_answer_count is not None and current.next_index != expected_answer_count:
            logger.warning(
                f"Conflito de escrita em {session_id}: esperado {expected_answer_count}, "
                f"encontrado {current.next_index}"
            )
            raise AnswerSlotConflictError(session_id, expected_answer_count, current.next_index)

        updated = dataclasses.replace(current, **changes)
        await self._write(self._session_key(session_id), updated.to_dict())
        logger.debug(f"Sessao atualizada: {session_id} ({sorted(changes)})")
        return updated

    async def delete(self, session_id: str) -> bool:
        """Remove a sessao; retorna False se ela nao existia."""
        key = self._session_key(session_id)
        if await self._read(key) is None:
            return False
        try:
            await self.agentfs.kv.delete(key)
        except Exception as e:
            logger.error(f"Falha removendo {key}: {e}")
            raise StoreFailure(f"Failed to delete {key}") from e
        logger.info(f"Sessao removida: {session_id}")
        return True

    async def _all_sessions(self) -> list[QuizSession]:
        prefix = f"{self.KEY_PREFIX}:"
        try:
            entries = await self.agentfs.kv.list(prefix=prefix)
        except Exception as e:
            logger.error(f"Falha listando {prefix}: {e}")
            raise StoreFailure("Failed to list sessions") from e

        sessions = []
        for entry in entries:
            key = entry.get("key", "") if isinstance(entry, dict) else str(entry)
            if not key.endswith(f":{self.SESSION_SUFFIX}"):
                continue
            data = entry.get("value") if isinstance(entry, dict) else None
            if data is None:
                data = await self._read(key)
            if data:
                sessions.append(self._decode(data))
        return sessions

    async def list(self, since: datetime, limit: int = 5000) -> list[QuizSession]:
        """Sessoes criadas a partir de `since`, mais recentes primeiro.

        Args:
            since: Data de corte (inclusive)
            limit: Maximo de sessoes retornadas
        """
        sessions = [s for s in await self._all_sessions() if s.created_at >= since]
        sessions.sort(key=lambda s: s.created_at, reverse=True)
        return sessions[:limit]

    async def list_recent(self, limit: int = 20) -> list[QuizSession]:
        """Sessoes mais recentes, independente da data."""
        sessions = await self._all_sessions()
        sessions.sort(key=lambda s: s.created_at, reverse=True)
        return sessions[:limit]
