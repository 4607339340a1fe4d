"""Quiz Stats - Agregacao do historico de sessoes."""

from datetime import datetime, timedelta

from ..models.enums import QuizDifficulty
from ..models.schemas import DifficultyStats, QuizStats, RecentSession
from ..models.state import QuizSession, utc_now

RECENT_SESSIONS_LIMIT = 10
STATS_SESSION_LIMIT = 5000


def _average(values: list[int]) -> float:
    return sum(values) / len(values) if values else 0.0


def compute_stats(sessions: list[QuizSession], difficulty: QuizDifficulty | None = None) -> QuizStats:
    """Calcula estatisticas a partir das sessoes (mais recentes primeiro).

    `total_quizzes` conta todas as sessoes do periodo; as demais metricas
    consideram apenas as sessoes completas.
    """
    if difficulty is not None:
        sessions = [s for s in sessions if s.config.difficulty == difficulty]

    completed = [s for s in sessions if s.completed_at is not None and s.score is not None]

    by_difficulty = {}
    for level in QuizDifficulty:
        scores = [s.score.percentage for s in completed if s.config.difficulty == level]
        by_difficulty[level] = DifficultyStats(attempts=len(scores), average_score=_average(scores))

    return QuizStats(
        total_quizzes=len(sessions),
        total_questions=sum(len(s.questions) for s in completed),
        correct_answers=sum(s.score.correct for s in completed),
        average_score=round(_average([s.score.percentage for s in completed])),
        by_difficulty=by_difficulty,
        recent_sessions=[
            RecentSession(
                id=s.id,
                date=s.completed_at,
                score=s.score.percentage,
                difficulty=s.config.difficulty,
            )
            for s in completed[:RECENT_SESSIONS_LIMIT]
        ],
    )


async def quiz_stats(
    store,
    days: int = 30,
    difficulty: QuizDifficulty | None = None,
    now: datetime | None = None,
) -> QuizStats:
    """Estatisticas dos ultimos `days` dias."""
    since = (now or utc_now()) - timedelta(days=days)
    sessions = await store.list(since, limit=STATS_SESSION_LIMIT)
    return compute_stats(sessions, difficulty)
