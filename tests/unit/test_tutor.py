# =============================================================================
# TESTES - Quiz Tutor
# =============================================================================

from datetime import datetime, timezone

import pytest


@pytest.fixture
def answered_session(make_session, mc_question, ms_question, open_question):
    """Sessao com 3 questoes e as 2 primeiras respondidas."""
    from quizz.models.schemas import QuizAnswer

    session = make_session([mc_question, ms_question, open_question], focus="Python basics")
    now = datetime.now(timezone.utc)
    session.append_answer(
        QuizAnswer(question_index=0, user_answer=1, is_correct=True, score=100,
                   evaluation="Correct!", answered_at=now)
    )
    session.append_answer(
        QuizAnswer(question_index=1, user_answer=[0, 1], is_correct=False, score=0,
                   evaluation="Incorrect.", answered_at=now)
    )
    return session


class TestTutorPrompt:
    """Testes para o system prompt do tutor."""

    def test_current_question_and_history(self, answered_session, mc_question, ms_question):
        from quizz.engine.tutor import build_tutor_prompt

        prompt = build_tutor_prompt(answered_session, 1)

        assert "Quiz Topic: Python basics" in prompt
        assert "question 2" in prompt
        assert ms_question.question in prompt
        assert "Options: A) list, B) vector" in prompt
        assert "Their answer: A, B" in prompt
        assert "Result: Incorrect" in prompt
        assert "Feedback: Incorrect." in prompt
        assert "Q1: " + mc_question.question in prompt
        assert "User's answer: Option B" in prompt

    def test_never_includes_later_questions(self, answered_session, open_question):
        from quizz.engine.tutor import build_tutor_prompt

        prompt = build_tutor_prompt(answered_session, 0)

        assert open_question.question not in prompt
        assert "Previous questions context" not in prompt

    def test_conversation_history(self):
        from quizz.engine.tutor import build_conversation
        from quizz.models.schemas import ChatMessage

        text = build_conversation(
            "And why?",
            [ChatMessage(role="user", content="Explain"), ChatMessage(role="assistant", content="Sure")],
        )

        assert text == "Student: Explain\n\nTutor: Sure\n\nStudent: And why?"


class TestTutorReply:
    @pytest.mark.asyncio
    async def test_reply_uses_system_prompt(self, mock_llm, answered_session):
        from quizz.engine.tutor import QuizTutor

        mock_llm.generate.return_value = "  useEffect runs after render.  "

        reply = await QuizTutor(mock_llm).reply(answered_session, 0, "Why B?")

        assert reply == "useEffect runs after render."
        kwargs = mock_llm.generate.call_args.kwargs
        assert "The student just answered question 1" in kwargs["system_prompt"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("index", [2, 5, -1])
    async def test_unanswered_question_rejected(self, mock_llm, answered_session, index):
        """Nao ha tutor para questoes ainda nao respondidas."""
        from quizz.engine.tutor import QuizTutor
        from quizz.errors import ValidationError

        with pytest.raises(ValidationError, match="not yet answered"):
            await QuizTutor(mock_llm).reply(answered_session, index, "hint?")

        mock_llm.generate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_llm_failure(self, mock_llm, answered_session):
        from quizz.engine.tutor import QuizTutor
        from quizz.errors import GenerationError
        from quizz.llm import LLMError

        mock_llm.generate.side_effect = LLMError("down")

        with pytest.raises(GenerationError, match="Tutor unavailable"):
            await QuizTutor(mock_llm).reply(answered_session, 0, "Why?")
