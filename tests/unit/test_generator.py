# =============================================================================
# TESTES - Quiz Generator e Content Analyzer
# =============================================================================
# Geracao de questoes e analise de conteudo com LLM mockado
# =============================================================================

import asyncio
import json

import pytest


def _config(**overrides):
    from quizz.models.schemas import QuizConfig

    values = {
        "question_count": 2,
        "question_types": ["multiple-choice"],
        "difficulty": "medium",
    }
    values.update(overrides)
    return QuizConfig(**values)


def _questions_json(*questions):
    return "```json\n" + json.dumps({"questions": list(questions)}) + "\n```"


MC_PAYLOAD = {
    "type": "multiple-choice",
    "question": "What does asyncio.Lock serialize?",
    "options": ["Threads", "Coroutines", "Processes", "Nothing"],
    "correct_index": 1,
    "explanation": "asyncio.Lock coordinates coroutines on one loop.",
}

CODE_PAYLOAD = {
    "type": "code-writing",
    "question": "Write a coroutine that sleeps for one second.",
    "language": "python",
    "expected_solution": "async def nap():\n    await asyncio.sleep(1)",
    "key_points": ["uses async def", "awaits asyncio.sleep"],
    "explanation": "Coroutines must await sleep.",
}


class TestContentHelpers:
    """Testes para hash e preview do conteudo."""

    def test_content_hash_is_16_hex(self):
        from quizz.engine.generator import content_hash

        digest = content_hash("hello")

        assert len(digest) == 16
        assert digest == "2cf24dba5fb0a30e"

    def test_preview_collapses_whitespace(self):
        from quizz.engine.generator import content_preview

        assert content_preview("a\n\n  b\tc") == "a b c"

    def test_preview_truncates(self):
        from quizz.engine.generator import content_preview

        preview = content_preview("word " * 50)

        assert len(preview) == 100
        assert preview.endswith("...")

    def test_has_code(self):
        from quizz.engine.generator import has_code

        assert has_code("use `asyncio.Lock` here")
        assert has_code("```python\nprint(1)\n```")
        assert not has_code("plain prose only")


class TestBuildPrompt:
    """Testes para o prompt de geracao."""

    def test_prompt_contents(self, mock_llm, store):
        from quizz.engine.generator import QuizGenerator

        prompt = QuizGenerator(mock_llm, store).build_prompt(
            "Some content about locks.", _config(question_count=3, focus="locks")
        )

        assert "3" in prompt
        assert "multiple-choice" in prompt
        assert "Difficulty: MEDIUM" in prompt
        assert "Focus questions specifically on: locks" in prompt
        assert "Some content about locks." in prompt
        assert "Mix the question types" not in prompt

    def test_mixed_types_and_code_hints(self, mock_llm, store):
        from quizz.engine.generator import QuizGenerator
        from quizz.prompts import CODE_CONTEXT_HINT

        generator = QuizGenerator(mock_llm, store)
        config = _config(question_types=["multiple-choice", "code-writing"])

        with_code = generator.build_prompt("Call `lock.acquire()` first.", config)
        without_code = generator.build_prompt("No code in this text.", config)

        assert "Mix the question types roughly equally." in with_code
        assert CODE_CONTEXT_HINT in with_code
        assert CODE_CONTEXT_HINT not in without_code


class TestGenerateQuestions:
    """Testes para a chamada ao gerador."""

    @pytest.mark.asyncio
    async def test_parses_mixed_questions(self, mock_llm, store):
        from quizz.engine.generator import QuizGenerator
        from quizz.models.schemas import CodeWritingQuestion, MultipleChoiceQuestion

        mock_llm.generate.return_value = _questions_json(MC_PAYLOAD, CODE_PAYLOAD)

        questions = await QuizGenerator(mock_llm, store).generate_questions(
            "content", _config(question_types=["multiple-choice", "code-writing"])
        )

        assert isinstance(questions[0], MultipleChoiceQuestion)
        assert isinstance(questions[1], CodeWritingQuestion)

    @pytest.mark.asyncio
    async def test_invalid_question_rejected(self, mock_llm, store):
        """Questao fora do schema invalida toda a geracao."""
        from quizz.engine.generator import QuizGenerator
        from quizz.errors import GenerationError

        broken = {**MC_PAYLOAD, "options": ["only", "two"]}
        mock_llm.generate.return_value = _questions_json(broken)

        with pytest.raises(GenerationError, match="invalid questions"):
            await QuizGenerator(mock_llm, store).generate_questions("content", _config())

    @pytest.mark.asyncio
    async def test_no_json_rejected(self, mock_llm, store):
        from quizz.engine.generator import QuizGenerator
        from quizz.errors import GenerationError

        mock_llm.generate.return_value = "Sorry, I cannot help with that."

        with pytest.raises(GenerationError):
            await QuizGenerator(mock_llm, store).generate_questions("content", _config())

    @pytest.mark.asyncio
    async def test_zero_questions_rejected(self, mock_llm, store):
        from quizz.engine.generator import QuizGenerator
        from quizz.errors import GenerationError

        mock_llm.generate.return_value = _questions_json()

        with pytest.raises(GenerationError, match="no questions"):
            await QuizGenerator(mock_llm, store).generate_questions("content", _config())

    @pytest.mark.asyncio
    async def test_timeout(self, mock_llm, store):
        from quizz.engine.generator import QuizGenerator
        from quizz.errors import GenerationError

        async def slow(*args, **kwargs):
            await asyncio.sleep(5)

        mock_llm.generate.side_effect = slow

        with pytest.raises(GenerationError, match="timed out"):
            await QuizGenerator(mock_llm, store, timeout=0.01).generate_questions(
                "content", _config()
            )


class TestCreateSession:
    @pytest.mark.asyncio
    async def test_session_persisted(self, mock_llm, store):
        import uuid

        from quizz.engine.generator import QuizGenerator, content_hash

        mock_llm.generate.return_value = _questions_json(MC_PAYLOAD, MC_PAYLOAD)
        content = "Locks and coroutines " * 10

        session = await QuizGenerator(mock_llm, store).create_session(content, _config())

        uuid.UUID(session.id)
        assert session.content_hash == content_hash(content)
        assert session.answers == []
        loaded = await store.get(session.id)
        assert len(loaded.questions) == 2


class TestContentAnalyzer:
    """Testes para o analisador de conteudo."""

    @pytest.mark.asyncio
    async def test_analyze(self, mock_llm):
        from quizz.engine.analyzer import ContentAnalyzer
        from quizz.models.enums import QuizDifficulty

        mock_llm.generate.return_value = json.dumps(
            {
                "topics": ["asyncio", "locks"],
                "complexity": "medium",
                "suggested_question_count": 6,
                "suggested_difficulty": "hard",
                "content_type": "code",
            }
        )

        analysis = await ContentAnalyzer(mock_llm).analyze("content")

        assert analysis.topics == ["asyncio", "locks"]
        assert analysis.suggested_difficulty == QuizDifficulty.HARD

    @pytest.mark.asyncio
    async def test_invalid_analysis(self, mock_llm):
        from quizz.engine.analyzer import ContentAnalyzer
        from quizz.errors import GenerationError

        mock_llm.generate.return_value = '{"topics": [], "complexity": "extreme"}'

        with pytest.raises(GenerationError):
            await ContentAnalyzer(mock_llm).analyze("content")
