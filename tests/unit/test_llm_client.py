# =============================================================================
# TESTES - LLM Client
# =============================================================================
# Cliente sobre o Claude Agent SDK (query mockado) e extracao de JSON
# =============================================================================

from unittest.mock import patch

import pytest


def _fake_query(*messages, error=None):
    async def query(prompt, options):
        for message in messages:
            yield message
        if error is not None:
            raise error

    return query


def _assistant(*texts):
    from claude_agent_sdk import AssistantMessage, TextBlock

    return AssistantMessage(content=[TextBlock(text=t) for t in texts], model="claude-test")


class TestExtractJson:
    """Testes para extracao do objeto JSON da resposta."""

    def test_plain_object(self):
        from quizz.llm import extract_json

        assert extract_json('{"score": 80}') == {"score": 80}

    def test_fenced_block_wins(self):
        from quizz.llm import extract_json

        text = 'Note {not json}\n```json\n{"score": 1}\n```'

        assert extract_json(text) == {"score": 1}

    def test_object_inside_prose(self):
        from quizz.llm import extract_json

        assert extract_json('Result: {"a": [1, 2]} thanks') == {"a": [1, 2]}

    @pytest.mark.parametrize("text", ["", "no json", "[1, 2]", "{broken"])
    def test_invalid(self, text):
        from quizz.llm import extract_json

        with pytest.raises(ValueError):
            extract_json(text)


class TestQuizLLMClient:
    """Testes para o cliente LLM."""

    def test_options_without_tools(self):
        from quizz.llm import QuizLLMClient

        client = QuizLLMClient(model="claude-test", system_prompt="base")
        options = client._options("override")

        assert options.model == "claude-test"
        assert options.system_prompt == "override"
        assert options.allowed_tools == []
        assert options.max_turns == 1
        assert client._options().system_prompt == "base"

    @pytest.mark.asyncio
    async def test_generate_concatenates_text(self):
        from quizz.llm import QuizLLMClient

        fake = _fake_query(_assistant('{"score":', " 90}"), _assistant(""))
        with patch("quizz.llm.client.query", fake):
            text = await QuizLLMClient("claude-test", "base").generate("prompt")

        assert text == '{"score": 90}'

    @pytest.mark.asyncio
    async def test_empty_response_raises(self):
        from quizz.llm import LLMError, QuizLLMClient

        with patch("quizz.llm.client.query", _fake_query()):
            with pytest.raises(LLMError, match="No text response"):
                await QuizLLMClient("claude-test", "base").generate("prompt")

    @pytest.mark.asyncio
    async def test_sdk_error_wrapped(self):
        from claude_agent_sdk import ClaudeSDKError

        from quizz.llm import LLMError, QuizLLMClient

        fake = _fake_query(error=ClaudeSDKError("cli not found"))
        with patch("quizz.llm.client.query", fake):
            with pytest.raises(LLMError, match="cli not found"):
                await QuizLLMClient("claude-test", "base").generate("prompt")


class TestLLMClientFactory:
    def test_models_per_role(self, settings):
        from quizz.llm import LLMClientFactory

        factory = LLMClientFactory(settings)

        assert factory.create_generation_client().model == settings.quiz_model
        assert factory.create_analysis_client().model == settings.quiz_model
        assert factory.create_grading_client().model == settings.quiz_grading_model
        assert factory.create_tutor_client().model == settings.quiz_grading_model
