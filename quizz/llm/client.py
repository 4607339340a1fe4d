"""LLM Client - Chamada de texto unica sobre o Claude Agent SDK."""

import json
import logging
import re
from typing import Any

from claude_agent_sdk import AssistantMessage, ClaudeAgentOptions, ClaudeSDKError, TextBlock, query

logger = logging.getLogger(__name__)

_FENCED_JSON = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.DOTALL)
_BARE_JSON = re.compile(r"\{.*\}", re.DOTALL)


class LLMError(Exception):
    """Falha do colaborador LLM (SDK indisponivel ou resposta vazia)."""


class QuizLLMClient:
    """Cliente minimo: prompt de texto -> resposta de texto.

    Sem ferramentas e com um unico turno; cada chamada e independente.

    Example:
        >>> client = QuizLLMClient(model="claude-sonnet-4-5", system_prompt="...")
        >>> text = await client.generate("Evaluate this answer...")
    """

    def __init__(self, model: str, system_prompt: str, max_turns: int = 1):
        self.model = model
        self.system_prompt = system_prompt
        self.max_turns = max_turns

    def _options(self, system_prompt: str | None = None) -> ClaudeAgentOptions:
        return ClaudeAgentOptions(
            model=self.model,
            system_prompt=system_prompt or self.system_prompt,
            allowed_tools=[],
            max_turns=self.max_turns,
        )

    async def generate(self, prompt: str, system_prompt: str | None = None) -> str:
        """Envia o prompt e concatena os blocos de texto da resposta.

        Args:
            prompt: Prompt do usuario
            system_prompt: Sobrescreve o system prompt padrao (ex: tutor)

        Returns:
            Texto completo da resposta

        Raises:
            LLMError: SDK falhou ou nao houve texto na resposta
        """
        options = self._options(system_prompt)
        text = ""

        try:
            async for message in query(prompt=prompt, options=options):
                if isinstance(message, AssistantMessage):
                    for block in message.content:
                        if isinstance(block, TextBlock):
                            text += block.text
        except ClaudeSDKError as e:
            logger.error(f"Falha no Claude Agent SDK ({self.model}): {e}")
            raise LLMError(str(e)) from e

        if not text.strip():
            raise LLMError(f"No text response from {self.model}")

        logger.debug(f"Resposta LLM ({self.model}): {len(text)} caracteres")
        return text


def extract_json(text: str) -> dict[str, Any]:
    """Extrai o objeto JSON de uma resposta (cercado por ``` ou solto no texto).

    Raises:
        ValueError: Nenhum objeto JSON valido encontrado
    """
    fenced = _FENCED_JSON.search(text)
    candidates = [fenced.group(1)] if fenced else []
    bare = _BARE_JSON.search(text)
    if bare:
        candidates.append(bare.group(0))

    for candidate in candidates:
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(data, dict):
            return data

    raise ValueError("No valid JSON object in response")
