"""LLM Client Factory - Criacao dos clientes LLM do quiz."""

from ..prompts import ANALYSIS_SYSTEM_PROMPT, GRADING_SYSTEM_PROMPT, QUIZ_SYSTEM_PROMPT
from .client import QuizLLMClient

TUTOR_BASE_PROMPT = "You are a helpful tutor discussing a quiz question with a student."


class LLMClientFactory:
    """Factory para criar QuizLLMClient com diferentes configuracoes.

    Centraliza a escolha de modelo e system prompt por funcao:
    - Geracao e analise: modelo de qualidade (QUIZ_MODEL)
    - Avaliacao e tutor: modelo rapido (QUIZ_GRADING_MODEL)

    Example:
        >>> factory = LLMClientFactory(settings)
        >>> grader = factory.create_grading_client()
        >>> text = await grader.generate("Evaluate this answer...")
    """

    def __init__(self, settings):
        self.settings = settings

    @staticmethod
    def create_client(model: str, system_prompt: str, max_turns: int = 1) -> QuizLLMClient:
        """Cria um cliente generico.

        Args:
            model: Modelo Claude (ex: claude-opus-4-5)
            system_prompt: Prompt de sistema

        Returns:
            QuizLLMClient configurado
        """
        return QuizLLMClient(model=model, system_prompt=system_prompt, max_turns=max_turns)

    def create_generation_client(self) -> QuizLLMClient:
        return self.create_client(self.settings.quiz_model, QUIZ_SYSTEM_PROMPT)

    def create_analysis_client(self) -> QuizLLMClient:
        return self.create_client(self.settings.quiz_model, ANALYSIS_SYSTEM_PROMPT)

    def create_grading_client(self) -> QuizLLMClient:
        return self.create_client(self.settings.quiz_grading_model, GRADING_SYSTEM_PROMPT)

    def create_tutor_client(self) -> QuizLLMClient:
        """Tutor usa system prompt por conversa; o base e so um default."""
        return self.create_client(self.settings.quiz_grading_model, TUTOR_BASE_PROMPT)
