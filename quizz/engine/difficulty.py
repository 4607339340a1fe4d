"""Difficulty Policy - Limiares de aprovacao e orientacoes por dificuldade."""

from ..models.enums import QuizDifficulty


class DifficultyPolicy:
    """Tabela estatica dificuldade -> limiar / orientacao para o LLM.

    O limiar (percentual) decide aprovacao tanto por questao avaliada pelo
    LLM quanto no resultado final do quiz. Os textos de orientacao so
    alimentam prompts; nao participam de nenhum calculo.

    Limiares:
        - EASY: 50%
        - MEDIUM: 60%
        - HARD: 75%
        - EXPERT: 85%

    Example:
        >>> DifficultyPolicy.threshold(QuizDifficulty.HARD)
        75
    """

    THRESHOLDS = {
        QuizDifficulty.EASY: 50,
        QuizDifficulty.MEDIUM: 60,
        QuizDifficulty.HARD: 75,
        QuizDifficulty.EXPERT: 85,
    }

    STRICTNESS = {
        QuizDifficulty.EASY: (
            "Be generous: accept paraphrasing; a partial answer that covers the main point "
            "counts as correct.\nA response showing basic understanding should pass."
        ),
        QuizDifficulty.MEDIUM: (
            "Be fair: the core concepts must be present, but different phrasing is fine.\n"
            "A response covering most key points should pass."
        ),
        QuizDifficulty.HARD: (
            "Be precise: terminology must be accurate and connections explicit.\n"
            "A response needs strong coverage of the key points with clear reasoning."
        ),
        QuizDifficulty.EXPERT: (
            "Be rigorous: expect expert-level depth, nuance and critical thinking.\n"
            "Only thorough, insightful responses demonstrating mastery should pass."
        ),
    }

    INSTRUCTIONS = {
        QuizDifficulty.EASY: """Difficulty: EASY
- Test basic recall of the main ideas and key concepts
- Questions should be answerable after a quick read
- Multiple-choice distractors should be clearly wrong or from unrelated topics
- Open-ended: expect 1-2 sentence answers covering the obvious points
- Focus on: main concepts, key takeaways, basic terminology""",
        QuizDifficulty.MEDIUM: """Difficulty: MEDIUM
- Test comprehension of methodology, patterns and core concepts
- Questions require understanding how the content is structured
- Multiple-choice distractors should be plausible but incomplete or slightly off
- Open-ended: expect a short paragraph explaining "how" and "why"
- Focus on: implementation details, patterns used, stated reasons""",
        QuizDifficulty.HARD: """Difficulty: HARD
- Test analysis of relationships, implications and trade-offs
- Questions require connecting ideas from different parts of the content
- Multiple-choice distractors should hinge on subtle distinctions and partial truths
- Open-ended: expect a synthesis of several concepts
- Focus on: unstated implications, trade-offs, when to use what""",
        QuizDifficulty.EXPERT: """Difficulty: EXPERT
- Test critical evaluation, edge cases and alternative approaches
- Questions should challenge someone who has read the content several times
- Multiple-choice distractors should reflect common expert misconceptions
- Open-ended: expect critique, comparison or proposed extensions
- Focus on: limitations, edge cases, what was not covered, alternatives""",
    }

    @classmethod
    def threshold(cls, difficulty: QuizDifficulty) -> int:
        """Retorna o percentual minimo para aprovacao."""
        return cls.THRESHOLDS[QuizDifficulty(difficulty)]

    @classmethod
    def strictness_guidance(cls, difficulty: QuizDifficulty) -> str:
        """Texto de rigor usado no prompt de avaliacao."""
        return cls.STRICTNESS[QuizDifficulty(difficulty)]

    @classmethod
    def instruction_guidance(cls, difficulty: QuizDifficulty) -> str:
        """Texto de instrucao usado no prompt de geracao."""
        return cls.INSTRUCTIONS[QuizDifficulty(difficulty)]

    @classmethod
    def passed(cls, percentage: float, difficulty: QuizDifficulty) -> bool:
        return percentage >= cls.threshold(difficulty)
