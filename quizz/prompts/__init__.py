"""Quiz Prompts - Templates de prompts."""

from .templates import (
    ANALYSIS_SYSTEM_PROMPT,
    CODE_COMPARISON_HINT,
    CODE_CONTEXT_HINT,
    CODE_GRADING_PROMPT,
    CODE_WRITING_INSTRUCTIONS,
    CONTENT_ANALYSIS_PROMPT,
    GRADING_SYSTEM_PROMPT,
    MULTI_SELECT_INSTRUCTIONS,
    MULTIPLE_CHOICE_INSTRUCTIONS,
    OPEN_ENDED_GRADING_PROMPT,
    OPEN_ENDED_INSTRUCTIONS,
    QUIZ_GENERATION_PROMPT,
    QUIZ_SYSTEM_PROMPT,
    TUTOR_PREVIOUS_QUESTION,
    TUTOR_SYSTEM_PROMPT,
)

__all__ = [
    "ANALYSIS_SYSTEM_PROMPT",
    "CODE_COMPARISON_HINT",
    "CODE_CONTEXT_HINT",
    "CODE_GRADING_PROMPT",
    "CODE_WRITING_INSTRUCTIONS",
    "CONTENT_ANALYSIS_PROMPT",
    "GRADING_SYSTEM_PROMPT",
    "MULTI_SELECT_INSTRUCTIONS",
    "MULTIPLE_CHOICE_INSTRUCTIONS",
    "OPEN_ENDED_GRADING_PROMPT",
    "OPEN_ENDED_INSTRUCTIONS",
    "QUIZ_GENERATION_PROMPT",
    "QUIZ_SYSTEM_PROMPT",
    "TUTOR_PREVIOUS_QUESTION",
    "TUTOR_SYSTEM_PROMPT",
]
