"""Formatacao de questoes e respostas para exibicao."""

from typing import assert_never

from ..models.enums import QuizQuestionType
from ..models.schemas import (
    CodeWritingQuestion,
    DisplayQuestion,
    MultipleChoiceQuestion,
    MultiSelectQuestion,
    OpenEndedQuestion,
    QuestionSummary,
    QuizAnswer,
    QuizQuestion,
)
from .scoring_engine import option_letter


def lettered_options(options: list[str]) -> list[str]:
    return [f"{option_letter(i)}) {text}" for i, text in enumerate(options)]


def format_question_for_display(
    question: QuizQuestion, question_number: int, total_questions: int
) -> DisplayQuestion:
    """Formata a questao sem nenhum campo de gabarito.

    Args:
        question: Questao a exibir
        question_number: Numero 1-based
        total_questions: Total da sessao
    """
    base = {
        "question_number": question_number,
        "total_questions": total_questions,
        "type": QuizQuestionType(question.type),
        "question": question.question,
        "source": question.source,
    }

    match question:
        case MultipleChoiceQuestion():
            return DisplayQuestion(
                **base,
                options=lettered_options(question.options),
                code_context=question.code_context,
                hint="Answer with the letter (A, B, C, or D) or the option number (0-3)",
            )
        case MultiSelectQuestion():
            return DisplayQuestion(
                **base,
                options=lettered_options(question.options),
                code_context=question.code_context,
                hint="Select all correct answers (e.g., 'A, C, D' or '0, 2, 3')",
            )
        case OpenEndedQuestion():
            return DisplayQuestion(
                **base,
                code_context=question.code_context,
                hint="Provide your answer as free text. It will be evaluated against key points.",
            )
        case CodeWritingQuestion():
            return DisplayQuestion(
                **base,
                language=question.language,
                starter_code=question.starter_code,
                hint=f"Write {question.language} code to solve the problem.",
            )
        case _:
            assert_never(question)


def correct_answer_text(question: QuizQuestion) -> str:
    """Gabarito legivel: alternativa(s) com letra ou resposta modelo."""
    match question:
        case MultipleChoiceQuestion():
            index = question.correct_index
            return f"{option_letter(index)}) {question.options[index]}"
        case MultiSelectQuestion():
            return ", ".join(
                f"{option_letter(i)}) {question.options[i]}" for i in question.correct_indices
            )
        case OpenEndedQuestion():
            return question.expected_answer
        case CodeWritingQuestion():
            return question.expected_solution
        case _:
            assert_never(question)


def format_user_answer(question: QuizQuestion, answer: QuizAnswer) -> str:
    user_answer = answer.user_answer
    match question:
        case MultipleChoiceQuestion() if isinstance(user_answer, int):
            return f"{option_letter(user_answer)}) {question.options[user_answer]}"
        case MultiSelectQuestion() if isinstance(user_answer, list):
            return ", ".join(
                f"{option_letter(i)}) {question.options[i]}"
                for i in user_answer
                if 0 <= i < len(question.options)
            )
        case _:
            return str(user_answer)


def short_user_answer(answer: QuizAnswer) -> str:
    """Resposta curta (so letras) usada no contexto do tutor."""
    user_answer = answer.user_answer
    if isinstance(user_answer, int):
        return f"Option {option_letter(user_answer)}"
    if isinstance(user_answer, list):
        return ", ".join(option_letter(i) for i in user_answer)
    return user_answer


def build_summary(
    questions: tuple[QuizQuestion, ...], answers: list[QuizAnswer]
) -> list[QuestionSummary]:
    """Resumo por questao do resultado final."""
    return [
        QuestionSummary(
            question=question.question,
            correct=answer.is_correct,
            your_answer=format_user_answer(question, answer),
        )
        for question, answer in zip(questions, answers, strict=True)
    ]
