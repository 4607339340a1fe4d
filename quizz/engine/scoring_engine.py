"""Quiz Scoring Engine - Avaliacao deterministica e placar agregado."""

from decimal import ROUND_HALF_UP, Decimal

from ..models.schemas import AnswerEvaluation, QuizAnswer, QuizScore


def option_letter(index: int) -> str:
    """0 -> A, 1 -> B, ..."""
    return chr(ord("A") + index)


def round_half_up(value: Decimal | float) -> int:
    """Arredonda .5 para cima: 62.5 -> 63."""
    return int(Decimal(str(value)).quantize(Decimal(0), rounding=ROUND_HALF_UP))


def percent(part: int, whole: int) -> int:
    """Percentual inteiro de part/whole com arredondamento half-up."""
    return round_half_up(Decimal(100 * part) / whole)


class QuizScoringEngine:
    """Motor de pontuacao para questoes com gabarito fechado.

    Multipla escolha nao tem credito parcial. Multi-select da credito
    parcial onde cada selecao errada cancela uma certa:

        score = round_half_up(100 * max(0, certas - erradas) / total_corretas)

    O score final de uma sessao e o percentual de questoes corretas.

    Example:
        >>> engine = QuizScoringEngine()
        >>> engine.evaluate_multi_select([0], [0, 2]).score
        50
    """

    MULTIPLE_CHOICE_SUCCESS = "Correct!"
    MULTI_SELECT_SUCCESS = "Correct! You selected all the right answers."

    def evaluate_multiple_choice(self, user_index: int, correct_index: int) -> AnswerEvaluation:
        """Avalia multipla escolha (resposta unica).

        Args:
            user_index: Indice escolhido (0-3)
            correct_index: Indice correto (0-3)

        Returns:
            AnswerEvaluation com score 100 ou 0
        """
        is_correct = user_index == correct_index
        if is_correct:
            feedback = self.MULTIPLE_CHOICE_SUCCESS
        else:
            feedback = (
                f"Incorrect. The correct answer was option {option_letter(correct_index)}."
            )

        return AnswerEvaluation(
            is_correct=is_correct,
            score=100 if is_correct else 0,
            feedback=feedback,
            matched_points=[],
        )

    def evaluate_multi_select(
        self, user_indices: list[int], correct_indices: list[int]
    ) -> AnswerEvaluation:
        """Avalia multi-select com credito parcial.

        `user_indices` deve conter indices unicos: duplicatas sao contadas
        como selecoes separadas.

        Args:
            user_indices: Indices selecionados, na ordem do usuario
            correct_indices: Indices corretos (nao vazio)

        Returns:
            AnswerEvaluation com score em [0, 100]
        """
        correct_set = set(correct_indices)
        user_set = set(user_indices)

        correctly_selected = sum(1 for i in user_indices if i in correct_set)
        incorrectly_selected = sum(1 for i in user_indices if i not in correct_set)
        missed = sum(1 for i in correct_indices if i not in user_set)

        is_correct = correctly_selected == len(correct_indices) and incorrectly_selected == 0

        if is_correct:
            score = 100
            feedback = self.MULTI_SELECT_SUCCESS
        else:
            earned = max(0, correctly_selected - incorrectly_selected)
            score = min(100, percent(earned, len(correct_indices)))

            parts = []
            if incorrectly_selected > 0:
                parts.append(f"{incorrectly_selected} incorrect selection(s)")
            if missed > 0:
                parts.append(f"{missed} correct answer(s) missed")
            letters = ", ".join(option_letter(i) for i in correct_indices)
            feedback = f"Incorrect. {' and '.join(parts)}. The correct answers were: {letters}."

        return AnswerEvaluation(
            is_correct=is_correct,
            score=score,
            feedback=feedback,
            matched_points=[option_letter(i) for i in user_indices if i in correct_set],
        )

    def calculate_score(self, answers: list[QuizAnswer], total_questions: int) -> QuizScore:
        """Calcula o placar final de uma sessao.

        Args:
            answers: Respostas registradas
            total_questions: Numero de questoes da sessao

        Returns:
            QuizScore com correct, total e percentage arredondado
        """
        if len(answers) != total_questions:
            raise ValueError(
                f"Answer count ({len(answers)}) differs from question count ({total_questions})"
            )
        if total_questions == 0:
            raise ValueError("A quiz needs at least one question")

        correct = sum(1 for a in answers if a.is_correct)
        return QuizScore(
            correct=correct,
            total=total_questions,
            percentage=percent(correct, total_questions),
        )
