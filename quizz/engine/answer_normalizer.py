"""Answer Normalizer - Converte a resposta bruta no formato de cada tipo."""

import re
from typing import assert_never

from ..errors import EmptyAnswerError, InvalidAnswerFormatError, InvalidSelectionError
from ..models.schemas import (
    CodeWritingQuestion,
    MultipleChoiceQuestion,
    MultiSelectQuestion,
    OpenEndedQuestion,
    QuizQuestion,
    RawAnswer,
)

# Separadores aceitos em multi-select: virgulas e/ou espacos
_SELECTION_SPLIT = re.compile(r"[,\s]+")

MULTIPLE_CHOICE_LETTERS = {"A": 0, "B": 1, "C": 2, "D": 3}
MULTI_SELECT_LETTERS = {"A": 0, "B": 1, "C": 2, "D": 3, "E": 4, "F": 5}


def normalize_multiple_choice(raw: RawAnswer) -> int:
    """Letra A-D (qualquer caixa) ou indice 0-3 (int ou string de digito).

    Raises:
        InvalidAnswerFormatError: Qualquer outra entrada
    """
    if isinstance(raw, int) and not isinstance(raw, bool):
        if 0 <= raw <= 3:
            return raw
    elif isinstance(raw, str):
        token = raw.strip().upper()
        if token in MULTIPLE_CHOICE_LETTERS:
            return MULTIPLE_CHOICE_LETTERS[token]
        if token.isascii() and token.isdigit() and 0 <= int(token) <= 3:
            return int(token)

    raise InvalidAnswerFormatError(
        "Invalid answer format. Use A, B, C, D or 0, 1, 2, 3.",
        details={"answer": str(raw)},
    )


def _selection_index(token: str | int, option_count: int) -> int:
    if isinstance(token, bool):
        raise InvalidSelectionError(token, option_count)
    if isinstance(token, int):
        index = token
    else:
        upper = token.upper()
        if upper in MULTI_SELECT_LETTERS:
            index = MULTI_SELECT_LETTERS[upper]
        elif upper.isascii() and upper.isdigit():
            index = int(upper)
        else:
            raise InvalidSelectionError(token, option_count)

    if index < 0 or index >= option_count:
        raise InvalidSelectionError(token, option_count)
    return index


def normalize_multi_select(raw: RawAnswer, option_count: int) -> list[int]:
    """Lista de indices a partir de string delimitada, int ou lista de ints.

    A ordem do usuario e preservada. Cada alternativa pode aparecer uma
    unica vez. String vazia resulta em selecao vazia (avaliada com score 0).

    Raises:
        InvalidSelectionError: Token que nao corresponde a uma alternativa ou
            que repete uma alternativa ja selecionada
    """
    if isinstance(raw, str):
        tokens: list[str | int] = [t for t in _SELECTION_SPLIT.split(raw.strip()) if t]
    elif isinstance(raw, list):
        tokens = list(raw)
    else:
        tokens = [raw]

    indices: list[int] = []
    for token in tokens:
        index = _selection_index(token, option_count)
        if index in indices:
            raise InvalidSelectionError(token, option_count, duplicate=True)
        indices.append(index)
    return indices


def normalize_text(raw: RawAnswer) -> str:
    """Texto nao vazio, sem espacos nas pontas.

    Raises:
        EmptyAnswerError: Resposta vazia ou que nao e texto
    """
    if not isinstance(raw, str) or not raw.strip():
        raise EmptyAnswerError("Answer text cannot be empty.")
    return raw.strip()


def normalize_answer(question: QuizQuestion, raw: RawAnswer) -> int | list[int] | str:
    """Normaliza a resposta bruta conforme o tipo da questao."""
    match question:
        case MultipleChoiceQuestion():
            return normalize_multiple_choice(raw)
        case MultiSelectQuestion():
            return normalize_multi_select(raw, len(question.options))
        case OpenEndedQuestion() | CodeWritingQuestion():
            return normalize_text(raw)
        case _:
            assert_never(question)
