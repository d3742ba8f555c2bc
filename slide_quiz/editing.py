"""Edit commands applied to a copy of a generated quiz.

The generator hands the quiz over once it is built; from then on users may
fix question wording, option text or the marked answer, or drop questions
entirely.  Each change is a small command object and :func:`apply_edits`
applies a list of them to a deep copy, so the caller's quiz is never
touched.
"""
from __future__ import annotations

import copy
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Union

from slide_quiz.errors import EditError
from slide_quiz.models import Question, QuizResult


@dataclass(frozen=True)
class SetCorrectAnswer:
    question: int
    option: int


@dataclass(frozen=True)
class DeleteQuestion:
    question: int


@dataclass(frozen=True)
class UpdateQuestionText:
    question: int
    text: str


@dataclass(frozen=True)
class UpdateOptionText:
    question: int
    option: int
    text: str


EditCommand = Union[SetCorrectAnswer, DeleteQuestion, UpdateQuestionText, UpdateOptionText]

_COMMANDS = {
    "set_correct_answer": SetCorrectAnswer,
    "delete_question": DeleteQuestion,
    "update_question_text": UpdateQuestionText,
    "update_option_text": UpdateOptionText,
}


def parse_edit(data: dict) -> EditCommand:
    """Build a command from its JSON form, e.g. ``{"op": "delete_question", "question": 2}``."""
    op = data.get("op")
    cls = _COMMANDS.get(op)
    if cls is None:
        raise EditError(f"Unknown edit operation: {op!r}")
    fields = {k: v for k, v in data.items() if k != "op"}
    try:
        return cls(**fields)
    except TypeError as e:
        raise EditError(f"Invalid fields for {op}: {e}") from e


def _is_index(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _question_at(result: QuizResult, index: int) -> Question:
    if not _is_index(index) or not 0 <= index < len(result.questions):
        raise EditError(f"Question index out of range: {index!r}")
    return result.questions[index]


def _check_option(q: Question, option: int) -> None:
    if not _is_index(option) or not 0 <= option < len(q.options):
        raise EditError(f"Option index out of range: {option!r}")


def _check_text(text) -> None:
    if not isinstance(text, str):
        raise EditError(f"Text must be a string, got {type(text).__name__}")


def _apply(result: QuizResult, command: EditCommand) -> None:
    if isinstance(command, SetCorrectAnswer):
        q = _question_at(result, command.question)
        _check_option(q, command.option)
        q.correct_answer = command.option
    elif isinstance(command, DeleteQuestion):
        _question_at(result, command.question)
        del result.questions[command.question]
    elif isinstance(command, UpdateQuestionText):
        _check_text(command.text)
        q = _question_at(result, command.question)
        q.question = command.text
    elif isinstance(command, UpdateOptionText):
        q = _question_at(result, command.question)
        _check_option(q, command.option)
        _check_text(command.text)
        q.options[command.option] = command.text
    else:
        raise EditError(f"Unsupported edit command: {command!r}")


def apply_edits(result: QuizResult, commands: Iterable[EditCommand]) -> QuizResult:
    """Return a copy of *result* with *commands* applied in order.

    Indices in each command refer to the quiz as left by the previous
    command.  Raises :class:`EditError` on the first invalid command.
    """
    edited = copy.deepcopy(result)
    for command in commands:
        _apply(edited, command)
    return edited


def validate_quiz(result: QuizResult) -> None:
    """Raise :class:`EditError` unless every question has four text options
    and a correct answer pointing at one of them."""
    for i, q in enumerate(result.questions):
        if not isinstance(q.question, str):
            raise EditError(f"Question {i} text must be a string")
        if len(q.options) != 4 or not all(isinstance(o, str) for o in q.options):
            raise EditError(f"Question {i} must have exactly 4 text options")
        if not 0 <= q.correct_answer < len(q.options):
            raise EditError(f"Question {i} correct answer out of range: {q.correct_answer}")
