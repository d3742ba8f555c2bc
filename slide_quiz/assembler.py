"""Turn a candidate plus its distractors into a shuffled Question."""
from __future__ import annotations

import random
from typing import TypeVar

from slide_quiz.models import Candidate, Question

T = TypeVar("T")

# question_type -> (id tag, difficulty, category)
QUESTION_META = {
    "definition": ("def", "easy", "Terminology"),
    "process": ("proc", "medium", "Process"),
    "comparison": ("comp", "medium", "Comparison"),
    "fact": ("fact", "easy", "Fact"),
    "application": ("app", "medium", "Application"),
}


def shuffle_options(items: list[T], rng: random.Random) -> list[T]:
    """Return a Fisher-Yates shuffled copy of *items*."""
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def assemble_question(
    candidate: Candidate,
    distractors: list[str],
    rng: random.Random,
) -> Question:
    tag, difficulty, category = QUESTION_META[candidate.question_type]
    options = shuffle_options([candidate.answer, *distractors], rng)
    return Question(
        id=f"{tag}_{candidate.index}",
        question=candidate.question,
        options=options,
        correct_answer=options.index(candidate.answer),
        explanation=candidate.explanation,
        question_type=candidate.question_type,
        difficulty=difficulty,
        category=category,
    )
