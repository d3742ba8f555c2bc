"""Wrong-answer templates per question type."""
from __future__ import annotations

import random

from slide_quiz.assembler import shuffle_options
from slide_quiz.models import Candidate

DISTRACTOR_COUNT = 3

DISTRACTOR_POOLS = {
    "definition": (
        "A type of {term} system",
        "The process of creating {term}",
        "A tool used for {term} analysis",
        "The opposite of {term}",
    ),
    "process": (
        "A completely different approach",
        "An outdated methodology",
        "A related but incorrect procedure",
        "The reverse sequence of steps",
    ),
    "comparison": (
        "They are exactly the same",
        "{term1} is faster than {term2}",
        "{term2} is more efficient than {term1}",
        "There is no significant difference",
    ),
    "application": (
        "Data analysis",
        "System optimization",
        "User interface design",
        "Network security",
    ),
}

# Not randomized: a true/false item always offers the same three.
FACT_DISTRACTORS = ("False", "Partially true", "Not mentioned")


def _template_fields(candidate: Candidate) -> dict:
    terms = candidate.terms
    if candidate.question_type == "definition":
        return {"term": terms[0].lower() if terms else ""}
    if candidate.question_type == "comparison":
        return {
            "term1": terms[0] if terms else "",
            "term2": terms[1] if len(terms) > 1 else "",
        }
    return {}


def synthesize_distractors(candidate: Candidate, rng: random.Random) -> list[str] | None:
    """Pick three distinct distractors for *candidate*.

    Returns ``None`` when the candidate has no usable answer or fewer than
    three templates differ from it; the caller drops such candidates.
    """
    answer = candidate.answer.strip()
    if not answer:
        return None

    if candidate.question_type == "fact":
        pool = list(FACT_DISTRACTORS)
    else:
        fields = _template_fields(candidate)
        pool = [t.format(**fields) for t in DISTRACTOR_POOLS[candidate.question_type]]

    seen = {answer.lower()}
    distinct: list[str] = []
    for d in pool:
        key = d.lower()
        if key in seen:
            continue
        seen.add(key)
        distinct.append(d)

    if len(distinct) < DISTRACTOR_COUNT:
        return None
    if candidate.question_type == "fact":
        return distinct[:DISTRACTOR_COUNT]
    return shuffle_options(distinct, rng)[:DISTRACTOR_COUNT]
