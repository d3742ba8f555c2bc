"""Pattern extractors: scan sentences for one question family each.

Every extractor takes the segmented sentences and returns the raw
candidates it found, in sentence order.  All patterns of an extractor are
tried against every sentence, so one sentence can produce several
candidates.  Extractors never attach distractors; that happens later and
may still discard a candidate.

``EXTRACTORS`` lists them in the priority order the generator runs them.
"""
from __future__ import annotations

import re
from collections.abc import Callable, Sequence

from slide_quiz.models import Candidate, Sentence

# A run of words, e.g. "Photosynthesis" or "Machine learning".  Each word
# needs at least one letter so the repetition cannot backtrack badly.
_TERM = r"([A-Za-z]{2,}(?:\s+[A-Za-z]+)*)"
_TEXT = r"([^.!?]+)"

DEFINITION_PATTERNS = [
    re.compile(rf"\b{_TERM} is (?:defined as|means) {_TEXT}", re.IGNORECASE),
    re.compile(rf"\b{_TERM} refers to {_TEXT}", re.IGNORECASE),
    re.compile(rf"\bThe term {_TERM} means {_TEXT}", re.IGNORECASE),
]

PROCESS_PATTERNS = [
    re.compile(rf"\bThe (?:steps?|process) (?:are|is):?\s*{_TEXT}", re.IGNORECASE),
    re.compile(rf"\b(?:First|Next|Then|Finally), {_TEXT}", re.IGNORECASE),
    re.compile(rf"\bThe (?:main|primary) (?:purpose|function) of (\w+) is {_TEXT}", re.IGNORECASE),
]

COMPARISON_PATTERNS = [
    re.compile(rf"\b(\w+) differs? from (\w+) in that {_TEXT}", re.IGNORECASE),
    re.compile(rf"\b(\w+) is different from (\w+) because {_TEXT}", re.IGNORECASE),
    re.compile(rf"\bThe main difference between (\w+) and (\w+) is {_TEXT}", re.IGNORECASE),
]

FACT_TRIGGER = re.compile(r"\b(?:is|are|was|were|can|has|have)\b", re.IGNORECASE)
FACT_MIN_WORDS = 7  # strictly more than six tokens

APPLICATION_TRIGGER = re.compile(
    r"\b(?:used for|applied in|utilized for|employed in)\b", re.IGNORECASE,
)
APPLICATION_CAPTURE = re.compile(
    rf"(?:used for|applied in|utilized for|employed in)\s+{_TEXT}", re.IGNORECASE,
)

PROCESS_QUESTION = "What is the correct description of this process?"
APPLICATION_QUESTION = "What is the primary application mentioned?"
ARTICLE_STEM = "Which of the following is true?"
GENERIC_STEM = "Based on the content, which statement is correct?"
FACT_ANSWER = "True"

Extractor = Callable[[Sequence[Sentence]], list[Candidate]]


def extract_definitions(sentences: Sequence[Sentence]) -> list[Candidate]:
    candidates: list[Candidate] = []
    for sentence in sentences:
        for pattern in DEFINITION_PATTERNS:
            m = pattern.search(sentence.text)
            if not m:
                continue
            term = m.group(1).strip()
            definition = m.group(2).strip()
            if not term or not definition:
                continue
            candidates.append(Candidate(
                question_type="definition",
                index=sentence.index,
                question=f"What is {term}?",
                answer=definition,
                explanation=f"{term} is defined as {definition}",
                terms=(term,),
            ))
    return candidates


def extract_processes(sentences: Sequence[Sentence]) -> list[Candidate]:
    candidates: list[Candidate] = []
    for sentence in sentences:
        for pattern in PROCESS_PATTERNS:
            if pattern.search(sentence.text):
                candidates.append(Candidate(
                    question_type="process",
                    index=sentence.index,
                    question=PROCESS_QUESTION,
                    answer=sentence.text,
                    explanation="This describes the key aspect of the process.",
                ))
    return candidates


def extract_comparisons(sentences: Sequence[Sentence]) -> list[Candidate]:
    candidates: list[Candidate] = []
    for sentence in sentences:
        for pattern in COMPARISON_PATTERNS:
            m = pattern.search(sentence.text)
            if not m:
                continue
            first, second = m.group(1), m.group(2)
            difference = m.group(3).strip()
            candidates.append(Candidate(
                question_type="comparison",
                index=sentence.index,
                question=f"How does {first} differ from {second}?",
                answer=difference,
                explanation=f"The key difference is: {difference}",
                terms=(first, second),
            ))
    return candidates


def statement_to_question(statement: str) -> str | None:
    """Turn a statement into a true/false stem.

    This is a coarse heuristic; it only looks at the leading article.
    """
    if len(statement) < 10:
        return None
    first_word = statement.split()[0].lower()
    if first_word in ("the", "a", "an"):
        return ARTICLE_STEM
    return GENERIC_STEM


def extract_facts(sentences: Sequence[Sentence]) -> list[Candidate]:
    candidates: list[Candidate] = []
    for sentence in sentences:
        if not FACT_TRIGGER.search(sentence.text):
            continue
        if len(sentence.text.split()) < FACT_MIN_WORDS:
            continue
        stem = statement_to_question(sentence.text)
        if stem is None:
            continue
        candidates.append(Candidate(
            question_type="fact",
            index=sentence.index,
            question=stem,
            answer=FACT_ANSWER,
            explanation=f"Based on: {sentence.text}",
        ))
    return candidates


def extract_application(sentence: str) -> str:
    """Return the phrase following the application keyword, or ``""``."""
    m = APPLICATION_CAPTURE.search(sentence)
    return m.group(1).strip() if m else ""


def extract_applications(sentences: Sequence[Sentence]) -> list[Candidate]:
    candidates: list[Candidate] = []
    for sentence in sentences:
        if not APPLICATION_TRIGGER.search(sentence.text):
            continue
        candidates.append(Candidate(
            question_type="application",
            index=sentence.index,
            question=APPLICATION_QUESTION,
            answer=extract_application(sentence.text),
            explanation=f"As described: {sentence.text}",
        ))
    return candidates


EXTRACTORS: tuple[Extractor, ...] = (
    extract_definitions,
    extract_processes,
    extract_comparisons,
    extract_facts,
    extract_applications,
)
