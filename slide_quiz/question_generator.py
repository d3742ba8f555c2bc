"""Generate a multiple-choice quiz from extracted document text."""
from __future__ import annotations

import logging
import math
import random
import time
import uuid
from collections.abc import Sequence

from slide_quiz.assembler import assemble_question
from slide_quiz.config import DEFAULTS, Settings
from slide_quiz.distractors import synthesize_distractors
from slide_quiz.errors import QuizGenerationError
from slide_quiz.extractors import EXTRACTORS, Extractor
from slide_quiz.models import Candidate, Question, QuizResult, Sentence
from slide_quiz.segmenter import count_words, split_into_sentences

_log = logging.getLogger("slide_quiz.qgen")

WORDS_PER_SLIDE = 100


class _CallLogger(logging.LoggerAdapter):
    """Prefix every record with the id of the generation call."""

    def process(self, msg, kwargs):
        return f"[{self.extra['call_id']}] {msg}", kwargs


def _call_logger() -> logging.LoggerAdapter:
    return _CallLogger(_log, {"call_id": uuid.uuid4().hex[:8]})


def collect_candidates(
    sentences: Sequence[Sentence],
    extractors: Sequence[Extractor] = EXTRACTORS,
    threshold: int = DEFAULTS["max_raw_candidates"],
    log: logging.Logger | logging.LoggerAdapter = _log,
) -> list[Candidate]:
    """Run *extractors* in order, stopping once *threshold* candidates exist.

    The threshold is only checked between extractors, so the result can
    exceed it by whatever the last extractor produced.
    """
    candidates: list[Candidate] = []
    for extractor in extractors:
        found = extractor(sentences)
        candidates.extend(found)
        log.debug("%s: %d candidates (total %d)", extractor.__name__, len(found), len(candidates))
        if len(candidates) >= threshold:
            log.info("Collected %d candidates, skipping remaining extractors", len(candidates))
            break
    return candidates


def build_questions(
    candidates: Sequence[Candidate],
    rng: random.Random,
    log: logging.Logger | logging.LoggerAdapter = _log,
) -> list[Question]:
    questions: list[Question] = []
    for candidate in candidates:
        distractors = synthesize_distractors(candidate, rng)
        if distractors is None:
            log.debug("Dropped %s candidate from sentence %d: no distinct distractors",
                      candidate.question_type, candidate.index)
            continue
        questions.append(assemble_question(candidate, distractors, rng))
    return questions


def dedupe_questions(questions: Sequence[Question]) -> list[Question]:
    """Keep the first question for each lower-cased question text."""
    seen: set[str] = set()
    unique: list[Question] = []
    for q in questions:
        key = q.question.lower()
        if key in seen:
            continue
        seen.add(key)
        unique.append(q)
    return unique


def limit_questions(questions: Sequence[Question], limit: int) -> list[Question]:
    return list(questions[:max(0, limit)])


def estimate_slide_count(text: str) -> int:
    return max(1, math.ceil(count_words(text) / WORDS_PER_SLIDE))


def generate(
    text: str,
    file_name: str,
    *,
    rng: random.Random | None = None,
    logger: logging.Logger | logging.LoggerAdapter | None = None,
    settings: Settings | None = None,
    extractors: Sequence[Extractor] = EXTRACTORS,
) -> QuizResult:
    """Build a quiz from *text*.

    *file_name* only labels the result.  Pass *rng* to make distractor
    picks and option order reproducible.  Any unexpected fault aborts the
    whole call with :class:`QuizGenerationError`; there are no partial
    results.
    """
    start = time.perf_counter()
    log = logger or _call_logger()
    rng = rng or random.Random()
    settings = settings or Settings()

    try:
        sentences = split_into_sentences(text)
        log.info("Generating quiz for %r: %d candidate sentences", file_name, len(sentences))
        candidates = collect_candidates(
            sentences, extractors, threshold=settings.max_raw_candidates, log=log,
        )
        questions = build_questions(candidates, rng, log=log)
        unique = dedupe_questions(questions)
        final = limit_questions(unique, settings.max_questions)
        result = QuizResult(
            questions=final,
            total_slides=estimate_slide_count(text),
            processing_time_ms=0,
            file_name=file_name,
            word_count=count_words(text),
        )
    except Exception as e:
        log.exception("MCQ generation error: %s", e)
        raise QuizGenerationError("Failed to generate quiz questions") from e

    result.processing_time_ms = int((time.perf_counter() - start) * 1000)
    log.info("Generated %d questions (%d candidates, %d after dedup) in %d ms",
             len(final), len(candidates), len(unique), result.processing_time_ms)
    return result
