"""Split extracted document text into candidate sentences."""
from __future__ import annotations

import re

from slide_quiz.models import Sentence

MIN_SENTENCE_CHARS = 20  # a sentence must be strictly longer than this
MIN_SENTENCE_WORDS = 5

_TERMINATORS = re.compile(r"[.!?]+")


def count_words(text: str) -> int:
    return len(text.split())


def split_into_sentences(text: str) -> list[Sentence]:
    sentences: list[Sentence] = []
    for fragment in _TERMINATORS.split(text):
        fragment = fragment.strip()
        if len(fragment) > MIN_SENTENCE_CHARS and count_words(fragment) >= MIN_SENTENCE_WORDS:
            sentences.append(Sentence(text=fragment, index=len(sentences)))
    return sentences
