"""Shared test fixtures."""
from __future__ import annotations

import random

import pytest

from slide_quiz.models import Question, QuizResult


class NoSwapRandom(random.Random):
    """Random source whose shuffles leave every list in its original order."""

    def randint(self, a, b):
        return b


@pytest.fixture
def no_swap_rng():
    return NoSwapRandom()


@pytest.fixture
def seeded_rng():
    return random.Random(1234)


@pytest.fixture
def lecture_text():
    """Slide-deck style text covering every question family."""
    return (
        "Introduction to Computer Science. "
        "Programming is defined as the process of creating instructions that tell a computer what to do. "
        "An algorithm refers to a finite sequence of well defined steps. "
        "First, the programmer writes the source code in an editor. "
        "Then, the compiler translates that code into machine instructions. "
        "Python differs from Java in that it uses dynamic typing at runtime. "
        "The main difference between arrays and lists is how they grow in memory. "
        "JavaScript is a high level programming language used for web development. "
        "Recursion can be applied in tree traversal and divide and conquer algorithms. "
        "The stack was originally designed to keep track of nested function calls. "
        "Hi. Short line here!"
    )


@pytest.fixture
def sample_question():
    return Question(
        id="def_0",
        question="What is Photosynthesis?",
        options=[
            "the process by which plants convert light into energy",
            "A type of photosynthesis system",
            "The process of creating photosynthesis",
            "The opposite of photosynthesis",
        ],
        correct_answer=0,
        explanation="Photosynthesis is defined as the process by which plants convert light into energy",
        question_type="definition",
        difficulty="easy",
        category="Terminology",
    )


@pytest.fixture
def sample_quiz(sample_question):
    fact = Question(
        id="fact_0",
        question="Based on the content, which statement is correct?",
        options=["False", "True", "Not mentioned", "Partially true"],
        correct_answer=1,
        explanation="Based on: Photosynthesis is defined as the process by which plants convert light into energy",
        question_type="fact",
        difficulty="easy",
        category="Fact",
    )
    return QuizResult(
        questions=[sample_question, fact],
        total_slides=1,
        processing_time_ms=3,
        file_name="biology.pdf",
        word_count=13,
    )
