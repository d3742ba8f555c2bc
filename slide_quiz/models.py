from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Sentence:
    text: str
    index: int


@dataclass
class Candidate:
    question_type: str  # definition | process | comparison | fact | application
    index: int  # ordinal of the source sentence
    question: str
    answer: str
    explanation: str
    terms: tuple[str, ...] = ()


@dataclass
class Question:
    id: str
    question: str
    options: list[str]
    correct_answer: int
    explanation: str
    question_type: str
    difficulty: str  # easy | medium
    category: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "question": self.question,
            "options": list(self.options),
            "correctAnswer": self.correct_answer,
            "explanation": self.explanation,
            "type": self.question_type,
            "difficulty": self.difficulty,
            "category": self.category,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Question:
        return cls(
            id=str(data.get("id", "")),
            question=data["question"],
            options=list(data["options"]),
            correct_answer=int(data["correctAnswer"]),
            explanation=data.get("explanation", ""),
            question_type=data.get("type", ""),
            difficulty=data.get("difficulty", ""),
            category=data.get("category", ""),
        )


@dataclass
class QuizResult:
    questions: list[Question]
    total_slides: int
    processing_time_ms: int
    file_name: str = ""
    word_count: int = 0

    def to_dict(self) -> dict:
        return {
            "questions": [q.to_dict() for q in self.questions],
            "totalSlides": self.total_slides,
            "processingTimeMs": self.processing_time_ms,
            "fileName": self.file_name,
            "wordCount": self.word_count,
        }

    @classmethod
    def from_dict(cls, data: dict) -> QuizResult:
        return cls(
            questions=[Question.from_dict(q) for q in data.get("questions", [])],
            total_slides=int(data.get("totalSlides", 1)),
            processing_time_ms=int(data.get("processingTimeMs", 0)),
            file_name=data.get("fileName", ""),
            word_count=int(data.get("wordCount", 0)),
        )
