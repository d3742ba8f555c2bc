"""Plain-text rendering of a quiz for download."""
from __future__ import annotations

import string
from datetime import datetime, timezone

from slide_quiz.models import QuizResult


def export_file_name(now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    return f"quiz-{int(now.timestamp() * 1000)}.txt"


def render_quiz_text(result: QuizResult) -> str:
    lines = [
        f"Quiz Generated from {result.file_name or 'document'}",
        f"Total Questions: {len(result.questions)}",
        "",
    ]
    for n, q in enumerate(result.questions, 1):
        lines.append(f"{n}. {q.question}")
        for i, option in enumerate(q.options):
            marker = " (Correct)" if i == q.correct_answer else ""
            lines.append(f"   {string.ascii_uppercase[i]}. {option}{marker}")
        if q.explanation:
            lines.append(f"   Explanation: {q.explanation}")
        lines.append("")
    return "\n".join(lines)
