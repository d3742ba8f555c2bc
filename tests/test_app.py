"""Tests for the FastAPI application routes."""
from __future__ import annotations

import io
from unittest.mock import patch

import pytest
from docx import Document
from fastapi.testclient import TestClient

from slide_quiz import app as app_module
from slide_quiz.app import app
from slide_quiz.config import Settings
from slide_quiz.errors import ExtractionError, QuizGenerationError
from slide_quiz.parsers.document_parser import DOCX, PDF

LECTURE = (
    "Photosynthesis is defined as the process by which plants convert light into energy. "
    "Cats differ from dogs in that they are more independent. "
    "JavaScript is a high level programming language used for web development."
)


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def client(upload_dir):
    # Set globals BEFORE creating TestClient so startup() is a no-op
    app_module._settings = Settings(upload_dir=str(upload_dir))
    client = TestClient(app, raise_server_exceptions=False)
    yield client
    client.close()
    app_module._settings = None


def _docx_bytes(*paragraphs: str) -> bytes:
    document = Document()
    for text in paragraphs:
        document.add_paragraph(text)
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


class TestUploadStatus:
    def test_status(self, client):
        resp = client.get("/api/upload/status")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "active"
        assert data["maxFileSize"] == "20MB"
        assert data["allowedFormats"] == ["PDF", "PPT", "PPTX", "DOC", "DOCX"]


class TestUpload:
    def test_real_docx(self, client, upload_dir):
        resp = client.post(
            "/api/upload",
            files={"file": ("biology.docx", _docx_bytes(LECTURE), DOCX)},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["message"] == "Quiz generated successfully"
        data = body["data"]
        assert data["fileName"] == "biology.docx"
        assert data["fileType"] == DOCX
        assert data["totalSlides"] == 1
        assert data["wordCount"] == len(LECTURE.split())
        assert 0 < len(data["questions"]) <= 10
        questions = {q["question"]: q for q in data["questions"]}
        definition = questions["What is Photosynthesis?"]
        assert definition["options"][definition["correctAnswer"]] == (
            "the process by which plants convert light into energy"
        )
        # The temporary upload is always removed
        assert list(upload_dir.iterdir()) == []

    def test_preview_truncated(self, client):
        long_text = LECTURE * 5
        with patch("slide_quiz.app.extract_text", return_value=long_text):
            resp = client.post("/api/upload", files={"file": ("a.pdf", b"%PDF", PDF)})
        preview = resp.json()["data"]["textPreview"]
        assert preview == long_text[:300] + "..."

    def test_no_file(self, client):
        resp = client.post("/api/upload")
        assert resp.status_code == 400
        assert resp.json()["code"] == "NO_FILE"

    def test_invalid_type(self, client):
        resp = client.post("/api/upload", files={"file": ("notes.txt", b"hello", "text/plain")})
        assert resp.status_code == 400
        assert resp.json()["code"] == "INVALID_FILE_TYPE"

    def test_too_large(self, client):
        app_module._settings = Settings(max_file_size_mb=0)
        resp = client.post("/api/upload", files={"file": ("big.pdf", b"%PDF-1.4", PDF)})
        assert resp.status_code == 413
        assert resp.json()["code"] == "FILE_TOO_LARGE"

    def test_insufficient_content(self, client):
        with patch("slide_quiz.app.extract_text", return_value="Too little text."):
            resp = client.post("/api/upload", files={"file": ("a.pdf", b"%PDF", PDF)})
        assert resp.status_code == 400
        assert resp.json()["code"] == "INSUFFICIENT_CONTENT"

    def test_extraction_failure(self, client, upload_dir):
        with patch("slide_quiz.app.extract_text",
                   side_effect=ExtractionError("Failed to extract text from PDF")):
            resp = client.post("/api/upload", files={"file": ("a.pdf", b"%PDF", PDF)})
        assert resp.status_code == 422
        assert resp.json() == {"error": "Failed to extract text from PDF", "code": "EXTRACTION_FAILED"}
        assert list(upload_dir.iterdir()) == []

    def test_generation_failure(self, client):
        with patch("slide_quiz.app.extract_text", return_value=LECTURE), \
             patch("slide_quiz.app.generate",
                   side_effect=QuizGenerationError("Failed to generate quiz questions")):
            resp = client.post("/api/upload", files={"file": ("a.pdf", b"%PDF", PDF)})
        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to generate quiz questions", "code": "GENERATION_FAILED"}


class TestQuizEdit:
    def test_applies_edits(self, client, sample_quiz):
        resp = client.post("/api/quiz/edit", json={
            "quiz": sample_quiz.to_dict(),
            "edits": [
                {"op": "update_question_text", "question": 0, "text": "Define photosynthesis."},
                {"op": "set_correct_answer", "question": 1, "option": 0},
                {"op": "update_option_text", "question": 1, "option": 0, "text": "Yes"},
            ],
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["questions"][0]["question"] == "Define photosynthesis."
        assert data["questions"][1]["correctAnswer"] == 0
        assert data["questions"][1]["options"][0] == "Yes"

    def test_delete(self, client, sample_quiz):
        resp = client.post("/api/quiz/edit", json={
            "quiz": sample_quiz.to_dict(),
            "edits": [{"op": "delete_question", "question": 0}],
        })
        assert [q["id"] for q in resp.json()["questions"]] == ["fact_0"]

    def test_invalid_edit(self, client, sample_quiz):
        resp = client.post("/api/quiz/edit", json={
            "quiz": sample_quiz.to_dict(),
            "edits": [{"op": "set_correct_answer", "question": 0, "option": 7}],
        })
        assert resp.status_code == 400
        assert resp.json()["code"] == "INVALID_EDIT"

    def test_missing_quiz(self, client):
        resp = client.post("/api/quiz/edit", json={"edits": []})
        assert resp.status_code == 400
        assert resp.json()["error"] == "No quiz provided"

    def test_malformed_quiz(self, client):
        resp = client.post("/api/quiz/edit", json={"quiz": {"questions": [{"question": "Q?"}]}})
        assert resp.status_code == 400
        assert resp.json()["code"] == "INVALID_EDIT"

    def test_body_not_an_object(self, client):
        resp = client.post("/api/quiz/edit", json=[1, 2])
        assert resp.status_code == 400
        assert resp.json()["code"] == "INVALID_EDIT"

    def test_invalid_json(self, client):
        resp = client.post(
            "/api/quiz/edit", content=b"{not json", headers={"Content-Type": "application/json"},
        )
        assert resp.status_code == 400
        assert resp.json()["code"] == "INVALID_EDIT"

    def test_null_option_text_rejected(self, client, sample_quiz):
        resp = client.post("/api/quiz/edit", json={
            "quiz": sample_quiz.to_dict(),
            "edits": [{"op": "update_option_text", "question": 0, "option": 0, "text": None}],
        })
        assert resp.status_code == 400
        assert resp.json()["code"] == "INVALID_EDIT"

    def test_correct_answer_outside_options(self, client, sample_quiz):
        quiz = sample_quiz.to_dict()
        quiz["questions"][0]["correctAnswer"] = 7
        resp = client.post("/api/quiz/edit", json={"quiz": quiz, "edits": []})
        assert resp.status_code == 400
        assert resp.json()["code"] == "INVALID_EDIT"


class TestQuizExport:
    def test_export_text(self, client, sample_quiz):
        resp = client.post("/api/quiz/export", json=sample_quiz.to_dict())
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/plain")
        assert "attachment; filename=\"quiz-" in resp.headers["content-disposition"]
        assert resp.text.startswith("Quiz Generated from biology.pdf")

    def test_export_without_body(self, client):
        resp = client.post("/api/quiz/export")
        assert resp.status_code == 400

    def test_export_invalid_json(self, client):
        resp = client.post(
            "/api/quiz/export", content=b"{not json", headers={"Content-Type": "application/json"},
        )
        assert resp.status_code == 400
        assert resp.json()["code"] == "INVALID_EDIT"

    def test_export_rejects_unmarked_question(self, client, sample_quiz):
        quiz = sample_quiz.to_dict()
        quiz["questions"][0]["correctAnswer"] = 7
        resp = client.post("/api/quiz/export", json=quiz)
        assert resp.status_code == 400
        assert resp.json()["code"] == "INVALID_EDIT"

    def test_export_marks_one_option_per_question(self, client, sample_quiz):
        resp = client.post("/api/quiz/export", json=sample_quiz.to_dict())
        assert resp.text.count("(Correct)") == len(sample_quiz.questions)
