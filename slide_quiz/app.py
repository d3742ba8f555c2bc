"""FastAPI application: upload a document, get a quiz back."""
from __future__ import annotations

import asyncio
import logging
import os
import tempfile
from pathlib import Path

logging.basicConfig(level=logging.INFO, format="%(name)s | %(message)s")

from fastapi import FastAPI, File, Request, UploadFile
from fastapi.responses import JSONResponse, PlainTextResponse

from slide_quiz.config import ALLOWED_FILE_TYPES, Settings, load_settings
from slide_quiz.editing import apply_edits, parse_edit, validate_quiz
from slide_quiz.errors import EditError, SlideQuizError
from slide_quiz.export import export_file_name, render_quiz_text
from slide_quiz.models import QuizResult
from slide_quiz.parsers.document_parser import extract_text
from slide_quiz.question_generator import generate
from slide_quiz.segmenter import count_words

app = FastAPI(title="Slide Quiz")

_settings: Settings | None = None
_log = logging.getLogger("slide_quiz.upload")

STATUS_BY_CODE = {
    "NO_FILE": 400,
    "INVALID_FILE_TYPE": 400,
    "INSUFFICIENT_CONTENT": 400,
    "INVALID_EDIT": 400,
    "FILE_TOO_LARGE": 413,
    "EXTRACTION_FAILED": 422,
    "GENERATION_FAILED": 500,
}


def get_settings() -> Settings:
    assert _settings is not None
    return _settings


@app.on_event("startup")
async def startup():
    global _settings
    if _settings is not None:
        return  # Already initialized (e.g. by tests)
    _settings = load_settings()


@app.exception_handler(SlideQuizError)
async def slide_quiz_error_handler(request: Request, exc: SlideQuizError):
    status = STATUS_BY_CODE.get(exc.code, 500)
    if status >= 500:
        _log.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=status, content={"error": exc.message, "code": exc.code})


# ── API: Upload ───────────────────────────────────────────────────────────

@app.get("/api/upload/status")
async def api_upload_status():
    s = get_settings()
    return {
        "status": "active",
        "maxFileSize": f"{s.max_file_size_mb}MB",
        "allowedFormats": list(ALLOWED_FILE_TYPES.values()),
        "features": ["MCQ Generation", "Text Extraction", "Multiple Formats"],
    }


def _validate_upload(file: UploadFile | None, size: int, s: Settings) -> None:
    if file is None or not file.filename:
        raise SlideQuizError("No file uploaded", code="NO_FILE")
    if size > s.max_file_size_bytes:
        raise SlideQuizError(
            f"Please upload a file smaller than {s.max_file_size_mb}MB", code="FILE_TOO_LARGE",
        )
    if file.content_type not in ALLOWED_FILE_TYPES:
        raise SlideQuizError(
            "Invalid file type. Please upload PDF, PPT, PPTX, DOC, or DOCX files.",
            code="INVALID_FILE_TYPE",
        )


def _write_temp(data: bytes, suffix: str, directory: Path | None) -> Path:
    if directory is not None:
        directory.mkdir(parents=True, exist_ok=True)
    fd, name = tempfile.mkstemp(suffix=suffix, dir=directory)
    with os.fdopen(fd, "wb") as f:
        f.write(data)
    return Path(name)


@app.post("/api/upload")
async def api_upload(file: UploadFile | None = File(None)):
    s = get_settings()
    # One byte past the limit is enough to reject without buffering the rest
    data = await file.read(s.max_file_size_bytes + 1) if file is not None else b""
    _validate_upload(file, len(data), s)

    file_name = file.filename
    file_type = file.content_type
    _log.info("Processing file: %s, Type: %s", file_name, file_type)

    path = _write_temp(data, Path(file_name).suffix, s.upload_full_path)
    try:
        text = await asyncio.to_thread(extract_text, path, file_type)
    finally:
        path.unlink(missing_ok=True)
        _log.info("Cleaned up file: %s", path.name)

    if len(text.strip()) < s.min_text_length:
        raise SlideQuizError(
            "Insufficient text content found in the file. "
            "Please ensure the file contains readable text.",
            code="INSUFFICIENT_CONTENT",
        )

    result = await asyncio.to_thread(generate, text, file_name, settings=s)

    preview = text[:s.text_preview_chars]
    if len(text) > s.text_preview_chars:
        preview += "..."
    return {
        "success": True,
        "message": "Quiz generated successfully",
        "data": {
            "fileName": file_name,
            "fileType": file_type,
            "totalSlides": result.total_slides,
            "textPreview": preview,
            "questions": [q.to_dict() for q in result.questions],
            "processingTimeMs": result.processing_time_ms,
            "wordCount": count_words(text),
        },
    }


# ── API: Edit / export ────────────────────────────────────────────────────

async def _read_json(request: Request, default):
    if not await request.body():
        return default
    try:
        return await request.json()
    except ValueError as e:
        raise EditError(f"Invalid JSON body: {e}") from e


def _parse_quiz(data) -> QuizResult:
    if not isinstance(data, dict):
        raise EditError("No quiz provided")
    try:
        quiz = QuizResult.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise EditError(f"Malformed quiz: {e}") from e
    validate_quiz(quiz)
    return quiz


@app.post("/api/quiz/edit")
async def api_quiz_edit(request: Request):
    body = await _read_json(request, {})
    if not isinstance(body, dict):
        raise EditError("Request body must be a JSON object")
    quiz = _parse_quiz(body.get("quiz"))
    edits = body.get("edits") or []
    if not isinstance(edits, list) or not all(isinstance(e, dict) for e in edits):
        raise EditError("Edits must be a list of objects")
    edited = apply_edits(quiz, [parse_edit(e) for e in edits])
    _log.info("Applied %d edits, %d questions remain", len(edits), len(edited.questions))
    return edited.to_dict()


@app.post("/api/quiz/export")
async def api_quiz_export(request: Request):
    body = await _read_json(request, None)
    quiz = _parse_quiz(body)
    return PlainTextResponse(
        render_quiz_text(quiz),
        headers={"Content-Disposition": f'attachment; filename="{export_file_name()}"'},
    )
