"""Exception types shared by the engine and the upload layer."""
from __future__ import annotations


class SlideQuizError(Exception):
    code = "INTERNAL_ERROR"

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class QuizGenerationError(SlideQuizError):
    code = "GENERATION_FAILED"


class ExtractionError(SlideQuizError):
    code = "EXTRACTION_FAILED"


class UnsupportedFileTypeError(SlideQuizError):
    code = "INVALID_FILE_TYPE"


class EditError(SlideQuizError):
    code = "INVALID_EDIT"
