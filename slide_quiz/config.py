from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.json"

DEFAULTS = {
    "max_raw_candidates": 15,
    "max_questions": 10,
    "min_text_length": 50,
    "max_file_size_mb": 20,
    "text_preview_chars": 300,
    "upload_dir": "",
}

ALLOWED_FILE_TYPES = {
    "application/pdf": "PDF",
    "application/vnd.ms-powerpoint": "PPT",
    "application/vnd.openxmlformats-officedocument.presentationml.presentation": "PPTX",
    "application/msword": "DOC",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "DOCX",
}


@dataclass
class Settings:
    max_raw_candidates: int = DEFAULTS["max_raw_candidates"]
    max_questions: int = DEFAULTS["max_questions"]
    min_text_length: int = DEFAULTS["min_text_length"]
    max_file_size_mb: int = DEFAULTS["max_file_size_mb"]
    text_preview_chars: int = DEFAULTS["text_preview_chars"]
    upload_dir: str = DEFAULTS["upload_dir"]

    @property
    def project_root(self) -> Path:
        return Path(__file__).resolve().parent.parent

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024

    @property
    def upload_full_path(self) -> Path | None:
        """Directory for temporary upload files; None means the system default."""
        if not self.upload_dir:
            return None
        return self.project_root / self.upload_dir

    def to_dict(self) -> dict:
        return {
            "max_raw_candidates": self.max_raw_candidates,
            "max_questions": self.max_questions,
            "min_text_length": self.min_text_length,
            "max_file_size_mb": self.max_file_size_mb,
            "text_preview_chars": self.text_preview_chars,
            "upload_dir": self.upload_dir,
        }


def load_settings() -> Settings:
    if CONFIG_PATH.exists():
        raw = json.loads(CONFIG_PATH.read_text())
        known = {f.name for f in Settings.__dataclass_fields__.values()}
        filtered = {k: v for k, v in raw.items() if k in known}
        return Settings(**filtered)
    return Settings()


def save_settings(settings: Settings) -> None:
    CONFIG_PATH.write_text(json.dumps(settings.to_dict(), indent=4) + "\n")
