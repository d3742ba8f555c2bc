"""CLI entry point for slide-quiz.

Usage:
  python -m slide_quiz serve [--host HOST] [--port PORT]
  python -m slide_quiz generate FILE [--seed N]
  python -m slide_quiz status
"""
from __future__ import annotations

import json
import sys
from pathlib import Path


def main():
    args = sys.argv[1:]
    command = args[0] if args else "serve"

    if command == "serve":
        _serve(args[1:])
    elif command == "generate":
        _generate(args[1:])
    elif command == "status":
        _status()
    else:
        print(f"Unknown command: {command}")
        print("Commands: serve, generate, status")
        sys.exit(1)


def _parse_flag(args: list[str], name: str, default: str) -> str:
    for i, a in enumerate(args):
        if a == name and i + 1 < len(args):
            return args[i + 1]
    return default


def _serve(args: list[str]):
    import uvicorn

    port = int(_parse_flag(args, "--port", "8000"))
    host = _parse_flag(args, "--host", "127.0.0.1")
    print(f"Starting Slide Quiz on http://{host}:{port}")
    print("Press Ctrl+C to stop\n")
    uvicorn.run(
        "slide_quiz.app:app",
        host=host,
        port=port,
        reload=False,
        timeout_graceful_shutdown=5,
    )


def _generate(args: list[str]):
    import logging
    import random

    from slide_quiz.config import load_settings
    from slide_quiz.errors import SlideQuizError
    from slide_quiz.parsers.document_parser import extract_text, guess_mime_type
    from slide_quiz.question_generator import generate

    logging.basicConfig(level=logging.WARNING, format="%(name)s | %(message)s")

    if not args or args[0].startswith("--"):
        print("Usage: python -m slide_quiz generate FILE [--seed N]")
        sys.exit(1)
    path = Path(args[0])
    if not path.exists():
        print(f"File not found: {path}")
        sys.exit(1)
    mime_type = guess_mime_type(path)
    if mime_type is None:
        print(f"Unsupported file extension: {path.suffix or '(none)'}")
        sys.exit(1)

    seed = _parse_flag(args, "--seed", "")
    rng = random.Random(int(seed)) if seed else None

    settings = load_settings()
    try:
        text = extract_text(path, mime_type)
        if len(text) < settings.min_text_length:
            print("Insufficient text content found in the file.")
            sys.exit(1)
        result = generate(text, path.name, rng=rng, settings=settings)
    except SlideQuizError as e:
        print(f"Error: {e.message}")
        sys.exit(1)

    print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))


def _status():
    from slide_quiz.config import CONFIG_PATH, load_settings

    settings = load_settings()
    source = CONFIG_PATH if CONFIG_PATH.exists() else "defaults"
    print(f"Slide Quiz settings ({source})")
    print("=" * 40)
    for key, value in settings.to_dict().items():
        print(f"{key + ':':22s}{value}")


if __name__ == "__main__":
    main()
