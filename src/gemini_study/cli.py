"""Command-line entry point.

Usage:
    gemini-study notes.pdf
    gemini-study --text "Photosynthesis converts light into chemical energy."
    gemini-study lecture.mp3 --validate --show-raw
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import TYPE_CHECKING, Any

from gemini_study.config import resolve_config
from gemini_study.core.exceptions import (
    ConfigurationError,
    MalformedModelOutputError,
    StudyPipelineError,
)
from gemini_study.core.types import TextSource
from gemini_study.files.extractors import source_from_path
from gemini_study.service import create_study_service

if TYPE_CHECKING:
    from collections.abc import Sequence

# ruff: noqa: T201


def build_parser() -> argparse.ArgumentParser:  # noqa: D103
    parser = argparse.ArgumentParser(
        prog="gemini-study",
        description="Generate a summary, quiz and explanation from study material.",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("file", nargs="?", help="PDF, DOCX, text or audio file")
    source.add_argument("--text", help="Inline study text")
    parser.add_argument(
        "--mime-type", help="Override the mime type guessed from the file name"
    )
    parser.add_argument("--env-file", help="Path to a .env file")
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Enforce the {summary, mcqs, content} artifact shape",
    )
    parser.add_argument(
        "--show-raw",
        action="store_true",
        help="Print the raw model output when it is not valid JSON",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


async def _run(args: argparse.Namespace) -> Any:
    settings = resolve_config(env_file=args.env_file)
    service = create_study_service(settings)
    if args.text is not None:
        source = TextSource(args.text)
    else:
        source = source_from_path(args.file, args.mime_type)
    if args.validate:
        artifact = await service.generate_study_artifact(source)
        return artifact.model_dump()
    return await service.generate_study_material(source)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI and return the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        result = asyncio.run(_run(args))
    except MalformedModelOutputError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        if args.show_raw:
            print(e.raw_text, file=sys.stderr)
        return 1
    except StudyPipelineError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"Could not read input: {e}", file=sys.stderr)
        return 2

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
