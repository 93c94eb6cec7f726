"""
Campaign Story CLI.

Commands:
- serve: run the HTTP API with uvicorn
- questions: print the question catalog as JSON
- generate: draft a story from a JSON answers file (no server needed)
- export: convert a session JSON export or answers file to json or csv
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

logger = logging.getLogger("campaign_story")


def _load_answers(path: Path):
    """
    Read answers from a JSON file.

    Accepts either a list of answers or an object with an "answers" list
    (a session JSON export works as-is).
    """
    from campaign_story.session.entities import Answer

    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("answers", [])
    if not isinstance(data, list):
        raise ValueError("answers file must contain a list or an object with an 'answers' list")
    for position, item in enumerate(data):
        if not isinstance(item, dict):
            raise ValueError(f"answer #{position + 1} is not an object: {item!r}")
    return [Answer.from_dict(item) for item in data]


def run_serve(args) -> int:
    import uvicorn

    from campaign_story.config import get_settings

    settings = get_settings()
    host = args.host or settings.host
    port = args.port or settings.port
    logger.info(f"[CLI] Serving on {host}:{port}")
    uvicorn.run("campaign_story.api.main:app", host=host, port=port, reload=args.reload)
    return 0


def run_questions(args) -> int:
    from campaign_story.questions import list_questions

    print(json.dumps([q.to_dict() for q in list_questions()], ensure_ascii=False, indent=2))
    return 0


def run_generate(args) -> int:
    from campaign_story.story import StoryGenerator, resolve_tone, tone_from_answers

    path = Path(args.answers)
    if not path.exists():
        logger.error(f"[CLI] Answers file not found: {path}")
        return 1

    try:
        answers = _load_answers(path)
    except (ValueError, KeyError) as e:
        logger.error(f"[CLI] Could not read answers from {path}: {e}")
        return 1

    tone = resolve_tone(args.tone, tone_from_answers(answers))

    logger.info("=" * 80)
    logger.info("[CLI] Story Generation Started")
    logger.info(f"[CLI] Answers: {len(answers)} from {path}")
    logger.info(f"[CLI] Tone: {tone}")
    logger.info("=" * 80)

    generator = StoryGenerator()
    story = generator.generate(tone, answers)

    if args.output:
        Path(args.output).write_text(story, encoding="utf-8")
        logger.info(f"[CLI] Story written to {args.output}")
    else:
        print(story)
    return 0


def run_export(args) -> int:
    from campaign_story.export import export_session, parse_json_export
    from campaign_story.session.entities import Session

    path = Path(args.session)
    if not path.exists():
        logger.error(f"[CLI] Session file not found: {path}")
        return 1

    try:
        text = path.read_text(encoding="utf-8")
        data = json.loads(text)
        if isinstance(data, dict) and "sessionId" in data:
            session = parse_json_export(text)
        else:
            session = Session.create()
            session.answers = _load_answers(path)
    except (ValueError, KeyError) as e:
        logger.error(f"[CLI] Could not read session from {path}: {e}")
        return 1

    body, _, filename = export_session(session, args.format)

    if args.output:
        Path(args.output).write_text(body, encoding="utf-8")
        logger.info(f"[CLI] Export written to {args.output}")
    else:
        sys.stdout.write(body)
        if not body.endswith("\n"):
            sys.stdout.write("\n")
        logger.info(f"[CLI] Exported {filename}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Campaign Story Builder")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", type=str, default=None, help="Bind host (default: HOST or 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port (default: PORT or 3001)")
    serve_parser.add_argument("--reload", action="store_true", default=False, help="Auto-reload on code changes")

    subparsers.add_parser("questions", help="Print the question catalog as JSON")

    generate_parser = subparsers.add_parser("generate", help="Generate a story from a JSON answers file")
    generate_parser.add_argument(
        "--answers",
        type=str,
        required=True,
        help="Path to a JSON list of answers or a session export"
    )
    generate_parser.add_argument(
        "--tone",
        type=str,
        default=None,
        help="Tone override: serious, hopeful, light-hearted, sentimental"
    )
    generate_parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write the story to this file instead of stdout"
    )

    export_parser = subparsers.add_parser("export", help="Convert a session JSON export or answers file")
    export_parser.add_argument(
        "--session",
        type=str,
        required=True,
        help="Path to a session JSON export or a JSON list of answers"
    )
    export_parser.add_argument(
        "--format",
        type=str,
        default="json",
        choices=["json", "csv"],
        help="Output format (default: json)"
    )
    export_parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write the export to this file instead of stdout"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()

    from campaign_story.config import get_settings
    from campaign_story.infra.logging_config import setup_logging

    settings = get_settings()
    setup_logging(settings.log_level, settings.log_dir)

    parser = build_parser()
    args = parser.parse_args(argv)

    commands = {
        "serve": run_serve,
        "questions": run_questions,
        "generate": run_generate,
        "export": run_export,
    }
    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 1
    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
