"""
Session export formats.

- JSON: every session field verbatim
- CSV: one row per answer plus a trailing display-only "Story" row

CSV fields are always quoted and embedded quotes are doubled, so commas,
quotes and newlines inside answers survive a round trip.
"""

import csv
import io
import json
import logging
from typing import List, Optional, Tuple

from ..session.entities import Answer, Session

logger = logging.getLogger(__name__)

FORMAT_JSON = "json"
FORMAT_CSV = "csv"
SUPPORTED_FORMATS = (FORMAT_JSON, FORMAT_CSV)

CSV_HEADER = ["Question ID", "Answer", "Follow-up Answer", "Skipped"]
STORY_ROW_LABEL = "Story"


def export_json(session: Session) -> str:
    """Structured export of the full session record."""
    return json.dumps(session.to_dict(), ensure_ascii=False, indent=2)


def export_csv(session: Session) -> str:
    """
    Tabular export, one row per answer.

    The trailing row carries the story draft under the fixed label "Story".
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for answer in session.answers:
        writer.writerow([
            answer.question_id,
            answer.answer or "",
            answer.follow_up_answer or "",
            "true" if answer.skipped else "false",
        ])
    writer.writerow([STORY_ROW_LABEL, session.story_draft or "", "", "false"])
    return buffer.getvalue()


def parse_json_export(text: str) -> Session:
    """Rebuild a session from its JSON export."""
    return Session.from_dict(json.loads(text))


def parse_csv_export(text: str) -> Tuple[List[Answer], Optional[str]]:
    """
    Rebuild the answer collection and story draft from a CSV export.

    Returns:
        (answers, story_draft) - story_draft is None when the export had none

    Raises:
        ValueError: If the header does not match the export layout
    """
    rows = list(csv.reader(io.StringIO(text)))
    if not rows or rows[0] != CSV_HEADER:
        raise ValueError("Not a campaign story CSV export")

    body = rows[1:]
    story_draft: Optional[str] = None
    if body and body[-1] and body[-1][0] == STORY_ROW_LABEL:
        story_draft = body[-1][1] or None
        body = body[:-1]

    answers = []
    for row in body:
        if len(row) != len(CSV_HEADER):
            raise ValueError(f"Malformed CSV row: expected {len(CSV_HEADER)} fields, got {len(row)}")
        question_id, answer_text, follow_up, skipped = row
        answers.append(Answer(
            question_id=question_id,
            answer=answer_text,
            follow_up_answer=follow_up or None,
            skipped=skipped.strip().lower() == "true",
        ))
    return answers, story_draft


def export_session(session: Session, fmt: Optional[str] = FORMAT_JSON) -> Tuple[str, str, str]:
    """
    Render a session for download.

    Unrecognized formats fall back to JSON.

    Returns:
        (body, media_type, filename)
    """
    normalized = (fmt or FORMAT_JSON).strip().lower()
    if normalized not in SUPPORTED_FORMATS:
        logger.info(f"[Export] Unknown format {fmt!r}, using json")
        normalized = FORMAT_JSON

    filename = f"campaign-story-{session.session_id}.{normalized}"
    if normalized == FORMAT_CSV:
        return export_csv(session), "text/csv", filename
    return export_json(session), "application/json", filename
