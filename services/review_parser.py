# services/review_parser.py
import re
from enum import Enum
from typing import Dict, List, Optional, Tuple

from prompts import (
    ARTISTIC_HEADING,
    GOOD_HEADING,
    NEEDS_IMPROVEMENT_HEADING,
    SCORE_HEADING,
    TECHNICAL_HEADING,
    TITLE_HEADING,
)
from schemas import ParsedReview, ReviewResponse
from services.utils import normalize_newlines

TITLE_RE = re.compile(rf"^{TITLE_HEADING}\s*:", re.IGNORECASE)
SCORE_RE = re.compile(r"[0-9]+(?:\.[0-9]+)?\s*/\s*10")
SCORE_PREFIX_RE = re.compile(rf"{SCORE_HEADING}\s*:?", re.IGNORECASE)
BULLET_RE = re.compile(r"^[-•*]\s*")


class Section(Enum):
    GOOD = "good"
    NEEDS_IMPROVEMENT = "needs_improvement"
    TECHNICAL = "technical"
    ARTISTIC = "artistic"


# Checked in order; the first prefix that matches wins.
SECTION_HEADINGS = [
    (GOOD_HEADING.lower(), Section.GOOD),
    (NEEDS_IMPROVEMENT_HEADING.lower(), Section.NEEDS_IMPROVEMENT),
    (TECHNICAL_HEADING.lower(), Section.TECHNICAL),
    (ARTISTIC_HEADING.lower(), Section.ARTISTIC),
]
SCORE_PREFIX = SCORE_HEADING.lower()


def split_title(text: Optional[str]) -> Tuple[Optional[str], str]:
    """
    Pull a leading "Title: ..." line off the model output.
    Returns (title, body). Only the first non-blank line is considered;
    when it is not a title line the text comes back untouched.
    """
    if not text:
        return None, text or ""

    lines = normalize_newlines(text).split("\n")
    for i, line in enumerate(lines):
        stripped = line.strip()
        if not stripped:
            continue
        if not TITLE_RE.match(stripped):
            break
        title = TITLE_RE.sub("", stripped, count=1).strip()
        body = "\n".join(lines[:i] + lines[i + 1:])
        return title or None, body

    return None, text


def _extract_score(line: str) -> Optional[str]:
    m = SCORE_RE.search(line)
    if m:
        return m.group(0)
    rest = SCORE_PREFIX_RE.sub("", line, count=1).strip()
    return rest or None


def _match_heading(line: str) -> Optional[Section]:
    lowered = line.lower()
    for prefix, section in SECTION_HEADINGS:
        if lowered.startswith(prefix):
            return section
    return None


def parse_review(text: Optional[str]) -> ParsedReview:
    """
    Split a (title-stripped) critique into its four bullet lists and score.

    Single pass over the lines: heading lines switch the active section,
    other non-blank lines are appended to it with one bullet marker removed.
    Lines seen while no section is active are dropped. Never raises.
    """
    sections: Dict[Section, List[str]] = {s: [] for s in Section}
    score: Optional[str] = None
    current: Optional[Section] = None

    for raw in normalize_newlines(text or "").split("\n"):
        line = raw.strip()
        if not line:
            continue

        heading = _match_heading(line)
        if heading is not None:
            current = heading
            continue
        if line.lower().startswith(SCORE_PREFIX):
            score = _extract_score(line)
            current = None
            continue

        if current is not None:
            cleaned = BULLET_RE.sub("", line, count=1)
            if cleaned:
                sections[current].append(cleaned)

    return ParsedReview(
        good=sections[Section.GOOD],
        needs_improvement=sections[Section.NEEDS_IMPROVEMENT],
        technical=sections[Section.TECHNICAL],
        artistic=sections[Section.ARTISTIC],
        score=score,
    )


def parse_model_output(text: Optional[str]) -> ReviewResponse:
    title, body = split_title(text)
    return ReviewResponse(title=title, review=body.strip(), parsed=parse_review(body))
