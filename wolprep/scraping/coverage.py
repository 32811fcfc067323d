"""Paragraph coverage: which paragraphs a question or figure refers to.

Study questions are numbered by the paragraphs they cover:

    "12."     single  -> ["12"]
    "5, 6."   double  -> ["5", "6"]
    "7-9."    range   -> ["7", "8", "9"]

Figure captions express the same thing in words, e.g. "(párrafos 7 a 9)".
"""

import re
from dataclasses import dataclass, field
from typing import Optional

from wolprep.config import CAPTION_PARAGRAPH_WORD, CAPTION_DOUBLE_WORD, CAPTION_RANGE_WORD

SINGLE = "single"
DOUBLE = "double"
RANGE = "range"

COVERAGE_TYPES = (SINGLE, DOUBLE, RANGE)

CAPTION_PATTERN = re.compile(
    rf"{CAPTION_PARAGRAPH_WORD}\s(\d+)"
    rf"(?:\s({re.escape(CAPTION_DOUBLE_WORD)}|{re.escape(CAPTION_RANGE_WORD)})\s(\d+))?"
)
PARENTHETICAL = re.compile(r"\(([^)]+)\)")


@dataclass
class ParagraphReference:
    coverage_type: str
    covered: list = field(default_factory=list)


def strip_token(token: str) -> str:
    """Remove the trailing period of a coverage token ("5, 6." -> "5, 6")."""
    token = token.strip()
    return token[:-1] if token.endswith(".") else token


def classify_coverage(token: str) -> str:
    """Classify a coverage token as single, double or range."""
    ref = strip_token(token)
    if "," in ref:
        return DOUBLE
    if "-" in ref:
        return RANGE
    return SINGLE


def expand_range(start, end) -> list:
    """Every paragraph number from start to end inclusive, as strings."""
    return [str(i) for i in range(int(start), int(end) + 1)]


def expand_coverage(coverage_type: str, ref: str) -> list:
    """Materialize the paragraph numbers a coverage reference points to."""
    ref = strip_token(ref)
    if coverage_type == DOUBLE:
        return [p.strip() for p in ref.split(",") if p.strip()]
    if coverage_type == RANGE:
        start, end = (p.strip() for p in ref.split("-", 1))
        return expand_range(start, end)
    return [ref]


def parse_coverage(token: str) -> ParagraphReference:
    coverage_type = classify_coverage(token)
    return ParagraphReference(coverage_type, expand_coverage(coverage_type, token))


def last_parenthetical(text: str) -> str:
    groups = PARENTHETICAL.findall(text or "")
    return groups[-1] if groups else ""


def parse_caption_reference(related: str) -> Optional[ParagraphReference]:
    """Read "párrafos N y M" style text. Returns None when nothing matches."""
    if not related:
        return None
    match = CAPTION_PATTERN.search(related)
    if not match:
        return None

    first, separator, second = match.groups()
    if separator == CAPTION_DOUBLE_WORD:
        return ParagraphReference(DOUBLE, [first, second])
    if separator == CAPTION_RANGE_WORD:
        return ParagraphReference(RANGE, expand_range(first, second))
    return ParagraphReference(SINGLE, [first])
