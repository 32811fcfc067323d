"""Map article DOM elements to plain records.

Every mapper takes a BeautifulSoup element from the rendered page and
returns a dataclass that serializes straight to JSON.
"""

import re
from dataclasses import dataclass, field
from typing import Optional

from bs4 import BeautifulSoup, Tag

from wolprep.config import SELECTORS
from wolprep.scraping.coverage import (
    ParagraphReference, classify_coverage, expand_coverage, strip_token,
    last_parenthetical, parse_caption_reference,
)
from wolprep.scraping.text import clean_text, trimmed_text, select_text, select_texts, strip_leading

LETTERED_QUESTION = re.compile(r"\b[a-z]\)\s+?\S")
LETTER_MARKER = re.compile(r"\b[a-z]\)\s+?")
REFERENCE = re.compile(r"\(([^)]+)\)")


@dataclass
class Question:
    """A study question and the paragraphs it covers."""

    coverage_type: str            # "single", "double" or "range"
    covered_ref: str              # e.g. "5, 6" (token without its period)
    covered: list                 # e.g. ["5", "6"]
    text: str                     # question text without the coverage token
    logical_count: int = 1        # how many answers the question asks for
    lettered_count: int = 0       # number of "a)", "b)" sub-questions
    lettered_texts: list = field(default_factory=list)
    references: list = field(default_factory=list)  # "(see picture)" notes


@dataclass
class Figure:
    image_alt: str = ""
    caption: str = ""
    related_paragraphs: str = ""
    paragraph_reference: Optional[ParagraphReference] = None
    footnote_description: str = ""


@dataclass
class Supplement:
    title: str
    figures: list = field(default_factory=list)
    contents: str = ""


@dataclass
class TeachBlock:
    title: str = ""
    items: list = field(default_factory=list)


# ─── Paragraphs ───────────────────────────────────────────────────────────────

def paragraph_number(p: Tag) -> str:
    """The paragraph's printed number, "1" when the paragraph has none."""
    return select_text(SELECTORS["paragraph_number"], p) or "1"


def paragraph_text(p: Tag) -> str:
    number = select_text(SELECTORS["paragraph_number"], p)
    return strip_leading(trimmed_text(p), number)


# ─── Questions ────────────────────────────────────────────────────────────────

def parse_question_text(question: str) -> dict:
    """Split lettered sub-questions and pull out parenthetical references."""
    lettered_count = len(LETTERED_QUESTION.findall(question))
    references = REFERENCE.findall(question)

    lettered_texts = []
    if lettered_count:
        for piece in LETTER_MARKER.split(question):
            piece = clean_text(piece)
            if not piece:
                continue
            for ref in references:
                piece = piece.replace(f"({ref})", "")
            lettered_texts.append(clean_text(piece))

    return {
        "text": question,
        "logical_count": lettered_count if lettered_count > 1 else 1,
        "lettered_count": lettered_count,
        "lettered_texts": lettered_texts,
        "references": references,
    }


def map_question(el: Tag) -> Question:
    token = trimmed_text(el.find("strong"))
    question = strip_leading(trimmed_text(el), token)
    coverage_type = classify_coverage(token)
    return Question(
        coverage_type=coverage_type,
        covered_ref=strip_token(token),
        covered=expand_coverage(coverage_type, token),
        **parse_question_text(question),
    )


# ─── Figures & supplements ────────────────────────────────────────────────────

def footnote_text(soup: BeautifulSoup, fn_id: str, drop=".fn-symbol, strong") -> str:
    """Text of ``#footnote<id>`` without its symbol and bold heading."""
    note = soup.find(id=f"footnote{fn_id}")
    if note is None:
        return ""
    note = BeautifulSoup(str(note), "html.parser")
    for el in note.select(drop):
        el.decompose()
    return trimmed_text(note)


def map_figure(figure: Tag, soup: BeautifulSoup) -> Figure:
    img = figure.find("img")
    figcaption = figure.find("figcaption")

    caption = trimmed_text(figcaption)
    related = last_parenthetical(caption)

    description = ""
    fn_ref = figcaption.select_one(".fn") if figcaption is not None else None
    if fn_ref is not None:
        description = footnote_text(soup, fn_ref.get("data-fnid", ""))

    return Figure(
        image_alt=clean_text(img.get("alt")) if img is not None else "",
        caption=caption,
        related_paragraphs=related,
        paragraph_reference=parse_caption_reference(related),
        footnote_description=description,
    )


def map_supplement(box: Tag) -> Supplement:
    return Supplement(
        title=select_text(SELECTORS["supplement_title"], box),
        figures=[clean_text(img.get("alt")) for img in box.select("figure img")],
        contents=select_text(SELECTORS["supplement_content"], box),
    )


def map_teach_block(soup: BeautifulSoup) -> TeachBlock:
    return TeachBlock(
        title=select_text(SELECTORS["teach_title"], soup),
        items=select_texts(SELECTORS["teach_items"], soup),
    )


def preview_text(soup: BeautifulSoup) -> str:
    """The article preview lives in the footnote linked from ``#p5``.

    Its first two characters are the footnote symbol and a space.
    """
    fn_ref = soup.select_one(SELECTORS["preview_footnote"])
    if fn_ref is None:
        return ""
    return select_text(f"#footnote{fn_ref.get('data-fnid', '')}", soup)[2:]
