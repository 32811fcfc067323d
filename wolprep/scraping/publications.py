"""Extract whole publications from a loaded WOL page.

Layout is read from an HTML snapshot with BeautifulSoup; tooltips are read
from the live page, so every extractor takes a ``reader_for`` callable that
returns the TooltipReader for a given container.

Supported publications:
    w    study article (Watchtower)
    bt   book chapter
    mwb  midweek meeting workbook talk
"""

import re
import json
import logging
from dataclasses import dataclass, field, asdict
from typing import Callable, Optional

from bs4 import BeautifulSoup

from wolprep.config import SELECTORS
from wolprep.errors import CitationError
from wolprep.scraping.citations import (
    BIBLE, PUBLICATION, CitationData, CiteCounter, build_citation_data,
)
from wolprep.scraping.mappers import (
    TeachBlock,
    map_figure, map_question, map_supplement, map_teach_block,
    paragraph_number, paragraph_text, preview_text,
)
from wolprep.scraping.text import select_text, select_texts

logger = logging.getLogger(__name__)

LEADING_NUMBER = re.compile(r"^\d+?\W")


@dataclass
class Paragraph:
    number: str
    text: str
    citation_data: CitationData


@dataclass
class Section:
    title: str
    paragraphs: list = field(default_factory=list)   # Paragraph
    questions: list = field(default_factory=list)    # Question
    figures: list = field(default_factory=list)      # Figure
    supplements: list = field(default_factory=list)  # Supplement


@dataclass
class StudyArticle:
    article_num: str
    title: str
    sub_titles: list
    main_cite: str
    preview: str
    body: list                 # Section
    teach_block: TeachBlock


@dataclass
class BookChapter:
    chapter_num: str
    title: str
    sub_titles: list
    opening_content: str
    theme_scripture: str
    sections: list             # Section


@dataclass
class MainPoint:
    sub_title: str
    citation_data: CitationData


@dataclass
class SpeechMaterial:
    period: str
    title: str
    figures: list              # Figure
    main_points: list          # MainPoint


def to_json(record) -> dict:
    return asdict(record)


def incomplete_containers(record) -> int:
    """How many paragraphs or talk points kept partial citation data."""
    if isinstance(record, SpeechMaterial):
        return sum(not mp.citation_data.complete for mp in record.main_points)
    sections = record.body if isinstance(record, StudyArticle) else record.sections
    return sum(not p.citation_data.complete for s in sections for p in s.paragraphs)



# ─── Sections ─────────────────────────────────────────────────────────────────

def _dump_partial(paragraphs: list) -> None:
    """Log what was extracted so far so a failed run can be finished by hand."""
    logger.info("partial paragraphs so far:\n%s",
                json.dumps([asdict(p) for p in paragraphs], indent=2, ensure_ascii=False))


def extract_sections(soup: BeautifulSoup, counter: CiteCounter,
                     reader_for: Callable, fetch_reference: Optional[Callable] = None) -> list:
    """Map every ``.bodyTxt .section``.

    ``reader_for(section_index, paragraph_index)`` gives the TooltipReader of
    that paragraph. A paragraph whose citations fail keeps its partial
    citation data and the next paragraph is processed as usual.
    """
    logger.debug("extracting body data")
    section_tags = soup.select(SELECTORS["sections"])
    sections = []

    for i, section in enumerate(section_tags):
        logger.debug("scraping section %d of %d", i + 1, len(section_tags))

        p_tags = section.select(SELECTORS["paragraphs"])
        paragraphs = []
        for j, p in enumerate(p_tags):
            logger.debug("scraping paragraph %d of %d", j + 1, len(p_tags))
            try:
                citation_data = build_citation_data(p, reader_for(i, j), counter, fetch_reference)
            except CitationError as e:
                logger.error("section %d paragraph %d: %s", i + 1, j + 1, e)
                _dump_partial(paragraphs)
                citation_data = e.partial
            paragraphs.append(Paragraph(
                number=paragraph_number(p),
                text=paragraph_text(p),
                citation_data=citation_data,
            ))

        sections.append(Section(
            title=select_text("h2", section),
            paragraphs=paragraphs,
            questions=[map_question(q) for q in section.select(SELECTORS["questions"])],
            figures=[map_figure(f, soup) for f in section.select(SELECTORS["figures"])],
            supplements=[map_supplement(b) for b in section.select(SELECTORS["supplements"])],
        ))
    logger.debug("sections were extracted")
    return sections


# ─── Publications ─────────────────────────────────────────────────────────────

def read_study_article(soup: BeautifulSoup, counter: CiteCounter, reader_for: Callable,
                       fetch_reference: Optional[Callable] = None) -> StudyArticle:
    return StudyArticle(
        article_num=select_text("#p1", soup),
        title=select_text("#p2", soup),
        sub_titles=select_texts(SELECTORS["sub_titles"], soup),
        main_cite=select_text("#p3", soup),
        preview=preview_text(soup),
        body=extract_sections(soup, counter, reader_for, fetch_reference),
        teach_block=map_teach_block(soup),
    )


def read_book_chapter(soup: BeautifulSoup, counter: CiteCounter, reader_for: Callable,
                      fetch_reference: Optional[Callable] = None) -> BookChapter:
    return BookChapter(
        chapter_num=select_text("#p1", soup),
        title=select_text("#p2", soup),
        sub_titles=select_texts(SELECTORS["sub_titles"], soup),
        opening_content=select_text("#p3", soup),
        theme_scripture=select_text("#p4", soup),
        sections=extract_sections(soup, counter, reader_for, fetch_reference),
    )


def read_speech_material(soup: BeautifulSoup, counter: CiteCounter, reader_for: Callable,
                         fetch_reference: Optional[Callable] = None) -> SpeechMaterial:
    """Workbook talk: every link of a sub-title is a citation.

    ``reader_for(point_index)`` gives the TooltipReader of that sub-title.
    Links inside both Bible and publication tooltips are expanded.
    """
    area = soup.select_one(SELECTORS["speech_area"])
    if area is None:
        raise ValueError(f"Speech area {SELECTORS['speech_area']} not found on page")

    main_points = []
    sub_titles = area.select(SELECTORS["speech_sub_titles"])
    for i, sub_title in enumerate(sub_titles):
        logger.debug("scraping sub-title %d of %d", i + 1, len(sub_titles))
        try:
            citation_data = build_citation_data(
                sub_title, reader_for(i), counter, fetch_reference,
                link_selector="a", expand_nested=(BIBLE, PUBLICATION),
            )
        except CitationError as e:
            logger.error("sub-title %d: %s", i + 1, e)
            logger.info("partial main points so far:\n%s", json.dumps(
                [asdict(mp) for mp in main_points], indent=2, ensure_ascii=False))
            citation_data = e.partial
        main_points.append(MainPoint(sub_title=citation_data.raw_text, citation_data=citation_data))
    logger.debug("main points were extracted")

    return SpeechMaterial(
        period=select_text(SELECTORS["period"], soup),
        title=LEADING_NUMBER.sub("", select_text("h3", area), count=1).strip(),
        figures=[map_figure(f, soup) for f in area.select(SELECTORS["speech_figures"])],
        main_points=main_points,
    )


# ─── Live page ────────────────────────────────────────────────────────────────

def snapshot(page, wait_for: str) -> BeautifulSoup:
    page.wait_for_selector(wait_for)
    logger.info("%s was found", wait_for)
    return BeautifulSoup(page.content(), "html.parser")


def paragraph_readers(page, surface) -> Callable:
    from wolprep.scraping.browser import PlaywrightTooltipReader

    section_handles = page.query_selector_all(SELECTORS["sections"])

    def reader_for(i, j):
        p_handle = section_handles[i].query_selector_all(SELECTORS["paragraphs"])[j]
        return PlaywrightTooltipReader(surface, p_handle)

    return reader_for


def extract_study_article(page, surface, counter, fetch_reference) -> StudyArticle:
    soup = snapshot(page, SELECTORS["article"])
    return read_study_article(soup, counter, paragraph_readers(page, surface), fetch_reference)


def extract_book_chapter(page, surface, counter, fetch_reference) -> BookChapter:
    soup = snapshot(page, SELECTORS["article"])
    return read_book_chapter(soup, counter, paragraph_readers(page, surface), fetch_reference)


def extract_speech_material(page, surface, counter, fetch_reference) -> SpeechMaterial:
    from wolprep.scraping.browser import PlaywrightTooltipReader

    soup = snapshot(page, SELECTORS["speech_area"])
    area_handle = page.query_selector(SELECTORS["speech_area"])
    point_handles = area_handle.query_selector_all(SELECTORS["speech_sub_titles"])

    def reader_for(i):
        return PlaywrightTooltipReader(surface, point_handles[i], link_selector="a")

    return read_speech_material(soup, counter, reader_for, fetch_reference)
