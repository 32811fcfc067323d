"""Citation resolver: turn inline scripture links into markdown footnotes.

For a container (a paragraph, a talk sub-title) holding citation links:

    "Lea Juan 3:16 y Rom. 5:8."

each link gets the next number of a run-wide counter and its tooltip text
is read, giving

    Lea Juan 3:16 [^1] y Rom. 5:8 [^2].
    ---
    [^1]: Porque Dios amó tanto al mundo ...
    [^2]: Pero Dios nos muestra su amor ...

Bible tooltips can hold cross-reference links of their own. Those are
fetched from the reference-lookup endpoint, numbered from the same counter,
marked inside the first-level text and listed after a second ``---`` line.
"""

import re
import itertools
import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from bs4 import BeautifulSoup, Tag

from wolprep.config import (
    CITATION_LINK_SELECTOR, FOOTNOTE_LINK_SELECTOR,
    BIBLE_CITATION_CLASS, PUBLICATION_CITATION_CLASS,
)
from wolprep.errors import CitationError, ReferenceLookupError, TooltipError
from wolprep.scraping.text import collapse_ws, trimmed_text

logger = logging.getLogger(__name__)

DELIMITER = "\n---\n"
FOOTNOTE_LINE = re.compile(r"^\[\^(\d+)\]: (.*)$", re.MULTILINE)
BIBLE = "bible"
PUBLICATION = "publication"

LEADING_VERSE_NUMBER = re.compile(r"^\d+?\W")
CROSS_REF_MARKERS = re.compile(r"[+*]")


# ─── Records ──────────────────────────────────────────────────────────────────

@dataclass
class CitationLink:
    link_text: str
    link_href: str
    cite_num: int


@dataclass
class NestedCitation:
    """A citation found inside another citation's tooltip."""

    cite_num: int
    link: CitationLink
    cited_text: str


@dataclass
class TooltipCitation:
    cite_num: int
    link: CitationLink
    cited_text: str
    link_text_with_ref: str
    is_bible_citation: bool = False
    is_publication_citation: bool = False
    nested: list = field(default_factory=list)  # NestedCitation


@dataclass
class CitationData:
    """A container's text in its plain and annotated forms."""

    raw_text: str
    text_with_refs_only: str
    text_with_refs_and_footnotes: str
    text_with_refs_and_footnotes_2_levels: str
    citations: list = field(default_factory=list)  # TooltipCitation
    complete: bool = True


# ─── Numbering ────────────────────────────────────────────────────────────────

class CiteCounter:
    """Hands out footnote numbers for a whole run.

    One counter is created per process run and passed to every extraction,
    so numbers never repeat across paragraphs or sections.
    """

    def __init__(self, start: int = 1):
        self._numbers = itertools.count(start)
        self.last = start - 1

    def next(self) -> int:
        self.last = next(self._numbers)
        return self.last


# ─── Tooltips ─────────────────────────────────────────────────────────────────

class TooltipReader:
    """Opens the tooltip of a container's i-th citation link.

    Subclasses must implement read(index) -> str, returning the inner HTML
    of the tooltip content, and only return once the tooltip is closed again.
    Implementations raise TooltipError when the surface does not respond.
    """

    def read(self, index: int) -> str:
        raise NotImplementedError


def footnote_marker(label: str, cite_num: int) -> str:
    return f"{label} [^{cite_num}]" if label else f"[^{cite_num}]"


def _first_child_classes(content: BeautifulSoup) -> list:
    first = next((c for c in content.children if isinstance(c, Tag)), None)
    return first.get("class", []) if first is not None else []


def resolve_tooltip(html: str, link: CitationLink, counter: CiteCounter,
                    fetch_reference: Optional[Callable[[str], str]] = None,
                    expand_nested=(BIBLE,)) -> TooltipCitation:
    """Build a TooltipCitation from tooltip HTML read for ``link``.

    Links nested in the tooltip are resolved through ``fetch_reference`` when
    the tooltip kind is listed in ``expand_nested``, otherwise dropped.
    """
    content = BeautifulSoup(html or "", "html.parser")
    classes = _first_child_classes(content)
    is_bible = BIBLE_CITATION_CLASS in classes
    is_publication = PUBLICATION_CITATION_CLASS in classes

    for a in content.select(FOOTNOTE_LINK_SELECTOR):
        a.decompose()

    nested = []
    nested_links = content.select(CITATION_LINK_SELECTOR)
    kind = BIBLE if is_bible else PUBLICATION if is_publication else None
    if kind in expand_nested and fetch_reference is not None:
        for a in nested_links:
            nested_link = CitationLink(
                link_text=trimmed_text(a),
                link_href=a.get("href", ""),
                cite_num=counter.next(),
            )
            logger.debug("expanding nested citation [^%d] %s",
                         nested_link.cite_num, nested_link.link_href)
            cited = fetch_reference(nested_link.link_href)
            label = CROSS_REF_MARKERS.sub("", nested_link.link_text).strip()
            a.replace_with(footnote_marker(label, nested_link.cite_num))
            nested.append(NestedCitation(nested_link.cite_num, nested_link, cited))
    else:
        for a in nested_links:
            a.decompose()

    cited_text = collapse_ws(content.get_text())
    if is_bible:
        cited_text = CROSS_REF_MARKERS.sub("", LEADING_VERSE_NUMBER.sub("", cited_text, count=1))
        cited_text = collapse_ws(cited_text)

    return TooltipCitation(
        cite_num=link.cite_num,
        link=link,
        cited_text=cited_text,
        link_text_with_ref=footnote_marker(link.link_text, link.cite_num),
        is_bible_citation=is_bible,
        is_publication_citation=is_publication,
        nested=nested,
    )


# ─── Annotated text ───────────────────────────────────────────────────────────

def add_refs(raw_text: str, citations: list) -> str:
    """Suffix each link's text with its marker.

    Replacement is by first textual match, so two links with the same
    visible text both annotate the first occurrence.
    """
    text = raw_text
    for c in citations:
        if c.link.link_text:
            text = text.replace(c.link.link_text, c.link_text_with_ref, 1)
    return text


def render_footnotes(citations: list) -> str:
    return "".join(f"[^{c.cite_num}]: {c.cited_text}\n" for c in citations)


def render_nested_footnotes(citations: list) -> str:
    return "\n".join(
        f"[^{n.cite_num}]: {n.cited_text}" for c in citations for n in c.nested
    )


def assemble(raw_text: str, citations: list, complete: bool = True) -> CitationData:
    refs_only = add_refs(raw_text, citations)
    with_footnotes = refs_only + DELIMITER + render_footnotes(citations)
    nested = render_nested_footnotes(citations)
    two_levels = with_footnotes + (f"---\n{nested}\n" if nested else "")
    return CitationData(
        raw_text=raw_text,
        text_with_refs_only=refs_only,
        text_with_refs_and_footnotes=with_footnotes,
        text_with_refs_and_footnotes_2_levels=two_levels,
        citations=citations,
        complete=complete,
    )


def build_citation_data(container: Tag, reader: TooltipReader, counter: CiteCounter,
                        fetch_reference: Optional[Callable[[str], str]] = None,
                        link_selector: str = CITATION_LINK_SELECTOR,
                        expand_nested=(BIBLE,)) -> CitationData:
    """Resolve every citation link of ``container`` in source order.

    Raises CitationError carrying the partial CitationData when a tooltip or
    a nested lookup fails; the container's remaining links are abandoned.
    """
    raw_text = trimmed_text(container)
    links = container.select(link_selector)
    citations = []

    for index, a in enumerate(links):
        link = CitationLink(
            link_text=trimmed_text(a),
            link_href=a.get("href", ""),
            cite_num=counter.next(),
        )
        try:
            html = reader.read(index)
            citations.append(
                resolve_tooltip(html, link, counter, fetch_reference, expand_nested))
        except (TooltipError, ReferenceLookupError) as e:
            partial = assemble(raw_text, citations, complete=False)
            raise CitationError(
                f"Citation {index + 1} of {len(links)} ({link.link_text!r}) failed: {e}",
                partial,
            ) from e
        logger.debug("citation [^%d] %s resolved", link.cite_num, link.link_text)

    return assemble(raw_text, citations)


# ─── Reading annotated text back ──────────────────────────────────────────────

def parse_footnotes(text: str) -> dict:
    """Map footnote number -> text for every ``[^N]: text`` line."""
    return {int(num): body for num, body in FOOTNOTE_LINE.findall(text or "")}


def split_annotated_text(text: str):
    """Split annotated text into (body, first-level block, second-level block)."""
    parts = (text or "").split(DELIMITER, 2)
    parts += [""] * (3 - len(parts))
    body, first, second = parts
    return body, first.strip("\n"), second.strip("\n")
