"""Text helpers for scraped HTML."""

import re
from typing import Optional

from bs4 import Tag

NBSP = "\u00a0"


def clean_text(text) -> str:
    """Trim and replace non-breaking spaces. Non-strings become ''."""
    if not isinstance(text, str):
        return ""
    return text.strip().replace(NBSP, " ")


def collapse_ws(text: str) -> str:
    """Clean and squeeze every whitespace run, newlines included, to one space."""
    return re.sub(r"\s+", " ", clean_text(text)).strip()


def trimmed_text(el: Optional[Tag]) -> str:
    """Visible text of an element, cleaned. Missing elements give ''."""
    if el is None:
        return ""
    return clean_text(el.get_text())


def select_text(selector: str, context: Tag) -> str:
    return trimmed_text(context.select_one(selector))


def select_texts(selector: str, context: Tag) -> list:
    return [trimmed_text(el) for el in context.select(selector)]


def strip_leading(text: str, prefix: str) -> str:
    """Drop the first ``"<prefix> "`` occurrence, as the site lays out numbers."""
    if not prefix:
        return text
    return text.replace(f"{prefix} ", "", 1)
