"""Text processing utilities for DOIs, titles, dates and keyword lists."""

import html
import re
from datetime import datetime
from typing import Optional

from bs4 import BeautifulSoup
from dateutil import parser as dtparser

# DOI regex pattern: 10.XXXX/... format
DOI_RE = re.compile(r"\b10\.\d{4,9}/[-._;()/:A-Z0-9]+\b", re.IGNORECASE)


def normalize_doi(doi: str) -> str:
    """Normalize DOI by removing URL prefixes and converting to lowercase."""
    doi = doi.strip()
    doi = doi.replace("https://doi.org/", "").replace("http://doi.org/", "")
    doi = doi.replace("https://dx.doi.org/", "").replace("http://dx.doi.org/", "")
    return doi.strip().lower()


def clean_title(text: Optional[str]) -> str:
    """Clean a title rendered as HTML (e.g. WordPress ``title.rendered``).

    Strips tags, decodes entities such as ``&#8211;`` and normalizes
    whitespace.

    Returns:
        Cleaned title string, or "(no title)" if empty
    """
    if not text or not isinstance(text, str):
        return "(no title)"

    text = BeautifulSoup(text, "html.parser").get_text(" ")
    text = html.unescape(text)
    text = " ".join(text.split()).strip()

    return text or "(no title)"


def parse_date(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-ish date/datetime string, returning None when unparseable."""
    if not value:
        return None
    try:
        return dtparser.parse(value)
    except (ValueError, OverflowError):
        return None


def split_authors(authors: Optional[str]) -> list[str]:
    """Split a comma-joined author string, keeping order and dropping blanks."""
    if not authors:
        return []
    return [a.strip() for a in authors.split(",") if a.strip()]


def split_keywords(expertise: Optional[str]) -> list[str]:
    """Split a comma-separated expertise string into lowercase keywords.

    Order, duplicates and empty entries are preserved, so ``"ai,"`` gives
    ``["ai", ""]`` and the empty keyword matches any text.  A non-string
    value yields no keywords.
    """
    if not isinstance(expertise, str):
        return []
    return [part.strip() for part in expertise.lower().split(",")]
