"""Utility functions."""

from journalbot.utils.numbers import coerce_rating, percentage, round_half_up
from journalbot.utils.text import (
    clean_title,
    normalize_doi,
    parse_date,
    split_authors,
    split_keywords,
)

__all__ = [
    "clean_title",
    "coerce_rating",
    "normalize_doi",
    "parse_date",
    "percentage",
    "round_half_up",
    "split_authors",
    "split_keywords",
]
