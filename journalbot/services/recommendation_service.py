"""Reviewer recommendation by expertise keyword overlap.

Scores every reviewer in a tenant's pool against one paper:

  1) Corpus
       ``(title + " " + authors).lower()``

  2) Keyword hits
       The reviewer's expertise string is split on commas; each trimmed,
       lowercased keyword that occurs **anywhere** in the corpus (plain
       substring test, so "learn" matches "machine learning") adds
       ``KEYWORD_WEIGHT`` points.

  3) Rating bonus
       ``rating × RATING_WEIGHT`` is always added, so well-rated reviewers
       surface even without topical overlap.

  4) Ranking
       Scores are rounded half-up, reviewers at ``<= 0`` are dropped, the
       rest are sorted by score descending and cut to the top N.  Equal
       scores keep the order of the input pool.

This is a pure function over already-loaded rows; no I/O happens here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from journalbot.exceptions import InvalidInputError
from journalbot.models.paper import Paper
from journalbot.models.reviewer import Reviewer
from journalbot.utils.numbers import coerce_rating, round_half_up
from journalbot.utils.text import split_keywords

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
KEYWORD_WEIGHT = 10
RATING_WEIGHT = 2
DEFAULT_LIMIT = 5


@dataclass
class RecommendationEntry:
    """A reviewer annotated with its match score for one paper."""

    reviewer_id: Optional[str]
    first_name: str
    last_name: str
    email: str
    institution: Optional[str]
    score: int
    matched_keywords: list[str] = field(default_factory=list)
    expertise: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "reviewerId": self.reviewer_id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "institution": self.institution,
            "score": self.score,
            "matchedKeywords": list(self.matched_keywords),
            "expertise": self.expertise,
        }


def build_corpus(paper: Paper) -> str:
    """Lowercase search text made of the paper's title and author list."""
    return f"{paper.title or ''} {paper.authors or ''}".lower()


def score_reviewer(corpus: str, reviewer: Reviewer) -> RecommendationEntry:
    """Score a single reviewer against a prepared corpus."""
    matched: list[str] = []
    score = 0.0
    for keyword in split_keywords(reviewer.expertise):
        if keyword in corpus:
            score += KEYWORD_WEIGHT
            matched.append(keyword)

    score += coerce_rating(reviewer.rating) * RATING_WEIGHT

    return RecommendationEntry(
        reviewer_id=reviewer.id,
        first_name=reviewer.first_name,
        last_name=reviewer.last_name,
        email=reviewer.email,
        institution=reviewer.institution,
        score=int(round_half_up(score)),
        matched_keywords=matched,
        expertise=reviewer.expertise if isinstance(reviewer.expertise, str) else "",
    )


def recommend(
    paper: Optional[Paper],
    reviewers: Iterable[Reviewer],
    limit: int = DEFAULT_LIMIT,
) -> list[RecommendationEntry]:
    """Rank *reviewers* for *paper* and return the best *limit* entries.

    Args:
        paper: Paper to find reviewers for (must not be None)
        reviewers: The tenant's full reviewer pool, in a stable order
        limit: Maximum entries to return

    Returns:
        Entries with a positive score, highest score first

    Raises:
        InvalidInputError: If *paper* is None
    """
    if paper is None:
        raise InvalidInputError("A paper is required to recommend reviewers")

    corpus = build_corpus(paper)
    scored = [score_reviewer(corpus, r) for r in reviewers]
    positive = [entry for entry in scored if entry.score > 0]

    # sorted() is stable: ties keep pool order
    ranked = sorted(positive, key=lambda entry: entry.score, reverse=True)
    logger.debug(
        "Scored %d reviewers for paper %s, %d with positive score",
        len(scored),
        paper.id,
        len(positive),
    )
    return ranked[: max(limit, 0)]
