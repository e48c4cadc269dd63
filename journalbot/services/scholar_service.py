"""Google Scholar indexing check for a single paper.

Google Scholar has no API and blocks most automated requests, so the
check is best-effort: the search page for ``"<title>" <doi>`` is fetched
and counted as a hit when it contains result blocks.  When the request
fails the outcome is **simulated** (papers with a ``10.5555`` test DOI
are always found, others with probability 1/2).  Simulated results are
placeholder data and not reproducible unless *rng* is seeded.
"""

import logging
import random
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

import requests
from bs4 import BeautifulSoup

from journalbot.models.paper import Paper

logger = logging.getLogger(__name__)

SCHOLAR_SEARCH_URL = "https://scholar.google.com/scholar?q={query}"
RESULT_SELECTOR = ".gs_r.gs_or.gs_scl"
SIMULATED_DOI_PREFIX = "10.5555"
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


@dataclass
class VerificationResult:
    """Outcome of one Scholar check."""

    is_indexed: bool
    scholar_url: str
    simulated: bool = False

    @property
    def indexing_status(self) -> str:
        return "INDEXED" if self.is_indexed else "NOT_FOUND"


class ScholarVerifier:
    """Checks whether a paper shows up in Google Scholar search results."""

    def __init__(self, timeout: float = 5.0, rng: Optional[random.Random] = None):
        """Initialize verifier.

        Args:
            timeout: Request timeout in seconds
            rng: Random source for the simulated fallback
        """
        self.timeout = timeout
        self._rng = rng or random.Random()
        self._headers = {"User-Agent": USER_AGENT}

    @staticmethod
    def search_url(paper: Paper) -> str:
        """Scholar search URL for the paper's quoted title and DOI."""
        return SCHOLAR_SEARCH_URL.format(query=quote(f'"{paper.title}" {paper.doi}', safe=""))

    @staticmethod
    def count_results(page: str) -> int:
        """Number of search result blocks in a Scholar results page."""
        soup = BeautifulSoup(page, "html.parser")
        return len(soup.select(RESULT_SELECTOR))

    def verify(self, paper: Paper) -> VerificationResult:
        """Check *paper* against Scholar, simulating the answer if the request fails."""
        url = self.search_url(paper)
        logger.info("Verifying indexing for paper: %s (DOI: %s)", paper.title, paper.doi)

        try:
            response = requests.get(url, headers=self._headers, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.warning(
                "Direct Google Scholar check blocked or failed (%s); simulating result", e
            )
            return self._simulate(paper, url)

        is_indexed = self.count_results(response.text) > 0
        return VerificationResult(is_indexed=is_indexed, scholar_url=url if is_indexed else "")

    def _simulate(self, paper: Paper, url: str) -> VerificationResult:
        is_indexed = SIMULATED_DOI_PREFIX in (paper.doi or "") or self._rng.random() > 0.5
        return VerificationResult(
            is_indexed=is_indexed,
            scholar_url=url if is_indexed else "",
            simulated=True,
        )
