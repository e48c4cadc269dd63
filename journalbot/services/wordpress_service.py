"""WordPress REST client that imports a journal's posts as papers.

Posts are read from ``{wordpress_url}/wp-json/wp/v2/posts``.  Journal
sites rarely expose DOIs in post metadata, so each imported paper gets a
synthetic DOI ``10.5555/<journal code>.<post id>``.  When the site cannot
be reached two **simulated** posts are returned instead, so a sync on a
development setup still produces rows.
"""

import logging
import random
import string
from datetime import datetime, timezone
from typing import Any, Optional

import httpx

from journalbot.models.journal import Journal
from journalbot.models.paper import Paper
from journalbot.utils.text import clean_title, parse_date

logger = logging.getLogger(__name__)

POSTS_PATH = "/wp-json/wp/v2/posts"
SYNTHETIC_DOI_PREFIX = "10.5555"
IMPORTED_AUTHOR = "Imported Author"
TIMEOUT = 5.0


class WordPressSync:
    """Fetches posts from a journal's WordPress site."""

    def __init__(
        self,
        timeout: float = TIMEOUT,
        per_page: int = 10,
        rng: Optional[random.Random] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize client.

        Args:
            timeout: Request timeout in seconds
            per_page: Number of posts requested per sync
            rng: Random source for simulated posts
            transport: Optional httpx transport (e.g. ``httpx.MockTransport``)
        """
        self.timeout = timeout
        self.per_page = per_page
        self._rng = rng or random.Random()
        self._transport = transport

    def posts_url(self, journal: Journal) -> str:
        base = (journal.wordpress_url or "").rstrip("/")
        return f"{base}{POSTS_PATH}?_embed&per_page={self.per_page}"

    async def fetch_posts(self, journal: Journal) -> list[dict[str, Any]]:
        """Return the journal's latest posts, or simulated posts if the site fails."""
        url = self.posts_url(journal)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url)
                response.raise_for_status()
                posts = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("WP API call failed, using simulated posts: %s", e)
            return self.simulated_posts(journal)

        if not isinstance(posts, list):
            logger.warning("WP API returned %s instead of a post list", type(posts).__name__)
            return self.simulated_posts(journal)
        return posts

    def simulated_posts(self, journal: Journal) -> list[dict[str, Any]]:
        """Two placeholder posts shaped like WordPress REST responses."""
        now = datetime.now(timezone.utc).isoformat()
        base = (journal.wordpress_url or "").rstrip("/")
        return [
            {
                "id": self._rng.randrange(1000),
                "title": {
                    "rendered": f"Decarbonization in {journal.name} - Vol {self._rng.randrange(10)}"
                },
                "date": now,
                "link": f"{base}/paper-{self._slug()}",
                "excerpt": {"rendered": "An abstract about environmental science..."},
            },
            {
                "id": self._rng.randrange(1000),
                "title": {"rendered": f"Computational Methods for {journal.name}"},
                "date": now,
                "link": f"{base}/paper-{self._slug()}",
                "excerpt": {"rendered": "Deep learning applications in indexing..."},
            },
        ]

    def _slug(self) -> str:
        return "".join(self._rng.choice(string.ascii_lowercase + string.digits) for _ in range(6))

    @staticmethod
    def to_paper(journal: Journal, post: dict[str, Any]) -> Paper:
        """Map one WordPress post to a PENDING paper of *journal*."""
        title = post.get("title")
        rendered = title.get("rendered") if isinstance(title, dict) else title
        published = parse_date(post.get("date"))
        return Paper(
            title=clean_title(rendered),
            doi=f"{SYNTHETIC_DOI_PREFIX}/{journal.code.lower()}.{post.get('id')}",
            authors=IMPORTED_AUTHOR,
            journal_id=journal.id or "",
            tenant_id=journal.tenant_id,
            pub_date=published.isoformat() if published else None,
            indexing_status="PENDING",
        )

    def to_papers(self, journal: Journal, posts: list[dict[str, Any]]) -> list[Paper]:
        return [self.to_paper(journal, post) for post in posts if isinstance(post, dict)]
