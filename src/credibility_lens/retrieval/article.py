"""Article text retrieval for URL submissions.

Best-effort plain-text extraction of an article's main body, bounded in
length so it fits in a prompt.
"""

from typing import Optional

import httpx

from ..config import get_settings
from ..errors import FetchFailed
from ..log import get_logger
from ..mlops.tracing import tracer, traced_operation
from .extract import extract_content
from .fetch import Fetcher, fetcher as default_fetcher

logger = get_logger(__name__)


class ArticleFetcher:
    def __init__(self, fetcher: Optional[Fetcher] = None, max_chars: Optional[int] = None):
        self.fetcher = fetcher or default_fetcher
        self.max_chars = max_chars or get_settings().FETCH_MAX_CHARS

    @traced_operation("retrieval.article_text", span_type="RETRIEVER")
    def fetch_text(self, url: str) -> str:
        """Return the main text of the page at `url` or raise FetchFailed."""
        try:
            html = self.fetcher.fetch_url(url)
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise FetchFailed(f"Failed to fetch URL: {status} {e.response.reason_phrase}")
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise FetchFailed(f"Failed to fetch URL: {e}")

        data = extract_content(html, url, self.max_chars)
        tracer.trace_retrieval(url=url, char_count=len(data["text"]), truncated=data["truncated"])

        if not data["text"]:
            raise FetchFailed("Could not extract meaningful text content from the URL.")
        if data["truncated"]:
            logger.info(f"Article text from {url} truncated to {self.max_chars} characters")
        return data["text"]


article_fetcher = ArticleFetcher()
