"""HTTP fetching with retry logic.

Fetches web content with retries on transport errors and browser-like headers.
"""

import httpx
from tenacity import retry, stop_after_attempt, wait_fixed, retry_if_exception_type
from ..config import get_settings
from ..log import get_logger

settings = get_settings()
logger = get_logger(__name__)

class Fetcher:
    def __init__(self):
        self.headers = {
            "User-Agent": (
                "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
                "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
            ),
            "Accept": "text/html,application/xhtml+xml",
        }
    
    @retry(
        stop=stop_after_attempt(3),
        wait=wait_fixed(2),
        retry=retry_if_exception_type(httpx.RequestError),
        reraise=True
    )
    def fetch_url(self, url: str) -> str:
        """
        Fetches the content of a URL. Returns text/html content.
        Raises httpx.HTTPStatusError on non-2xx, httpx.RequestError after retries.
        """
        logger.debug(f"GET {url}")
        with httpx.Client(timeout=settings.FETCH_TIMEOUT_SECONDS, follow_redirects=True, headers=self.headers) as client:
            resp = client.get(url)
            resp.raise_for_status()
            return resp.text

fetcher = Fetcher()
