import trafilatura
from typing import Dict, Any


def extract_content(html: str, url: str, max_chars: int) -> Dict[str, Any]:
    """
    Extracts main text from HTML, dropping navigation, ads, comments and scripts.
    Returns dict with 'text', 'url' and 'truncated'.
    """
    extracted = trafilatura.extract(
        html,
        url=url,
        include_comments=False,
        include_tables=True,
        favor_recall=True,
    )
    text = (extracted or "").strip()

    truncated = len(text) > max_chars
    if truncated:
        text = text[:max_chars]

    return {
        "text": text,
        "url": url,
        "truncated": truncated,
    }
