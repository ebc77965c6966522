"""JSON object extraction from free-form model replies.

Models are asked for bare JSON but may wrap it in a markdown fence or add
prose around it. Strategies are tried in a fixed order and the first one
that decodes to an object wins:

1. the whole (stripped) reply
2. the first ```json fenced block
3. the span from the first '{' to the last '}'
"""

import json
import re
from typing import Any, Dict, Optional

from ..errors import ExtractionFailed
from ..log import get_logger

logger = get_logger(__name__)

_FENCE_RE = re.compile(r"```json[ \t]*\r?\n(.*?)\r?\n?[ \t]*```", re.DOTALL | re.IGNORECASE)


def _decode(candidate: str, raw: str, strategy: str) -> Optional[Dict[str, Any]]:
    """Decode one candidate. None means the strategy did not succeed."""
    try:
        value = json.loads(candidate)
    except (ValueError, RecursionError):
        return None
    if not isinstance(value, dict):
        raise ExtractionFailed(
            f"Expected a JSON object, got {type(value).__name__} ({strategy})",
            raw_response=raw,
        )
    logger.debug(f"Extracted JSON object via {strategy}")
    return value


def extract_json_object(text: str) -> Dict[str, Any]:
    """
    Recover a single JSON object from a model reply.

    Raises ExtractionFailed carrying the unmodified reply when no strategy
    yields an object. JSON that decodes to an array or scalar is rejected
    outright rather than searched for an inner object.
    """
    stripped = text.strip()
    if stripped:
        value = _decode(stripped, text, "direct")
        if value is not None:
            return value

    match = _FENCE_RE.search(text)
    if match:
        value = _decode(match.group(1), text, "fenced block")
        if value is not None:
            return value

    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end != -1 and start < end:
        value = _decode(text[start:end + 1], text, "brace span")
        if value is not None:
            return value

    raise ExtractionFailed("No JSON object found in the model reply", raw_response=text)
