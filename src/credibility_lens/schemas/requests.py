"""Pydantic schemas for analysis requests.

Requests are permissive at construction; precondition_errors() lists what
is wrong so the orchestrator can refuse the request before calling the model.
"""

import base64
import binascii
import re
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field

from ..errors import PreconditionFailed
from .results import ContentKind

# e.g. data:audio/webm;codecs=opus;base64,...
_DATA_URI_RE = re.compile(
    r"^data:(?P<mime>[^;,]+(?:;[^;,=]+=[^;,]*)*);base64,(?P<data>.+)$",
    re.DOTALL,
)


def _present(value: Optional[str]) -> bool:
    return bool(value and value.strip())


class MediaPayload(BaseModel):
    data: bytes
    mime_type: str

    @classmethod
    def from_data_uri(cls, data_uri: str) -> "MediaPayload":
        """Parse 'data:<mimetype>;base64,<encoded_data>'."""
        match = _DATA_URI_RE.match(data_uri.strip())
        if not match:
            raise PreconditionFailed("Invalid data URI: expected 'data:<mimetype>;base64,<encoded_data>'")
        try:
            data = base64.b64decode(match.group("data"), validate=True)
        except (binascii.Error, ValueError) as e:
            raise PreconditionFailed(f"Invalid base64 payload in data URI: {e}")
        return cls(data=data, mime_type=match.group("mime"))

    @property
    def base_mime_type(self) -> str:
        """MIME type without parameters, lowercased ("audio/webm;codecs=opus" -> "audio/webm")."""
        return self.mime_type.split(";", 1)[0].strip().lower()

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    def to_data_uri(self) -> str:
        return f"data:{self.mime_type};base64,{self.to_base64()}"


class ArticleRequest(BaseModel):
    kind: Literal[ContentKind.ARTICLE] = ContentKind.ARTICLE
    language: str = Field(..., description='Two-letter ISO 639-1 code, e.g. "en", "hi".')
    text: Optional[str] = Field(None, description="The full text of the news article.")
    url: Optional[str] = Field(None, description="URL of the article to fetch and analyze.")
    headline: Optional[str] = Field(None, description="The headline of the article.")

    def precondition_errors(self) -> List[str]:
        errors = []
        if not _present(self.language):
            errors.append("language must be a non-empty language code")

        sources = [name for name in ("text", "url", "headline") if _present(getattr(self, name))]
        if len(sources) != 1:
            errors.append(
                f"exactly one of text, url or headline must be provided (got {len(sources)}: {', '.join(sources) or 'none'})"
            )
        if _present(self.url) and not self.url.strip().lower().startswith(("http://", "https://")):
            errors.append(f"url must be an http(s) URL -> {self.url!r}")
        return errors


class MediaRequest(BaseModel):
    language: str = Field(..., description='Two-letter ISO 639-1 code, e.g. "en", "hi".')
    media: MediaPayload

    def precondition_errors(self) -> List[str]:
        errors = []
        if not _present(self.language):
            errors.append("language must be a non-empty language code")
        if not _present(self.media.mime_type):
            errors.append("media must declare a MIME type")
        elif not self.media.base_mime_type.startswith(f"{self.kind.value}/"):
            errors.append(f"{self.kind.value} analysis needs a {self.kind.value}/* MIME type, got {self.media.mime_type!r}")
        if not self.media.data:
            errors.append("media content must not be empty")
        return errors


class ImageRequest(MediaRequest):
    kind: Literal[ContentKind.IMAGE] = ContentKind.IMAGE


class AudioRequest(MediaRequest):
    kind: Literal[ContentKind.AUDIO] = ContentKind.AUDIO


class VideoRequest(MediaRequest):
    kind: Literal[ContentKind.VIDEO] = ContentKind.VIDEO


AnalysisRequest = Union[ArticleRequest, ImageRequest, AudioRequest, VideoRequest]
