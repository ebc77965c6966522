"""OpenAI client wrapper for multimodal report generation.

The orchestrator only depends on the ModelCapability protocol; OpenAIModel is
the production implementation. It returns the raw reply text: recovering a
JSON object from it is the caller's job.
"""

import json
from typing import Any, Dict, List, Optional, Protocol

from openai import OpenAI
from pydantic import BaseModel

from ..config import get_settings
from ..log import get_logger
from ..mlops.tracing import tracer
from ..schemas.requests import MediaPayload

logger = get_logger(__name__)

# input_audio only understands these two formats
_AUDIO_FORMATS = {
    "audio/wav": "wav",
    "audio/x-wav": "wav",
    "audio/wave": "wav",
    "audio/mpeg": "mp3",
    "audio/mp3": "mp3",
}


class ModelRequest(BaseModel):
    prompt: str
    language: str
    output_schema: Dict[str, Any]
    media: Optional[MediaPayload] = None


class ModelCapability(Protocol):
    def generate(self, request: ModelRequest) -> str:
        ...


def media_part(media: MediaPayload) -> Dict[str, Any]:
    """Chat-completions content part for an inline media payload."""
    mime_type = media.base_mime_type
    if mime_type.startswith("image/"):
        return {"type": "image_url", "image_url": {"url": media.to_data_uri()}}
    if mime_type in _AUDIO_FORMATS:
        return {
            "type": "input_audio",
            "input_audio": {"data": media.to_base64(), "format": _AUDIO_FORMATS[mime_type]},
        }
    # Video and other audio containers go as files; support depends on the backend.
    extension = mime_type.split("/")[-1].split("+")[0]
    return {
        "type": "file",
        "file": {"filename": f"upload.{extension}", "file_data": media.to_data_uri()},
    }


def system_message(request: ModelRequest) -> str:
    schema_dump = json.dumps(request.output_schema, indent=2)
    return (
        "Respond with a single JSON object and nothing else.\n"
        f"Write every free-text value in the language with ISO 639-1 code \"{request.language}\".\n\n"
        f"# Output JSON Schema\n{schema_dump}"
    )


class OpenAIModel:
    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o",
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        json_mode: bool = True,
        client: Optional[OpenAI] = None,
    ):
        # No automatic retries; the caller may resubmit.
        self.client = client or OpenAI(api_key=api_key, base_url=base_url, timeout=timeout, max_retries=0)
        self.model = model
        self.json_mode = json_mode

    def build_messages(self, request: ModelRequest) -> List[Dict[str, Any]]:
        content: List[Dict[str, Any]] = []
        if request.media is not None:
            content.append(media_part(request.media))
        content.append({"type": "text", "text": request.prompt})
        return [
            {"role": "system", "content": system_message(request)},
            {"role": "user", "content": content},
        ]

    def generate(self, request: ModelRequest) -> str:
        kwargs: Dict[str, Any] = {}
        if self.json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        response = self.client.chat.completions.create(
            model=self.model,
            messages=self.build_messages(request),
            **kwargs,
        )
        text = response.choices[0].message.content or ""

        tokens = None
        if response.usage is not None:
            tokens = {
                "prompt_tokens": response.usage.prompt_tokens,
                "completion_tokens": response.usage.completion_tokens,
            }
        tracer.trace_llm_call(model=self.model, prompt=request.prompt, response=text, tokens=tokens)
        logger.debug(f"Model {self.model} replied with {len(text)} characters")
        return text


def build_model() -> OpenAIModel:
    settings = get_settings()
    if not settings.OPENAI_API_KEY:
        raise RuntimeError("OPENAI_API_KEY is not set; add it to the environment or .env to use the OpenAI model")
    return OpenAIModel(
        api_key=settings.OPENAI_API_KEY,
        model=settings.MODEL,
        base_url=settings.OPENAI_BASE_URL,
        timeout=settings.MODEL_TIMEOUT_SECONDS,
        json_mode=settings.MODEL_JSON_MODE,
    )
