"""HTTP entry points for the presentation layer.

Usage:
    uvicorn credibility_lens.main_api:app
"""

from functools import lru_cache
from typing import Literal, Optional, Union

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from .analysis.orchestrator import Orchestrator, build_orchestrator
from .errors import PreconditionFailed
from .log import setup_logging, get_logger
from .schemas.requests import ArticleRequest, AudioRequest, ImageRequest, MediaPayload, VideoRequest
from .schemas.results import AnalysisError, AnalysisResult, ErrorKind

setup_logging()
logger = get_logger("api")

app = FastAPI(title="Credibility Lens")

_STATUS_BY_ERROR = {
    ErrorKind.PRECONDITION_FAILED: 400,
    ErrorKind.FETCH_FAILED: 502,
    ErrorKind.MODEL_INVOCATION_FAILED: 502,
    ErrorKind.EXTRACTION_FAILED: 502,
    ErrorKind.VALIDATION_FAILED: 502,
}

_MEDIA_REQUESTS = {
    "image": ImageRequest,
    "audio": AudioRequest,
    "video": VideoRequest,
}


class ArticleBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    language: str
    article_text: Optional[str] = Field(None, alias="articleText")
    article_url: Optional[str] = Field(None, alias="articleUrl")
    article_headline: Optional[str] = Field(None, alias="articleHeadline")


class MediaBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    language: str
    data_uri: str = Field(..., alias="dataUri", description="data:<mimetype>;base64,<encoded_data>")


@lru_cache()
def get_orchestrator() -> Orchestrator:
    return build_orchestrator()


def _respond(outcome: Union[AnalysisResult, AnalysisError]) -> JSONResponse:
    if isinstance(outcome, AnalysisError):
        return JSONResponse(status_code=_STATUS_BY_ERROR[outcome.error], content=outcome.model_dump(mode="json"))
    return JSONResponse(status_code=200, content=outcome.model_dump(mode="json"))


@app.get("/healthz")
def healthz():
    return {"status": "ok"}


@app.post("/api/analyze/article")
def analyze_article(body: ArticleBody, orchestrator: Orchestrator = Depends(get_orchestrator)):
    request = ArticleRequest(
        language=body.language,
        text=body.article_text,
        url=body.article_url,
        headline=body.article_headline,
    )
    return _respond(orchestrator.analyze_article(request))


@app.post("/api/analyze/{kind}")
def analyze_media(
    kind: Literal["image", "audio", "video"],
    body: MediaBody,
    orchestrator: Orchestrator = Depends(get_orchestrator),
):
    try:
        media = MediaPayload.from_data_uri(body.data_uri)
    except PreconditionFailed as failure:
        logger.info(f"Rejected {kind} upload: {failure.message}")
        return _respond(failure.to_error())

    request = _MEDIA_REQUESTS[kind](language=body.language, media=media)
    return _respond(orchestrator.analyze(request))
