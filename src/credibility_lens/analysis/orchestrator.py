"""Analysis orchestration.

One entry point per content kind. Each call checks the request, makes a
single model call, and turns the reply into an AnalysisResult. Every failure
along the way comes back as an AnalysisError; nothing is raised to the caller.
"""

from typing import Dict, Mapping, Optional, Union

from pydantic import BaseModel

from ..config import get_settings
from ..errors import (
    AnalysisFailure,
    ExtractionFailed,
    ModelInvocationFailed,
    PreconditionFailed,
    ValidationFailed,
)
from ..llm.client import ModelCapability, ModelRequest, build_model
from ..llm.extract import extract_json_object
from ..llm.prompts import build_model_request
from ..llm.validate import validate_report
from ..log import get_logger
from ..mlops.tracing import tracer
from ..retrieval.article import ArticleFetcher, article_fetcher
from ..schemas.report import ReportSchema, load_report
from ..schemas.requests import (
    AnalysisRequest,
    ArticleRequest,
    AudioRequest,
    ImageRequest,
    VideoRequest,
)
from ..schemas.results import AnalysisError, AnalysisResult, ContentKind

logger = get_logger(__name__)

Outcome = Union[AnalysisResult, AnalysisError]


def default_reports(article_report: Optional[str] = None) -> Dict[ContentKind, ReportSchema]:
    settings = get_settings()
    return {
        ContentKind.ARTICLE: load_report(article_report or settings.ARTICLE_REPORT),
        ContentKind.IMAGE: load_report("image_verifier"),
        ContentKind.AUDIO: load_report("audio_authenticator"),
        ContentKind.VIDEO: load_report("video_integrity"),
    }


class Orchestrator:
    def __init__(
        self,
        model: ModelCapability,
        fetcher: Optional[ArticleFetcher] = None,
        reports: Optional[Mapping[ContentKind, ReportSchema]] = None,
    ):
        self.model = model
        self.fetcher = fetcher or article_fetcher
        self.reports = dict(default_reports())
        if reports:
            self.reports.update(reports)

        for kind, report in self.reports.items():
            if report.kind != kind:
                raise ValueError(f"Report {report.name} is for {report.kind.value}, not {kind.value}")

    def analyze_article(self, request: ArticleRequest) -> Outcome:
        return self.analyze(request)

    def analyze_image(self, request: ImageRequest) -> Outcome:
        return self.analyze(request)

    def analyze_audio(self, request: AudioRequest) -> Outcome:
        return self.analyze(request)

    def analyze_video(self, request: VideoRequest) -> Outcome:
        return self.analyze(request)

    def analyze(self, request: AnalysisRequest) -> Outcome:
        report = self.reports[request.kind]

        with tracer.span(f"analysis.{request.kind.value}", span_type="CHAIN", attributes={"report": report.name}):
            try:
                self._check_preconditions(request)
                model_request = self._build_model_request(report, request)
                raw = self._invoke(model_request)
                parsed = self._interpret(report, raw)
            except AnalysisFailure as failure:
                logger.warning(f"{report.name} analysis failed: {failure.kind.value}: {failure.message}")
                tracer.trace_outcome(report.name, failure.kind.value)
                return failure.to_error()

            tracer.trace_outcome(report.name, "success")

        logger.info(f"{report.name} analysis succeeded")
        return AnalysisResult(kind=request.kind, report_name=report.name, report=parsed)

    def _check_preconditions(self, request: AnalysisRequest):
        problems = request.precondition_errors()
        if problems:
            raise PreconditionFailed("; ".join(problems))

    def _build_model_request(self, report: ReportSchema, request: AnalysisRequest) -> ModelRequest:
        article_text = None
        if isinstance(request, ArticleRequest) and request.url and request.url.strip():
            article_text = self.fetcher.fetch_text(request.url.strip())
        return build_model_request(report, request, article_text)

    def _invoke(self, model_request: ModelRequest) -> str:
        try:
            with tracer.span("model.generate", span_type="LLM"):
                raw = self.model.generate(model_request)
        except Exception as e:
            logger.exception("Error during AI generation")
            raise ModelInvocationFailed(f"The AI model failed to generate a response: {e}")

        if not isinstance(raw, str):
            raise ModelInvocationFailed(f"The AI model returned {type(raw).__name__} instead of text")
        return raw

    def _interpret(self, report: ReportSchema, raw: str) -> BaseModel:
        try:
            with tracer.span("reply.parse", span_type="PARSER"):
                payload = extract_json_object(raw)
                return validate_report(report, payload)
        except ExtractionFailed:
            logger.error(f"Raw AI response that failed to parse: {raw!r}")
            raise
        except ValidationFailed as failure:
            logger.error(f"Raw AI response that failed validation: {raw!r}")
            raise failure.with_raw_response(raw)


def build_orchestrator() -> Orchestrator:
    """Orchestrator wired to the configured OpenAI model and default reports."""
    return Orchestrator(model=build_model())
