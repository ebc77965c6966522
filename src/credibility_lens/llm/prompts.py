"""Prompt assembly for each content kind.

The report descriptor carries the task template; the request adds the
article content (if any) and the media part.
"""

from typing import Optional, Union

from ..schemas.report import ReportSchema
from ..schemas.requests import ArticleRequest, MediaRequest
from .client import ModelRequest
from .validate import output_json_schema


def render_template(report: ReportSchema, language: str) -> str:
    return report.prompt.format(language=language.strip()).strip()


def build_article_prompt(report: ReportSchema, request: ArticleRequest, article_text: Optional[str] = None) -> str:
    sections = [render_template(report, request.language)]

    if request.text and request.text.strip():
        sections.append(f"# News Article Text\n{request.text.strip()}")

    if request.url and request.url.strip():
        sections.append(f"# News Article URL\n{request.url.strip()}")
        if article_text:
            sections.append(f"# Article Text Fetched From URL\n{article_text}")

    if request.headline and request.headline.strip():
        sections.append(f"# News Article Headline\n{request.headline.strip()}")

    return "\n\n".join(sections)


def build_model_request(
    report: ReportSchema,
    request: Union[ArticleRequest, MediaRequest],
    article_text: Optional[str] = None,
) -> ModelRequest:
    if isinstance(request, ArticleRequest):
        prompt = build_article_prompt(report, request, article_text)
        media = None
    else:
        prompt = render_template(report, request.language)
        media = request.media

    return ModelRequest(
        prompt=prompt,
        language=request.language.strip(),
        output_schema=output_json_schema(report),
        media=media,
    )
