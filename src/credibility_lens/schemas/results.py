"""Pydantic schemas for analysis outcomes.

An analysis ends in exactly one of AnalysisResult or AnalysisError. Callers
tell them apart by the presence of the `error` field.
"""

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, SerializeAsAny


class ContentKind(str, Enum):
    ARTICLE = "article"
    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"


class ErrorKind(str, Enum):
    PRECONDITION_FAILED = "PRECONDITION_FAILED"
    FETCH_FAILED = "FETCH_FAILED"
    MODEL_INVOCATION_FAILED = "MODEL_INVOCATION_FAILED"
    EXTRACTION_FAILED = "EXTRACTION_FAILED"
    VALIDATION_FAILED = "VALIDATION_FAILED"


class FieldFailure(BaseModel):
    field: str  # dotted path, "<root>" for the whole value
    reason: str  # missing, wrong_type, not_allowed, not_finite, invalid
    message: str


class AnalysisResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: ContentKind
    report_name: str
    report: SerializeAsAny[BaseModel]


class AnalysisError(BaseModel):
    model_config = ConfigDict(frozen=True)

    error: ErrorKind
    message: str
    raw_response: Optional[str] = Field(None, description="Unmodified model output that could not be used.")
    failures: List[FieldFailure] = Field(default_factory=list)
