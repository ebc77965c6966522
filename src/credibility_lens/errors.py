"""Failures raised inside the analysis stages.

Stages raise AnalysisFailure subclasses; the orchestrator turns them into
AnalysisError values with to_error(), so nothing escapes to the caller.
"""

from typing import List, Optional

from .schemas.results import AnalysisError, ErrorKind, FieldFailure


class AnalysisFailure(Exception):
    kind: ErrorKind

    def __init__(
        self,
        message: str,
        raw_response: Optional[str] = None,
        failures: Optional[List[FieldFailure]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.raw_response = raw_response
        self.failures = list(failures or [])

    def to_error(self) -> AnalysisError:
        return AnalysisError(
            error=self.kind,
            message=self.message,
            raw_response=self.raw_response,
            failures=self.failures,
        )


class PreconditionFailed(AnalysisFailure):
    kind = ErrorKind.PRECONDITION_FAILED


class FetchFailed(AnalysisFailure):
    kind = ErrorKind.FETCH_FAILED


class ModelInvocationFailed(AnalysisFailure):
    kind = ErrorKind.MODEL_INVOCATION_FAILED


class ExtractionFailed(AnalysisFailure):
    kind = ErrorKind.EXTRACTION_FAILED

    def __init__(self, message: str, raw_response: str):
        super().__init__(message, raw_response=raw_response)


class ValidationFailed(AnalysisFailure):
    kind = ErrorKind.VALIDATION_FAILED

    def __init__(self, failures: List[FieldFailure], raw_response: Optional[str] = None):
        fields = ", ".join(f.field for f in failures)
        super().__init__(f"Model reply does not match the report shape: {fields}", raw_response, failures)

    def with_raw_response(self, raw_response: str) -> "ValidationFailed":
        return ValidationFailed(self.failures, raw_response=raw_response)
