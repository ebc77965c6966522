"""
MLflow tracing integration for LLM observability.
Provides span-based tracing for analyses, model calls and article retrieval.
"""
import logging
import time
from typing import Optional, Dict, Any, Callable
from functools import wraps
from contextlib import contextmanager

import mlflow

from ..config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


class MLflowTracer:
    """Handles MLflow tracing for LLM observability."""

    def __init__(self):
        self.enabled = settings.MLFLOW_ENABLE_TRACING
        if self.enabled:
            try:
                mlflow.set_tracking_uri(settings.MLFLOW_TRACKING_URI)
                logger.info("MLflow tracing enabled")
            except Exception as e:
                logger.warning(f"Failed to initialize MLflow tracing: {e}")
                self.enabled = False
        else:
            logger.info("MLflow tracing disabled")

    @contextmanager
    def span(
        self,
        name: str,
        span_type: str = "UNKNOWN",
        attributes: Optional[Dict[str, Any]] = None,
        inputs: Optional[Dict[str, Any]] = None
    ):
        """
        Create a traced span for an operation.

        Args:
            name: Name of the span (e.g., "analysis.image", "model.generate")
            span_type: Type of span (e.g., "LLM", "RETRIEVER", "CHAIN", "PARSER")
            attributes: Additional metadata for the span
            inputs: Input data to the operation
        """
        if not self.enabled:
            yield None
            return

        with mlflow.start_span(name=name, span_type=span_type) as span:
            if attributes:
                span.set_attributes(attributes)
            if inputs:
                span.set_inputs(inputs)

            start_time = time.time()
            yield span
            elapsed = time.time() - start_time
            span.set_attribute("latency_ms", int(elapsed * 1000))

    def _annotate_current_span(self, attributes: Dict[str, Any], what: str):
        try:
            current_span = mlflow.get_current_active_span()
            if current_span:
                current_span.set_attributes(attributes)
        except Exception as e:
            logger.warning(f"Failed to trace {what}: {e}")

    def trace_llm_call(
        self,
        model: str,
        prompt: str,
        response: Any,
        tokens: Optional[Dict[str, int]] = None
    ):
        """Log details of an LLM call within the current span."""
        if not self.enabled:
            return

        attributes = {
            "model": model,
            "prompt_length": len(prompt),
            "response_length": len(response) if isinstance(response, str) else 0,
        }
        if tokens:
            attributes.update(tokens)
        self._annotate_current_span(attributes, "LLM call")

    def trace_retrieval(self, url: str, char_count: int, truncated: bool):
        """Log details of an article fetch."""
        if not self.enabled:
            return

        self._annotate_current_span({
            "url": url,
            "char_count": char_count,
            "truncated": truncated,
        }, "retrieval")

    def trace_outcome(self, report_name: str, outcome: str):
        """Log how an analysis ended ("success" or an error kind)."""
        if not self.enabled:
            return

        self._annotate_current_span({
            "report": report_name,
            "outcome": outcome,
        }, "outcome")


def traced_operation(name: str, span_type: str = "CHAIN"):
    """
    Decorator to automatically trace a function as a span.

    Usage:
        @traced_operation("retrieval.article_text", span_type="RETRIEVER")
        def fetch_text(self, url):
            ...
    """
    def decorator(func: Callable):
        @wraps(func)
        def wrapper(*args, **kwargs):
            with tracer.span(name=name, span_type=span_type):
                return func(*args, **kwargs)
        return wrapper
    return decorator


# Global tracer instance
tracer = MLflowTracer()
