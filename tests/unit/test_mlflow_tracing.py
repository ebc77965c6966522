"""Tests for MLflow tracing functionality."""
import pytest
from unittest.mock import Mock, patch
from credibility_lens.mlops.tracing import MLflowTracer


@pytest.fixture
def mock_settings_enabled():
    """Mock settings with tracing enabled."""
    with patch('credibility_lens.mlops.tracing.settings') as mock:
        mock.MLFLOW_ENABLE_TRACING = True
        mock.MLFLOW_TRACKING_URI = "http://localhost:5000"
        yield mock


@pytest.fixture
def mock_settings_disabled():
    """Mock settings with tracing disabled."""
    with patch('credibility_lens.mlops.tracing.settings') as mock:
        mock.MLFLOW_ENABLE_TRACING = False
        yield mock


class TestMLflowTracerEnabled:
    """Tests for MLflowTracer when enabled."""

    @patch('credibility_lens.mlops.tracing.mlflow')
    def test_tracer_initialization_enabled(self, mock_mlflow, mock_settings_enabled):
        tracer = MLflowTracer()

        assert tracer.enabled is True
        mock_mlflow.set_tracking_uri.assert_called_once_with("http://localhost:5000")

    @patch('credibility_lens.mlops.tracing.mlflow')
    def test_initialization_failure_disables_tracing(self, mock_mlflow, mock_settings_enabled):
        mock_mlflow.set_tracking_uri.side_effect = RuntimeError("bad uri")
        tracer = MLflowTracer()
        assert tracer.enabled is False

    @patch('credibility_lens.mlops.tracing.mlflow')
    def test_span_creation(self, mock_mlflow, mock_settings_enabled):
        """Test span is created with correct parameters."""
        tracer = MLflowTracer()

        mock_span = Mock()
        mock_mlflow.start_span.return_value.__enter__.return_value = mock_span

        with tracer.span("analysis.image", "CHAIN", {"report": "image_verifier"}, {"language": "en"}) as span:
            assert span is mock_span

        call_kwargs = mock_mlflow.start_span.call_args[1]
        assert call_kwargs['name'] == "analysis.image"
        assert call_kwargs['span_type'] == "CHAIN"
        mock_span.set_attributes.assert_called_once_with({"report": "image_verifier"})
        mock_span.set_inputs.assert_called_once_with({"language": "en"})

    @patch('credibility_lens.mlops.tracing.mlflow')
    @patch('credibility_lens.mlops.tracing.time')
    def test_span_tracks_latency(self, mock_time, mock_mlflow, mock_settings_enabled):
        tracer = MLflowTracer()

        mock_span = Mock()
        mock_mlflow.start_span.return_value.__enter__.return_value = mock_span
        mock_time.time.side_effect = [1000.0, 1001.5]

        with tracer.span("model.generate", "LLM"):
            pass

        mock_span.set_attribute.assert_called_once_with("latency_ms", 1500)

    @patch('credibility_lens.mlops.tracing.mlflow')
    def test_trace_llm_call(self, mock_mlflow, mock_settings_enabled):
        tracer = MLflowTracer()

        mock_span = Mock()
        mock_mlflow.get_current_active_span.return_value = mock_span

        tracer.trace_llm_call(
            model="gpt-4o",
            prompt="test prompt",
            response='{"verdict": "Uncertain"}',
            tokens={"prompt_tokens": 100, "completion_tokens": 50}
        )

        attributes = mock_span.set_attributes.call_args[0][0]
        assert attributes["model"] == "gpt-4o"
        assert attributes["prompt_length"] == len("test prompt")
        assert attributes["response_length"] == len('{"verdict": "Uncertain"}')
        assert attributes["prompt_tokens"] == 100
        assert attributes["completion_tokens"] == 50

    @patch('credibility_lens.mlops.tracing.mlflow')
    def test_trace_retrieval_and_outcome(self, mock_mlflow, mock_settings_enabled):
        tracer = MLflowTracer()

        mock_span = Mock()
        mock_mlflow.get_current_active_span.return_value = mock_span

        tracer.trace_retrieval(url="https://example.com", char_count=1200, truncated=False)
        tracer.trace_outcome("article_credibility", "EXTRACTION_FAILED")

        first, second = [c[0][0] for c in mock_span.set_attributes.call_args_list]
        assert first == {"url": "https://example.com", "char_count": 1200, "truncated": False}
        assert second == {"report": "article_credibility", "outcome": "EXTRACTION_FAILED"}

    @patch('credibility_lens.mlops.tracing.mlflow')
    def test_annotation_errors_are_logged_not_raised(self, mock_mlflow, mock_settings_enabled):
        tracer = MLflowTracer()
        mock_mlflow.get_current_active_span.side_effect = RuntimeError("no backend")

        tracer.trace_outcome("image_verifier", "success")


class TestMLflowTracerDisabled:
    """Tests for MLflowTracer when disabled."""

    @patch('credibility_lens.mlops.tracing.mlflow')
    def test_span_is_noop(self, mock_mlflow, mock_settings_disabled):
        tracer = MLflowTracer()

        with tracer.span("analysis.audio", "CHAIN") as span:
            assert span is None

        mock_mlflow.set_tracking_uri.assert_not_called()
        mock_mlflow.start_span.assert_not_called()

    @patch('credibility_lens.mlops.tracing.mlflow')
    def test_exceptions_pass_through_disabled_span(self, mock_mlflow, mock_settings_disabled):
        tracer = MLflowTracer()
        with pytest.raises(ValueError):
            with tracer.span("reply.parse", "PARSER"):
                raise ValueError("boom")

    @patch('credibility_lens.mlops.tracing.mlflow')
    def test_trace_helpers_are_noops(self, mock_mlflow, mock_settings_disabled):
        tracer = MLflowTracer()
        tracer.trace_llm_call(model="gpt-4o", prompt="p", response="r")
        tracer.trace_retrieval(url="u", char_count=1, truncated=False)
        tracer.trace_outcome("r", "success")
        mock_mlflow.get_current_active_span.assert_not_called()
