"""Tests for the capture boundary state machine."""

from unittest.mock import MagicMock

import pytest

from error_capture.application.boundary import CaptureBoundary, FallbackView
from error_capture.application.services import CaptureService
from error_capture.domain.enums import BoundaryState, CaptureOrigin
from error_capture.infrastructure.monitoring import MetricsCollector


class Region:
    """Callable that fails a given number of times, then renders."""

    def __init__(self, failures: int) -> None:
        self.failures = failures
        self.calls = 0

    def __call__(self) -> str:
        self.calls += 1
        if self.calls <= self.failures:
            raise RuntimeError(f"render failed #{self.calls}")
        return "content"


class TestHealthyBoundary:
    def test_renders_region(self, recording_capture) -> None:
        boundary = CaptureBoundary(recording_capture)

        assert boundary.render(lambda: "content") == "content"
        assert boundary.state == BoundaryState.HEALTHY
        assert recording_capture.calls == []

    def test_passes_arguments(self, recording_capture) -> None:
        boundary = CaptureBoundary(recording_capture)
        assert boundary(lambda a, b=0: a + b, 1, b=2) == 3

    def test_requires_a_region(self, recording_capture) -> None:
        with pytest.raises(ValueError):
            CaptureBoundary(recording_capture).render()

    def test_rejects_negative_retries(self, recording_capture) -> None:
        with pytest.raises(ValueError):
            CaptureBoundary(recording_capture, max_retries=-1)


class TestDegradedBoundary:
    def test_failure_is_captured_and_fallback_rendered(self, recording_capture) -> None:
        boundary = CaptureBoundary(recording_capture, name="OrderSummary")

        view = boundary.render(Region(failures=1))

        assert isinstance(view, FallbackView)
        assert view.error.message == "render failed #1"
        assert view.retry_count == 0
        assert view.can_retry is True
        assert boundary.is_degraded

        error, context, origin = recording_capture.calls[0]
        assert isinstance(error, RuntimeError)
        assert origin == CaptureOrigin.BOUNDARY
        assert context["level"] == "component"
        assert context["boundary"] == "OrderSummary"
        assert context["retryCount"] == 0
        assert "render failed #1" in context["componentStack"]

    def test_degraded_render_does_not_call_region(self, recording_capture) -> None:
        region = Region(failures=1)
        boundary = CaptureBoundary(recording_capture)
        boundary.render(region)

        boundary.render(region)

        assert region.calls == 1
        assert len(recording_capture.calls) == 1

    def test_retry_recovers(self, recording_capture) -> None:
        boundary = CaptureBoundary(recording_capture)
        boundary.render(Region(failures=1))

        assert boundary.retry() == "content"
        assert boundary.state == BoundaryState.HEALTHY
        assert boundary.retry_count == 1
        assert boundary.error is None

    def test_fallback_view_retry_is_bound(self, recording_capture) -> None:
        boundary = CaptureBoundary(recording_capture)
        view = boundary.render(Region(failures=1))

        assert view.retry() == "content"

    def test_custom_fallback_receives_error_and_retry(self, recording_capture) -> None:
        received = []
        boundary = CaptureBoundary(recording_capture, fallback=lambda error, retry: received.append((error, retry)) or "oops")

        assert boundary.render(Region(failures=1)) == "oops"
        assert received[0][0].name == "RuntimeError"
        assert received[0][1] == boundary.retry

    def test_on_error_callback(self, recording_capture) -> None:
        on_error = MagicMock()
        boundary = CaptureBoundary(recording_capture, on_error=on_error)
        boundary.render(Region(failures=1))

        exc, info = on_error.call_args.args
        assert isinstance(exc, RuntimeError)
        assert "componentStack" in info

    def test_failing_on_error_is_contained(self, recording_capture) -> None:
        boundary = CaptureBoundary(recording_capture, on_error=MagicMock(side_effect=ValueError("callback bug")))

        assert isinstance(boundary.render(Region(failures=1)), FallbackView)

    def test_page_scope(self, recording_capture) -> None:
        boundary = CaptureBoundary(recording_capture, scope="page")
        boundary.render(Region(failures=1))

        assert recording_capture.calls[0][1]["level"] == "page"


class TestRetryBound:
    def test_hard_reset_after_max_retries(self, recording_capture) -> None:
        hard_reset = MagicMock()
        region = Region(failures=100)
        boundary = CaptureBoundary(recording_capture, hard_reset=hard_reset, max_retries=3)

        boundary.render(region)
        for _ in range(3):
            boundary.retry()

        assert len(recording_capture.calls) == 4
        assert [call[1]["retryCount"] for call in recording_capture.calls] == [0, 1, 2, 3]
        hard_reset.assert_not_called()

        view = boundary.retry()

        hard_reset.assert_called_once()
        assert len(recording_capture.calls) == 4
        assert region.calls == 4
        assert boundary.is_degraded
        assert view.can_retry is False

    def test_without_hard_reset_stays_degraded(self, recording_capture) -> None:
        boundary = CaptureBoundary(recording_capture, max_retries=0)
        boundary.render(Region(failures=5))

        assert isinstance(boundary.retry(), FallbackView)
        assert boundary.is_degraded

    def test_reset_restores_retry_budget(self, recording_capture) -> None:
        region = Region(failures=1)
        boundary = CaptureBoundary(recording_capture, max_retries=0)
        boundary.render(region)

        boundary.reset()

        assert boundary.state == BoundaryState.HEALTHY
        assert boundary.retry_count == 0
        assert boundary.render() == "content"

    def test_records_transitions(self, recording_capture) -> None:
        metrics = MetricsCollector()
        boundary = CaptureBoundary(recording_capture, max_retries=1, metrics=metrics, hard_reset=MagicMock())
        boundary.render(Region(failures=10))
        boundary.retry()
        boundary.retry()

        def sample(transition: str) -> float | None:
            return metrics.registry.get_sample_value(
                "error_capture_boundary_transitions_total", {"scope": "component", "transition": transition}
            )

        assert sample("degraded") == 2.0
        assert sample("retry") == 1.0
        assert sample("hard_reset") == 1.0


class TestWrap:
    def test_wrapped_function_renders_through_boundary(self, recording_capture) -> None:
        boundary = CaptureBoundary(recording_capture)

        @boundary.wrap
        def widget(value: int) -> int:
            if value < 0:
                raise ValueError("negative")
            return value * 2

        assert widget(2) == 4
        assert isinstance(widget(-1), FallbackView)
        assert widget.__name__ == "widget"
        assert len(recording_capture.calls) == 1


def test_boundary_feeds_the_real_ledger(capture_service: CaptureService) -> None:
    boundary = CaptureBoundary(capture_service, name="Checkout", scope="page")
    boundary.render(Region(failures=1))

    entry = capture_service.ledger.list()[0]
    assert entry.context["boundary"] == "Checkout"
    assert entry.context["level"] == "page"
    assert entry.retry_count == 0


class TestCaptureTargets:
    def test_two_argument_capture_callable(self) -> None:
        calls = []

        def capture(error, context) -> None:
            calls.append((error, context))

        boundary = CaptureBoundary(capture, name="Sidebar")
        view = boundary.render(Region(failures=1))

        assert isinstance(view, FallbackView)
        assert str(calls[0][0]) == "render failed #1"
        assert calls[0][1]["boundary"] == "Sidebar"

    def test_failing_capture_still_renders_fallback(self) -> None:
        def capture(error, context) -> None:
            raise RuntimeError("monitor down")

        boundary = CaptureBoundary(capture)

        assert isinstance(boundary.render(Region(failures=1)), FallbackView)
        assert boundary.state == BoundaryState.DEGRADED

    def test_degraded_without_failure_is_an_error(self, recording_capture) -> None:
        boundary = CaptureBoundary(recording_capture)
        boundary._state = BoundaryState.DEGRADED

        with pytest.raises(RuntimeError):
            boundary.render(Region(failures=0))
