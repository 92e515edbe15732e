"""End-to-end scenarios through ViewController, AnalysisClient and CaptureSession.

Only the network (MockTransport) and the microphone (FakeDevice) are faked;
everything in between runs for real.
"""

from src.core.models import ViewState
from src.ui.normalizer import PLACEHOLDER


def test_image_only_success(make_controller, sample_image_bytes, sample_result_payload):
    """Scenario A: photo only, service answers -> result with placeholders and 55%."""
    controller = make_controller(body=sample_result_payload)
    controller.select_image(sample_image_bytes, filename="photo.jpg", content_type="image/jpeg")

    assert controller.submit() is True

    sent = controller._handler.requests[0]
    assert b'name="image"; filename="photo.jpg"' in sent.content
    assert b'name="audio"' not in sent.content
    assert b'name="text"' not in sent.content

    assert controller.view is ViewState.result
    assert controller.result.observed == [PLACEHOLDER]
    assert controller.result.likely_causes == ["wet pavement"]
    assert controller.result.confidence_pct == 55
    assert controller.result.caption == "a street"


def test_backend_failure(make_controller, sample_image_bytes):
    """Scenario B: HTTP 500 'model overloaded' -> message verbatim, still on the form."""
    controller = make_controller(status_code=500, text="model overloaded")
    controller.select_image(sample_image_bytes, filename="photo.jpg", content_type="image/jpeg")

    assert controller.submit() is False

    assert controller.error == "model overloaded"
    assert controller.view is ViewState.form
    assert controller.loading is False
    assert controller.image is not None


def test_record_then_reset(make_controller, fake_device):
    """Scenario C: record, stop, reset before submitting -> audio cleared, tracks released."""
    controller = make_controller()
    controller.start_recording()
    fake_device.last.emit(b"\x1aE\xdf\xa3voice")
    controller.stop_recording()
    assert controller.audio is not None

    controller.reset()

    assert controller.audio is None
    assert fake_device.last.released == 1
    assert fake_device.last.active is False
    assert controller.view is ViewState.form
    assert controller._handler.requests == []


def test_full_round_trip_with_voice_and_text(
    make_controller, fake_device, sample_image_bytes, sample_result_payload
):
    """Image + recording + text are all sent, then 'Analyze Another' returns to an empty form."""
    payload = {**sample_result_payload, "confidence": "High", "transcript": "why is it wet"}
    controller = make_controller(body=payload)

    controller.select_image(sample_image_bytes, filename="street.png", content_type="image/png")
    controller.edit_text("  near campus at 5pm  ")
    controller.start_recording()
    fake_device.last.emit(b"chunk-1")
    fake_device.last.emit(b"chunk-2")
    controller.stop_recording()

    assert controller.submit() is True

    sent = controller._handler.requests[0].content
    assert b'name="audio"; filename="recording.webm"' in sent
    assert b"chunk-1chunk-2" in sent
    assert b"near campus at 5pm" in sent
    assert b"  near campus" not in sent
    assert controller.result.confidence_pct == 80
    assert controller.result.transcript == "why is it wet"

    controller.reset()

    assert controller.view is ViewState.form
    assert controller.image is None
    assert controller.previews.live_count == 0
