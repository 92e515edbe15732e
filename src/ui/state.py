"""
View controller — the client's interaction state machine.

Views: form -> result (successful submit) -> form (reset)

Owns the form fields, the loading flag, the last error and the image preview
handle. Every user or device event is one method; none of them touch the
rendering layer, so the whole flow runs without a display surface.
"""

import logging

from src.core.exceptions import (
    CaptureAlreadyActiveError,
    ExplainMyWorldError,
    PermissionDenied,
)
from src.core.models import (
    AnalysisRequest,
    AnalysisResult,
    MediaAsset,
    MediaKind,
    ResultView,
    ViewState,
)
from src.services.capture import CaptureSession
from src.services.preview import PreviewRegistry
from src.ui.api_client import AnalysisClient, build_request
from src.ui.normalizer import normalize

logger = logging.getLogger(__name__)

MIC_DENIED_NOTICE = "Microphone access denied. You can still upload an audio file."
GENERIC_ERROR = "Something went wrong"


class ViewController:
    """Top-level state machine for one browser session.

    Attributes:
        view: Which screen is active.
        loading: True while a submission is in flight.
        error: Message from the last failed action, if any.
        notice: Non-blocking advisory (e.g. microphone refused).
        image / audio / text: Current form fields.
        result: Normalized result shown on the result screen.
    """

    def __init__(
        self,
        client: AnalysisClient,
        capture: CaptureSession | None = None,
        previews: PreviewRegistry | None = None,
    ) -> None:
        self._client = client
        self.capture = capture
        self.previews = previews or PreviewRegistry()

        self.view = ViewState.form
        self.loading = False
        self.error: str | None = None
        self.error_code: str | None = None
        self.notice: str | None = None

        self.image: MediaAsset | None = None
        self.audio: MediaAsset | None = None
        self.audio_source: str | None = None  # "upload" or "recording"
        self.text = ""

        self.raw_result: AnalysisResult | None = None
        self.result: ResultView | None = None

    # -- helpers --

    @property
    def is_recording(self) -> bool:
        return self.capture is not None and self.capture.is_recording

    @property
    def can_submit(self) -> bool:
        return self.view is ViewState.form and not self.loading

    def _accepts_input(self, event: str) -> bool:
        if self.view is not ViewState.form:
            logger.debug("Ignoring %s outside the form view", event)
            return False
        return True

    def _clear_error(self) -> None:
        self.error = None
        self.error_code = None

    def _set_error(self, exc: ExplainMyWorldError) -> None:
        self.error = exc.detail
        self.error_code = exc.code

    def _release_preview(self) -> None:
        if self.image is not None and self.image.preview is not None:
            self.previews.release(self.image.preview)
            self.image = self.image.model_copy(update={"preview": None})

    # -- field events --

    def select_image(
        self,
        content: bytes,
        filename: str,
        content_type: str = "application/octet-stream",
    ) -> None:
        """Replace the image; the old preview handle is freed first."""
        if not self._accepts_input("select_image"):
            return
        self._clear_error()
        self._release_preview()
        self.image = MediaAsset(
            content=content,
            kind=MediaKind.image,
            filename=filename,
            content_type=content_type,
            preview=self.previews.allocate(content),
        )

    def clear_image(self) -> None:
        if not self._accepts_input("clear_image"):
            return
        self._clear_error()
        self._release_preview()
        self.image = None

    def select_audio(
        self,
        content: bytes | None,
        filename: str = "",
        content_type: str = "application/octet-stream",
    ) -> None:
        """Set (or clear, with ``content=None``) the audio from a file picker."""
        if not self._accepts_input("select_audio"):
            return
        self._clear_error()
        self.notice = None
        if content is None:
            self.audio = None
            self.audio_source = None
            return
        self.audio_source = "upload"
        self.audio = MediaAsset(
            content=content,
            kind=MediaKind.audio,
            filename=filename,
            content_type=content_type,
        )

    def clear_uploaded_audio(self) -> None:
        """The file picker was emptied; drop its audio but keep a recording."""
        if self.audio_source == "upload":
            self.select_audio(None)

    def edit_text(self, text: str) -> None:
        if not self._accepts_input("edit_text"):
            return
        self._clear_error()
        self.text = text

    # -- capture events --

    def start_recording(self) -> bool:
        """Begin a microphone capture. Returns True if recording started.

        A refused microphone leaves a notice and keeps manual upload available.
        """
        if not self._accepts_input("start_recording"):
            return False
        self._clear_error()
        self.notice = None
        if self.capture is None:
            self.notice = MIC_DENIED_NOTICE
            return False
        try:
            self.capture.start()
        except PermissionDenied:
            logger.warning("Microphone access denied; falling back to file upload")
            self.notice = MIC_DENIED_NOTICE
            return False
        except CaptureAlreadyActiveError:
            logger.debug("start_recording while already recording")
            return False
        return True

    def stop_recording(self) -> MediaAsset | None:
        """Finish the capture and store it as the audio field. No-op when idle."""
        if self.capture is None:
            return None
        try:
            asset = self.capture.stop()
        except Exception as exc:
            logger.warning("Capture finalization failed: %s", exc)
            self.error = f"Recording failed: {exc}"
            self.error_code = "CAPTURE_FAILED"
            return None
        if asset is not None and self.view is ViewState.form:
            self.audio = asset
            self.audio_source = "recording"
        return asset

    # -- submission --

    def begin_submit(self) -> AnalysisRequest | None:
        """Gate a submit: returns the request to send, or None if rejected.

        Rejected while loading or outside the form (no queueing). A missing
        image sets the validation error without any network call.
        """
        if not self.can_submit:
            logger.debug("Submit rejected (view=%s, loading=%s)", self.view, self.loading)
            return None
        self._clear_error()
        try:
            request = build_request(self.image, self.audio, self.text)
        except ExplainMyWorldError as exc:
            self._set_error(exc)
            return None
        self.loading = True
        return request

    def complete_submit(self, result: AnalysisResult) -> None:
        self.raw_result = result
        self.result = normalize(result)
        self.view = ViewState.result
        self.loading = False

    def fail_submit(self, message: str, code: str | None = None) -> None:
        """Record a failed attempt; entered fields are kept."""
        self.error = message
        self.error_code = code
        self.loading = False

    def submit(self) -> bool:
        """Validate, send and apply the outcome. Returns True on success."""
        request = self.begin_submit()
        if request is None:
            return False
        try:
            result = self._client.analyze(request)
        except ExplainMyWorldError as exc:
            self.fail_submit(exc.detail, exc.code)
            return False
        except Exception:
            logger.exception("Unexpected failure during analyze")
            self.fail_submit(GENERIC_ERROR)
            return False
        logger.info("Analysis complete (confidence=%r)", result.confidence)
        self.complete_submit(result)
        return True

    # -- reset --

    def reset(self) -> None:
        """Return to an empty form from any state. Safe to call repeatedly."""
        if self.is_recording:
            try:
                self.capture.stop()
            except Exception as exc:
                # stop() has already released the device at this point
                logger.warning("Capture finalization failed during reset: %s", exc)
        self._release_preview()

        self.image = None
        self.audio = None
        self.audio_source = None
        self.text = ""
        self.raw_result = None
        self.result = None
        self._clear_error()
        self.notice = None
        self.view = ViewState.form
        self.loading = False
