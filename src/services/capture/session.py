"""Capture session lifecycle for a single audio-recording attempt.

Acquires a stream from a CaptureDevice, buffers the chunks it delivers and,
on stop, turns them into one audio MediaAsset before releasing the device.
"""

import logging

from src.core.exceptions import CaptureAlreadyActiveError
from src.core.models import CaptureState, MediaAsset, MediaKind
from src.services.capture.base import CaptureDevice, CaptureStream

logger = logging.getLogger(__name__)

RECORDING_CONTENT_TYPE = "audio/webm"
RECORDING_FILENAME = "recording.webm"


class CaptureSession:
    """Owns one microphone stream and its buffered chunks between start and stop.

    States: idle -> recording -> idle. The chunk buffer is private to the
    session; device events are dispatched into it via ``handle_chunk``.
    """

    def __init__(self, device: CaptureDevice) -> None:
        self._device = device
        self._stream: CaptureStream | None = None
        self._chunks: list[bytes] = []
        self._state = CaptureState.idle

    @property
    def state(self) -> CaptureState:
        return self._state

    @property
    def is_recording(self) -> bool:
        return self._state is CaptureState.recording

    @property
    def buffered_bytes(self) -> int:
        """Number of audio bytes captured so far in the current attempt."""
        return sum(len(c) for c in self._chunks)

    def start(self) -> None:
        """Acquire the microphone and begin buffering.

        Raises:
            PermissionDenied: Access refused; the session stays idle.
            CaptureAlreadyActiveError: A recording is already in progress.
        """
        if self.is_recording:
            raise CaptureAlreadyActiveError()

        # PermissionDenied propagates with the session still idle
        stream = self._device.request_access()

        self._chunks = []
        self._stream = stream
        try:
            stream.begin(self.handle_chunk)
        except Exception:
            self._stream = None
            stream.release()
            raise
        self._state = CaptureState.recording
        logger.info("Capture started")

    def handle_chunk(self, data: bytes) -> None:
        """Device event: a chunk of captured audio is available."""
        if self._stream is None:
            logger.debug("Dropping %d byte chunk delivered while idle", len(data))
            return
        if data:
            self._chunks.append(data)

    def stop(self) -> MediaAsset | None:
        """Finalize the recording and release the device.

        The stream is released even when finalization fails.

        Returns:
            The recorded audio asset, or None if the session was idle.
        """
        stream = self._stream
        if stream is None:
            return None

        try:
            stream.finalize()
        finally:
            stream.release()
            self._stream = None
            self._state = CaptureState.idle

        content = b"".join(self._chunks)
        self._chunks = []
        logger.info("Capture stopped (%d bytes)", len(content))
        return MediaAsset(
            content=content,
            kind=MediaKind.audio,
            filename=RECORDING_FILENAME,
            content_type=RECORDING_CONTENT_TYPE,
        )
