"""Capture device backed by a browser recorder widget.

Streamlit's ``st.audio_input`` records in the browser and hands the page the
finished clip. This adapter exposes that clip through the CaptureDevice
interface so the same CaptureSession lifecycle applies.
"""

from src.core.exceptions import PermissionDenied
from src.services.capture.base import CaptureDevice, CaptureStream, ChunkCallback


class AudioInputStream(CaptureStream):
    """Stream whose audio is pushed in by the page via ``feed``."""

    def __init__(self) -> None:
        self._on_chunk: ChunkCallback | None = None
        self._pending = bytearray()
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def begin(self, on_chunk: ChunkCallback) -> None:
        self._on_chunk = on_chunk

    def feed(self, data: bytes) -> None:
        """Queue audio received from the widget until finalization."""
        if self._active:
            self._pending.extend(data)

    def finalize(self) -> None:
        if self._on_chunk is not None and self._pending:
            self._on_chunk(bytes(self._pending))
        self._pending.clear()
        self._on_chunk = None

    def release(self) -> None:
        self._active = False
        self._pending.clear()


class AudioInputDevice(CaptureDevice):
    """Hands out AudioInputStreams; ``allowed=False`` simulates a refusal."""

    def __init__(self, allowed: bool = True) -> None:
        self.allowed = allowed
        self.current: AudioInputStream | None = None

    def request_access(self) -> AudioInputStream:
        if not self.allowed:
            raise PermissionDenied()
        self.current = AudioInputStream()
        return self.current

    def feed(self, data: bytes) -> None:
        """Forward widget audio to the most recently acquired stream."""
        if self.current is not None:
            self.current.feed(data)
