"""Shared pytest fixtures for the ExplainMyWorld test suite.

Provides a fake capture device, sample media bytes and an AnalysisClient
wired to an in-process ``httpx.MockTransport``.
"""

import json

import httpx
import pytest

from src.core.exceptions import PermissionDenied
from src.services.capture.base import CaptureDevice, CaptureStream
from src.ui.api_client import AnalysisClient

# ---------------------------------------------------------------------------
# Capture fakes
# ---------------------------------------------------------------------------


class FakeStream(CaptureStream):
    """Records lifecycle calls; ``final_chunk`` is flushed on finalize."""

    def __init__(self, final_chunk: bytes = b"", fail_finalize: bool = False) -> None:
        self.final_chunk = final_chunk
        self.fail_finalize = fail_finalize
        self.on_chunk = None
        self.released = 0
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def begin(self, on_chunk) -> None:
        self.on_chunk = on_chunk

    def emit(self, data: bytes) -> None:
        """Simulate the device delivering a chunk."""
        self.on_chunk(data)

    def finalize(self) -> None:
        if self.fail_finalize:
            raise RuntimeError("encoder crashed")
        if self.final_chunk:
            self.on_chunk(self.final_chunk)

    def release(self) -> None:
        self.released += 1
        self._active = False


class FakeDevice(CaptureDevice):
    """Hands out FakeStreams, or refuses access when ``allowed`` is False."""

    def __init__(self, allowed: bool = True, **stream_kwargs) -> None:
        self.allowed = allowed
        self.stream_kwargs = stream_kwargs
        self.streams: list[FakeStream] = []

    def request_access(self) -> FakeStream:
        if not self.allowed:
            raise PermissionDenied()
        stream = FakeStream(**self.stream_kwargs)
        self.streams.append(stream)
        return stream

    @property
    def last(self) -> FakeStream:
        return self.streams[-1]


@pytest.fixture
def fake_device():
    """A capture device that always grants access."""
    return FakeDevice()


@pytest.fixture
def denied_device():
    """A capture device that always refuses access."""
    return FakeDevice(allowed=False)


@pytest.fixture
def make_device():
    """Factory for devices with custom stream behaviour (e.g. ``fail_finalize=True``)."""
    return FakeDevice


# ---------------------------------------------------------------------------
# Media fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_image_bytes():
    """Minimal JPEG-looking payload (SOI marker + padding + EOI marker).

    Returns:
        bytes: Fake image data.
    """
    return b"\xff\xd8\xff\xe0" + b"\x00" * 64 + b"\xff\xd9"


@pytest.fixture
def sample_result_payload():
    """Analysis payload used by the happy-path tests."""
    return {
        "observed": [],
        "likely_causes": ["wet pavement"],
        "why": "rain",
        "confidence": "medium",
        "question": "when?",
        "image_caption": "a street",
    }


# ---------------------------------------------------------------------------
# HTTP fixtures
# ---------------------------------------------------------------------------


class RecordingHandler:
    """MockTransport handler that stores requests and replies with a canned response."""

    def __init__(self, status_code: int = 200, body=None, text: str | None = None) -> None:
        self.status_code = status_code
        self.body = body
        self.text = text
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        if self.body is None:
            return httpx.Response(self.status_code)
        return httpx.Response(self.status_code, content=json.dumps(self.body).encode())


@pytest.fixture
def make_client():
    """Factory: ``make_client(handler)`` or ``make_client(status_code=..., body=...)``."""
    clients: list[AnalysisClient] = []

    def _make(handler=None, **response) -> AnalysisClient:
        if handler is None:
            handler = RecordingHandler(**response)
        client = AnalysisClient(
            base_url="http://test:8000",
            transport=httpx.MockTransport(handler),
        )
        client._handler = handler  # expose for assertions
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()


# ---------------------------------------------------------------------------
# Controller fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def make_controller(make_client, fake_device):
    """Factory: ViewController over a mock-transport client and ``fake_device``.

    Accepts the same arguments as ``make_client``; ``device=`` overrides the
    capture device.
    """
    from src.services.capture import CaptureSession
    from src.ui.state import ViewController

    def _make(handler=None, device=None, **response) -> ViewController:
        client = make_client(handler, **response)
        controller = ViewController(
            client=client,
            capture=CaptureSession(device or fake_device),
        )
        controller._handler = client._handler  # expose for assertions
        return controller

    return _make
