"""
Synchronous HTTP client for the ExplainMyWorld analysis service.

Uses ``httpx.Client`` (sync) because Streamlit scripts run synchronously.
Also hosts the submission builder that validates form input and turns it
into a multipart ``POST /analyze`` body.
"""

import logging

import httpx
import streamlit as st
from pydantic import ValidationError as PydanticValidationError

from src.core.exceptions import RemoteError, ValidationError
from src.core.models import AnalysisRequest, AnalysisResult, MediaAsset

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://127.0.0.1:8000"
GENERIC_FAILURE = "Request failed"
HEALTH_TIMEOUT = 5.0  # Sidebar probe; independent of request_timeout


# ---------------------------------------------------------------------------
# Submission builder
# ---------------------------------------------------------------------------


def build_request(
    image: MediaAsset | None,
    audio: MediaAsset | None = None,
    text: str | None = None,
) -> AnalysisRequest:
    """Validate form input and assemble an AnalysisRequest.

    Args:
        image: The selected image (required).
        audio: Recorded or uploaded audio, if any.
        text: Free-text context; whitespace-only counts as absent.

    Raises:
        ValidationError: If no image is present.
    """
    if image is None:
        raise ValidationError("image required")
    trimmed = (text or "").strip()
    return AnalysisRequest(image=image, audio=audio, text=trimmed or None)


def build_multipart(request: AnalysisRequest) -> tuple[dict, dict]:
    """Return ``(files, data)`` for httpx: image always, audio and text if present."""
    files: dict = {
        "image": (request.image.filename, request.image.content, request.image.content_type),
    }
    if request.audio is not None:
        files["audio"] = (
            request.audio.filename,
            request.audio.content,
            request.audio.content_type,
        )
    data: dict = {}
    if request.text:
        data["text"] = request.text
    return files, data


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


class AnalysisClient:
    """Thin synchronous wrapper around httpx for calling the analysis service.

    Each ``analyze`` call is a single attempt: no retry, no queueing.
    Failures are raised as ``RemoteError`` carrying a message fit for display.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float | None = 120.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            base_url: Base URL of the analysis service.
            timeout: Per-request timeout in seconds; ``None`` or 0 waits forever.
            transport: Optional httpx transport (tests inject ``MockTransport``).
        """
        self._base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            base_url=self._base_url,
            timeout=timeout or None,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    def _send(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Execute an HTTP request, translating transport failures to RemoteError.

        Non-2xx responses are returned as-is; status handling is up to the caller.
        """
        try:
            return getattr(self._client, method)(path, **kwargs)
        except httpx.ConnectError:
            raise RemoteError(
                f"Analysis service is not reachable at {self._base_url}.",
                category="connection",
            ) from None
        except httpx.TimeoutException:
            raise RemoteError(
                "Request timed out. The service may be overloaded.",
                category="timeout",
            ) from None
        except httpx.HTTPError as exc:
            raise RemoteError(f"Network error: {exc}", category="network") from None

    # -- analyze --

    def analyze(self, request: AnalysisRequest) -> AnalysisResult:
        """Send one ``POST /analyze`` and parse the result.

        Raises:
            RemoteError: Non-2xx status (body text verbatim), or a 2xx body
                that is not a valid AnalysisResult.
        """
        files, data = build_multipart(request)
        resp = self._send("post", "/analyze", files=files, data=data or None)

        if not resp.is_success:
            logger.warning("Analyze failed with HTTP %s", resp.status_code)
            raise RemoteError(
                resp.text or GENERIC_FAILURE,
                status_code=resp.status_code,
                category="http",
            )

        try:
            return AnalysisResult.model_validate(resp.json())
        except (ValueError, PydanticValidationError) as exc:
            logger.warning("Analyze returned an unparseable payload: %s", exc)
            raise RemoteError(
                "The analysis service returned an invalid response.",
                status_code=resp.status_code,
                category="payload",
            ) from exc

    # -- health --

    def check_connection(self) -> tuple[bool, str]:
        """Check if the service is reachable. Returns (ok, message)."""
        try:
            resp = self._send("get", "/health", timeout=HEALTH_TIMEOUT)
        except RemoteError as exc:
            return False, exc.detail
        if resp.is_success:
            return True, "Connected"
        return False, f"HTTP {resp.status_code}"

    def close(self) -> None:
        self._client.close()


@st.cache_resource
def get_api_client(
    base_url: str = DEFAULT_BASE_URL,
    timeout: float | None = 120.0,
) -> AnalysisClient:
    """Return a cached AnalysisClient, keyed by base_url and timeout.

    Uses Streamlit's ``cache_resource`` to persist the client across reruns.
    """
    return AnalysisClient(base_url=base_url, timeout=timeout)
