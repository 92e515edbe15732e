"""
Pydantic v2 models shared by the capture, submission and view layers.

Media — MediaKind, MediaAsset
Capture / view — CaptureState, ViewState
Analysis — AnalysisRequest, AnalysisResult, ResultView
"""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ---------------------------------------------------------------------------
# Media
# ---------------------------------------------------------------------------


class MediaKind(StrEnum):
    """Declared kind of a media asset."""

    image = "image"
    audio = "audio"


class MediaAsset(BaseModel):
    """A binary payload plus the metadata needed to upload and preview it."""

    content: bytes
    kind: MediaKind
    filename: str
    content_type: str = "application/octet-stream"
    preview: str | None = None  # Handle issued by PreviewRegistry

    @property
    def size(self) -> int:
        return len(self.content)


# ---------------------------------------------------------------------------
# Capture / view
# ---------------------------------------------------------------------------


class CaptureState(StrEnum):
    """Possible states for a capture session."""

    idle = "idle"
    recording = "recording"


class ViewState(StrEnum):
    """Which screen the client currently renders."""

    form = "form"
    result = "result"


# ---------------------------------------------------------------------------
# Analysis
# ---------------------------------------------------------------------------


class AnalysisRequest(BaseModel):
    """Validated input for one ``POST /analyze`` call."""

    image: MediaAsset
    audio: MediaAsset | None = None
    text: str | None = None  # Already trimmed; None when blank


class AnalysisResult(BaseModel):
    """Structured payload returned by the analysis service.

    Absent or null fields fall back to empty values so that a partial
    payload still renders. Unknown fields are ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    observed: list[str] = Field(default_factory=list)
    likely_causes: list[str] = Field(default_factory=list)
    why: str = ""
    confidence: str = ""  # Usually "high" / "medium" / "low", treated as opaque
    question: str = ""
    image_caption: str = ""
    transcript: str | None = None

    @field_validator("observed", "likely_causes", mode="before")
    @classmethod
    def _none_to_empty_list(cls, value):
        return [] if value is None else value

    @field_validator("why", "confidence", "question", "image_caption", mode="before")
    @classmethod
    def _none_to_empty_str(cls, value):
        return "" if value is None else value


class ResultView(BaseModel):
    """Display-ready rendition of an AnalysisResult (see ``normalize``)."""

    model_config = ConfigDict(frozen=True)

    caption: str
    observed: list[str]
    likely_causes: list[str]
    why: str
    confidence_label: str
    confidence_pct: int
    question: str
    transcript: str | None = None
