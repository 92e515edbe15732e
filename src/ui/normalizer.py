"""
Result normalization: AnalysisResult -> display-safe ResultView.

Pure functions only; the input result is never modified.
"""

from src.core.models import AnalysisResult, ResultView

PLACEHOLDER = "—"

# Checked in this order; the first keyword found wins.
_CONFIDENCE_LEVELS = (
    ("high", 80),
    ("medium", 55),
    ("low", 30),
)
_DEFAULT_CONFIDENCE_PCT = 50


def confidence_to_pct(confidence: str | None) -> int:
    """Map a free-form confidence label to a bar width in percent.

    >>> confidence_to_pct("HIGH-risk-but-medium-evidence")
    80
    """
    value = (confidence or "").lower()
    for keyword, pct in _CONFIDENCE_LEVELS:
        if keyword in value:
            return pct
    return _DEFAULT_CONFIDENCE_PCT


def has_content(items: list[str] | None) -> bool:
    return bool(items)


def display_items(items: list[str] | None) -> list[str]:
    """Return a copy of ``items``, or a single placeholder entry when empty."""
    return list(items) if has_content(items) else [PLACEHOLDER]


def display_text(value: str | None) -> str:
    return value if value else PLACEHOLDER


def normalize(result: AnalysisResult) -> ResultView:
    """Build the display model shown on the result screen."""
    return ResultView(
        caption=display_text(result.image_caption),
        observed=display_items(result.observed),
        likely_causes=display_items(result.likely_causes),
        why=display_text(result.why),
        confidence_label=display_text(result.confidence),
        confidence_pct=confidence_to_pct(result.confidence),
        question=display_text(result.question),
        transcript=result.transcript or None,
    )
