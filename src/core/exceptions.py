"""
ExplainMyWorld exception hierarchy.

All application-specific exceptions inherit from ExplainMyWorldError,
so the view controller can surface any of them as a plain message.
"""


class ExplainMyWorldError(Exception):
    """Base exception for all ExplainMyWorld client errors."""

    def __init__(
        self,
        detail: str = "Something went wrong",
        code: str = "EXPLAINMYWORLD_ERROR",
    ) -> None:
        self.detail = detail
        self.code = code
        super().__init__(detail)


class PermissionDenied(ExplainMyWorldError):
    """Raised when the capture device refuses microphone access."""

    def __init__(self, detail: str = "Microphone access denied") -> None:
        super().__init__(detail=detail, code="PERMISSION_DENIED")


class ValidationError(ExplainMyWorldError):
    """Raised when a submission is attempted with incomplete input."""

    def __init__(self, detail: str = "image required") -> None:
        super().__init__(detail=detail, code="VALIDATION_ERROR")


class RemoteError(ExplainMyWorldError):
    """Raised when the analysis service fails or returns an unusable payload.

    Categories: "http", "payload", "connection", "timeout", "network".
    """

    def __init__(
        self,
        detail: str = "Request failed",
        status_code: int | None = None,
        category: str = "http",
    ) -> None:
        self.status_code = status_code
        self.category = category
        super().__init__(detail=detail, code="REMOTE_ERROR")


class CaptureAlreadyActiveError(ExplainMyWorldError):
    """Raised when trying to start a capture while one is already recording."""

    def __init__(self) -> None:
        super().__init__(
            detail="A recording is already active",
            code="CAPTURE_ALREADY_ACTIVE",
        )
