from enum import Enum


class AnalysisError(Exception):
    """Base exception for analysis (prompting and model calls)."""


class UpstreamErrorKind(str, Enum):
    TIMEOUT = "timeout"
    RATE_LIMITED = "rate_limited"
    SERVER_ERROR = "server_error"
    MALFORMED = "malformed"


class UpstreamError(AnalysisError):
    """Raised when the completion service (or storage fetch) fails."""

    def __init__(self, kind: UpstreamErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind

    @property
    def retryable(self) -> bool:
        return self.kind in (UpstreamErrorKind.RATE_LIMITED, UpstreamErrorKind.TIMEOUT)
