"""Exception hierarchy for wellness-report."""


class WellnessReportError(Exception):
    """Base exception for all wellness-report errors."""


class ValidationError(WellnessReportError):
    """Raised when a submission is rejected before composition (missing name, nested answers)."""


class UpstreamAnalysisError(WellnessReportError):
    """Raised when the analysis provider fails: timeouts, 5xx, network errors."""


class NonRetryableAnalysisError(UpstreamAnalysisError):
    """Auth errors, bad requests and unknown models: never retried."""


class LogoDecodeError(WellnessReportError):
    """Raised when a logo payload cannot be decoded into an image."""


class RenderError(WellnessReportError):
    """Raised when the document cannot be laid out or serialized."""


class PersistenceError(WellnessReportError):
    """Raised when the report sink cannot be read."""


class RateLimitExceeded(WellnessReportError):
    """Raised when a client exceeds its request budget for the current window."""

    def __init__(self, message: str, retry_after: float = 0.0) -> None:
        super().__init__(message)
        self.retry_after = retry_after
