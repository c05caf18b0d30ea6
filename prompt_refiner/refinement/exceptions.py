class RefinementError(Exception):
    """Raised when a refinement cannot be produced."""


class GatewayError(RefinementError):
    """Raised when the completion gateway call fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GatewayConfigurationError(GatewayError):
    """Raised when the gateway is missing credentials or settings. No request is sent."""


class GatewayRateLimitError(GatewayError):
    """Raised when the gateway answers HTTP 429."""


class GatewayQuotaError(GatewayError):
    """Raised when the gateway answers HTTP 402 (credits exhausted)."""


class GatewayNetworkError(GatewayError):
    """Raised when the gateway cannot be reached or the transport times out."""


class ResponseParseError(RefinementError):
    """Raised when the model output is not valid JSON after cleanup."""
