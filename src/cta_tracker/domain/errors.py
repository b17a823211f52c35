"""Domain errors."""


class ValidationError(ValueError):
    """A required input is missing or malformed."""


class UpstreamUnavailable(RuntimeError):
    """A third-party provider call failed or returned an unexpected payload.

    The message is safe to log: it never contains credentials.
    """

    def __init__(self, provider: str, reason: str, status_code: int | None = None) -> None:
        """Initialize with the provider name, a short reason and an optional HTTP status."""
        self.provider = provider
        self.reason = reason
        self.status_code = status_code
        status = f" (status {status_code})" if status_code is not None else ""
        super().__init__(f"{provider} unavailable{status}: {reason}")
