"""Exception classes for diagram generation."""


class GenerationError(Exception):
    """Base exception for diagram generation errors."""

    pass


class ApiKeyNotConfiguredError(GenerationError):
    """Raised when no API key is configured."""

    def __init__(self, message: str = "No Anthropic API key configured"):
        super().__init__(message)


class GenerationFailedError(GenerationError):
    """Raised when the generation call fails or its response is unusable."""

    def __init__(self, reason: str, status_code: int | None = None):
        self.reason = reason
        self.status_code = status_code
        super().__init__(reason)
