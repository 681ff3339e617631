"""Error kinds raised by the generation pipeline."""


class GenerationError(RuntimeError):
    """Base class for failures that end a single generation request."""

    def __init__(self, message: str, *, reason: str | None = None) -> None:
        super().__init__(message)
        self.reason = reason or message


class PromptBuildError(GenerationError):
    """Raised when a prompt cannot be assembled from a request."""


class MalformedResponse(GenerationError):
    """Raised when the completion text holds no parseable JSON value."""


class UpstreamFailure(GenerationError):
    """Raised when the completion service call itself fails."""
