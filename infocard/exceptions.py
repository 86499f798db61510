"""Custom exceptions for the info card service."""


class InfoCardError(Exception):
    """Base exception for the info card service.

    ``status_code`` is the HTTP status the API layer answers with, and
    ``message`` is the text that is safe to show to a client.
    """

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidInputError(InfoCardError):
    """Raised when the request shape is wrong (no url/text, both, no provider)."""

    status_code = 400


class EmptyContentError(InfoCardError):
    """Raised when no usable text could be obtained from the source."""

    status_code = 400


class ExtractionError(InfoCardError):
    """Raised when fetching or rendering a page fails."""

    pass


class ProviderError(InfoCardError):
    """Raised for unsupported providers, transport failures and non-2xx replies."""

    def __init__(self, message: str, provider: str = "", status_code: int | None = None):
        self.provider = provider
        self.upstream_status = status_code
        super().__init__(message)


class ResponseFormatError(InfoCardError):
    """Raised when a model reply cannot be parsed into a card.

    The raw reply is kept on the exception for logging; it never reaches the client.
    """

    def __init__(self, reason: str, raw_text: str = ""):
        self.reason = reason
        self.raw_text = raw_text
        super().__init__("Failed to parse the AI response into a card")
