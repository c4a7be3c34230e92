"""Exceptions raised by the Lexia integration clients."""


class APIRequestError(Exception):
    """Raised when a backend API request fails before a response arrives."""

    def __init__(self, method: str, url: str, cause: Exception) -> None:
        self.method = method
        self.url = url
        self.cause = cause
        super().__init__(f"{method} {url} failed: {cause}")


class CentrifugoError(Exception):
    """Raised when a message cannot be published to Centrifugo."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)
