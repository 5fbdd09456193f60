from typing import Optional


class OpenTokError(Exception):
    """Base error for every failure raised by the SDK."""


class InvalidArgumentError(OpenTokError):
    """Caller-supplied input is malformed or outside the accepted range."""


class SigningError(OpenTokError):
    """The HMAC primitive could not be invoked."""


class RequestError(OpenTokError):
    """A call to the remote service failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code is None:
            return super().__str__()
        return f"[{self.status_code}] {super().__str__()}"
