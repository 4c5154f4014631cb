"""Exception types raised while fetching canonical listings."""

from typing import Optional


class Up2CodeError(Exception):
    """Base class for errors that abort a check run."""


class FetchError(Up2CodeError):
    """The canonical copy of a listing could not be retrieved.

    Raised for transport-level failures (DNS, refused connections, timeouts).
    ``cause`` holds the underlying ``requests`` exception when there is one.
    """

    def __init__(self, url: str, message: str, cause: Optional[BaseException] = None):
        super().__init__(f"{url}: {message}")
        self.url = url
        self.cause = cause


class StatusError(FetchError):
    """The server answered, but with a non-success HTTP status.

    Kept distinct from a plain FetchError so that a broken listing link can be
    told apart from a listing whose content has merely drifted.
    """

    def __init__(self, url: str, status_code: int, reason: str = ""):
        message = f"HTTP {status_code}"
        if reason:
            message = f"{message} {reason}"
        super().__init__(url, message)
        self.status_code = status_code


__all__ = ["Up2CodeError", "FetchError", "StatusError"]
