"""Typed fetch failures surfaced by the fetch clients."""


class FetchError(Exception):
    """Base class for every failure while reading a page from a backend.

    Attributes:
        url (str): The URL that was requested.
    """

    def __init__(self, message: str, url: str = "") -> None:
        super().__init__(message)
        self.url = url


class NetworkError(FetchError):
    """The request did not produce a usable response (connect, timeout, non-2xx status)."""

    def __init__(self, message: str, url: str = "", status_code: int | None = None) -> None:
        super().__init__(message, url=url)
        self.status_code = status_code


class ParseError(FetchError):
    """The response body is not JSON, or is JSON but neither an array nor an object."""
