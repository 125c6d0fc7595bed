"""Exceptions raised while obtaining robot description text."""

from typing import Optional


class RetrievalError(Exception):
    """Description text could not be obtained from a locator."""

    def __init__(self, message: str, locator: Optional[str] = None) -> None:
        super().__init__(message)
        self.locator = locator


class RetrievalUnavailable(RetrievalError):
    """The environment has no way to retrieve this locator."""


class RetrievalFailed(RetrievalError):
    """Retrieval was attempted and returned a non-success outcome."""

    def __init__(self, locator: str, status: Optional[int], reason: str) -> None:
        if status is None:
            message = f"Failed to fetch robot description from {locator}: {reason}"
        else:
            message = f"Failed to fetch robot description from {locator}: {status} {reason}"
        super().__init__(message, locator)
        self.status = status
        self.reason = reason
