from typing import Optional


class LeaderboardError(Exception):
    pass


class ValidationError(LeaderboardError):
    """Request parameters are missing or unusable (HTTP 400)."""


class UpstreamError(LeaderboardError):
    """
    A dialog-tbot call returned a non-success status or could not be made.

    status_code is None when no HTTP response was received.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
