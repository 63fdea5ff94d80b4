"""
Error taxonomy.

Every failure raised by the API clients, the credential layer and the
settings reconcilers is one of these.
"""

from typing import Optional


class PlatsyncError(Exception):
    """Base class for all platsync errors"""


class NetworkError(PlatsyncError):
    """Transport-level failure calling a remote API"""


class AuthError(PlatsyncError):
    """401/403-class response from a remote API"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ValidationError(PlatsyncError):
    """Caller-supplied data failed a local check before any network call"""


class NotFoundError(PlatsyncError):
    """An expected entity (project, role key) is missing"""


class RemoteStateError(PlatsyncError):
    """Remote API answered with a non-2xx status the caller cannot interpret"""

    def __init__(self, message: str, status_code: int, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
