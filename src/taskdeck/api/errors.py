"""Exception hierarchy for the task service client.

Every failure of an outbound call is mapped to exactly one of these types, so
callers can react precisely:

    TaskdeckError (base)
    ├── AuthenticationError  - /login or /signup rejected the identifier/secret
    ├── Unauthorized         - 401 from a guarded endpoint (missing/invalid/expired credential)
    ├── RequestFailed        - any other non-success status
    └── TransportFailure     - the request never reached the server (offline, DNS, timeout)

Only ``Unauthorized`` may lead to the credential being cleared.
"""

from __future__ import annotations

from typing import Any


class TaskdeckError(Exception):
    """Base exception for all client errors.

    Attributes:
        message: Human-readable error description, safe to show to the user.

    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r})"


class AuthenticationError(TaskdeckError):
    """Raised when the authentication service refuses to issue a credential.

    Covers a bad identifier/secret on login and an already existing account on signup.
    """


class Unauthorized(TaskdeckError):
    """Raised when a guarded endpoint answers 401.

    The credential that was sent (if any) must be considered invalid.
    """

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class RequestFailed(TaskdeckError):
    """Raised for any non-success response other than 401.

    Attributes:
        status_code: HTTP status returned by the server.
        response_data: Parsed error body, if it was JSON.

    """

    def __init__(
        self,
        message: str,
        status_code: int,
        response_data: Any = None,
    ) -> None:
        self.status_code = status_code
        self.response_data = response_data
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, status_code={self.status_code})"


class TransportFailure(TaskdeckError):
    """Raised when the request could not be delivered or no response arrived."""
