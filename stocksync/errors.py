"""Failure taxonomy shared by views, mutations and the API client."""

from enum import Enum

from pydantic import BaseModel

SESSION_EXPIRED_MESSAGE = "Your session has expired. Please log in again."
NOT_LOGGED_IN_MESSAGE = "You must be logged in to view this data. Please log in again."
CONNECTION_FAILED_MESSAGE = (
    "Could not connect to the server. Please check your connection and try again."
)


class FailureKind(str, Enum):
    NO_CREDENTIAL = "NoCredential"
    AUTH_EXPIRED = "AuthExpired"
    SERVER_ERROR = "ServerError"
    NETWORK_ERROR = "NetworkError"
    VALIDATION_ERROR = "ValidationError"


class Failure(BaseModel):
    """Why a fetch or mutation did not succeed, with a human-readable message."""

    kind: FailureKind
    message: str
    status_code: int | None = None
    detail: str | None = None  # raw response body, when there was one

    @property
    def notifies(self) -> bool:
        """Validation errors stay on the form; everything else is shown to the user."""
        return self.kind is not FailureKind.VALIDATION_ERROR


def no_credential() -> Failure:
    return Failure(kind=FailureKind.NO_CREDENTIAL, message=NOT_LOGGED_IN_MESSAGE)


def validation_error(message: str) -> Failure:
    return Failure(kind=FailureKind.VALIDATION_ERROR, message=message)
