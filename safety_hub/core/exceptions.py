"""
Domain exceptions.

Every exception carries a short title and a user-facing message; the API
layer turns them into a notification the browser shows as a toast.
"""

from typing import Optional


class SafetyHubError(Exception):
    """Base class for all errors surfaced to the user."""

    status_code = 400
    title = "Error"

    def __init__(self, message: str, title: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if title:
            self.title = title


class ValidationError(SafetyHubError):
    """Input rejected locally before any collaborator call."""

    status_code = 400


class NotAuthenticatedError(SafetyHubError):
    status_code = 401


class NotAuthorizedError(SafetyHubError):
    status_code = 403


class NotFoundError(SafetyHubError):
    status_code = 404


class CollaboratorError(SafetyHubError):
    """An external collaborator (auth, store, storage) failed."""

    status_code = 502


class AuthError(CollaboratorError):
    status_code = 401


class StoreError(CollaboratorError):
    pass


class UploadError(CollaboratorError):
    pass
