"""
Error taxonomy shared by the identity module and the upstream collaborators.

Every error carries a short, user-facing message and the HTTP status it maps
to. The API layer renders them as ``{"error": message}``.
"""

from fastapi import status


class SidebarError(Exception):
    """Base class for errors that are safe to show to the client."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str = "", status_code: int = 0):
        self.message = message or self.default_message
        if status_code:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(SidebarError):
    """Missing or malformed input; the client can correct it."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class AuthenticationError(SidebarError):
    """Bad credentials or token; the client must re-authenticate."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class ConflictError(SidebarError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Email already registered"


class NotFoundError(SidebarError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "User not found"


class UpstreamError(SidebarError):
    """
    A third-party API (Anthropic, JobTread) failed.

    ``credential_invalid`` marks failures caused by a rejected API key so the
    client can send the user to Settings instead of asking them to retry.
    """

    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "Upstream service error"

    def __init__(self, message: str = "", credential_invalid: bool = False):
        super().__init__(
            message,
            status.HTTP_401_UNAUTHORIZED if credential_invalid else 0,
        )
        self.credential_invalid = credential_invalid


class ModelOutputError(UpstreamError):
    """The language model answered, but not with usable JSON. Retryable."""

    default_message = "AI returned an invalid format. Please try again."
