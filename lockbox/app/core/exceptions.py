# lockbox/app/core/exceptions.py
"""
Error taxonomy shared by the security layer, the vault store and the API.

Each error carries the HTTP status it maps to and the message that is safe
to show to a client. Internal detail goes to the log, never into `message`.
"""
from fastapi import status


class LockboxError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: str = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class AuthFailure(LockboxError):
    """Any authentication failure. Subtypes are never exposed to clients."""

    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Unauthorized"

    def __init__(self, reason: str = None):
        # reason is for logs only; the public message stays uniform
        self.reason = reason
        super().__init__()


class MissingCredential(AuthFailure):
    pass


class InvalidCredential(AuthFailure):
    pass


class ValidationError(LockboxError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request"


class NotFound(LockboxError):
    """Lookup miss. Covers both "does not exist" and "owned by someone else"."""

    status_code = status.HTTP_404_NOT_FOUND
    message = "Vault item not found"


class DecryptionFailure(LockboxError):
    """Ciphertext could not be authenticated or decoded with the current key."""


class InternalFault(LockboxError):
    pass
