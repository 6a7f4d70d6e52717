class AuthenticationError(Exception):
    """Raised when the session is missing, expired or rejected by the backend."""


class PermissionDeniedError(AuthenticationError):
    """Raised when the signed-in user lacks the role or outlet capability."""


class NotFoundError(Exception):
    """Raised when the backend has no such resource."""


class IntegrationError(Exception):
    """Raised when a backend call fails."""


class RateLimitError(Exception):
    """Raised when the backend rate limit is hit."""


class UploadError(IntegrationError):
    """Raised when either step of an image upload fails."""


class InvalidInputError(Exception):
    """Raised when a caller passes a value outside the allowed set."""
