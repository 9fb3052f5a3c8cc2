from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "Document not found") -> None:
        super().__init__(message)


class AuthenticationError(UserError):
    """Raised when authentication fails."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message)


class InvalidCredentialsError(AuthenticationError):
    """Raised when a password does not match the stored hash."""

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class MissingTokenError(AuthenticationError):
    """Raised when a protected request carries no bearer token."""

    def __init__(self, message: str = "Authentication token is required") -> None:
        super().__init__(message)


class InvalidTokenError(AuthenticationError):
    """Raised when a token is tampered with or malformed."""

    def __init__(self, message: str = "Invalid authentication token") -> None:
        super().__init__(message)


class TokenExpiredError(AuthenticationError):
    """Raised when a correctly signed token is past its expiry."""

    def __init__(self, message: str = "Authentication token has expired") -> None:
        super().__init__(message)


class AccessDeniedError(UserError):
    """Raised when a user tries to access a resource they do not have permission for."""


class ValidationError(UserError):
    """Raised when user input fails validation."""


class DuplicateUsernameError(ValidationError):
    """Raised when registering a username that is already taken."""

    def __init__(self, username: str) -> None:
        super().__init__(f"User '{username}' already exists")


class InvalidIdError(ValidationError):
    """Raised when an identifier is not well-formed."""
