from expensetracker.errors import ValidationError


def validate_credentials(username: str, password: str) -> None:
    """Check that both credential fields carry a value.

    Whitespace-only values count as empty. Anything else is accepted verbatim,
    usernames are case-sensitive.

    Raises:
        ValidationError: If either field is empty
    """
    if not username or not username.strip():
        raise ValidationError("Username is required")

    if not password or not password.strip():
        raise ValidationError("Password is required")


MAX_PASSWORD_BYTES = 72  # bcrypt only looks at the first 72 bytes


def validate_new_password(password: str) -> None:
    """Validate a password about to be hashed for a new account."""
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes long")
