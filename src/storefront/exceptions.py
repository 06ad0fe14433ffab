"""Domain errors not covered by ``protean.exceptions``.

Malformed input raises ``protean.exceptions.ValidationError`` and missing
records raise ``protean.exceptions.ObjectNotFoundError``, as everywhere else.
"""

from protean.exceptions import ValidationError


class ConflictError(ValidationError):
    """The request is well formed but clashes with current state.

    Raised for stock shortfalls, insufficient balance and duplicate codes.
    Carries the same ``{field: [messages]}`` payload as ``ValidationError``.
    """


class AuthenticationError(Exception):
    """Credentials or a session token did not identify a user."""

    def __init__(self, message="Not authorized"):
        super().__init__(message)
        self.message = message
