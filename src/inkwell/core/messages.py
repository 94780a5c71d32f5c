"""Map service error messages to text suitable for end users."""

from __future__ import annotations

# Checked in order; the first matching substring wins.
FRIENDLY_MESSAGES: list[tuple[str, str]] = [
    ("InvalidSecret", "Invalid email or password. Please check your credentials and try again."),
    ("InvalidAccountId", "Account not found. Please sign up first."),
    ("already exists", "Account already exists. Please sign in instead."),
    ("Not authenticated", "Please sign in to continue."),
    ("Not authorized", "You can only change content you created."),
    ("Username is already taken", "That username is taken. Please choose another."),
    ("Post not found", "This post no longer exists."),
    ("Comment not found", "This comment no longer exists."),
]


def friendly_message(error: BaseException | str) -> str:
    """Return a user-facing message for an error.

    Unrecognized messages are returned verbatim.
    """
    message = error.message if hasattr(error, "message") else str(error)
    for needle, replacement in FRIENDLY_MESSAGES:
        if needle in message:
            return replacement
    return message
