"""Custom exceptions raised by inkwell services."""

from __future__ import annotations


class BlogError(Exception):
    """Base exception carrying a human-readable message and optional suggestion."""

    label = "Error"

    def __init__(self, message: str, suggestion: str | None = None) -> None:
        self.message = message
        self.suggestion = suggestion
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = self.message
        if self.suggestion:
            msg += f"\n[Suggestion] {self.suggestion}"
        return msg


class ConfigurationError(BlogError):
    """Error when configuration is missing or unusable."""

    label = "Configuration Error"

    def _format_message(self) -> str:
        return f"[{self.label}] {super()._format_message()}"


class Unauthenticated(BlogError):
    """Error when a mutation is attempted without a current user."""

    label = "Unauthenticated"

    def __init__(self) -> None:
        super().__init__("Not authenticated", "Sign in and try again.")


class NotAuthorized(BlogError):
    """Error when the current user does not own the target entity."""

    label = "Not Authorized"

    def __init__(self, action: str, kind: str) -> None:
        self.action = action
        self.kind = kind
        super().__init__(f"Not authorized to {action} this {kind}")


class NotFound(BlogError):
    """Error when a referenced entity does not exist."""

    label = "Not Found"

    def __init__(self, kind: str, entity_id: str | None = None) -> None:
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind.capitalize()} not found")


class ValidationError(BlogError):
    """Error when user-supplied fields fail validation."""

    label = "Validation Error"

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(reason)
