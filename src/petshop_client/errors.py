"""Typed failures surfaced to the UI layer."""

import httpx

_DUPLICATE_FIELDS = ("whatsapp_number",)


class PetshopError(Exception):
    """Base error carrying a human-readable message."""

    default_message = "Something went wrong. Please try again."

    def __init__(
        self,
        message: str | None = None,
        *,
        status_code: int | None = None,
        details: dict[str, object] | None = None,
    ) -> None:
        self.message = message or self.default_message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(PetshopError):
    """Input rejected, either client-side or by the server (422)."""

    default_message = "Please check the highlighted fields."

    def __init__(
        self,
        message: str | None = None,
        *,
        field_errors: dict[str, str] | None = None,
        status_code: int | None = None,
        details: dict[str, object] | None = None,
    ) -> None:
        self.field_errors = dict(field_errors or {})
        if message is None and self.field_errors:
            message = next(iter(self.field_errors.values()))
        super().__init__(message, status_code=status_code, details=details)


class InvalidCredentials(PetshopError):
    """The server refused the supplied credential (401)."""

    default_message = "Login failed. Please check your credentials."


class AuthenticationRequired(InvalidCredentials):
    """An operation needs a logged-in session and there is none."""

    default_message = "Please login to access this page"


class Forbidden(PetshopError):
    """The current identity lacks the role for the operation (403)."""

    default_message = "You do not have permission to access this page"


class NotFound(PetshopError):
    """The referenced entity does not exist (404)."""

    default_message = "The requested item could not be found."


class DuplicateAccount(PetshopError):
    """Registration collided with an existing account (409)."""

    default_message = "An account with this WhatsApp number already exists."


class UnexpectedResponse(PetshopError):
    """The server answered successfully but the body was not usable."""

    default_message = "Unexpected response from server"


class NetworkError(PetshopError):
    """The server could not be reached or did not answer in time."""

    default_message = (
        "Could not reach the server. Check your connection and try again."
    )


def error_from_response(status_code: int, payload: object) -> PetshopError:
    """Classify a failed HTTP response into a typed error."""
    body = payload if isinstance(payload, dict) else {}
    message = body.get("message") if isinstance(body.get("message"), str) else None
    field_errors = _field_errors(body.get("errors"))

    if status_code == httpx.codes.UNAUTHORIZED:
        return InvalidCredentials(message, status_code=status_code, details=body)
    if status_code == httpx.codes.FORBIDDEN:
        return Forbidden(message, status_code=status_code, details=body)
    if status_code == httpx.codes.NOT_FOUND:
        return NotFound(message, status_code=status_code, details=body)
    if status_code == httpx.codes.CONFLICT:
        return DuplicateAccount(message, status_code=status_code, details=body)
    if status_code == httpx.codes.UNPROCESSABLE_ENTITY:
        duplicate = _duplicate_message(field_errors)
        if duplicate is not None:
            return DuplicateAccount(
                duplicate,
                status_code=status_code,
                details=body,
            )
        return ValidationError(
            message,
            field_errors=field_errors,
            status_code=status_code,
            details=body,
        )
    return PetshopError(message, status_code=status_code, details=body)


def _field_errors(raw: object) -> dict[str, str]:
    """Keep the first message per field from a Laravel-style error bag."""
    if not isinstance(raw, dict):
        return {}
    errors: dict[str, str] = {}
    for field, messages in raw.items():
        if isinstance(messages, list) and messages:
            errors[str(field)] = str(messages[0])
        elif isinstance(messages, str):
            errors[str(field)] = messages
    return errors


def _duplicate_message(field_errors: dict[str, str]) -> str | None:
    for field in _DUPLICATE_FIELDS:
        message = field_errors.get(field, "")
        if "taken" in message.lower():
            return message
    return None
