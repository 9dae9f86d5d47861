"""
Readwise API error parsing.

Translates httpx failures into ExternalApiError with a message an agent can
act on. The tool dispatcher turns these into error-flagged tool results.
"""

from typing import Any

import httpx


class ExternalApiError(Exception):
    """Raised when a Readwise API call fails or returns a non-success status."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body


def parse_http_error(e: httpx.HTTPStatusError) -> ExternalApiError:  # noqa: PLR0911
    """
    Parse an HTTP status error into an ExternalApiError.

    Args:
        e: The HTTP status error from httpx.

    Returns:
        ExternalApiError carrying the status code, the decoded body when it is
        JSON (raw text otherwise), and a status-specific message.
    """
    status = e.response.status_code
    body = _safe_get_body(e.response)

    if status == 401:
        return ExternalApiError(
            "Readwise API error 401: Invalid or expired token", status, body,
        )

    if status == 403:
        return ExternalApiError("Readwise API error 403: Access denied", status, body)

    if status == 404:
        return ExternalApiError("Readwise API error 404: Not found", status, body)

    if status == 429:
        retry_after = e.response.headers.get("Retry-After")
        msg = "Readwise API error 429: Rate limit exceeded"
        if retry_after:
            msg += f" (retry after {retry_after}s)"
        return ExternalApiError(msg, status, body)

    if status in (400, 422):
        return ExternalApiError(
            f"Readwise API error {status}: {_extract_validation_message(body)}",
            status,
            body,
        )

    msg = f"Readwise API error {status}"
    if _has_content(body):
        msg += f": {_extract_validation_message(body)}"
    return ExternalApiError(msg, status, body)


def _has_content(body: Any) -> bool:
    if isinstance(body, str):
        return bool(body.strip())
    return bool(body)


def _safe_get_body(response: httpx.Response) -> Any:
    """Return the decoded JSON body, falling back to raw text."""
    try:
        return response.json()
    except ValueError:
        return response.text


def _extract_validation_message(body: Any) -> str:
    """
    Extract a readable message from an error response body.

    Readwise reports field errors as nested mappings, e.g.
    {"highlights": [{"text": ["This field may not be blank."]}]}.
    """
    if isinstance(body, dict) and isinstance(body.get("detail"), str):
        return body["detail"]
    if isinstance(body, (dict, list)):
        messages = _flatten_field_errors(body)
        return "; ".join(messages) if messages else "Validation error"
    if isinstance(body, str) and body.strip():
        return body.strip()
    return "Validation error"


def _flatten_field_errors(errors: Any, path: str = "") -> list[str]:
    messages: list[str] = []
    if isinstance(errors, dict):
        for key, value in errors.items():
            messages.extend(_flatten_field_errors(value, f"{path}.{key}" if path else str(key)))
    elif isinstance(errors, list):
        if errors and all(isinstance(item, str) for item in errors):
            joined = " ".join(errors)
            messages.append(f"{path}: {joined}" if path else joined)
        else:
            for index, item in enumerate(errors):
                messages.extend(_flatten_field_errors(item, f"{path}[{index}]"))
    elif errors not in (None, ""):
        messages.append(f"{path}: {errors}" if path else str(errors))
    return messages
