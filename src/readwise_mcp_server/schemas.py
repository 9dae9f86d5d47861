"""Pydantic schemas for highlight tool arguments."""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class InvalidArgumentsError(ValueError):
    """Raised when tool arguments do not match the expected shape."""


class Highlight(BaseModel):
    """
    A single highlight as accepted by the Readwise create endpoint.

    Field names match the Readwise wire format. Empty strings in optional
    fields are normalized to None and omitted from the request payload.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    text: str = Field(min_length=1)
    title: str | None = None
    author: str | None = None
    source_url: str | None = None
    note: str | None = None
    location: int | None = None
    location_type: str | None = None
    highlighted_at: str | None = None
    category: str | None = None
    highlight_url: str | None = None
    image_url: str | None = None

    @field_validator(
        "title",
        "author",
        "source_url",
        "note",
        "location_type",
        "highlighted_at",
        "category",
        "highlight_url",
        "image_url",
        "location",
        mode="before",
    )
    @classmethod
    def empty_string_to_none(cls, v: Any) -> Any:
        """Treat an empty string as an absent value."""
        # Unverified whether Readwise distinguishes "" from absent; never send ""
        if v == "":
            return None
        return v

    def to_payload(self) -> dict[str, Any]:
        """Return the request payload, omitting absent fields."""
        return self.model_dump(exclude_none=True)


class CreateHighlightsArguments(BaseModel):
    """Arguments of the create_highlights tool."""

    model_config = ConfigDict(extra="forbid")

    highlights: list[Highlight]


def parse_highlight(arguments: dict[str, Any]) -> Highlight:
    """
    Parse tool arguments into a Highlight.

    Raises:
        InvalidArgumentsError: If the arguments do not describe a valid highlight.
    """
    try:
        return Highlight.model_validate(arguments)
    except ValidationError as e:
        raise InvalidArgumentsError(format_validation_error(e)) from e


def parse_highlights(arguments: dict[str, Any]) -> list[Highlight]:
    """
    Parse create_highlights tool arguments into a list of Highlights.

    Order is preserved and duplicates are kept.

    Raises:
        InvalidArgumentsError: If `highlights` is missing or any element is invalid.
    """
    try:
        return CreateHighlightsArguments.model_validate(arguments).highlights
    except ValidationError as e:
        raise InvalidArgumentsError(format_validation_error(e)) from e


def format_validation_error(e: ValidationError) -> str:
    """Condense a pydantic ValidationError into 'field: problem' pairs."""
    messages = []
    for err in e.errors():
        loc = ".".join(str(part) for part in err.get("loc", ())) or "arguments"
        messages.append(f"{loc}: {err.get('msg', 'invalid')}")
    return "Invalid arguments: " + "; ".join(messages)
