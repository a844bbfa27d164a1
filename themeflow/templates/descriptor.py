from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from themeflow.constants import ContentType
from themeflow.templates.exceptions import InvalidDescriptorError

FORBIDDEN_SLUG_PARTS = ("/", "\\", "..")


class ContentDescriptor(BaseModel):
    """
    Describes what is being rendered.

    A descriptor is immutable and built per render request. The rule table
    turns it into the ordered list of template candidates.

    Attributes:
        content_type: The category, e.g. ``single``, ``page`` or ``archive``.
            Known categories are ContentType members; any other lower case
            string is kept as is so custom rule tables can define their own.
        type_slug: Sub type, e.g. the post type ``post`` or a taxonomy name.
        path_slug: Slug of the item itself, e.g. ``hello-world``.
        depth: Hierarchy depth of the item (0 for top level), if known.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    content_type: ContentType | str
    type_slug: str | None = None
    path_slug: str | None = None
    depth: int | None = Field(default=None, ge=0)

    @field_validator("content_type", mode="before")
    @classmethod
    def normalize_content_type(cls, v: Any) -> ContentType | str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("content_type must be a non-empty string")
        try:
            return ContentType(v.strip())
        except ValueError:
            return v.strip().lower()

    @field_validator("type_slug", "path_slug")
    @classmethod
    def validate_slug(cls, v: str | None) -> str | None:
        if v is None:
            return None
        if any(part in v for part in FORBIDDEN_SLUG_PARTS):
            raise ValueError(f"slug must be a single path segment, got '{v}'")
        if any(ord(char) < 32 or ord(char) == 127 for char in v):
            raise ValueError(f"slug must not contain control characters, got {v!r}")
        return v

    @classmethod
    def create(cls, content_type: str, **kwargs: Any) -> "ContentDescriptor":
        """Build a descriptor, converting validation failures to InvalidDescriptorError."""
        try:
            return cls(content_type=content_type, **kwargs)
        except ValidationError as e:
            raise InvalidDescriptorError(f"Invalid content descriptor: {e}") from e

    @property
    def category(self) -> str:
        """Key of this descriptor in a rule table."""
        return str(self.content_type)

    def fields(self) -> dict[str, str | None]:
        """Token values available to rule patterns."""
        return {
            "type": self.category,
            "type_slug": self.type_slug,
            "path_slug": self.path_slug,
        }

    def __str__(self) -> str:
        parts = [self.category]
        if self.type_slug:
            parts.append(f"type_slug={self.type_slug}")
        if self.path_slug:
            parts.append(f"path_slug={self.path_slug}")
        if self.depth is not None:
            parts.append(f"depth={self.depth}")
        return " ".join(parts)
