"""Data models using Pydantic."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .types import AiSummary


class Content(BaseModel):
    """Cached content record for one request path.

    Serialized with the wire names used in the key-value store
    (``statusCode``, ``attrs``, ``html``, ``summary``).
    """

    model_config = ConfigDict(populate_by_name=True)

    status_code: int = Field(200, alias="statusCode")
    attrs: dict[str, Any] = Field(default_factory=dict)
    html: str = ""
    summary: AiSummary | None = None

    @property
    def title(self) -> str | None:
        title = self.attrs.get("title")
        return str(title) if title is not None else None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def to_json(self) -> str:
        """Serialize for the key-value store."""
        exclude = None if self.summary is not None else {"summary"}
        return self.model_dump_json(by_alias=True, exclude=exclude)

    @classmethod
    def from_json(cls, data: str | bytes) -> "Content":
        """Parse a record read from the key-value store."""
        return cls.model_validate_json(data)


class Frontmatter(BaseModel):
    """A markdown document split into frontmatter attributes and body."""

    attrs: dict[str, Any] = Field(default_factory=dict)
    body: str = ""
