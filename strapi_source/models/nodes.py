"""Content graph node and media descriptor models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

RICH_TEXT_NODE_TYPE = "StrapiRichText"
RICH_TEXT_MEDIA_TYPE = "text/markdown"
FILE_NODE_TYPE = "File"

# Suffix Gatsby uses for foreign-key fields between nodes.
NODE_REFERENCE_SUFFIX = "___NODE"

MEDIA_REQUIRED_FIELDS = frozenset({"id", "url", "mime", "ext", "name"})


class NodeInternal(BaseModel):
    """Bookkeeping block every node carries."""

    model_config = ConfigDict(populate_by_name=True)

    type: str
    content_digest: str = Field(alias="contentDigest")
    content: str | None = None
    media_type: str | None = Field(default=None, alias="mediaType")


class Node(BaseModel):
    """A unit in the content graph.

    Entity nodes carry the entity's fields as extra attributes.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    parent: str | None = None
    children: list[str] = Field(default_factory=list)
    internal: NodeInternal


class MediaDescriptor(BaseModel):
    """An uploaded file as Strapi embeds it inside an entity."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str | int
    url: str
    mime: str
    ext: str
    name: str
    updated_at: str | None = Field(default=None, alias="updatedAt")

    @classmethod
    def matches(cls, value: Any) -> bool:
        """Check whether a JSON value is a well-formed media descriptor."""
        if not isinstance(value, dict) or not MEDIA_REQUIRED_FIELDS.issubset(value):
            return False
        try:
            cls.from_entity(value)
        except ValidationError:
            return False
        return True

    @classmethod
    def from_entity(cls, value: dict[str, Any]) -> "MediaDescriptor":
        """Parse, accepting both ``updatedAt`` and ``updated_at`` timestamps."""
        data = dict(value)
        if data.get("updatedAt") is None and data.get("updated_at") is not None:
            data["updatedAt"] = data.pop("updated_at")
        return cls.model_validate(data)
