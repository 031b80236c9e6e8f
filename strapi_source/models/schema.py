"""Pydantic models for the Content-Type Builder schema and the rich-text path index."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Only user-defined content types take part in discovery; built-in and
# plugin types (e.g. "plugin::users-permissions.user") are skipped.
APPLICATION_PREFIX = "application::"

RICH_TEXT_TYPE = "richtext"
COMPONENT_TYPE = "component"


class AttributeSpec(BaseModel):
    """A single attribute of a content type or component."""

    model_config = ConfigDict(extra="allow", frozen=True)

    type: str | None = None
    component: str | None = None
    target: str | None = None

    @property
    def is_rich_text(self) -> bool:
        return self.type == RICH_TEXT_TYPE

    @property
    def is_component(self) -> bool:
        return self.type == COMPONENT_TYPE


class SchemaItem(BaseModel):
    """A content type (has ``kind``) or a component (no ``kind``)."""

    model_config = ConfigDict(extra="allow", frozen=True)

    uid: str
    kind: str | None = None
    attributes: dict[str, AttributeSpec] | None = None

    @property
    def is_component(self) -> bool:
        return not self.kind

    @classmethod
    def from_api(cls, entry: dict[str, Any]) -> "SchemaItem":
        """Build from a ``{uid, schema}`` entry of the Content-Type Builder API."""
        return cls.model_validate({**(entry.get("schema") or {}), "uid": entry["uid"]})


class SchemaMaps(BaseModel):
    """Types and components keyed by uid."""

    model_config = ConfigDict(frozen=True)

    types: dict[str, SchemaItem] = Field(default_factory=dict)
    components: dict[str, SchemaItem] = Field(default_factory=dict)

    @classmethod
    def from_api(
        cls,
        types_payload: dict[str, Any],
        components_payload: dict[str, Any],
    ) -> "SchemaMaps":
        """Build the maps from the two Content-Type Builder responses.

        Args:
            types_payload: Body of ``/content-type-builder/content-types``.
            components_payload: Body of ``/content-type-builder/components``.
        """
        types = {}
        for entry in types_payload.get("data", []):
            if entry["uid"].startswith(APPLICATION_PREFIX):
                types[entry["uid"]] = SchemaItem.from_api(entry)

        components = {
            entry["uid"]: SchemaItem.from_api(entry)
            for entry in components_payload.get("data", [])
        }
        return cls(types=types, components=components)


class PathIndex(BaseModel):
    """Result of rich-text path discovery.

    ``types`` and ``components`` hold the dotted paths per uid; only uids
    with at least one path appear. ``rich_text_paths`` is the flattened
    lookup table keyed by ``"<type name>.<path>"``.
    """

    model_config = ConfigDict(frozen=True)

    rich_text_paths: dict[str, bool] = Field(default_factory=dict)
    types: dict[str, list[str]] = Field(default_factory=dict)
    components: dict[str, list[str]] = Field(default_factory=dict)

    def is_rich_text(self, path: str) -> bool:
        """Check whether a dotted entity path holds rich text."""
        return self.rich_text_paths.get(path, False)
