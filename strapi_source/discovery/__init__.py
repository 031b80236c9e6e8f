"""Rich-text path discovery over the Strapi schema graph."""

from strapi_source.discovery.rich_text_paths import (
    build_path_index,
    build_rich_text_path,
    strip_type_namespace,
)

__all__ = [
    "build_path_index",
    "build_rich_text_path",
    "strip_type_namespace",
]
