"""Entity normalization: media and rich-text extraction into graph nodes."""

from strapi_source.normalization.extractor import (
    download_media_files,
    extract_fields,
    extract_image,
    extract_rich_text,
)

__all__ = [
    "download_media_files",
    "extract_fields",
    "extract_image",
    "extract_rich_text",
]
