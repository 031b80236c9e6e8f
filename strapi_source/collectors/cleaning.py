"""Key cleanup applied to every fetched entity."""

from typing import Any

VERSION_KEY = "__v"
IDENTITY_KEY = "_id"
RESERVED_PREFIX = "__"
RENAMED_PREFIX = "strapi_"


def clean(value: Any) -> Any:
    """Return a copy of a fetched JSON value with reserved keys rewritten.

    - ``__v`` (Mongo's document version) is dropped.
    - ``_id`` becomes ``id``, taking precedence over a plain ``id`` key.
    - Any other ``__``-prefixed key becomes ``strapi_``-prefixed, since the
      content graph reserves double-underscore names.

    Nested mappings and sequences are cleaned as well.
    """
    if isinstance(value, list):
        return [clean(element) for element in value]
    if not isinstance(value, dict):
        return value

    cleaned = {}
    has_identity = IDENTITY_KEY in value
    for key, item in value.items():
        if key == VERSION_KEY or (key == "id" and has_identity):
            continue
        if key == IDENTITY_KEY:
            cleaned["id"] = item
        elif key.startswith(RESERVED_PREFIX):
            cleaned[f"{RENAMED_PREFIX}{key[len(RESERVED_PREFIX):]}"] = item
        else:
            cleaned[key] = clean(item)
    return cleaned
