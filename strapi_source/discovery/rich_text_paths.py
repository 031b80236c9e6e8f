"""Rich-text path discovery over the content-type/component schema graph.

For every content type, computes the dotted field paths that lead,
possibly through components and relations, to a ``richtext`` attribute.
The graph may contain cycles (a type relating to itself, components that
reference each other), so every uid is entered at most once.
"""

import re
from typing import Optional

import structlog

from strapi_source.models.schema import PathIndex, SchemaItem, SchemaMaps

logger = structlog.get_logger(__name__)

_NAMESPACE_RE = re.compile(r"^application::.*?\.", re.IGNORECASE)

Paths = dict[str, list[str]]


class _Frame:
    """Traversal state for one schema item on the explicit stack."""

    __slots__ = ("item", "bucket", "attributes", "pending")

    def __init__(self, item: SchemaItem, bucket: Paths):
        self.item = item
        self.bucket = bucket
        self.attributes = iter(item.attributes.items())
        # (attribute key, paths map, referenced uid) awaiting a child frame
        self.pending: Optional[tuple[str, Paths, str]] = None

    def register(self, paths: list[str]) -> None:
        if paths:
            self.bucket.setdefault(self.item.uid, []).extend(paths)

    def merge(self, key: str, source: Paths, uid: str) -> None:
        self.register([f"{key}.{path}" for path in source.get(uid, [])])


def _enter(
    item: Optional[SchemaItem],
    type_paths: Paths,
    component_paths: Paths,
    visited: set[tuple[bool, str]],
) -> Optional[_Frame]:
    """Open a frame for ``item``, or None when there is nothing to traverse."""
    if item is None:
        return None

    marker = (item.is_component, item.uid)
    if marker in visited:
        return None
    visited.add(marker)

    if not item.attributes:
        return None
    return _Frame(item, component_paths if item.is_component else type_paths)


def build_rich_text_path(
    item: Optional[SchemaItem],
    maps: SchemaMaps,
    type_paths: Paths,
    component_paths: Paths,
    visited: Optional[set[tuple[bool, str]]] = None,
) -> None:
    """Discover the rich-text paths reachable from ``item``.

    Results are accumulated into ``type_paths`` / ``component_paths``, keyed
    by uid, in attribute order. A referenced component or type is finished
    before its paths are prefixed with the attribute key and appended to the
    referencing item. Paths reachable along several routes appear once per
    route.

    Args:
        item: Content type or component to start from. None is a no-op.
        maps: All known types and components.
        type_paths: Discovered paths per content type uid (updated in place).
        component_paths: Discovered paths per component uid (updated in place).
        visited: Items already entered. Share it between calls so that a uid
            reachable from several roots is only traversed once.
    """
    if visited is None:
        visited = set()

    root = _enter(item, type_paths, component_paths, visited)
    if root is None:
        return

    stack = [root]
    while stack:
        frame = stack[-1]

        if frame.pending is not None:
            frame.merge(*frame.pending)
            frame.pending = None

        for key, attr in frame.attributes:
            if attr.is_rich_text:
                frame.register([key])
                continue

            if attr.is_component:
                uid, source = attr.component, component_paths
                child = maps.components.get(uid) if uid else None
            elif attr.target:
                uid, source = attr.target, type_paths
                child = maps.types.get(uid)
            else:
                continue

            if uid is None:
                continue
            if child is None:
                logger.debug("schema_reference_unresolved", uid=frame.item.uid, attribute=key, target=uid)

            child_frame = _enter(child, type_paths, component_paths, visited)
            if child_frame is None:
                frame.merge(key, source, uid)
                continue

            frame.pending = (key, source, uid)
            stack.append(child_frame)
            break
        else:
            stack.pop()


def strip_type_namespace(uid: str) -> str:
    """``application::article.article`` -> ``article``."""
    return _NAMESPACE_RE.sub("", uid)


def build_path_index(maps: SchemaMaps) -> PathIndex:
    """Run discovery for every content type and flatten the result."""
    type_paths: Paths = {}
    component_paths: Paths = {}
    visited: set[tuple[bool, str]] = set()

    for item in maps.types.values():
        build_rich_text_path(item, maps, type_paths, component_paths, visited)

    rich_text_paths = {}
    for uid, paths in type_paths.items():
        name = strip_type_namespace(uid)
        for path in paths:
            rich_text_paths[f"{name}.{path}"] = True

    logger.info(
        "rich_text_paths_discovered",
        types=len(type_paths),
        components=len(component_paths),
        paths=len(rich_text_paths),
    )
    return PathIndex(
        rich_text_paths=rich_text_paths,
        types=type_paths,
        components=component_paths,
    )
