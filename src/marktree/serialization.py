"""AST serialization: JSON round-trip for marktree AST nodes.

Converts typed AST nodes to/from JSON-compatible dicts. Useful for:
- Caching parsed documents to disk
- Handing a tree to a non-Python consumer (editor front end, preview pane)
- Debugging and inspection

All output is deterministic (sorted keys) for cache-key stability.

Example:
    from marktree import parse
    from marktree.serialization import to_json, from_json

    doc = parse("# Hello")
    restored = from_json(to_json(doc))
    assert doc == restored

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from dataclasses import fields
from typing import Any

from marktree.errors import SerializationError
from marktree.location import Position
from marktree.nodes import NODE_TYPES, Node

# Registry of node type names to classes for deserialization
_NODE_TYPES: dict[str, type[Node]] = {cls.__name__: cls for cls in NODE_TYPES.values()}

# Fields that contain child node tuples
_CHILDREN_FIELDS = {"children", "items"}


def to_dict(node: Node) -> dict[str, Any]:
    """Convert an AST node to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization.
    Recursively serializes child nodes and Position objects.

    Args:
        node: Any marktree AST node.

    Returns:
        Dict with ``_type`` and all node fields.

    """
    result: dict[str, Any] = {"_type": type(node).__name__}

    for f in fields(node):
        result[f.name] = _serialize_value(getattr(node, f.name))

    return result


def _serialize_value(value: Any) -> Any:
    """Serialize a single field value."""
    if isinstance(value, Node):
        return to_dict(value)
    if isinstance(value, Position):
        return {
            "_type": "Position",
            "line": value.line,
            "column": value.column,
            "offset": value.offset,
        }
    if isinstance(value, tuple):
        return [_serialize_value(item) for item in value]
    # Primitives: str, int, bool, None
    return value


def from_dict(data: dict[str, Any]) -> Node:
    """Reconstruct a typed AST node from a dict.

    Uses the ``_type`` discriminator to determine the node class.
    Recursively deserializes child nodes and Position objects.

    Args:
        data: Dict with ``_type`` and node fields (as produced by to_dict).

    Returns:
        Typed AST node (frozen dataclass).

    Raises:
        SerializationError: If ``_type`` is missing or unknown, or the
            fields do not fit the node class.

    """
    if not isinstance(data, dict):
        msg = f"Serialized node must be a dict, got {type(data).__name__}"
        raise SerializationError(msg)

    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized node"
        raise SerializationError(msg)

    node_cls = _NODE_TYPES.get(type_name)
    if node_cls is None:
        msg = f"Unknown node type: {type_name!r}"
        raise SerializationError(msg)

    kwargs: dict[str, Any] = {}
    for f in fields(node_cls):
        if f.name not in data:
            continue
        kwargs[f.name] = _deserialize_value(data[f.name], f.name)

    try:
        return node_cls(**kwargs)
    except TypeError as exc:
        msg = f"Cannot build {type_name} from {sorted(data)}: {exc}"
        raise SerializationError(msg) from exc


def _deserialize_value(value: Any, field_name: str = "") -> Any:
    """Deserialize a single field value."""
    if isinstance(value, dict):
        if value.get("_type") == "Position":
            try:
                return Position(value["line"], value["column"], value.get("offset", 0))
            except KeyError as exc:
                msg = f"Position is missing {exc.args[0]!r}"
                raise SerializationError(msg) from exc
        return from_dict(value)
    if isinstance(value, list):
        if field_name in _CHILDREN_FIELDS:
            return tuple(from_dict(item) for item in value)
        return tuple(_deserialize_value(item) for item in value)
    return value


def to_json(node: Node, *, indent: int | None = None) -> str:
    """Serialize an AST node to a JSON string.

    Output is deterministic (sorted keys).

    Args:
        node: Any marktree AST node.
        indent: JSON indentation level (None for compact).

    Returns:
        JSON string.

    """
    return json.dumps(to_dict(node), sort_keys=True, indent=indent, ensure_ascii=False)


def from_json(data: str) -> Node:
    """Deserialize a JSON string to a typed AST node.

    Raises:
        SerializationError: If ``data`` is not valid JSON or does not
            describe a node.

    """
    try:
        parsed = json.loads(data)
    except json.JSONDecodeError as exc:
        msg = f"Invalid JSON: {exc}"
        raise SerializationError(msg) from exc
    return from_dict(parsed)
