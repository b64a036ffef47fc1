"""Conversion between native values and their tagged wire form.

The tagged form is a mapping ``{"name": <type name>, "data": {...}}`` as
exchanged with a test frontend.
"""

from __future__ import annotations

from typing import Any


def value_response(name: str, value: Any) -> dict[str, Any]:
    """Wrap ``value`` into a tagged value called ``name``."""
    return {"name": name, "data": {"value": value}}


def _is_node(value: Any) -> bool:
    return all(hasattr(value, attr) for attr in ("id", "labels", "props"))


def native_to_cypher(value: Any) -> dict[str, Any]:
    """Convert a native value into its tagged form.

    Supports None, bool, int, str, float, lists, tuples, string-keyed dicts
    and node-like objects carrying ``id``, ``labels`` and ``props``.
    """
    if value is None:
        return {"name": "CypherNull", "data": None}
    if isinstance(value, bool):
        return value_response("CypherBool", value)
    if isinstance(value, int):
        return value_response("CypherInt", value)
    if isinstance(value, str):
        return value_response("CypherString", value)
    if isinstance(value, float):
        return value_response("CypherFloat", value)
    if isinstance(value, (list, tuple)):
        return value_response("CypherList", [native_to_cypher(item) for item in value])
    if isinstance(value, dict):
        return value_response(
            "CypherMap", {key: native_to_cypher(item) for key, item in value.items()}
        )
    if _is_node(value):
        return {
            "name": "Node",
            "data": {
                "id": native_to_cypher(value.id),
                "labels": native_to_cypher(list(value.labels)),
                "props": native_to_cypher(dict(value.props)),
            },
        }
    raise TypeError(f"Don't know how to patch {type(value).__name__}")


def cypher_to_native(value: dict[str, Any]) -> Any:
    """Convert a tagged value back into a native value."""
    name = value["name"]
    if name == "CypherNull":
        return None
    data = value["data"]
    if name == "CypherString":
        return str(data["value"])
    if name == "CypherInt":
        return int(data["value"])
    if name == "CypherBool":
        return bool(data["value"])
    if name == "CypherFloat":
        return float(data["value"])
    if name == "CypherList":
        return [cypher_to_native(item) for item in data["value"]]
    if name == "CypherMap":
        return {key: cypher_to_native(item) for key, item in data["value"].items()}
    raise ValueError(f"Don't know how to convert {name} to native")