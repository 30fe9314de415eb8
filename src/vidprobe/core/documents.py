"""Decoding of url-encoded and JSON response bodies."""

import json
from typing import Any, Dict, Optional
from urllib.parse import parse_qsl

from .errors import ParseFailure


def parse_query(body: str) -> Dict[str, str]:
    """Decode a url-encoded body into a flat mapping.

    Keys and values are percent-decoded, blank values are kept and the last
    value wins when a key repeats.
    """
    return dict(parse_qsl(body, keep_blank_values=True))


def parse_json(body: str) -> Any:
    """Decode a JSON body, raising ParseFailure on malformed input."""
    try:
        return json.loads(body)
    except json.JSONDecodeError as e:
        raise ParseFailure(
            f"Response is not valid JSON: {e.msg}",
            details={"original_error": e},
        ) from e


def json_field(document: Any, path: str) -> Optional[str]:
    """Read the leaf at a dotted path such as ``items.0.statistics.likeCount``.

    Integer steps index into lists. Returns the leaf coerced to a string, or
    None when any step along the way is missing or the leaf is null.
    """
    node = document
    for step in path.split("."):
        if isinstance(node, dict):
            if step not in node:
                return None
            node = node[step]
        elif isinstance(node, list) and step.isdigit():
            index = int(step)
            if index >= len(node):
                return None
            node = node[index]
        else:
            return None

    if node is None:
        return None
    if isinstance(node, bool):
        return "true" if node else "false"
    if isinstance(node, (dict, list)):
        return json.dumps(node)
    return str(node)
