"""
Credit Report API - Path Resolver

Reads leaf values out of the tree produced by the XML tree builder. The tree
is loosely shaped: any node may be missing, every child element arrives as a
list (even when it occurs once), and an element carrying attributes arrives
as a wrapper mapping with its text under TEXT_KEY.

Absence is the common case in real reports, so resolution never raises;
the empty string is the only "missing" signal.
"""
from __future__ import annotations
from typing import Any, Dict

TEXT_KEY = "_"
ATTRS_KEY = "$"


def resolve(node: Any, path: str) -> str:
    """
    Resolve a dotted field path against a tree node.

    Walks mapping keys segment by segment. A trailing single-element list is
    unwrapped and a text wrapper yields its text; any other shape, or a
    missing segment at any depth, yields "".

        >>> resolve({"A": [{"B": ["x"]}]}, "A")
        ''
        >>> resolve({"B": [{"_": "x", "$": {"type": "1"}}]}, "B")
        'x'
    """
    value = node
    for key in path.split("."):
        if not isinstance(value, dict) or key not in value:
            return ""
        value = value[key]

    if isinstance(value, list) and value:
        value = value[0]

    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        text = value.get(TEXT_KEY)
        if isinstance(text, str):
            return text
    return ""


def first_child(node: Any, key: str) -> Dict[str, Any]:
    """
    Return the first element of the list under `key` when it is a mapping.

    Any other shape (missing key, empty list, text leaf) gives an empty
    mapping, so lookups below it degrade to "" instead of failing.
    """
    if not isinstance(node, dict):
        return {}
    value = node.get(key)
    if isinstance(value, list):
        value = value[0] if value else None
    return value if isinstance(value, dict) else {}


def children(node: Any, key: str) -> list:
    """All elements of the repeatable child `key`, in document order."""
    if not isinstance(node, dict):
        return []
    value = node.get(key)
    if isinstance(value, list):
        return value
    # A lone mapping is one occurrence that skipped the list convention
    return [value] if isinstance(value, dict) else []
