"""Aggregation of boolean field markers such as ``"required": true``."""

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from schemoid.common import check_recursion, json_path
from schemoid.errors import SchemaShapeError

logger = logging.getLogger(__name__)


def get_field_property(source: Dict[str, Any], property_name: str,
                       fields: Optional[Dict[str, None]] = None, path: str = '$',
                       recursion_stack: Optional[List[Tuple[Any, str]]] = None) -> List[str]:
    """
    Collect the names of all fields that set a property to ``true``.

    Every object-valued entry of the tree is visited. When the object sets
    property_name to the boolean ``true`` the entry's own key is collected.
    Fields are identified by name only: equally named fields in different
    branches are collected once, in the order they are first found.

    Args:
        source: The tree to search.
        property_name: The marker property, e.g. ``required``.
        fields: Names found so far, used while recursing.
        path: JSON path of source.
        recursion_stack: Nodes on the current recursion path.

    Returns:
        List[str]: Unique field names in discovery order.
    """
    if fields is None:
        fields = {}
    if recursion_stack is None:
        recursion_stack = []
    check_recursion(source, path, recursion_stack)
    recursion_stack.append((source, path))
    try:
        for key, item in source.items():
            if isinstance(item, dict):
                if item.get(property_name) is True:
                    fields.setdefault(key, None)
                get_field_property(item, property_name, fields, json_path(path, key), recursion_stack)
    finally:
        recursion_stack.pop()
    return list(fields)


def update_field_property(source: Dict[str, Any], property_name: str, fields: Iterable[str]) -> Dict[str, Any]:
    """
    Merge field names into the top-level array stored under property_name.

    Names already present keep their position, new names are appended and
    duplicates are dropped.
    """
    existing = source.get(property_name)
    if existing is None:
        existing = []
    elif not isinstance(existing, list):
        raise SchemaShapeError(f"Expected '{property_name}' to be an array, got {type(existing).__name__}",
                               json_path('$', property_name))
    merged: Dict[Any, None] = dict.fromkeys(existing)
    for field in fields:
        merged.setdefault(field, None)
    source[property_name] = list(merged)
    return source


def add_required_fields(source: Dict[str, Any]) -> Dict[str, Any]:
    """
    Fold nested ``"required": true`` markers into the top-level ``required``
    array. The tree is returned untouched when no field is marked.
    """
    fields = get_field_property(source, 'required')
    if not fields:
        return source
    logger.debug("Required fields found in nested properties: %s", ', '.join(fields))
    return update_field_property(source, 'required', fields)
