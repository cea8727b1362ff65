"""Maps JSON schema ``type``/``format`` tokens to target field types."""

import logging
from typing import Any, Mapping, Optional

from schemoid.common import sanitize_name
from schemoid.resolution import Mapped, PassThrough, Resolution, Unmapped, unwrap

logger = logging.getLogger(__name__)


class TypeMapper:
    """Looks up field types in a static type map."""

    def __init__(self, type_map: Mapping[str, str]) -> None:
        self.types = type_map

    def type_token(self, value: Any) -> Optional[str]:
        """
        Get the snake_case lookup token of a type or format value.

        A list of types (``["string", "null"]``) is represented by its first
        non-null entry. Anything else that is not a string has no token.
        """
        if isinstance(value, list):
            candidates = [item for item in value if isinstance(item, str) and item]
            non_null = [item for item in candidates if sanitize_name(item, True) != 'null']
            value = non_null[0] if non_null else (candidates[0] if candidates else None)
        if not isinstance(value, str):
            return None
        return sanitize_name(value, True)

    def resolve(self, node: Any) -> Resolution:
        """
        Resolve the target type of a field node.

        The format takes precedence over the type.

        Returns:
            Mapped: the target type name.
            Unmapped: type information was given but is not in the type map.
            PassThrough: the node carries neither type nor format.
        """
        if not isinstance(node, dict):
            return PassThrough(node)
        field_type, field_format = node.get('type'), node.get('format')
        if field_type is None and field_format is None:
            return PassThrough(node)
        token = self.type_token(field_format if field_format is not None else field_type)
        if token is not None and token in self.types:
            return Mapped(self.types[token])
        logger.debug("No type mapping for type %r, format %r", field_type, field_format)
        return Unmapped()

    def get_field_type(self, node: Any) -> Any:
        """
        Get the target type name of a field node: the mapped name, None for
        unknown types, or the node itself when it has neither type nor format.
        """
        return unwrap(self.resolve(node))
