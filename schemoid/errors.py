"""Exceptions raised while transforming JSON schema documents."""

from typing import List, Optional


class SchemoidError(Exception):
    """
    Base exception for schema transformation failures.

    Attributes:
        message: Human-readable error description
        path: Optional JSON path of the offending node, e.g. ``$.properties.foo``
    """

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        self.message = message
        self.path = path
        full_message = message
        if path:
            full_message = f"{message} (path: {path})"
        super().__init__(full_message)


class SchemaShapeError(SchemoidError):
    """Raised when a node does not have the shape the transformation expects."""


class SchemaDepthError(SchemoidError):
    """Raised when the schema nests deeper than the recursion limit."""


class SchemaCycleError(SchemoidError):
    """
    Raised when a node is visited again on its own recursion path.

    Attributes:
        cycle_path: List of JSON paths forming the cycle
    """

    def __init__(self, cycle_path: List[str]) -> None:
        self.cycle_path = cycle_path
        cycle_str = ' -> '.join(cycle_path)
        super().__init__(f"Circular schema reference detected: {cycle_str}",
                         cycle_path[-1] if cycle_path else None)
