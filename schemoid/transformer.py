"""Recursive key/value normalization of JSON schema documents."""

import copy
from typing import Any, Dict, List, Optional, Tuple

from schemoid.common import check_recursion, is_array_of_strings, json_path, normalize_array_value, sanitize_name
from schemoid.config import SchemaConfig
from schemoid.errors import SchemaShapeError


class SchemaTransformer:
    """
    Produces a canonical copy of a schema tree.

    Keys are sanitized (snake_cased when configured), keys listed as
    exceptions are dropped with their subtree, and arrays of strings are
    normalized to snake_case tokens. The source tree is never modified.
    """

    def __init__(self, config: SchemaConfig) -> None:
        self.config = config

    def transform(self, source: Dict[str, Any], path: str = '$',
                  recursion_stack: Optional[List[Tuple[Any, str]]] = None) -> Dict[str, Any]:
        """
        Transform an object node.

        Args:
            source: The object node to transform.
            path: JSON path of the node, used in error messages.
            recursion_stack: Nodes on the current recursion path.

        Returns:
            A new object with canonical keys, in source order.
        """
        if not isinstance(source, dict):
            raise SchemaShapeError(f"Expected an object, got {type(source).__name__}", path)
        if recursion_stack is None:
            recursion_stack = []
        check_recursion(source, path, recursion_stack)
        recursion_stack.append((source, path))
        try:
            results: Dict[str, Any] = {}
            for key, value in source.items():
                clone_key = sanitize_name(key, self.config.snake_case_keys)
                # ignore unsupported schema references
                if clone_key in self.config.exceptions:
                    continue
                if is_array_of_strings(value):
                    item = normalize_array_value(value)
                elif isinstance(value, dict):
                    item = self.transform(value, json_path(path, clone_key), recursion_stack)
                else:
                    item = copy.deepcopy(value)
                results[clone_key] = item
            return results
        finally:
            recursion_stack.pop()
