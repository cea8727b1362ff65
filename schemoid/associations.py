"""Descriptive field annotations emitted as comments by the renderer."""

from typing import Any, Dict, List

from schemoid.references import ReferenceResolver
from schemoid.resolution import unwrap


class AssociationAnnotator:
    """Builds the ``# field ...`` comment of a field declaration."""

    def __init__(self, resolver: ReferenceResolver, schema_name: str) -> None:
        self.resolver = resolver
        self.schema_name = schema_name

    def add_associations(self, field: Dict[str, Any], results: List[str]) -> List[str]:
        """
        Append the annotations of a field to results.

        Args:
            field: The field node.
            results: The list to append to.

        Returns:
            List[str]: results
        """
        description = field.get('description')
        if description:
            results.append(f"description: {description}")

        properties = field.get('properties')
        if isinstance(properties, dict):
            results.append(f"properties: {', '.join(properties.keys())}")

        items = field.get('items')
        item_type = items.get('type') if isinstance(items, dict) else None
        if item_type:
            if isinstance(item_type, list):
                item_type = ', '.join(str(t) for t in item_type)
            results.append(f"items: {item_type}")

        if self.resolver.has_field_reference(field):
            ref = field['ref']
            namespace = unwrap(self.resolver.resolve(field))
            if isinstance(namespace, str) and namespace:
                ref_key = namespace.capitalize()
                results.append(f"reference: {ref}\n"
                               f"  # @todo: specify 'embedded_in :{self.schema_name}' within class {ref_key}")
            else:
                results.append(f"reference: {ref}")

        return results

    def annotate(self, field: Dict[str, Any]) -> List[str]:
        """Get the annotations of a field."""
        return self.add_associations(field, [])

    def get_field_associations(self, field: Dict[str, Any]) -> str:
        """Format the annotations of a field as a comment block, or a line break if there are none."""
        results = self.annotate(field)
        if results:
            return f"\n  # field {', '.join(results)}\n"
        return "\n"
