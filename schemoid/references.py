"""Derives local namespace names from ``$ref`` URLs."""

import logging
import re
from typing import Any, Dict, Optional

from jsonpointer import JsonPointer

from schemoid.resolution import Mapped, PassThrough, Resolution, Unmapped, unwrap
from schemoid.uritemplates import UriTemplateRegistry

logger = logging.getLogger(__name__)

DEFINITION_FRAGMENT = re.compile(r'/definitions/(.+)')


class ReferenceResolver:
    """Resolves schema references against the registered URI templates."""

    def __init__(self, registry: UriTemplateRegistry) -> None:
        self.registry = registry

    @staticmethod
    def has_field_reference(field: Any, key: str = 'ref') -> bool:
        """True if the field holds a non-empty string under key."""
        if not isinstance(field, dict):
            return False
        value = field.get(key)
        return isinstance(value, str) and bool(value)

    def resolve(self, field: Dict[str, Any]) -> Resolution:
        """
        Resolve the namespace a field's ``ref`` points at.

        A ``/definitions/<name>`` fragment wins over the first path segment.
        A reference that does not match the reference template is handed
        back untouched.
        """
        ref = field.get('ref')
        reference = self.registry.extract(ref, 'reference')
        if reference is None:
            return PassThrough(ref)
        for fragment in reference.get('fragments') or []:
            name_space = DEFINITION_FRAGMENT.search(fragment)
            if name_space:
                return Mapped(name_space.group(1))
        segments = reference.get('segments')
        if segments:
            return Mapped(segments[0])
        logger.debug("Reference %r names no namespace", ref)
        return Unmapped()

    def get_field_reference(self, field: Dict[str, Any]) -> Optional[str]:
        """Get the namespace of a field's reference, see resolve."""
        return unwrap(self.resolve(field))

    def resolve_definition(self, ref: Any, document: Any) -> Optional[Dict[str, Any]]:
        """
        Look up a same-document ``#/definitions/...`` reference.

        Args:
            ref: The reference, e.g. ``#/definitions/address``.
            document: The untransformed source document.

        Returns:
            The referenced definition object, or None if the reference is not
            a local definition or the definition does not exist.
        """
        definition = self.registry.extract(ref, 'definition')
        if not definition or not definition.get('segments'):
            return None
        pointer = JsonPointer.from_parts(['definitions'] + definition['segments'])
        target = pointer.resolve(document, None)
        if not isinstance(target, dict):
            logger.warning("Reference %s does not point at a definition object", ref)
            return None
        return target
