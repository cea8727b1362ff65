"""
Schema transformation engine.

Turns a decoded JSON schema document into the annotated tree consumed by
the renderers, and answers the per-field queries renderers make while
emitting code.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from schemoid.associations import AssociationAnnotator
from schemoid.config import SchemaConfig
from schemoid.dependency_resolver import DependencyTracker
from schemoid.errors import SchemaShapeError
from schemoid.field_properties import add_required_fields, get_field_property
from schemoid.fieldtypes import TypeMapper
from schemoid.references import ReferenceResolver
from schemoid.resolution import Resolution
from schemoid.transformer import SchemaTransformer
from schemoid.uritemplates import UriTemplateRegistry

logger = logging.getLogger(__name__)


class SchemaEngine:
    """
    Transforms one JSON schema document.

    Attributes:
        source: The decoded schema document. Never modified.
        config: The engine configuration.
        schema: The transformed tree, available after init().
    """

    def __init__(self, source: Dict[str, Any], config: SchemaConfig) -> None:
        if not isinstance(source, dict):
            raise SchemaShapeError(f"Schema document must be an object, got {type(source).__name__}", '$')
        self.source = source
        self.config = config
        self.schema: Optional[Dict[str, Any]] = None
        self.registry = UriTemplateRegistry(config.url_templates)
        self.types = TypeMapper(config.type_map)
        self.references = ReferenceResolver(self.registry)
        self.associations = AssociationAnnotator(self.references, config.schema_name)
        self.dependencies = DependencyTracker()
        self.transformer = SchemaTransformer(config)

    @classmethod
    def for_schema(cls, source: Dict[str, Any], name: str, snake_case_keys: bool = True,
                   exceptions: Optional[Iterable[str]] = None) -> 'SchemaEngine':
        """Create an engine for a document with the given logical name."""
        return cls(source, SchemaConfig.for_schema(name, snake_case_keys, exceptions))

    def init(self) -> Dict[str, Any]:
        """
        Run the transformation pipeline once and return the resulting tree.
        Later calls return the same tree.
        """
        if self.schema is not None:
            return self.schema
        logger.debug("Transforming schema %s", self.config.schema_name)
        schema = self.transform(self.source)
        schema = self.add_title(schema)
        schema = self.add_schema_url(schema)
        schema = self.add_required_fields(schema)
        self.add_dependencies(schema)
        self.schema = schema
        return schema

    def transform(self, source: Dict[str, Any]) -> Dict[str, Any]:
        """Canonicalize a schema tree, see SchemaTransformer."""
        schema = self.transformer.transform(source)
        properties = schema.get('properties')
        if properties is not None and not isinstance(properties, dict):
            raise SchemaShapeError(f"Expected 'properties' to be an object, got {type(properties).__name__}",
                                   '$.properties')
        return schema

    def add_title(self, source: Dict[str, Any]) -> Dict[str, Any]:
        """Set the title to the schema name."""
        source['title'] = self.config.schema_name
        return source

    def add_schema_url(self, source: Dict[str, Any]) -> Dict[str, Any]:
        """Set the default JSON schema URL unless the document names one."""
        if source.get('schema'):
            return source
        source['schema'] = self.config.default_schema_url
        return source

    def add_required_fields(self, source: Dict[str, Any]) -> Dict[str, Any]:
        """Fold nested required markers into the top-level required array."""
        return add_required_fields(source)

    def add_dependencies(self, source: Dict[str, Any]) -> None:
        """Register the property dependencies declared by the schema."""
        self.dependencies.add_schema_dependencies(source)

    def get_dependencies(self) -> Mapping[str, List[str]]:
        """Dependency owner -> dependent fields."""
        return self.dependencies.all()

    def get_field_property(self, property_name: str) -> List[str]:
        """Names of the fields of the transformed tree that set property_name to true."""
        return get_field_property(self.init(), property_name)

    def resolve_field_type(self, field: Dict[str, Any]) -> Resolution:
        """Resolve the target type of a field."""
        return self.types.resolve(field)

    def get_field_type(self, field: Dict[str, Any]) -> Any:
        """Target type of a field; see TypeMapper.get_field_type."""
        return self.types.get_field_type(field)

    def resolve_field_reference(self, field: Dict[str, Any]) -> Resolution:
        """Resolve the namespace of a field reference."""
        return self.references.resolve(field)

    def get_field_reference(self, field: Dict[str, Any]) -> Optional[str]:
        """Namespace of a field reference; see ReferenceResolver.get_field_reference."""
        return self.references.get_field_reference(field)

    def has_field_reference(self, field: Dict[str, Any], key: str = 'ref') -> bool:
        """True if the field holds a non-empty reference under key."""
        return self.references.has_field_reference(field, key)

    def resolve_definition(self, ref: Any) -> Optional[Dict[str, Any]]:
        """Look up a ``#/definitions/...`` reference in the source document."""
        return self.references.resolve_definition(ref, self.source)

    def get_field_associations(self, field: Dict[str, Any]) -> str:
        """Comment block describing a field."""
        return self.associations.get_field_associations(field)

    def schema_version(self) -> Optional[str]:
        """
        Get the JSON schema version named by the schema URL, e.g. ``draft-04``.
        Returns None for URLs that name no supported version.
        """
        url = self.init().get('schema')
        version = self.registry.extract(url, 'version')
        segments = version.get('segments') if version else None
        if segments and segments[0] in self.config.versions:
            return segments[0]
        logger.warning("Schema %s declares unsupported schema URL %r", self.config.schema_name, url)
        return None
