"""Engine configuration and the static type and URL tables."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import FrozenSet, Iterable, Mapping, Optional, Tuple

from schemoid.common import sanitize_name, upcase_first

# JSON schema type/format tokens (snake_case) to Mongoid field types
TYPE_MAP: Mapping[str, str] = MappingProxyType({
    'array': 'Array',
    'integer': 'Integer',
    'number': 'Float',
    'string': 'String',
    'boolean': 'Mongoid::Boolean',
    'null': 'Null',
    'object': 'Hash',
    'date': 'Date',
    'date_time': 'DateTime',
    'date-time': 'DateTime',
    'time': 'Time',
    'uri': 'String',
    'email': 'String',
    'phone': 'String',
    'geo': 'Hash',
    'adr': 'Hash',
})

DEFAULT_SCHEMA_URL = 'http://json-schema.org/schema#'

URL_TEMPLATES: Mapping[str, str] = MappingProxyType({
    'default': DEFAULT_SCHEMA_URL,
    'version': '{scheme}://{host}{/segments*}{#fragment}',
    'reference': '{scheme}://{host}{/segments*}{#fragments*}',
    'definition': '#/definitions{/segments*}',
})

SCHEMA_VERSIONS: Tuple[str, ...] = ('schema', 'hyper-schema', 'draft-03', 'draft-04')

DEFAULT_EXCEPTIONS: FrozenSet[str] = frozenset({'definitions'})


@dataclass(frozen=True)
class SchemaConfig:
    """
    Settings of one engine instance. Immutable once constructed.

    Attributes:
        schema_name: Class name derived from the input's logical name.
        snake_case_keys: Convert object keys to snake_case while transforming.
        exceptions: Keys whose whole subtree is dropped while transforming.
        type_map: Type/format token to target type name.
        url_templates: URI template name to pattern.
        versions: Schema versions recognised in ``$schema`` URLs.
    """
    schema_name: str
    snake_case_keys: bool = True
    exceptions: FrozenSet[str] = DEFAULT_EXCEPTIONS
    type_map: Mapping[str, str] = field(default_factory=lambda: TYPE_MAP)
    url_templates: Mapping[str, str] = field(default_factory=lambda: URL_TEMPLATES)
    versions: Tuple[str, ...] = SCHEMA_VERSIONS

    def __post_init__(self) -> None:
        object.__setattr__(self, 'exceptions', frozenset(self.exceptions))
        object.__setattr__(self, 'type_map', MappingProxyType(dict(self.type_map)))
        object.__setattr__(self, 'url_templates', MappingProxyType(dict(self.url_templates)))
        object.__setattr__(self, 'versions', tuple(self.versions))

    @property
    def default_schema_url(self) -> str:
        """The schema URL assumed when a document declares none."""
        return self.url_templates.get('default', DEFAULT_SCHEMA_URL)

    @classmethod
    def for_schema(cls, name: str, snake_case_keys: bool = True,
                   exceptions: Optional[Iterable[str]] = None) -> 'SchemaConfig':
        """
        Build the configuration for a schema with the given logical name,
        usually the input file name without its extension.
        """
        schema_name = upcase_first(sanitize_name(name))
        if not schema_name:
            raise ValueError(f"Schema name {name!r} has no usable characters")
        return cls(schema_name=schema_name,
                   snake_case_keys=snake_case_keys,
                   exceptions=frozenset(exceptions) if exceptions is not None else DEFAULT_EXCEPTIONS)
