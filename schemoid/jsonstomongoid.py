# coding: utf-8
"""
Converts JSON schema documents to Mongoid document classes.
"""

# pylint: disable=line-too-long

import json
import logging
import os
import re
from typing import Any, Dict, Iterable, List, Optional

from schemoid.common import json_path, pascal, process_template, render_template, sanitize_name, underscore
from schemoid.errors import SchemaShapeError
from schemoid.resolution import Mapped
from schemoid.schema import SchemaEngine

logger = logging.getLogger(__name__)

RUBY_SYMBOL = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*[?!]?$')
RUBY_IDENTIFIER = re.compile(r'^[a-z_][A-Za-z0-9_]*$')


def ruby_symbol(name: str) -> str:
    """Format a name as a Ruby symbol literal, quoting it where required."""
    if RUBY_SYMBOL.match(name):
        return f':{name}'
    escaped = name.replace('\\', '\\\\').replace('"', '\\"')
    return f':"{escaped}"'


class JsonSchemaToMongoidConverter:
    """
    Renders the transformed tree of a JSON schema as a Mongoid document class.

    Attributes:
        schema_name: Logical schema name; the input file name when empty.
        snake_case_keys: Convert schema keys to snake_case.
        exceptions: Keys dropped with their subtree, ``definitions`` by default.
        engine: The engine of the schema being converted.
    """

    def __init__(self, schema_name: str = '', snake_case_keys: bool = True, exceptions: Optional[Iterable[str]] = None) -> None:
        self.schema_name = schema_name
        self.snake_case_keys = snake_case_keys
        self.exceptions = exceptions
        self.engine: Optional[SchemaEngine] = None

    def load(self, json_schema_file_path: str) -> SchemaEngine:
        """Read a JSON schema file and create its engine."""
        with open(json_schema_file_path, 'r', encoding='utf-8') as file:
            source = json.load(file)
        name = self.schema_name or os.path.splitext(os.path.basename(json_schema_file_path))[0]
        self.engine = SchemaEngine.for_schema(source, name, self.snake_case_keys, self.exceptions)
        return self.engine

    def convert(self, json_schema_file_path: str, mongoid_file_path: str) -> Dict[str, Any]:
        """
        Convert a JSON schema file and write the Mongoid class.

        Returns:
            The transformed schema tree.
        """
        engine = self.load(json_schema_file_path)
        data = engine.init()
        return self.generate(data, mongoid_file_path)

    def generate(self, data: Dict[str, Any], mongoid_file_path: Optional[str] = None) -> Dict[str, Any]:
        """
        Generate the document for a transformed tree. Trees without
        properties produce no document.
        """
        if not data.get('properties'):
            logger.info("Schema %s has no properties, no document generated", data.get('title'))
            return data
        self.generate_document(data, mongoid_file_path)
        return data

    def output_path(self, mongoid_file_path: str, data: Dict[str, Any]) -> str:
        """Place the document in the given directory, or use the given file path."""
        if os.path.isdir(mongoid_file_path) or mongoid_file_path.endswith(('/', os.sep)):
            return os.path.join(mongoid_file_path, f"{str(data['title']).lower()}.rb")
        return mongoid_file_path

    def generate_document(self, data: Dict[str, Any], mongoid_file_path: Optional[str] = None) -> str:
        """
        Render the Mongoid class of a transformed tree and, if a path is
        given, write it to disk.

        Returns:
            str: The rendered document.
        """
        if self.engine is None:
            raise ValueError("No schema loaded")
        kvargs = dict(
            data=data,
            dependencies=self.engine.get_dependencies(),
            required=self.get_required_fields(data),
            embedded_classes=self.get_embedded_classes(data),
            document_json=json.dumps(data, indent=2),
            generate_fields=self.generate_fields,
            dependency_condition=self.dependency_condition,
            ruby_symbol=ruby_symbol,
        )
        template = "jsonstomongoid/document.rb.jinja"
        if not mongoid_file_path:
            return process_template(template, **kvargs)
        output = self.output_path(mongoid_file_path, data)
        logger.info("Writing %s", output)
        return render_template(template, output, **kvargs)

    def generate_fields(self, properties: Any, path: str = '$.properties') -> str:
        """
        Render the declarations of all properties, each preceded by its comment block.

        Raises:
            SchemaShapeError: If a property is not an object.
        """
        if not isinstance(properties, dict):
            return ''
        lines = []
        for name, field in properties.items():
            if not isinstance(field, dict):
                raise SchemaShapeError(f"Expected property '{name}' to be an object, got {type(field).__name__}",
                                       json_path(path, name))
            lines.append(self.engine.get_field_associations(field))
            lines.append(f"  {self.get_field_declaration(name, field)}")
        return ''.join(lines)

    def get_field_declaration(self, name: str, field: Dict[str, Any]) -> str:
        """Declare a field, or an embedded relation for referenced types."""
        if self.engine.has_field_reference(field):
            return f"embeds_one {ruby_symbol(self.get_reference_name(field, name))}"
        items = field.get('items')
        if isinstance(items, dict) and self.engine.has_field_reference(items):
            return f"embeds_many {ruby_symbol(self.get_reference_name(items, name))}"
        field_type = self.engine.resolve_field_type(field)
        if isinstance(field_type, Mapped):
            return f"field {ruby_symbol(name)}, type: {field_type.value}"
        if 'type' in field or 'format' in field:
            logger.warning("Field %s has no known type (type %r, format %r)", name, field.get('type'), field.get('format'))
        return f"field {ruby_symbol(name)}"

    def get_reference_name(self, node: Dict[str, Any], fallback: str) -> str:
        """Relation name of a referenced type, from its namespace or local definition."""
        namespace = self.engine.resolve_field_reference(node)
        if isinstance(namespace, Mapped):
            return sanitize_name(namespace.value, True)
        definition = self.engine.registry.extract(node['ref'], 'definition')
        if definition and definition.get('segments'):
            return sanitize_name(definition['segments'][-1], True)
        return fallback

    def get_required_fields(self, data: Dict[str, Any]) -> str:
        """The required field symbols, comma separated."""
        required = data.get('required')
        if not isinstance(required, list):
            return ''
        return ', '.join(ruby_symbol(str(name)) for name in required)

    def dependency_condition(self, dependents: List[str]) -> str:
        """
        Ruby condition that holds when any dependent field is present.
        Names that are not plain Ruby method names are read as attributes,
        e.g. ``self[:"post-box"]``.
        """
        conditions = []
        for name in dependents:
            if RUBY_IDENTIFIER.match(name):
                conditions.append(f"{name}.present?")
            else:
                conditions.append(f"self[{ruby_symbol(name)}].present?")
        return ' || '.join(conditions)

    def get_embedded_classes(self, data: Dict[str, Any]) -> List[Dict[str, Any]]:
        """
        Collect the locally defined types referenced by the properties.
        Each is transformed like the main schema and rendered as an embedded
        class of it.
        """
        embedded: Dict[str, Dict[str, Any]] = {}
        properties = data.get('properties')
        if not isinstance(properties, dict):
            return []
        for name, field in properties.items():
            if not isinstance(field, dict):
                continue
            node = field if self.engine.has_field_reference(field) else field.get('items')
            if not isinstance(node, dict) or not self.engine.has_field_reference(node):
                continue
            definition = self.engine.resolve_definition(node['ref'])
            if definition is None:
                continue
            reference_name = self.get_reference_name(node, name)
            class_name = pascal(reference_name)
            if class_name in embedded:
                continue
            definition_path = f'$.definitions.{reference_name}'
            tree = self.engine.transformer.transform(definition, definition_path)
            embedded[class_name] = {
                'name': class_name,
                'description': tree.get('description', ''),
                'properties': tree.get('properties', {}),
                'path': json_path(definition_path, 'properties'),
                'parent': ruby_symbol(underscore(self.engine.config.schema_name)),
            }
        return list(embedded.values())


def convert_jsons_to_mongoid(json_schema_file_path: str, mongoid_file_path: str, schema_name: str = '', snake_case_keys: bool = True, exceptions: Optional[Iterable[str]] = None) -> Dict[str, Any]:
    """
    Convert a JSON schema file to a Mongoid document class.

    Args:
        json_schema_file_path: Path to the JSON schema file.
        mongoid_file_path: Path of the Ruby file to write, or a directory.
        schema_name: Class name base; defaults to the input file name.
        snake_case_keys: Convert schema keys to snake_case.
        exceptions: Keys to drop with their subtree.

    Returns:
        The transformed schema tree.
    """
    if not json_schema_file_path:
        raise ValueError('JSON schema file path is required')
    if not os.path.exists(json_schema_file_path):
        raise FileNotFoundError(f'JSON schema file {json_schema_file_path} not found')
    converter = JsonSchemaToMongoidConverter(schema_name, snake_case_keys, exceptions)
    return converter.convert(json_schema_file_path, mongoid_file_path)


def convert_jsons_to_tree(json_schema_file_path: str, tree_file_path: str, schema_name: str = '', snake_case_keys: bool = True, exceptions: Optional[Iterable[str]] = None) -> Dict[str, Any]:
    """
    Convert a JSON schema file to its transformed tree and write it as JSON.

    Returns:
        The transformed schema tree.
    """
    if not json_schema_file_path:
        raise ValueError('JSON schema file path is required')
    if not os.path.exists(json_schema_file_path):
        raise FileNotFoundError(f'JSON schema file {json_schema_file_path} not found')
    converter = JsonSchemaToMongoidConverter(schema_name, snake_case_keys, exceptions)
    tree = converter.load(json_schema_file_path).init()
    output_dir = os.path.dirname(tree_file_path)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)
    with open(tree_file_path, 'w', encoding='utf-8') as tree_file:
        json.dump(tree, tree_file, indent=2)
    return tree
