"""
Common utility functions for Schemoid.
"""

# pylint: disable=line-too-long

import os
import re
from typing import Any, List, Tuple

import jinja2

from schemoid.errors import SchemaCycleError, SchemaDepthError

# Maximum nesting of objects walked by the recursive transformations
MAX_RECURSION_DEPTH = 100


def underscore(word: str) -> str:
    """
    Convert a camelCase or PascalCase word to snake_case.

    Acronym runs are split before their last capital (``HTMLParser`` becomes
    ``html_parser``). Existing underscores and hyphens are kept as they are.

    Args:
        word (str): The word to convert.

    Returns:
        str: The word in snake_case.
    """
    word = re.sub(r'([A-Z\d]+)([A-Z][a-z])', r'\1_\2', word)
    word = re.sub(r'([a-z\d])([A-Z])', r'\1_\2', word)
    return word.lower()


def sanitize_name(value: str, snake_case: bool = False) -> str:
    """
    Sanitize a schema key or value into a canonical identifier token.

    Every character outside ``[A-Za-z0-9_-]`` is removed, which also drops
    sigils such as the ``$`` of ``$ref`` and ``$schema``.

    Args:
        value (str): The raw key or value.
        snake_case (bool): Convert the stripped token to snake_case.

    Returns:
        str: The canonical token.

    Raises:
        TypeError: If the value is not a string.
    """
    if not isinstance(value, str):
        raise TypeError(f"Cannot sanitize value of type {type(value).__name__}: {value!r}")
    token = re.sub(r'[^a-zA-Z0-9_-]', '', value)
    if snake_case:
        token = underscore(token)
    return token


def upcase_first(value: str) -> str:
    """Upper-case the first character only, leaving the rest untouched."""
    return value[:1].upper() + value[1:]


def pascal(word: str) -> str:
    """
    Convert a snake_case or hyphenated token to PascalCase, e.g.
    ``postal_address`` to ``PostalAddress``. camelCase words keep their
    inner capitals.

    Args:
        word (str): The token to convert.

    Returns:
        str: The token in PascalCase.
    """
    return ''.join(upcase_first(part) for part in re.split(r'[_-]', word) if part)


def is_array_of_strings(value: Any) -> bool:
    """True for a non-empty list whose elements are all strings."""
    if isinstance(value, list) and value:
        return all(isinstance(item, str) for item in value)
    return False


def normalize_array_value(values: List[str]) -> List[str]:
    """Sanitize every string of a list into a snake_case token."""
    return [sanitize_name(value, True) for value in values]


def json_path(parent: str, key: str) -> str:
    """Append a key to a JSON path expression rooted at ``$``."""
    return f'{parent}.{key}' if parent else f'$.{key}'


def process_template(file_path: str, **kvargs) -> str:
    """
    Process a file as a Jinja2 template with the given object as input.

    Args:
        file_path (str): The path to the template, relative to the package.

    Returns:
        str: The processed template as a string.
    """
    file_dir = os.path.dirname(__file__)
    template_loader = jinja2.FileSystemLoader(searchpath=file_dir)
    template_env = jinja2.Environment(loader=template_loader, trim_blocks=True, lstrip_blocks=True, keep_trailing_newline=True)
    template_env.filters['upcase_first'] = upcase_first

    template = template_env.get_template(file_path)
    return template.render(**kvargs)


def render_template(template: str, output: str, **kvargs) -> str:
    """
    Render a template and write it to a file

    Args:
        template (str): The template to render.
        output (str): The output file path.
        **kvargs: The keyword arguments to pass to the template.

    Returns:
        str: The rendered document.
    """
    out = process_template(template, **kvargs)
    output_dir = os.path.dirname(output)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)
    with open(output, 'w', encoding='utf-8') as f:
        f.write(out)
    return out


def check_recursion(node: Any, path: str, recursion_stack: List[Tuple[Any, str]]) -> None:
    """
    Guard a recursive descent into node.

    Args:
        node: The node about to be visited.
        path: The JSON path of the node.
        recursion_stack: The (node, path) pairs on the current recursion path.

    Raises:
        SchemaCycleError: If node is already on the recursion path.
        SchemaDepthError: If the recursion path is at its maximum length.
    """
    for index, (visited, _) in enumerate(recursion_stack):
        if visited is node:
            raise SchemaCycleError([p for _, p in recursion_stack[index:]] + [path])
    if len(recursion_stack) >= MAX_RECURSION_DEPTH:
        raise SchemaDepthError(f"Maximum recursion depth {MAX_RECURSION_DEPTH} exceeded in schema", path)
