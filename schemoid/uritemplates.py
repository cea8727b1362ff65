"""
URI templates used to take schema URLs apart.

Only the subset of RFC 6570 needed by the schema URL patterns is supported:
single-variable expressions with the simple, ``+``, ``#``, ``/`` and ``.``
operators, optionally exploded with ``*``. Matching works in the reverse
direction of expansion: a URL is matched against the template and the
variable values are extracted from it.
"""

import logging
import re
from typing import Any, Dict, List, Mapping, Optional, Tuple
from urllib.parse import unquote

logger = logging.getLogger(__name__)

UNRESERVED = r"A-Za-z0-9\-._~%"
RESERVED = r":/?#\[\]@!$&'()*+,;="

# operator -> (prefix, explode separator, allow reserved characters)
OPERATORS: Dict[str, Tuple[str, str, bool]] = {
    '': ('', ',', False),
    '+': ('', ',', True),
    '#': ('#', ',', True),
    '/': ('/', '/', False),
    '.': ('.', '.', False),
}

EXPRESSION = re.compile(r'\{([+#./]?)([A-Za-z_][A-Za-z0-9_]*)(\*?)\}')


class UriTemplate:
    """A compiled URI template that can extract variables from URLs."""

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        self.variables: List[Tuple[str, str, bool]] = []
        self._regex = re.compile(self._compile(pattern))

    def _compile(self, pattern: str) -> str:
        regex = []
        position = 0
        for match in EXPRESSION.finditer(pattern):
            regex.append(re.escape(pattern[position:match.start()]))
            operator, name, explode = match.group(1), match.group(2), bool(match.group(3))
            if any(name == var[0] for var in self.variables):
                raise ValueError(f"Variable '{name}' occurs more than once in URI template {pattern}")
            self.variables.append((name, operator, explode))
            prefix, separator, allow_reserved = OPERATORS[operator]
            chars = UNRESERVED + (RESERVED if allow_reserved else '')
            if explode and prefix and separator == prefix:
                # every item carries its own prefix, e.g. /a/b/c
                regex.append(f'(?P<{name}>(?:{re.escape(prefix)}[{chars}]*)+)?')
            elif prefix:
                regex.append(f'(?:{re.escape(prefix)}(?P<{name}>[{chars}]*))?')
            else:
                regex.append(f'(?P<{name}>[{chars}]*)')
            position = match.end()
        remainder = pattern[position:]
        if '{' in remainder or '}' in remainder:
            raise ValueError(f"Unsupported expression in URI template {pattern}")
        regex.append(re.escape(remainder))
        return ''.join(regex)

    def extract(self, url: Any) -> Optional[Dict[str, Any]]:
        """
        Match a URL against the template and extract its variables.

        Exploded variables yield lists of their non-empty components and the
        other variables yield strings. A variable that is absent from the URL,
        or whose components are all empty, is reported as None.

        Args:
            url: The URL to match.

        Returns:
            Dict[str, Any] | None: Variable values by name, or None if the URL
            does not match the template.
        """
        if not isinstance(url, str):
            return None
        match = self._regex.fullmatch(url)
        if match is None:
            logger.debug("URL %r does not match template %s", url, self.pattern)
            return None
        result: Dict[str, Any] = {}
        for name, operator, explode in self.variables:
            raw = match.group(name)
            if raw is None:
                result[name] = None
                continue
            prefix, separator, _ = OPERATORS[operator]
            if explode:
                items = raw.split(separator)
                if prefix and separator == prefix:
                    items = items[1:]
                values = [unquote(item) for item in items if item]
                result[name] = values if values else None
            else:
                result[name] = unquote(raw) if raw else None
        return result


class UriTemplateRegistry:
    """Named URI templates with a silent fallback to the ``version`` template."""

    FALLBACK = 'version'

    def __init__(self, templates: Mapping[str, str]) -> None:
        if self.FALLBACK not in templates:
            raise ValueError(f"URI template registry requires a '{self.FALLBACK}' template")
        self._patterns = dict(templates)
        self._compiled: Dict[str, UriTemplate] = {}

    @property
    def default(self) -> Optional[str]:
        """The default schema URL. It is a plain URL, not a template."""
        return self._patterns.get('default')

    def template(self, name: str) -> UriTemplate:
        """Get the template registered under name, or the version template."""
        pattern = self._patterns.get(name, self._patterns[self.FALLBACK])
        if pattern not in self._compiled:
            self._compiled[pattern] = UriTemplate(pattern)
        return self._compiled[pattern]

    def extract(self, url: Any, name: str) -> Optional[Dict[str, Any]]:
        """Extract the components of a URL via the named template."""
        return self.template(name).extract(url)
