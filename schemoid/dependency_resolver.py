# track field dependencies

from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping


class DependencyTracker:
    """
    Inverted index of field dependencies.

    Several fields may depend on the same field. To validate that field only
    once, the dependency becomes the owner of its dependents:
    ``dependency -> [dependent, dependent, ...]``.
    """

    def __init__(self) -> None:
        self._dependencies: Dict[str, List[str]] = {}

    def add(self, dependent: str, dependencies: Iterable[str]) -> None:
        """ register dependent under each of the fields it depends on """
        for dependency in dependencies:
            self._dependencies.setdefault(dependency, []).append(dependent)

    def all(self) -> Mapping[str, List[str]]:
        """ read-only view of dependency -> dependents """
        return MappingProxyType(self._dependencies)

    def add_schema_dependencies(self, tree: Dict[str, Any]) -> None:
        """
        Register the property dependencies of a transformed schema, i.e. the
        entries of its ``dependencies`` object that list property names.
        Schema dependencies (object values) carry no field names and are skipped.
        """
        dependencies = tree.get('dependencies')
        if not isinstance(dependencies, dict):
            return
        for dependent, source in dependencies.items():
            if isinstance(source, list) and all(isinstance(item, str) for item in source):
                self.add(dependent, source)
