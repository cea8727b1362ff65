import importlib

mod = "schemoid"
class LazyLoader:
    """
    Lazy loader for the schemoid functions to speed up startup time.
    """
    def __init__(self, mappings):
        self._modules = {}
        self._mappings = mappings

    def _load_module(self, module_name):
        if module_name not in self._modules:
            self._modules[module_name] = importlib.import_module(module_name)
        return self._modules[module_name]

    def __getattr__(self, item):
        if item.startswith("__"):
            raise AttributeError(item)
        if item in self._mappings:
            module_name, func_name = self._mappings[item]
            module = self._load_module(module_name)
            return getattr(module, func_name)
        else:
            return self._load_module(f"{mod}.{item}")

# Define the functions and their corresponding module paths
_mappings = {
    "SchemaEngine": (f"{mod}.schema", "SchemaEngine"),
    "SchemaConfig": (f"{mod}.config", "SchemaConfig"),
    "sanitize_name": (f"{mod}.common", "sanitize_name"),
    "convert_jsons_to_mongoid": (f"{mod}.jsonstomongoid", "convert_jsons_to_mongoid"),
    "convert_jsons_to_tree": (f"{mod}.jsonstomongoid", "convert_jsons_to_tree"),
}

_lazy_loader = LazyLoader(_mappings)

def __getattr__(name):
    return getattr(_lazy_loader, name)
