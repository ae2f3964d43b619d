"""Operation registry for auto-discovery."""

import pkgutil
import importlib
import inspect
from typing import Dict, List, Type

from .base import Operation


class OperationRegistry:
    """Map CLI operation names to the Operation subclasses of this package."""

    def __init__(self):
        self._operations: Dict[str, Type[Operation]] = {}
        package = importlib.import_module(__package__)
        for _, module_name, _ in pkgutil.iter_modules(package.__path__):
            if module_name in ('base', 'registry'):
                continue
            module = importlib.import_module(f'{__package__}.{module_name}')
            for _, obj in inspect.getmembers(module, inspect.isclass):
                if issubclass(obj, Operation) and obj is not Operation:
                    self._operations[obj.name] = obj

    def get(self, name: str) -> Type[Operation]:
        """Get an operation class by name.

        Raises:
            KeyError: If operation not found
        """
        if name not in self._operations:
            raise KeyError(f"Unknown operation: {name}")
        return self._operations[name]

    def list_operations(self) -> List[str]:
        """Get sorted list of available operation names."""
        return sorted(self._operations)


registry = OperationRegistry()
