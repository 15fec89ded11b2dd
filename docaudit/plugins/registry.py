# docaudit/plugins/registry.py
from typing import Callable, Dict, Any


class Registry:
    def __init__(self):
        # auxiliary checks: context dict -> outcome dict with at least "status"
        self.checks: Dict[str, Callable[[Dict[str, Any]], Dict[str, Any]]] = {}

    def check(self, name: str):
        def deco(fn: Callable[[Dict[str, Any]], Dict[str, Any]]):
            self.checks[name] = fn
            return fn
        return deco


plugin_registry = Registry()
