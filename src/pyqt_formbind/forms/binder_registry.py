"""
Explicit registry of active form binders.

Maps a name to the binders registered under it so application code can reach
them (re-initialization hooks, remote invocation) without global lookups.

Design:
- Registration is explicit (FormBinder(registry=...) or register())
- on_init hooks run for current and future binders of a name
- Fail-loud on empty names
"""

import logging
from typing import Any, Callable, Dict, List

from pyqt_formbind.core.exceptions import BindingError

logger = logging.getLogger(__name__)

InitHook = Callable[[Any], None]


class BinderRegistry:
    """
    Registry of binders by name.

    Example:
        registry = BinderRegistry()
        registry.on_init("order", lambda binder: binder.prevent_editing(True))
        FormBinder(order_form, registry=registry, name="order")
        registry.invoke("order", "fill", new_order)
    """

    def __init__(self):
        self._binders: Dict[str, List[Any]] = {}
        self._hooks: Dict[str, List[InitHook]] = {}

    def register(self, name: str, binder: Any) -> None:
        """Register ``binder`` under ``name`` and run the init hooks of that name."""
        if not name:
            raise BindingError("Binder registration requires a non-empty name")
        binders = self._binders.setdefault(name, [])
        if binder in binders:
            logger.warning(f"Binder already registered under '{name}'")
            return
        binders.append(binder)
        logger.info(f"Registered binder '{name}'")
        for hook in self._hooks.get(name, []):
            hook(binder)

    def unregister(self, name: str, binder: Any = None) -> None:
        """Remove ``binder`` (or every binder if None) from ``name``."""
        binders = self._binders.get(name)
        if not binders:
            return
        if binder is None:
            del self._binders[name]
        else:
            if binder in binders:
                binders.remove(binder)
            if not binders:
                del self._binders[name]
        logger.debug(f"Unregistered binder '{name}'")

    def lookup(self, name: str) -> List[Any]:
        """Return the binders registered under ``name`` (empty list if none)."""
        return list(self._binders.get(name, []))

    def names(self) -> List[str]:
        return list(self._binders.keys())

    def on_init(self, name: str, hook: InitHook) -> None:
        """Run ``hook`` on every current and future binder registered under ``name``."""
        self._hooks.setdefault(name, []).append(hook)
        for binder in self.lookup(name):
            hook(binder)

    def invoke(self, name: str, method: str, *args, **kwargs) -> List[Any]:
        """
        Call ``method`` on every binder under ``name``.

        Returns:
            The results in registration order

        Raises:
            AttributeError: If a binder has no such method
        """
        results = []
        for binder in self.lookup(name):
            results.append(getattr(binder, method)(*args, **kwargs))
        return results
