# pyzke/resolver.py
import logging
from typing import Dict, List, Set, Tuple

from .base import WidgetClass, WidgetInstance
from .registry import ClassRegistry

logger = logging.getLogger(__name__)

DependencySet = Tuple[WidgetClass, ...]


class DependencyResolver:
    """
    Works out which widget classes an instance tree needs on the client.

    Only eager aggregatees count: late ones bring their own classes when
    they are fetched.
    """

    def __init__(self, registry: ClassRegistry):
        self.registry = registry

    def resolve(self, instance: WidgetInstance) -> DependencySet:
        """
        Ordered, duplicate-free classes for ``instance``.

        Every class comes after the classes its instances eagerly aggregate
        and after its own superclasses that are in the set. Apart from that,
        classes keep the position of their first (deepest) occurrence.
        """
        seen: Dict[str, WidgetClass] = {}
        requires: Dict[str, List[str]] = {}
        self._collect(instance, seen, requires)

        placed: Dict[str, WidgetClass] = {}
        for name in seen:
            self._place(name, seen, requires, placed, set())
        ordered = tuple(placed.values())
        logger.debug("Dependencies of %s: %s", instance.id, [c.short_name for c in ordered])
        return ordered

    def _collect(
        self,
        instance: WidgetInstance,
        seen: Dict[str, WidgetClass],
        requires: Dict[str, List[str]],
    ) -> None:
        needed = requires.setdefault(instance.widget_class.name, [])
        for _, child in instance.eager_aggregatees():
            self._collect(child, seen, requires)
            if child.widget_class.name not in needed:
                needed.append(child.widget_class.name)
        # dicts keep the first insertion position
        seen.setdefault(instance.widget_class.name, instance.widget_class)

    def _place(
        self,
        name: str,
        seen: Dict[str, WidgetClass],
        requires: Dict[str, List[str]],
        placed: Dict[str, WidgetClass],
        visiting: Set[str],
    ) -> None:
        if name in placed or name in visiting:
            # a class aggregating its own subclass has no valid order; the
            # first edge walked wins
            return
        visiting.add(name)
        widget_class = seen[name]
        ancestors = [a.name for a in reversed(self.registry.ancestors(widget_class)) if a.name in seen]
        for before in ancestors + requires.get(name, []):
            self._place(before, seen, requires, placed, visiting)
        visiting.discard(name)
        placed[name] = widget_class
