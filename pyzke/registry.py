# pyzke/registry.py
import logging
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .base import WidgetClass
from .config import DEFAULT_EXT_LOCATION
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

# Longest superclass chain walked before the chain is treated as cyclic.
MAX_INHERITANCE_DEPTH = 32


class ClassRegistry:
    """
    Keyed store of widget class metadata.

    Records are frozen, so once a class is registered nothing about it
    changes; composition only ever reads from here.
    """

    def __init__(self, classes=()):
        self._classes: Dict[str, WidgetClass] = {}
        for widget_class in classes:
            self.register(widget_class)

    def register(self, widget_class: WidgetClass) -> WidgetClass:
        existing = self._classes.get(widget_class.name)
        if existing is not None:
            if existing == widget_class:
                logger.warning("Widget class %r registered twice; ignoring", widget_class.name)
                return existing
            raise ConfigurationError(
                f"Widget class {widget_class.name!r} is already registered with different metadata"
            )
        clash = self._by_short_name(widget_class.short_name)
        if clash is not None:
            raise ConfigurationError(
                f"Short name {widget_class.short_name!r} of {widget_class.name!r} "
                f"is already used by {clash.name!r}"
            )
        self._classes[widget_class.name] = widget_class
        logger.debug("Registered widget class %s as %s", widget_class.name, widget_class.short_name)
        return widget_class

    def get(self, name: str) -> WidgetClass:
        try:
            return self._classes[name]
        except KeyError:
            raise ConfigurationError(f"Unknown widget class {name!r}") from None

    def __contains__(self, name) -> bool:
        return name in self._classes

    def __iter__(self) -> Iterator[WidgetClass]:
        return iter(self._classes.values())

    def __len__(self) -> int:
        return len(self._classes)

    def _by_short_name(self, short_name: str) -> Optional[WidgetClass]:
        for widget_class in self._classes.values():
            if widget_class.short_name == short_name:
                return widget_class
        return None

    # --- inheritance ---
    def is_js_inherited(self, widget_class: WidgetClass) -> bool:
        """
        True when the class chains to another generated widget class on the
        client, False when it extends a foreign base class directly.
        """
        if widget_class.superclass is None:
            return False
        self.superclass_of(widget_class)
        return True

    def superclass_of(self, widget_class: WidgetClass) -> WidgetClass:
        if widget_class.superclass is None:
            raise ConfigurationError(f"{widget_class.name!r} has no widget superclass")
        try:
            return self._classes[widget_class.superclass]
        except KeyError:
            raise ConfigurationError(
                f"Superclass {widget_class.superclass!r} of {widget_class.name!r} is not registered"
            ) from None

    def ancestors(self, widget_class: WidgetClass) -> List[WidgetClass]:
        """Widget superclasses of a class, nearest first."""
        chain = []
        current = widget_class
        while current.superclass is not None:
            if len(chain) >= MAX_INHERITANCE_DEPTH:
                raise ConfigurationError(
                    f"Superclass chain of {widget_class.name!r} is longer than "
                    f"{MAX_INHERITANCE_DEPTH}; is it cyclic?"
                )
            current = self.superclass_of(current)
            chain.append(current)
        return chain

    def accumulated_styles(self, widget_class: WidgetClass) -> Tuple[str, ...]:
        # Own styles only; ancestors are pulled in by the composer.
        return widget_class.included_styles


def css_include(*args: Any, ext_location: str = DEFAULT_EXT_LOCATION) -> Tuple[str, ...]:
    """
    Build an ``included_styles`` tuple.

    Each argument is a path, a list of paths, or a one-item mapping
    ``{"ext_examples": files}`` whose files live under the Ext examples
    directory.
    """
    included: List[str] = []
    for inclusion in args:
        if isinstance(inclusion, dict):
            (where, files), = inclusion.items()
            if where != "ext_examples":
                raise ConfigurationError(f"Unknown style location {where!r}")
            location = ext_location.rstrip("/") + "/examples/"
        else:
            location = ""
            files = inclusion

        if isinstance(files, str):
            files = [files]

        for f in files:
            included.append(location + f)
    return tuple(included)
