# pyzke/base.py
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from .errors import ConfigurationError

_SHORT_NAME_SEPARATORS = re.compile(r"::|\.")


def short_name_for(name: str) -> str:
    """
    Default client-side symbol for a class name. Module separators are
    dropped so ``grids.Extended`` becomes ``GridsExtended``.
    """
    parts = [p for p in _SHORT_NAME_SEPARATORS.split(name) if p]
    return "".join(p[0].upper() + p[1:] for p in parts)


# --- Widget class metadata ---
@dataclass(frozen=True)
class WidgetClass:
    """
    Static description of a widget class, registered once.

    :param name: Registry key of the class.
    :param superclass: Name of the WidgetClass this one extends on the client,
        or None when it extends a foreign client class directly.
    :param base_class: Foreign client class to extend when ``superclass`` is None.
        None means the configured default (``Ext.Panel``).
    :param extend_properties: Properties and function bodies mixed into the
        generated client class, in declaration order.
    :param included_scripts: Paths of script files sent ahead of the class definition.
    :param included_styles: Paths of stylesheets belonging to this class.
    :param menus: Menu descriptors registered when an instance is constructed.
    :param api_points: Names of server operations exposed to the client.
    :param short_name: Symbol used in the client cache namespace.
    """
    name: str
    superclass: Optional[str] = None
    base_class: Optional[str] = None
    extend_properties: Mapping[str, Any] = field(default_factory=dict)
    included_scripts: Tuple[str, ...] = ()
    included_styles: Tuple[str, ...] = ()
    menus: Tuple[Any, ...] = ()
    api_points: Tuple[str, ...] = ()
    short_name: str = ""

    def __post_init__(self):
        if not self.name:
            raise ConfigurationError("Widget class needs a name")
        if self.superclass == self.name:
            raise ConfigurationError(f"Widget class {self.name!r} cannot inherit from itself")
        # frozen: normalize through object.__setattr__
        object.__setattr__(self, "short_name", self.short_name or short_name_for(self.name))
        object.__setattr__(self, "extend_properties", MappingProxyType(dict(self.extend_properties)))
        object.__setattr__(self, "included_scripts", tuple(self.included_scripts))
        object.__setattr__(self, "included_styles", tuple(self.included_styles))
        object.__setattr__(self, "menus", tuple(self.menus))
        object.__setattr__(self, "api_points", tuple(self.api_points))

    def __eq__(self, other):
        if not isinstance(other, WidgetClass):
            return NotImplemented
        return self._compare_key() == other._compare_key()

    def __hash__(self):
        return hash(self.name)

    def _compare_key(self):
        return (
            self.name, self.short_name, self.superclass, self.base_class,
            tuple(self.extend_properties.items()), self.included_scripts,
            self.included_styles, self.menus, self.api_points,
        )

    def __repr__(self):
        return f"WidgetClass({self.name!r}, superclass={self.superclass!r})"


# --- Widget instances ---
@dataclass(frozen=True)
class Aggregatee:
    """A child instance together with its loading mode."""
    instance: "WidgetInstance"
    late: bool = False


class WidgetInstance:
    """
    One widget in a per-request instance tree.

    Children ("aggregatees") are created through :meth:`aggregate`, which
    derives their id from the parent's so that ids are unique within a tree
    and no instance is shared between two parents.

    :param name: Local name of the instance.
    :param widget_class: The WidgetClass this instance is built from.
    :param override_config: Values merged over the computed client config.
    :param actions: Opaque actions passed through to the client.
    :param menu: Opaque menu passed through to the client.
    :param before_load: Optional callables run (with the instance) right before
        the instance is serialized for the client.
    """

    def __init__(
        self,
        name: str,
        widget_class: WidgetClass,
        override_config: Optional[Dict[str, Any]] = None,
        actions: Any = None,
        menu: Any = None,
        before_load: Sequence[Callable[["WidgetInstance"], None]] = (),
        _id: Optional[str] = None,
    ):
        self.name = name
        self.widget_class = widget_class
        self.override_config: Dict[str, Any] = dict(override_config or {})
        self.actions = actions
        self.menu = menu
        self._before_load_hooks: List[Callable[["WidgetInstance"], None]] = list(before_load)
        self._id = _id if _id is not None else name
        self._aggregatees: Dict[str, Aggregatee] = {}

    @property
    def id(self) -> str:
        return self._id

    @property
    def aggregatees(self) -> Mapping[str, Aggregatee]:
        return MappingProxyType(self._aggregatees)

    def aggregate(
        self,
        name: str,
        widget_class: WidgetClass,
        late: bool = False,
        **kwargs,
    ) -> "WidgetInstance":
        """Create a child instance owned by this one and return it."""
        if name in self._aggregatees:
            raise ConfigurationError(f"{self.id!r} already has an aggregatee named {name!r}")
        child = WidgetInstance(name, widget_class, _id=f"{self._id}__{name}", **kwargs)
        self._aggregatees[name] = Aggregatee(child, late)
        return child

    def aggregatee(self, name: str) -> "WidgetInstance":
        try:
            return self._aggregatees[name].instance
        except KeyError:
            raise ConfigurationError(f"{self.id!r} has no aggregatee named {name!r}") from None

    def eager_aggregatees(self) -> List[Tuple[str, "WidgetInstance"]]:
        """Aggregatees embedded in the initial payload, in insertion order."""
        return [(n, a.instance) for n, a in self._aggregatees.items() if not a.late]

    def late_aggregatees(self) -> List[Tuple[str, "WidgetInstance"]]:
        return [(n, a.instance) for n, a in self._aggregatees.items() if a.late]

    def add_before_load(self, hook: Callable[["WidgetInstance"], None]) -> None:
        self._before_load_hooks.append(hook)

    def before_load(self) -> None:
        """Lifecycle hook run right before the instance is serialized."""
        for hook in self._before_load_hooks:
            hook(self)

    def __repr__(self):
        return f"WidgetInstance(id={self._id!r}, class={self.widget_class.name!r})"
