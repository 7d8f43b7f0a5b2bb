# pyzke/definitions.py
"""
Loading widget classes and instance trees from YAML documents.

A document has two top-level keys::

    classes:
      Grid:
        base_class: Ext.grid.EditorGridPanel
        scripts: [js/grid.js]
        styles: [css/grid.css]
        api: [get_data]
        extend:
          onRowClick: !js "function(row){ this.select(row); }"
      ExtendedGrid:
        superclass: Grid
    widget:
      name: foo_bar
      class: ExtendedGrid
      aggregatees:
        - {name: detail, class: Grid, late: true}

Strings tagged ``!js`` become :class:`~pyzke.jsutil.JsLiteral` values and
are written into generated code unquoted.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml

from .base import WidgetClass, WidgetInstance
from .config import DEFAULT_EXT_LOCATION
from .errors import ConfigurationError
from .jsutil import JsLiteral
from .registry import ClassRegistry, css_include

_CLASS_KEYS = {"superclass", "base_class", "short_name", "extend", "scripts", "styles", "menus", "api"}
_WIDGET_KEYS = {"name", "class", "late", "config", "actions", "menu", "aggregatees"}


class DefinitionLoader(yaml.SafeLoader):
    """Safe YAML loader that also understands the ``!js`` tag."""


def _js_constructor(loader, node):
    return JsLiteral(loader.construct_scalar(node))


DefinitionLoader.add_constructor("!js", _js_constructor)


def load_document(source: Union[str, Path]) -> Dict[str, Any]:
    path = Path(source)
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = yaml.load(fh, Loader=DefinitionLoader)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid definition file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Definition file {path} must contain a mapping")
    return data


def parse_class(name: str, spec: Optional[Dict[str, Any]], ext_location: str = DEFAULT_EXT_LOCATION) -> WidgetClass:
    spec = spec or {}
    if not isinstance(spec, dict):
        raise ConfigurationError(f"Definition of class {name!r} must be a mapping")
    unknown = set(spec) - _CLASS_KEYS
    if unknown:
        raise ConfigurationError(f"Unknown keys for class {name!r}: {sorted(unknown)}")

    scripts = spec.get("scripts", [])
    if isinstance(scripts, str):
        scripts = [scripts]
    styles = spec.get("styles", [])
    if not isinstance(styles, list):
        styles = [styles]

    return WidgetClass(
        name=name,
        superclass=spec.get("superclass"),
        base_class=spec.get("base_class"),
        short_name=spec.get("short_name", ""),
        extend_properties=spec.get("extend") or {},
        included_scripts=tuple(scripts),
        included_styles=css_include(*styles, ext_location=ext_location),
        menus=tuple(spec.get("menus") or ()),
        api_points=tuple(spec.get("api") or ()),
    )


def load_registry(data: Dict[str, Any], ext_location: str = DEFAULT_EXT_LOCATION) -> ClassRegistry:
    classes = data.get("classes") or {}
    if not isinstance(classes, dict):
        raise ConfigurationError("'classes' must map class names to definitions")
    registry = ClassRegistry()
    for name, spec in classes.items():
        registry.register(parse_class(str(name), spec, ext_location))
    return registry


def build_instance(spec: Dict[str, Any], registry: ClassRegistry) -> WidgetInstance:
    _check_widget_spec(spec)
    root = WidgetInstance(
        spec["name"],
        registry.get(spec["class"]),
        override_config=spec.get("config"),
        actions=spec.get("actions"),
        menu=spec.get("menu"),
    )
    _add_aggregatees(root, spec.get("aggregatees") or [], registry)
    return root


def _add_aggregatees(parent: WidgetInstance, specs, registry: ClassRegistry) -> None:
    for spec in specs:
        _check_widget_spec(spec)
        child = parent.aggregate(
            spec["name"],
            registry.get(spec["class"]),
            late=bool(spec.get("late", False)),
            override_config=spec.get("config"),
            actions=spec.get("actions"),
            menu=spec.get("menu"),
        )
        _add_aggregatees(child, spec.get("aggregatees") or [], registry)


def _check_widget_spec(spec: Any) -> None:
    if not isinstance(spec, dict):
        raise ConfigurationError(f"Widget definition must be a mapping, got {spec!r}")
    missing = {"name", "class"} - set(spec)
    if missing:
        raise ConfigurationError(f"Widget definition is missing {sorted(missing)}")
    unknown = set(spec) - _WIDGET_KEYS
    if unknown:
        raise ConfigurationError(f"Unknown keys for widget {spec['name']!r}: {sorted(unknown)}")


def load(source: Union[str, Path], ext_location: str = DEFAULT_EXT_LOCATION) -> Tuple[ClassRegistry, WidgetInstance]:
    """Read a definition file and return its registry and root instance."""
    data = load_document(source)
    registry = load_registry(data, ext_location)
    if "widget" not in data:
        raise ConfigurationError(f"Definition file {source} has no 'widget' section")
    return registry, build_instance(data["widget"], registry)
