# pyzke/__init__.py

"""
Pyzke

Composes the client code and instantiation config for trees of server-side
widgets, sending a browser only the widget classes it does not have yet.
"""

# --- Metadata and instances ---
from .base import WidgetClass, WidgetInstance, Aggregatee
from .registry import ClassRegistry, css_include, MAX_INHERITANCE_DEPTH

# --- Composition ---
from .resolver import DependencyResolver
from .composer import CodeComposer
from .instance_config import ConfigComposer
from .engine import WidgetEngine, WidgetPayload

# --- Support ---
from .config import Config, EngineSettings, get_config
from .resources import StaticFileReader
from .jsutil import JsLiteral, THIS, NULL, to_js_literal
from .errors import PyzkeError, ResourceNotFound, ConfigurationError

__all__ = [
    "WidgetClass", "WidgetInstance", "Aggregatee",
    "ClassRegistry", "css_include", "MAX_INHERITANCE_DEPTH",
    "DependencyResolver", "CodeComposer", "ConfigComposer",
    "WidgetEngine", "WidgetPayload",
    "Config", "EngineSettings", "get_config",
    "StaticFileReader",
    "JsLiteral", "THIS", "NULL", "to_js_literal",
    "PyzkeError", "ResourceNotFound", "ConfigurationError",
]
