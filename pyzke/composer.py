# pyzke/composer.py
"""
Client class code generation.

Every widget class becomes a constructor stored in the client cache
namespace under its short name. A class whose superclass is another widget
class extends that generated constructor; a class without one extends a
foreign base class (``Ext.Panel`` by default) and runs the common
before/after constructor hooks every widget needs.

Code for a class is always preceded by the code of its widget ancestors,
except for ancestors the browser already has (the ``known`` short names
passed in by the caller).
"""

import logging
from typing import Collection, Iterable, Optional

from .base import WidgetClass
from .config import EngineSettings
from .jsutil import strip_js_comments, to_js_literal
from .registry import ClassRegistry
from .resources import StaticFileReader

logger = logging.getLogger(__name__)


class CodeComposer:

    def __init__(
        self,
        registry: ClassRegistry,
        reader: Optional[StaticFileReader] = None,
        settings: Optional[EngineSettings] = None,
    ):
        self.registry = registry
        self.settings = settings if settings is not None else EngineSettings()
        self.reader = reader if reader is not None else StaticFileReader(self.settings.static_root)

    # --- scripts ---
    def script_for(self, widget_class: WidgetClass, known: Collection[str] = ()) -> str:
        """All JS code for a class, including the code of its uncached ancestors."""
        known = _as_set(known)
        res = ""

        if self._needs_ancestor(widget_class, known):
            res += self.script_for(self.registry.superclass_of(widget_class), known) + "\n"

        res += self.included_scripts(widget_class) + "\n"
        res += self.class_definition(widget_class)
        return res

    def included_scripts(self, widget_class: WidgetClass) -> str:
        """Contents of the class's own script files, in declaration order."""
        res = ""
        for path in widget_class.included_scripts:
            res += self.reader.read(path) + "\n"
        return res

    def class_definition(self, widget_class: WidgetClass) -> str:
        """The constructor and ``Ext.extend`` call for one class."""
        ns = self.settings.cache_namespace
        cls = f"{ns}.{widget_class.short_name}"
        properties = f"Ext.applyIf({to_js_literal(dict(widget_class.extend_properties))}, {self.settings.mixin})"
        add_menus = ""
        if widget_class.menus:
            add_menus = f"  this.addMenus({to_js_literal(list(widget_class.menus))});\n"

        if self.registry.is_js_inherited(widget_class):
            parent = self.registry.superclass_of(widget_class)
            return (
                f"{cls} = function(config){{\n"
                f"  {cls}.superclass.constructor.call(this, config);\n"
                f"{add_menus}"
                f"}};\n"
                f"Ext.extend({cls}, {ns}.{parent.short_name}, {properties});\n"
            )

        base_class = widget_class.base_class or self.settings.default_base_class
        return (
            f"{cls} = function(config){{\n"
            f"  this.commonBeforeConstructor(config);\n"
            f"  {cls}.superclass.constructor.call(this, config);\n"
            f"{add_menus}"
            f"  this.commonAfterConstructor(config);\n"
            f"}};\n"
            f"Ext.extend({cls}, {base_class}, {properties});\n"
        )

    # --- styles ---
    def styles_for(self, widget_class: WidgetClass, known: Collection[str] = ()) -> str:
        """All CSS for a class, including the styles of its uncached ancestors."""
        known = _as_set(known)
        res = ""

        if self._needs_ancestor(widget_class, known):
            res += self.styles_for(self.registry.superclass_of(widget_class), known) + "\n"

        res += self.included_styles(widget_class) + "\n"
        return res

    def included_styles(self, widget_class: WidgetClass) -> str:
        return "".join(self.reader.read(path) for path in self.registry.accumulated_styles(widget_class))

    # --- whole dependency sets ---
    def missing_scripts(self, dependencies: Iterable[WidgetClass], known: Collection[str] = ()) -> Optional[str]:
        """
        Script text for every class the browser does not have yet, or None
        when there is nothing to send.

        ``known`` is consulted as given; classes emitted earlier in the same
        call are not added to it, so two uncached classes sharing an
        uncached ancestor both carry that ancestor's code.
        """
        known = _as_set(known)
        code = ""
        for widget_class in dependencies:
            if widget_class.short_name in known:
                continue
            script = self.script_for(widget_class, known)
            if self.settings.strip_js_comments:
                script = strip_js_comments(script)
            code += script
        logger.debug("Composed %d chars of missing JS", len(code))
        return code if code.strip() else None

    def missing_styles(self, dependencies: Iterable[WidgetClass], known: Collection[str] = ()) -> Optional[str]:
        known = _as_set(known)
        code = ""
        for widget_class in dependencies:
            if widget_class.short_name in known:
                continue
            code += self.styles_for(widget_class, known)
        logger.debug("Composed %d chars of missing CSS", len(code))
        return code if code.strip() else None

    def _needs_ancestor(self, widget_class: WidgetClass, known: Collection[str]) -> bool:
        if not self.registry.is_js_inherited(widget_class):
            return False
        # raises ConfigurationError on a broken or cyclic chain
        parent = self.registry.ancestors(widget_class)[0]
        return parent.short_name not in known


def _as_set(known: Optional[Collection[str]]) -> Collection[str]:
    if known is None:
        return frozenset()
    if isinstance(known, str):
        # one short name, not a collection of characters
        return frozenset((known,))
    return known if isinstance(known, (set, frozenset)) else frozenset(known)
