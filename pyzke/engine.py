# pyzke/engine.py
import logging
from dataclasses import dataclass
from typing import Any, Collection, Dict, Optional

from .base import WidgetInstance
from .composer import CodeComposer
from .config import EngineSettings
from .instance_config import ConfigComposer
from .registry import ClassRegistry
from .resolver import DependencyResolver, DependencySet
from .resources import StaticFileReader

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WidgetPayload:
    """Everything a client needs to instantiate one widget tree."""
    config: Dict[str, Any]
    js: Optional[str]
    css: Optional[str]


class WidgetEngine:
    """
    Entry point tying the registry, dependency resolution, code and config
    composition together.

    Each call works on the instance tree and ``known`` collection it is
    given and keeps no state between calls, so one engine can serve many
    requests at once.
    """

    def __init__(
        self,
        registry: ClassRegistry,
        reader: Optional[StaticFileReader] = None,
        settings: Optional[EngineSettings] = None,
    ):
        self.registry = registry
        self.settings = settings if settings is not None else EngineSettings.from_config()
        self.reader = reader if reader is not None else StaticFileReader(self.settings.static_root)
        self.resolver = DependencyResolver(registry)
        self.code = CodeComposer(registry, self.reader, self.settings)
        self.configs = ConfigComposer(self.settings)

    def dependency_classes(self, instance: WidgetInstance) -> DependencySet:
        return self.resolver.resolve(instance)

    def js_missing_code(self, instance: WidgetInstance, known: Collection[str] = ()) -> Optional[str]:
        """JS for every class the instance needs and the browser lacks, or None."""
        return self.code.missing_scripts(self.dependency_classes(instance), known)

    def css_missing_code(self, instance: WidgetInstance, known: Collection[str] = ()) -> Optional[str]:
        return self.code.missing_styles(self.dependency_classes(instance), known)

    def js_config(self, instance: WidgetInstance) -> Dict[str, Any]:
        return self.configs.instance_config(instance)

    def serve(self, instance: WidgetInstance, known: Collection[str] = ()) -> WidgetPayload:
        """
        Run the instance's before-load hook, then compose its config and the
        code it is missing. Nothing is returned if any part fails.
        """
        instance.before_load()
        dependencies = self.dependency_classes(instance)
        payload = WidgetPayload(
            config=self.configs.instance_config(instance),
            js=self.code.missing_scripts(dependencies, known),
            css=self.code.missing_styles(dependencies, known),
        )
        logger.debug(
            "Served %s: %d classes, js=%s css=%s",
            instance.id, len(dependencies), payload.js is not None, payload.css is not None,
        )
        return payload

    def load_aggregatee(
        self, parent: WidgetInstance, name: str, known: Collection[str] = ()
    ) -> WidgetPayload:
        """
        Payload for one aggregatee of ``parent``, fetched on demand. This is
        how late aggregatees reach the client after the initial render.
        """
        return self.serve(parent.aggregatee(name), known)

    # --- standalone page snippets ---
    def js_widget_instance(self, instance: WidgetInstance) -> str:
        return self.configs.js_widget_instance(instance)

    def js_widget_render(self, instance: WidgetInstance) -> str:
        return self.configs.js_widget_render(instance)

    def js_widget_html(self, instance: WidgetInstance) -> str:
        return self.configs.js_widget_html(instance)
