# pyzke/instance_config.py
from typing import Any, Dict, Optional

from .base import WidgetInstance
from .config import EngineSettings
from .jsutil import container_id, js_name, to_js_literal


class ConfigComposer:
    """
    Builds the object a client uses to instantiate a widget.

    Configs of eager aggregatees are nested inside their parent's config
    under ``<name>_config``, so one payload is enough to construct the whole
    eager part of the tree.
    """

    def __init__(self, settings: Optional[EngineSettings] = None):
        self.settings = settings if settings is not None else EngineSettings()

    def instance_config(self, instance: WidgetInstance) -> Dict[str, Any]:
        res: Dict[str, Any] = {"id": instance.id}

        for aggr_name, aggr_instance in instance.eager_aggregatees():
            aggr_instance.before_load()
            res[f"{aggr_name}_config"] = self.instance_config(aggr_instance)

        res["api"] = list(instance.widget_class.api_points)

        # needed for dynamic instantiation on the client
        res["widgetClassName"] = instance.widget_class.short_name

        if instance.actions is not None:
            res["actions"] = instance.actions
        if instance.menu is not None:
            res["menu"] = instance.menu

        res.update(instance.override_config)
        return res

    # --- standalone snippets (a widget embedded directly in a page) ---
    def js_widget_instance(self, instance: WidgetInstance) -> str:
        config = to_js_literal(self.instance_config(instance))
        return (
            f"var {js_name(instance.id)} = "
            f"new {self.settings.cache_namespace}.{instance.widget_class.short_name}({config});"
        )

    def js_widget_render(self, instance: WidgetInstance) -> str:
        return f'{js_name(instance.id)}.render("{container_id(instance.name)}");'

    def js_widget_html(self, instance: WidgetInstance) -> str:
        return f'<div id="{container_id(instance.name)}"></div>'
