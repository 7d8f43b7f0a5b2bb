# tests/test_instance_config.py
import unittest

from pyzke import ClassRegistry, ConfigComposer, EngineSettings, WidgetClass, WidgetInstance
from pyzke.errors import ConfigurationError


class TestInstanceConfig(unittest.TestCase):

    def setUp(self):
        self.registry = ClassRegistry([
            WidgetClass("Panel", api_points=("load_data", "save")),
            WidgetClass("A"),
            WidgetClass("B", superclass="A"),
            WidgetClass("Form", api_points=("submit",)),
        ])
        self.composer = ConfigComposer()
        self.root = WidgetInstance("app", self.registry.get("Panel"))

    def test_minimal_config(self):
        config = self.composer.instance_config(self.root)
        self.assertEqual(config, {"id": "app", "api": ["load_data", "save"], "widgetClassName": "Panel"})

    def test_eager_aggregatees_are_nested(self):
        self.root.aggregate("a", self.registry.get("A"))
        self.root.aggregate("b", self.registry.get("B"))
        config = self.composer.instance_config(self.root)
        self.assertEqual(list(config), ["id", "a_config", "b_config", "api", "widgetClassName"])
        self.assertEqual(config["a_config"], {"id": "app__a", "api": [], "widgetClassName": "A"})
        self.assertEqual(config["b_config"]["widgetClassName"], "B")

    def test_late_aggregatees_are_not_embedded(self):
        self.root.aggregate("form", self.registry.get("Form"), late=True)
        config = self.composer.instance_config(self.root)
        self.assertNotIn("form_config", config)

    def test_deep_nesting_builds_ids_from_parents(self):
        form = self.root.aggregate("form", self.registry.get("Form"))
        form.aggregate("a", self.registry.get("A"))
        config = self.composer.instance_config(self.root)
        self.assertEqual(config["form_config"]["a_config"]["id"], "app__form__a")

    def test_before_load_runs_for_eager_aggregatees_only(self):
        calls = []
        self.root.aggregate("a", self.registry.get("A"), before_load=[lambda i: calls.append(i.id)])
        self.root.aggregate("form", self.registry.get("Form"), late=True,
                            before_load=[lambda i: calls.append(i.id)])
        self.composer.instance_config(self.root)
        self.assertEqual(calls, ["app__a"])

    def test_before_load_can_adjust_config(self):
        child = self.root.aggregate("a", self.registry.get("A"))
        child.add_before_load(lambda i: i.override_config.update(title="Loaded"))
        config = self.composer.instance_config(self.root)
        self.assertEqual(config["a_config"]["title"], "Loaded")

    def test_actions_and_menu_only_when_given(self):
        self.assertNotIn("actions", self.composer.instance_config(self.root))
        root = WidgetInstance("app", self.registry.get("Panel"), actions={"add": {"text": "Add"}}, menu=["add"])
        config = self.composer.instance_config(root)
        self.assertEqual(config["actions"], {"add": {"text": "Add"}})
        self.assertEqual(config["menu"], ["add"])

    def test_override_config_wins(self):
        root = WidgetInstance("app", self.registry.get("Panel"), override_config={"title": "Main", "api": []})
        config = self.composer.instance_config(root)
        self.assertEqual(config["title"], "Main")
        self.assertEqual(config["api"], [])

    def test_duplicate_aggregatee_name_fails(self):
        self.root.aggregate("a", self.registry.get("A"))
        with self.assertRaises(ConfigurationError):
            self.root.aggregate("a", self.registry.get("B"))


class TestStandaloneSnippets(unittest.TestCase):

    def setUp(self):
        self.grid = WidgetClass("Grid")
        self.composer = ConfigComposer()
        self.instance = WidgetInstance("foo_bar", self.grid)

    def test_container_markup(self):
        self.assertEqual(self.composer.js_widget_html(self.instance), '<div id="foo-bar"></div>')

    def test_render_call(self):
        self.assertEqual(self.composer.js_widget_render(self.instance), 'fooBar.render("foo-bar");')

    def test_instantiation_snippet(self):
        self.assertEqual(
            self.composer.js_widget_instance(self.instance),
            'var fooBar = new Ext.netzke.cache.Grid({id: "foo_bar", api: [], widgetClassName: "Grid"});',
        )

    def test_aggregatee_variable_comes_from_its_id(self):
        root = WidgetInstance("app", self.grid)
        left = root.aggregate("left", self.grid).aggregate("grid", self.grid)
        right = root.aggregate("right", self.grid).aggregate("grid", self.grid)
        self.assertTrue(self.composer.js_widget_instance(left).startswith("var appLeftGrid = new "))
        self.assertTrue(self.composer.js_widget_instance(right).startswith("var appRightGrid = new "))
        self.assertEqual(self.composer.js_widget_render(left), 'appLeftGrid.render("grid");')

    def test_instantiation_uses_configured_namespace(self):
        composer = ConfigComposer(EngineSettings(cache_namespace="App.cache"))
        self.assertTrue(composer.js_widget_instance(self.instance).startswith("var fooBar = new App.cache.Grid("))


if __name__ == "__main__":
    unittest.main()
