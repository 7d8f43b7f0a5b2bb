# tests/test_config.py
import tempfile
import unittest
from pathlib import Path

from pyzke import Config, EngineSettings


class TestConfig(unittest.TestCase):

    def setUp(self):
        Config.reset()
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "pyzke.yaml"
        self.path.write_text(
            "cache_namespace: App.cache\n"
            "strip_js_comments: true\n"
            "ext:\n"
            "  location: /static/ext\n",
            encoding="utf-8",
        )

    def tearDown(self):
        Config.reset()
        self._tmp.cleanup()

    def test_loads_yaml_file(self):
        cfg = Config(config_file=str(self.path), prefer_embedded=False)
        self.assertEqual(cfg.source, "file")
        self.assertEqual(cfg.get("cache_namespace"), "App.cache")
        self.assertEqual(cfg.get_nested("ext.location"), "/static/ext")
        self.assertIsNone(cfg.get_nested("ext.missing"))
        self.assertEqual(cfg.resolved_config_path, self.path.resolve())

    def test_is_a_singleton(self):
        first = Config(config_file=str(self.path), prefer_embedded=False)
        self.assertIs(Config(), first)

    def test_missing_file_gives_empty_config(self):
        cfg = Config(config_file=str(Path(self._tmp.name) / "absent.yaml"))
        self.assertIsNone(cfg.source)
        self.assertEqual(cfg.as_dict(), {})

    def test_reload_picks_up_changes(self):
        cfg = Config(config_file=str(self.path), prefer_embedded=False)
        self.path.write_text("cache_namespace: Other.cache\n", encoding="utf-8")
        cfg.reload()
        self.assertEqual(cfg.get("cache_namespace"), "Other.cache")

    def test_engine_settings_from_config(self):
        cfg = Config(config_file=str(self.path), prefer_embedded=False)
        settings = EngineSettings.from_config(cfg)
        self.assertEqual(settings.cache_namespace, "App.cache")
        self.assertTrue(settings.strip_js_comments)
        self.assertEqual(settings.mixin, "Ext.widgetMixIn")
        self.assertEqual(settings.default_base_class, "Ext.Panel")


if __name__ == "__main__":
    unittest.main()
