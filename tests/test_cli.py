# tests/test_cli.py
import tempfile
import textwrap
import unittest
from pathlib import Path

from typer.testing import CliRunner

from pyzke import Config
from pyzke_cli.main import app

DOCUMENT = """
classes:
  Grid:
    base_class: Ext.grid.GridPanel
    scripts: [grid.js]
    styles: [grid.css]
  ExtendedGrid:
    superclass: Grid
  Panel:
widget:
  name: main_panel
  class: Panel
  aggregatees:
    - {name: users, class: ExtendedGrid}
    - {name: archive, class: Grid, late: true}
"""


class TestCli(unittest.TestCase):

    def setUp(self):
        Config.reset()
        self.runner = CliRunner()
        self._tmp = tempfile.TemporaryDirectory()
        root = Path(self._tmp.name)
        (root / "grid.js").write_text("var gridHelper = 1;", encoding="utf-8")
        (root / "grid.css").write_text(".grid {}", encoding="utf-8")
        self.path = root / "widgets.yaml"
        self.path.write_text(textwrap.dedent(DOCUMENT), encoding="utf-8")

    def tearDown(self):
        Config.reset()
        self._tmp.cleanup()

    def invoke(self, *args):
        return self.runner.invoke(app, [str(a) for a in args])

    def test_deps(self):
        result = self.invoke("deps", self.path)
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output.split(), ["ExtendedGrid", "Panel"])

    def test_code(self):
        result = self.invoke("code", self.path)
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("var gridHelper = 1;", result.output)
        self.assertIn("Ext.netzke.cache.ExtendedGrid = function(config){", result.output)

    def test_code_with_known_classes(self):
        result = self.invoke("code", self.path, "--known", "Grid", "--known", "Panel")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertNotIn("gridHelper", result.output)
        self.assertNotIn("Ext.netzke.cache.Panel = function", result.output)

    def test_code_nothing_missing(self):
        result = self.invoke("code", self.path, "-k", "ExtendedGrid", "-k", "Panel")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Nothing missing", result.output)

    def test_css(self):
        result = self.invoke("code", self.path, "--css")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn(".grid {}", result.output)

    def test_config(self):
        result = self.invoke("config", self.path)
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn('users_config: {id: "main_panel__users"', result.output)
        self.assertNotIn("archive_config", result.output)

    def test_snippet(self):
        result = self.invoke("snippet", self.path)
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn('<div id="main-panel"></div>', result.output)
        self.assertIn("var mainPanel = new Ext.netzke.cache.Panel(", result.output)
        self.assertIn('mainPanel.render("main-panel");', result.output)

    def test_unusable_widget_name(self):
        self.path.write_text(textwrap.dedent(DOCUMENT).replace("name: main_panel", "name: '__'"), encoding="utf-8")
        result = self.invoke("snippet", self.path)
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Error", result.output)
        self.assertNotIsInstance(result.exception, ValueError)

    def test_missing_file(self):
        result = self.invoke("deps", Path(self._tmp.name) / "absent.yaml")
        self.assertEqual(result.exit_code, 1)

    def test_missing_include_fails(self):
        (Path(self._tmp.name) / "grid.js").unlink()
        result = self.invoke("code", self.path)
        self.assertEqual(result.exit_code, 1)


if __name__ == "__main__":
    unittest.main()
