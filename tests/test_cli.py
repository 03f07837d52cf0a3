"""
Unit tests for CLI commands.

Tests cover:
- show command in every output format
- find command
- target resolution errors
"""

import json

import yaml
from typer.testing import CliRunner

from rendertest.cli.app import app

runner = CliRunner()

PAGE = "tests.utils.components:build_page"


class TestShowCommand:
    """Tests for show command."""

    def test_show_jsx(self):
        """Default format prints JSX-like text."""
        result = runner.invoke(app, ["show", PAGE])

        assert result.exit_code == 0
        assert '<main\n  id="page"\n>' in result.stdout
        assert "Hello " in result.stdout
        assert "</main>" in result.stdout

    def test_show_element_attribute(self):
        """Targets may name an element directly."""
        result = runner.invoke(app, ["show", "tests.utils.components:page_element"])

        assert result.exit_code == 0
        assert "<ul>" in result.stdout

    def test_show_json(self):
        result = runner.invoke(app, ["show", PAGE, "--format", "json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["type"] == "main"
        assert data["props"] == {"id": "page"}
        assert [child["type"] for child in data["children"]] == ["span", "ul"]

    def test_show_yaml(self):
        result = runner.invoke(app, ["show", PAGE, "-f", "yaml"])

        assert result.exit_code == 0
        data = yaml.safe_load(result.stdout)
        assert data["children"][1]["children"][0] == {"type": "li", "props": {"id": "a"}, "children": ["A"]}

    def test_show_tree(self):
        result = runner.invoke(app, ["show", PAGE, "--format", "tree"])

        assert result.exit_code == 0
        assert "component Greeting" in result.stdout
        assert "host main" in result.stdout

    def test_show_invalid_format(self):
        result = runner.invoke(app, ["show", PAGE, "--format", "xml"])

        assert result.exit_code != 0


class TestFindCommand:
    """Tests for find command."""

    def test_find_component(self):
        result = runner.invoke(app, ["find", PAGE, "--type", "Item"])

        assert result.exit_code == 0
        assert "Nodes of type Item" in result.stdout
        assert 'id="a"' in result.stdout
        assert 'id="b"' in result.stdout

    def test_find_host(self):
        result = runner.invoke(app, ["find", PAGE, "-t", "span"])

        assert result.exit_code == 0
        assert "Greeting" in result.stdout

    def test_find_nothing(self):
        result = runner.invoke(app, ["find", PAGE, "--type", "table"])

        assert result.exit_code == 1
        assert "No nodes found" in result.stdout


class TestTargetErrors:
    """Tests for target resolution failures."""

    def test_missing_colon(self):
        result = runner.invoke(app, ["show", "tests.utils.components"])

        assert result.exit_code == 1
        assert "Invalid target" in result.stdout

    def test_unknown_module(self):
        result = runner.invoke(app, ["show", "no_such_module_xyz:page"])

        assert result.exit_code == 1
        assert "Failed to import" in result.stdout

    def test_unknown_attribute(self):
        result = runner.invoke(app, ["show", "tests.utils.components:missing"])

        assert result.exit_code == 1
        assert "Attribute not found" in result.stdout

    def test_not_an_element(self):
        result = runner.invoke(app, ["show", "tests.utils.components:not_an_element"])

        assert result.exit_code == 1
        assert "Not an element" in result.stdout
