from unittest.mock import MagicMock

import pytest
import yaml

from themeflow.builder import ThemeFlowBuilder
from themeflow.exceptions import InitializationError
from themeflow.hooks import HookRegistry
from themeflow.settings import ThemeFlowSettings
from themeflow.templates import ContentDescriptor, InMemoryExistenceCheck
from themeflow.themeflow import ThemeFlow


class TestThemeFlowBuilder:
    """Tests for the fluent ThemeFlow builder."""

    def test_build_from_settings_path(self, settings_file, theme_dirs):
        themeflow = ThemeFlowBuilder().with_settings_path(settings_file).build()

        assert isinstance(themeflow, ThemeFlow)
        assert themeflow.resolver.roots == (str(theme_dirs["child"]), str(theme_dirs["parent"]))
        assert not themeflow.is_setup

    def test_settings_object_wins_over_path(self, settings_file):
        settings = ThemeFlowSettings(template_roots=["only"])

        themeflow = (
            ThemeFlowBuilder().with_settings_object(settings).with_settings_path(settings_file).build()
        )

        assert themeflow.settings is settings

    def test_build_with_default_settings_file(self, settings_file, monkeypatch):
        monkeypatch.chdir(settings_file.parent)

        themeflow = ThemeFlowBuilder().build()

        assert themeflow.settings.settings_file == str(settings_file.resolve())

    def test_build_without_settings_file_raises(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        with pytest.raises(InitializationError, match="Failed to load settings"):
            ThemeFlowBuilder().build()

    def test_bad_settings_path_raises(self, tmp_path):
        with pytest.raises(InitializationError, match="missing.yaml"):
            ThemeFlowBuilder().with_settings_path(tmp_path / "missing.yaml")

    def test_invalid_rules_raise_initialization_error(self, tmp_path):
        settings_file = tmp_path / "themeflow.yaml"
        settings_file.write_text(yaml.dump({"template_rules": {"single": ["{slug}.html"]}}))

        with pytest.raises(InitializationError, match="Invalid template rules"):
            ThemeFlowBuilder().with_settings_path(settings_file).build()

    def test_injected_collaborators(self, settings_file):
        registry = HookRegistry(name="shared")
        check = InMemoryExistenceCheck({"a": ["single.html"]})
        renderer = MagicMock()
        settings = ThemeFlowSettings(template_roots=["a"])

        themeflow = (
            ThemeFlowBuilder()
            .with_settings_object(settings)
            .with_registry(registry)
            .with_existence_check(check)
            .with_renderer(renderer)
            .build()
        )

        assert themeflow.registry is registry
        assert themeflow.resolver.existence_check is check
        assert themeflow.renderer is renderer
        assert themeflow.resolve(ContentDescriptor(content_type="single")).identifier == "a/single.html"

    def test_callable_existence_check(self):
        settings = ThemeFlowSettings(template_roots=["a"])

        themeflow = (
            ThemeFlowBuilder()
            .with_settings_object(settings)
            .with_existence_check(lambda root, name: name == "index.html")
            .build()
        )

        assert themeflow.resolve(ContentDescriptor(content_type="home")).name == "index.html"
