"""Shared fixtures for ThemeFlow unit tests."""

import os
from pathlib import Path

import pytest
import yaml

from themeflow.hooks import HookRegistry
from themeflow.logger import logger
from themeflow.templates import InMemoryExistenceCheck, TemplateRuleTable


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep ThemeFlow environment variables of the host out of the tests."""
    monkeypatch.delenv("THEMEFLOW_SETTINGS", raising=False)
    for key in list(os.environ):
        if key.startswith("THEMEFLOW_SETTINGS_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def reset_logger_context():
    """Make sure no test leaves a log file handler attached."""
    yield
    logger.clear_execution_context()


@pytest.fixture
def registry():
    """A fresh, unfrozen hook registry."""
    return HookRegistry(name="test")


@pytest.fixture
def rules():
    """A small rule table for resolver tests."""
    return TemplateRuleTable(
        {
            "single": ["single-{type_slug}.html", "single.html"],
            "page": ["page-{path_slug}.html", "page.html"],
        }
    )


@pytest.fixture
def memory_check():
    """Child and parent roots with a handful of templates."""
    return InMemoryExistenceCheck(
        {
            "child": ["page.html"],
            "parent": ["single.html", "page.html", "index.html"],
        }
    )


@pytest.fixture
def theme_dirs(tmp_path) -> dict[str, Path]:
    """Child and parent template roots on disk plus an empty hooks directory."""
    child = tmp_path / "themes" / "child" / "templates"
    parent = tmp_path / "themes" / "parent" / "templates"
    hooks = tmp_path / "hooks"
    for directory in (child, parent, hooks):
        directory.mkdir(parents=True)

    (parent / "base.html").write_text("<main>{% block content %}{% endblock %}</main>")
    (parent / "index.html").write_text('{% extends "base.html" %}{% block content %}index{% endblock %}')
    (parent / "single.html").write_text(
        '{% extends "base.html" %}{% block content %}parent single: {{ title }}{% endblock %}'
    )
    (child / "page.html").write_text('{% extends "base.html" %}{% block content %}child page{% endblock %}')

    return {"child": child, "parent": parent, "hooks": hooks, "base": tmp_path}


@pytest.fixture
def settings_file(tmp_path, theme_dirs) -> Path:
    """A themeflow.yaml pointing at the theme_dirs fixture with relative paths."""
    path = tmp_path / "themeflow.yaml"
    path.write_text(
        yaml.dump(
            {
                "template_roots": ["themes/child/templates", "themes/parent/templates"],
                "local_hooks": ["hooks"],
                "log_dir": "logs",
            }
        )
    )
    return path
