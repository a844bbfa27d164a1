import pytest
import yaml

from themeflow.constants import DEFAULT_TEMPLATE_RULES
from themeflow.exceptions import SettingsError
from themeflow.settings import ThemeFlowSettings


def write_settings(path, data):
    path.write_text(yaml.dump(data))
    return path


def test_settings_load_resolves_relative_paths(tmp_path):
    """Paths in the YAML file are relative to the file's directory."""
    settings_file = write_settings(
        tmp_path / "themeflow.yaml",
        {"template_roots": ["child", "/abs/parent"], "local_hooks": ["hooks"], "log_dir": "logs"},
    )

    settings = ThemeFlowSettings.load(str(settings_file))

    assert settings.template_roots == [str(tmp_path / "child"), "/abs/parent"]
    assert settings.local_hooks == [str(tmp_path / "hooks")]
    assert settings.log_dir == str(tmp_path / "logs")
    assert settings.settings_file == str(settings_file.resolve())
    assert settings.base_dir == tmp_path.resolve()


def test_settings_load_explicit_base_dir(tmp_path):
    settings_file = write_settings(tmp_path / "themeflow.yaml", {"template_roots": ["templates"]})
    base = tmp_path / "elsewhere"

    settings = ThemeFlowSettings.load(settings_file, base_dir=base)

    assert settings.template_roots == [str(base / "templates")]


def test_settings_defaults(tmp_path):
    settings_file = write_settings(tmp_path / "themeflow.yaml", {})

    settings = ThemeFlowSettings.load(settings_file)

    assert settings.template_roots == [str(tmp_path / "templates")]
    assert settings.fallback_template == "index.html"
    assert settings.default_patterns == ["index.html"]
    assert settings.template_rules == {str(k): v for k, v in DEFAULT_TEMPLATE_RULES.items()}
    assert settings.cache_existence is True
    assert settings.freeze_after_setup is True
    assert settings.hook_callbacks == []
    assert settings.log_level == "INFO"


def test_settings_load_file_not_found():
    with pytest.raises(SettingsError, match="Settings file not found"):
        ThemeFlowSettings.load("nonexistent.yaml")


def test_settings_load_from_env_var_path(tmp_path, monkeypatch):
    settings_file = write_settings(tmp_path / "custom.yml", {"template_roots": ["theme"]})
    monkeypatch.setenv("THEMEFLOW_SETTINGS", str(settings_file))

    settings = ThemeFlowSettings.load()

    assert settings.template_roots == [str(tmp_path / "theme")]


def test_settings_load_default_file_in_cwd(tmp_path, monkeypatch):
    write_settings(tmp_path / "themeflow.yaml", {"fallback_template": "home.html"})
    monkeypatch.chdir(tmp_path)

    assert ThemeFlowSettings.load().fallback_template == "home.html"


def test_settings_load_rejects_non_yaml(tmp_path):
    settings_file = tmp_path / "themeflow.json"
    settings_file.write_text("{}")

    with pytest.raises(SettingsError, match="must be a YAML file"):
        ThemeFlowSettings.load(settings_file)


def test_settings_load_invalid_yaml(tmp_path):
    settings_file = tmp_path / "bad.yaml"
    settings_file.write_text("invalid: yaml: content:")

    with pytest.raises(SettingsError, match="Failed to load settings"):
        ThemeFlowSettings.load(settings_file)


def test_settings_load_non_mapping_yaml(tmp_path):
    settings_file = tmp_path / "list.yaml"
    settings_file.write_text("- a\n- b\n")

    with pytest.raises(SettingsError, match="Failed to load settings"):
        ThemeFlowSettings.load(settings_file)


@pytest.mark.parametrize(
    "data",
    [
        {"template_roots": []},
        {"unknown_option": True},
        {"log_level": "LOUD"},
        {"hook_callbacks": [{"hook": "init"}]},
        {"hook_callbacks": ["not-a-mapping"]},
        {"hook_callbacks": {"hook": "init"}},
    ],
)
def test_settings_load_invalid_values(tmp_path, data):
    settings_file = write_settings(tmp_path / "themeflow.yaml", data)

    with pytest.raises(SettingsError, match="Invalid settings"):
        ThemeFlowSettings.load(settings_file)


def test_settings_hook_callbacks_are_normalized(tmp_path):
    settings_file = write_settings(
        tmp_path / "themeflow.yaml",
        {"hook_callbacks": [{"hook": "init", "callback": "theme.setup:boot", "priority": 1}]},
    )

    settings = ThemeFlowSettings.load(settings_file)

    assert settings.hook_callbacks == [
        {"hook": "init", "callback": "theme.setup:boot", "priority": 1, "accepted_args": 1}
    ]


def test_settings_log_level_is_upper_cased(tmp_path):
    settings_file = write_settings(tmp_path / "themeflow.yaml", {"log_level": "debug"})

    assert ThemeFlowSettings.load(settings_file).log_level == "DEBUG"


def test_settings_overrides_beat_yaml(tmp_path):
    settings_file = write_settings(tmp_path / "themeflow.yaml", {"fallback_template": "index.html"})

    settings = ThemeFlowSettings.load(settings_file, fallback_template=None)

    assert settings.fallback_template is None


def test_settings_env_vars_beat_yaml(tmp_path, monkeypatch):
    """Environment variables take precedence over the file."""
    settings_file = write_settings(
        tmp_path / "themeflow.yaml", {"fallback_template": "index.html", "log_level": "INFO"}
    )
    monkeypatch.setenv("THEMEFLOW_SETTINGS_FALLBACK_TEMPLATE", "home.html")
    monkeypatch.setenv("THEMEFLOW_SETTINGS_TEMPLATE_ROOTS", '["env/child", "env/parent"]')

    settings = ThemeFlowSettings.load(settings_file)

    assert settings.fallback_template == "home.html"
    assert settings.template_roots == [str(tmp_path / "env/child"), str(tmp_path / "env/parent")]


def test_settings_direct_construction_keeps_paths():
    settings = ThemeFlowSettings(template_roots=["child", "parent"])

    assert settings.base_dir is None
    assert settings.settings_file is None
    assert settings.resolve_relative_paths().template_roots == ["child", "parent"]


def test_settings_as_dict(tmp_path):
    settings = ThemeFlowSettings.load(write_settings(tmp_path / "themeflow.yaml", {}))

    data = settings.as_dict

    assert set(data) >= {"template_roots", "template_rules", "local_hooks", "log_dir"}
    assert str(settings) == str(data)
