import os
from pathlib import Path
from typing import Any

from pydantic import Field, PrivateAttr, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from themeflow.constants import (
    DEFAULT_ACCEPTED_ARGS,
    DEFAULT_FALLBACK_TEMPLATE,
    DEFAULT_PATTERNS,
    DEFAULT_PRIORITY,
    DEFAULT_TEMPLATE_RULES,
    THEMEFLOW_DEFAULT_HOOKS_DIR,
    THEMEFLOW_DEFAULT_LOG_DIR,
    THEMEFLOW_DEFAULT_LOG_LEVEL,
    THEMEFLOW_DEFAULT_SETTINGS_FILE,
    THEMEFLOW_DEFAULT_TEMPLATES_DIR,
    THEMEFLOW_PATH_SETTINGS,
    THEMEFLOW_SETTINGS_ENV_VAR,
    VALID_LOG_LEVELS,
)
from themeflow.exceptions import ResourceError, SettingsError
from themeflow.utils import is_yaml_file, load_yaml_mapping


class ThemeFlowSettings(BaseSettings):
    """
    ThemeFlow settings management using Pydantic.

    Settings are loaded with the following priority (highest to lowest):
    1. Environment variables (prefixed with THEMEFLOW_SETTINGS_)
    2. Values from the settings YAML file
    3. Default values defined in the model

    Environment variable examples:
    - THEMEFLOW_SETTINGS_TEMPLATE_ROOTS='["child/templates", "parent/templates"]'
    - THEMEFLOW_SETTINGS_FALLBACK_TEMPLATE=index.html
    - THEMEFLOW_SETTINGS_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="THEMEFLOW_SETTINGS_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="forbid",
    )

    template_roots: list[str] = Field(
        default=[THEMEFLOW_DEFAULT_TEMPLATES_DIR],
        description="Template root directories, child theme first",
    )
    template_rules: dict[str, list[str]] = Field(
        default_factory=lambda: {str(k): list(v) for k, v in DEFAULT_TEMPLATE_RULES.items()},
        description="Template name patterns per content type, most specific first",
    )
    default_patterns: list[str] = Field(
        default_factory=lambda: list(DEFAULT_PATTERNS),
        description="Patterns appended to every content type's candidate list",
    )
    fallback_template: str | None = Field(
        default=DEFAULT_FALLBACK_TEMPLATE, description="Template used when no candidate exists"
    )
    local_hooks: list[str] = Field(
        default=[THEMEFLOW_DEFAULT_HOOKS_DIR],
        description="Directories containing hook modules with a register(registry) function",
    )
    hook_callbacks: list[dict[str, Any]] = Field(
        default_factory=list, description="Callbacks registered from dotted import paths"
    )
    cache_existence: bool = Field(default=True, description="Cache template existence checks")
    freeze_after_setup: bool = Field(
        default=True, description="Freeze the hook registry once setup hooks have run"
    )
    log_dir: str = Field(default=THEMEFLOW_DEFAULT_LOG_DIR, description="Directory for log files")
    log_level: str = Field(default=THEMEFLOW_DEFAULT_LOG_LEVEL, description="Log level for log files")

    _base_dir: Path | None = PrivateAttr(default=None)
    _settings_file: str | None = PrivateAttr(default=None)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Environment wins over values read from the YAML file (passed as init kwargs)
        return env_settings, init_settings, file_secret_settings

    @field_validator("template_roots")
    @classmethod
    def validate_template_roots(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("at least one template root is required")
        return v

    @field_validator("hook_callbacks", mode="before")
    @classmethod
    def validate_hook_callbacks(cls, v: Any) -> list[dict[str, Any]]:
        """Validate and normalize hook callback specs."""
        if not v:
            return []

        if not isinstance(v, list):
            raise ValueError("hook_callbacks must be a list")

        validated = []
        for item in v:
            if not isinstance(item, dict):
                raise ValueError(f"Invalid hook callback spec type: {type(item).__name__}")
            missing = [key for key in ("hook", "callback") if not item.get(key)]
            if missing:
                raise ValueError(f"Hook callback spec is missing {', '.join(missing)}: {item}")
            validated.append(
                {
                    "hook": str(item["hook"]),
                    "callback": str(item["callback"]),
                    "priority": item.get("priority", DEFAULT_PRIORITY),
                    "accepted_args": item.get("accepted_args", DEFAULT_ACCEPTED_ARGS),
                }
            )
        return validated

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: Any) -> str:
        level = str(v).upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of: {', '.join(VALID_LOG_LEVELS)}")
        return level

    def resolve_relative_paths(self) -> "ThemeFlowSettings":
        """Resolve relative paths against the base directory."""
        base_dir = self.base_dir
        if not base_dir:
            return self

        for field_name in THEMEFLOW_PATH_SETTINGS:
            resolved = [self._resolve_path(base_dir, p) for p in getattr(self, field_name)]
            setattr(self, field_name, resolved)

        self.log_dir = self._resolve_path(base_dir, self.log_dir)
        return self

    @staticmethod
    def _resolve_path(base_dir: Path, value: str) -> str:
        path = Path(value)
        return str(path if path.is_absolute() else base_dir / path)

    @classmethod
    def load(
        cls, settings_file: str | Path | None = None, base_dir: Path | None = None, **overrides: Any
    ) -> "ThemeFlowSettings":
        """
        Load settings from a YAML file with path resolution and overrides.

        Settings file resolution priority (highest to lowest):
        1. Explicit settings_file parameter
        2. THEMEFLOW_SETTINGS environment variable
        3. Default "themeflow.yaml" in the current directory

        Args:
            settings_file: Path to the settings YAML file.
            base_dir: Base directory for relative paths. Defaults to the
                directory containing the settings file.
            **overrides: Values overriding the YAML ones, e.g. fallback_template=None.
                Environment variables still take precedence over both.

        Returns:
            ThemeFlowSettings instance with all paths resolved.

        Raises:
            SettingsError: If the file is missing, isn't a YAML mapping, or holds invalid values.
        """
        resolved_file = str(
            settings_file or os.getenv(THEMEFLOW_SETTINGS_ENV_VAR) or THEMEFLOW_DEFAULT_SETTINGS_FILE
        )
        settings_path = Path(resolved_file).resolve()

        if not settings_path.exists():
            raise SettingsError(
                f"Settings file not found: {resolved_file}\n"
                f"Resolved to absolute path: {settings_path}\n"
                f"Current working directory: {Path.cwd()}"
            )
        if not is_yaml_file(settings_path):
            raise SettingsError(f"Settings file must be a YAML file: {resolved_file}")

        try:
            yaml_data = load_yaml_mapping(settings_path)
        except ResourceError as e:
            raise SettingsError(f"Failed to load settings from {resolved_file}: {e}") from e

        try:
            instance = cls(**{**yaml_data, **overrides})
        except ValueError as e:
            raise SettingsError(f"Invalid settings in {resolved_file}: {e}") from e

        instance._base_dir = base_dir or settings_path.parent
        instance._settings_file = str(settings_path)
        return instance.resolve_relative_paths()

    @property
    def as_dict(self) -> dict[str, Any]:
        """Settings as a dictionary."""
        return self.model_dump()

    @property
    def base_dir(self) -> Path | None:
        """Base directory for resolving relative paths, if available."""
        if self._base_dir:
            return self._base_dir
        if self._settings_file:
            return Path(self._settings_file).parent
        return None

    @property
    def settings_file(self) -> str | None:
        return self._settings_file

    def __str__(self) -> str:
        return str(self.as_dict)
