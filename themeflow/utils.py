import importlib
import importlib.util
import logging
from collections.abc import Callable
from pathlib import Path
from types import ModuleType
from typing import Any

import yaml

from themeflow.exceptions import CoreError, ResourceError

logger = logging.getLogger(__name__)

SUPPORTED_YAML_EXTENSIONS = (".yaml", ".yml")


def import_module_from_path(module_name: str, module_path: str | Path) -> ModuleType:
    """
    Import a module from a given file path.

    Args:
        module_name: Name to assign to the module.
        module_path: Path to the module file.

    Returns:
        Imported module.

    Raises:
        CoreError: If there is an error importing the module.
    """
    try:
        spec = importlib.util.spec_from_file_location(module_name, str(module_path))
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        logger.debug("Imported module %s from %s", module_name, module_path)
        return module
    except Exception as e:
        raise CoreError(
            f"Failed to import module '{module_name}' from '{module_path}': {e!s}",
            component="ModuleLoader",
        ) from e


def import_from_string(dotted_path: str) -> Any:
    """
    Import an attribute from a dotted path.

    Both ``package.module:attr`` and ``package.module.attr`` are accepted.

    Args:
        dotted_path: The path to import.

    Returns:
        The imported attribute.

    Raises:
        CoreError: If the module or the attribute cannot be found.
    """
    if ":" in dotted_path:
        module_name, _, attr_path = dotted_path.partition(":")
    else:
        module_name, _, attr_path = dotted_path.rpartition(".")

    if not module_name or not attr_path:
        raise CoreError(f"Invalid import path '{dotted_path}'", component="ModuleLoader")

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise CoreError(f"Cannot import module '{module_name}': {e!s}", component="ModuleLoader") from e

    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as e:
            raise CoreError(
                f"Module '{module_name}' has no attribute '{attr_path}'", component="ModuleLoader"
            ) from e
    return obj


def list_python_modules(dir_path: str | Path) -> list[Path]:
    """
    List importable Python files below a directory, sorted by path.

    Files whose name starts with ``__`` are skipped.

    Raises:
        ResourceError: If the directory doesn't exist.
    """
    path = Path(dir_path)
    if not path.is_dir():
        raise ResourceError(
            f"Directory not found: {dir_path}", resource_type="hooks directory", resource_name=str(dir_path)
        )
    return sorted(py_file for py_file in path.rglob("*.py") if not py_file.name.startswith("__"))


def callable_name(func: Callable) -> str:
    """Return a readable qualified name for any callable."""
    module = getattr(func, "__module__", None)
    qualname = getattr(func, "__qualname__", None)
    if qualname is None:
        qualname = type(func).__qualname__
    return f"{module}.{qualname}" if module else qualname


def is_yaml_file(file_path: str | Path) -> bool:
    """Check whether a path has a YAML extension."""
    return Path(file_path).suffix.lower() in SUPPORTED_YAML_EXTENSIONS


def load_yaml_mapping(file_path: str | Path) -> dict[str, Any]:
    """
    Load a YAML file that must contain a mapping.

    An empty file yields an empty dict.

    Raises:
        ResourceError: If the file is missing, unreadable, or not a mapping.
    """
    path = Path(file_path)
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ResourceError(f"Failed to load YAML: {e}", resource_type="file", resource_name=str(path)) from e

    if not isinstance(data, dict):
        raise ResourceError(
            f"Expected a YAML mapping, got {type(data).__name__}",
            resource_type="file",
            resource_name=str(path),
        )
    return data
