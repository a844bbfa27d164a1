import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from themeflow.constants import DEFAULT_ACCEPTED_ARGS, DEFAULT_PRIORITY, HOOK_MODULE_ENTRYPOINT
from themeflow.exceptions import CoreError
from themeflow.hooks.exceptions import HookError, HookLoadError
from themeflow.hooks.registry import HookRegistry
from themeflow.utils import import_from_string, import_module_from_path, list_python_modules

logger = logging.getLogger(__name__)


def load_hook_modules(registry: HookRegistry, dirs: Iterable[str | Path]) -> int:
    """Load theme hook modules and let them register their callbacks.

    Every Python file below each directory is imported and its module-level
    ``register(registry)`` function is called. This mirrors a theme's
    functions file: a single place that wires callbacks onto hooks.

    Args:
        registry: The registry handed to each module.
        dirs: Directories to scan, in order.

    Returns:
        Number of modules whose register() was called.

    Raises:
        ResourceError: If a directory doesn't exist.
        HookLoadError: If a module fails to import or its register() fails.
    """
    loaded = 0
    for index, dir_path in enumerate(dirs):
        for py_file in list_python_modules(dir_path):
            module_name = hook_module_name(index, dir_path, py_file)
            try:
                module = import_module_from_path(module_name, py_file)
            except CoreError as e:
                raise HookLoadError(f"Failed to import hook module '{py_file}': {e}") from e

            register = getattr(module, HOOK_MODULE_ENTRYPOINT, None)
            if not callable(register):
                logger.debug(f"Skipping '{py_file}': no {HOOK_MODULE_ENTRYPOINT}() function")
                continue

            try:
                register(registry)
            except HookError:
                raise
            except Exception as e:
                raise HookLoadError(f"{HOOK_MODULE_ENTRYPOINT}() in '{py_file}' failed: {e}") from e

            logger.debug(f"Loaded hook module '{py_file}'")
            loaded += 1
    return loaded


def hook_module_name(index: int, dir_path: str | Path, py_file: Path) -> str:
    """Module name for a hook file, unique across hook directories.

    ``widgets/menus.py`` in the second directory becomes
    ``themeflow_hooks_1.widgets.menus``.
    """
    relative = py_file.relative_to(dir_path).with_suffix("")
    return ".".join([f"themeflow_hooks_{index}", *relative.parts])


def load_hook_callbacks(registry: HookRegistry, specs: Iterable[Mapping[str, Any]]) -> int:
    """Register callbacks referenced by dotted import paths.

    Each spec looks like::

        {"hook": "init", "callback": "my_theme.setup:add_menus", "priority": 5, "accepted_args": 1}

    Args:
        registry: Registry to register into.
        specs: Callback specifications.

    Returns:
        Number of callbacks registered.

    Raises:
        HookLoadError: If a spec is incomplete or the callback can't be imported.
        InvalidRegistrationError: If priority or accepted_args are malformed.
    """
    count = 0
    for spec in specs:
        hook_name = spec.get("hook")
        path = spec.get("callback")
        if not hook_name or not path:
            raise HookLoadError(f"Callback spec needs 'hook' and 'callback' keys, got {dict(spec)!r}")

        try:
            callback = import_from_string(path)
        except CoreError as e:
            raise HookLoadError(f"Cannot load callback '{path}': {e}", hook_name=hook_name) from e

        registry.register(
            hook_name,
            callback,
            priority=spec.get("priority", DEFAULT_PRIORITY),
            accepted_args=spec.get("accepted_args", DEFAULT_ACCEPTED_ARGS),
        )
        count += 1
    return count
