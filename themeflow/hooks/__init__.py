"""Action and filter hooks for ThemeFlow.

Hooks decouple code that announces lifecycle moments from code that reacts
to them. Register callbacks on a HookRegistry, then dispatch actions or apply
filters by name.
"""

from themeflow.hooks.exceptions import (
    CallbackFailureError,
    HookError,
    HookLoadError,
    InvalidRegistrationError,
    RegistryFrozenError,
)
from themeflow.hooks.loader import load_hook_callbacks, load_hook_modules
from themeflow.hooks.registry import HookRegistration, HookRegistry

__all__ = [
    "CallbackFailureError",
    "HookError",
    "HookLoadError",
    "HookRegistration",
    "HookRegistry",
    "InvalidRegistrationError",
    "RegistryFrozenError",
    "load_hook_callbacks",
    "load_hook_modules",
]
