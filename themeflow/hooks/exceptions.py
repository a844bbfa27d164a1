from typing import Any

from themeflow.exceptions import ThemeFlowError


class HookError(ThemeFlowError):
    """Base exception class for hook-related errors."""

    def __init__(self, message: str = "", hook_name: str = ""):
        prefix = f"Hook '{hook_name}': " if hook_name else ""
        super().__init__(f"{prefix}{message}")
        self.hook_name = hook_name


class InvalidRegistrationError(HookError):
    """Raised when a callback registration is malformed. Registry state is left unchanged."""


class RegistryFrozenError(HookError):
    """Raised when registering or unregistering after the registry was frozen."""


class HookLoadError(HookError):
    """Raised when a hook module or a dotted callback path cannot be loaded."""


class CallbackFailureError(HookError):
    """Raised when a registered callback fails during dispatch.

    Dispatch stops at the failing callback. Callbacks that already ran are not
    rolled back. The original exception is chained as ``__cause__``.
    """

    def __init__(
        self,
        hook_name: str,
        callback_name: str,
        priority: int,
        original_exception: BaseException,
        value: Any = None,
    ):
        """Initialize the failure with dispatch details.

        Args:
            hook_name: The hook being dispatched.
            callback_name: Qualified name of the failing callback.
            priority: Priority the callback was registered at.
            original_exception: The exception raised by the callback.
            value: For filters, the value the failing callback received.
        """
        self.callback_name = callback_name
        self.priority = priority
        self.original_exception = original_exception
        self.value = value
        super().__init__(
            f"callback '{callback_name}' (priority {priority}) failed: "
            f"{original_exception.__class__.__name__}: {original_exception}",
            hook_name=hook_name,
        )
