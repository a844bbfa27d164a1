"""Priority-ordered action and filter registry.

A HookRegistry maps hook names to callbacks. Callbacks run in ascending
priority and, within one priority, in registration order. Actions discard
return values; filters thread a value through every callback.

Failures are not swallowed: when a callback raises, dispatch stops and a
CallbackFailureError reaches the caller. Callbacks that already ran are not
undone, so a hook chain is best effort rather than transactional.

Example:
    registry = HookRegistry()

    @registry.on("the_title", priority=20)
    def shout(title):
        return title.upper()

    registry.apply_filter("the_title", "hello")  # "HELLO"
"""

import itertools
import logging
import threading
from collections import Counter
from collections.abc import Callable
from typing import Any, NamedTuple

from themeflow.constants import DEFAULT_ACCEPTED_ARGS, DEFAULT_PRIORITY
from themeflow.hooks.exceptions import (
    CallbackFailureError,
    InvalidRegistrationError,
    RegistryFrozenError,
)
from themeflow.utils import callable_name

logger = logging.getLogger(__name__)


class HookRegistration(NamedTuple):
    """A single callback attached to a hook."""

    hook_name: str
    callback: Callable[..., Any]
    priority: int
    accepted_args: int
    sequence: int

    @property
    def callback_name(self) -> str:
        return callable_name(self.callback)


class HookRegistry:
    """Registry of named extension points.

    The registry is meant to be built once at startup, frozen, and then only
    dispatched. Mutation is guarded by a single lock so registering from
    several threads is safe. A frozen registry serves dispatch from cached
    snapshots without taking that lock; action counters have their own lock.

    Attributes:
        name: Label used in log messages.
    """

    def __init__(self, name: str = "default"):
        self.name = name
        self._hooks: dict[str, dict[int, list[HookRegistration]]] = {}
        self._snapshots: dict[str, tuple[HookRegistration, ...]] = {}
        self._sequence = itertools.count()
        self._lock = threading.RLock()
        self._frozen = False
        self._action_counts: Counter[str] = Counter()
        self._counts_lock = threading.Lock()
        self._local = threading.local()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, hooks={len(self._hooks)}, frozen={self._frozen})"

    ###########################################################################
    # Registration
    ###########################################################################

    def register(
        self,
        hook_name: str,
        callback: Callable[..., Any],
        priority: int = DEFAULT_PRIORITY,
        accepted_args: int = DEFAULT_ACCEPTED_ARGS,
    ) -> HookRegistration:
        """Attach a callback to a hook.

        Args:
            hook_name: Name of the hook. Need not exist yet.
            callback: Callable invoked on dispatch.
            priority: Lower values run earlier.
            accepted_args: How many positional arguments the callback receives.
                For filters the value counts as the first one.

        Returns:
            The stored registration.

        Raises:
            InvalidRegistrationError: If any argument is malformed.
            RegistryFrozenError: If the registry is frozen.
        """
        hook_name = self._validate_registration(hook_name, callback, priority, accepted_args)

        with self._lock:
            self._ensure_mutable(hook_name)
            registration = HookRegistration(
                hook_name=hook_name,
                callback=callback,
                priority=priority,
                accepted_args=accepted_args,
                sequence=next(self._sequence),
            )
            self._hooks.setdefault(hook_name, {}).setdefault(priority, []).append(registration)
            self._snapshots.pop(hook_name, None)

        logger.debug(
            f"Registered '{registration.callback_name}' on hook '{hook_name}' "
            f"(priority={priority}, accepted_args={accepted_args})"
        )
        return registration

    def on(
        self,
        hook_name: str,
        priority: int = DEFAULT_PRIORITY,
        accepted_args: int = DEFAULT_ACCEPTED_ARGS,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorator form of register(). Returns the decorated function unchanged."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self.register(hook_name, func, priority=priority, accepted_args=accepted_args)
            return func

        return decorator

    def unregister(self, hook_name: str, callback: Callable[..., Any], priority: int = DEFAULT_PRIORITY) -> bool:
        """Remove the earliest registration matching hook name, priority and callback.

        Callbacks are compared with ``==`` so bound methods of the same object match.

        Returns:
            True if a registration was removed, False if none matched.

        Raises:
            RegistryFrozenError: If the registry is frozen.
        """
        hook_name = str(hook_name)
        with self._lock:
            self._ensure_mutable(hook_name)
            bucket = self._hooks.get(hook_name, {}).get(priority)
            if not bucket:
                return False

            for index, registration in enumerate(bucket):
                if registration.callback == callback:
                    del bucket[index]
                    self._prune(hook_name, priority)
                    logger.debug(f"Unregistered '{callable_name(callback)}' from hook '{hook_name}'")
                    return True
        return False

    def unregister_all(self, hook_name: str, priority: int | None = None) -> int:
        """Remove every registration of a hook, or only those at one priority.

        Returns:
            Number of registrations removed.
        """
        hook_name = str(hook_name)
        with self._lock:
            self._ensure_mutable(hook_name)
            table = self._hooks.get(hook_name)
            if not table:
                return 0

            if priority is None:
                removed = sum(len(bucket) for bucket in table.values())
                del self._hooks[hook_name]
                self._snapshots.pop(hook_name, None)
            else:
                removed = len(table.get(priority, []))
                table.pop(priority, None)
                self._prune(hook_name, priority)
        return removed

    def freeze(self) -> None:
        """Reject any further registration changes. Dispatch keeps working."""
        with self._lock:
            # Snapshots must be complete before dispatch switches to the lock-free path
            self._snapshots = {hook_name: self._build_snapshot(hook_name) for hook_name in self._hooks}
            self._frozen = True
        logger.debug(f"Hook registry '{self.name}' frozen with {len(self._hooks)} hook(s)")

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    ###########################################################################
    # Queries
    ###########################################################################

    def has_callbacks(self, hook_name: str) -> bool:
        """Check whether any callback is attached to a hook."""
        return bool(self._snapshot(str(hook_name)))

    def priority_of(self, hook_name: str, callback: Callable[..., Any]) -> int | None:
        """Priority of the first registration of callback on hook_name, or None."""
        for registration in self._snapshot(str(hook_name)):
            if registration.callback == callback:
                return registration.priority
        return None

    def registrations(
        self, hook_name: str | None = None
    ) -> list[HookRegistration] | dict[str, list[HookRegistration]]:
        """Registrations in dispatch order.

        Args:
            hook_name: A single hook to inspect. When omitted, all hooks are returned.

        Returns:
            A list for one hook, or a dict keyed by hook name sorted alphabetically.
        """
        if hook_name is not None:
            return list(self._snapshot(str(hook_name)))
        with self._lock:
            names = sorted(self._hooks)
        return {name: list(self._snapshot(name)) for name in names}

    @property
    def hook_names(self) -> list[str]:
        with self._lock:
            return sorted(self._hooks)

    def action_count(self, hook_name: str) -> int:
        """Number of times dispatch_action() started for hook_name."""
        with self._counts_lock:
            return self._action_counts[str(hook_name)]

    def current_hook(self) -> str | None:
        """Innermost hook being dispatched on the calling thread."""
        stack = self._stack()
        return stack[-1] if stack else None

    def is_dispatching(self, hook_name: str | None = None) -> bool:
        """Whether the calling thread is inside a dispatch (of hook_name, if given)."""
        stack = self._stack()
        if hook_name is None:
            return bool(stack)
        return str(hook_name) in stack

    ###########################################################################
    # Dispatch
    ###########################################################################

    def dispatch_action(self, hook_name: str, *args: Any) -> None:
        """Run every callback of an action hook.

        Each callback receives the first ``accepted_args`` of args; return values
        are discarded. A hook without callbacks is a no-op.

        Raises:
            CallbackFailureError: If a callback raises. Later callbacks don't run.
        """
        hook_name = str(hook_name)
        with self._counts_lock:
            self._action_counts[hook_name] += 1

        registrations = self._snapshot(hook_name)
        if not registrations:
            return

        stack = self._stack()
        stack.append(hook_name)
        try:
            for registration in registrations:
                self._invoke(registration, args)
        finally:
            stack.pop()

    def apply_filter(self, hook_name: str, value: Any, *args: Any) -> Any:
        """Thread a value through every callback of a filter hook.

        Each callback receives ``(value, *args)`` truncated to its ``accepted_args``
        and returns the value handed to the next callback. Without callbacks the
        original value is returned as is.

        Returns:
            The value returned by the last callback.

        Raises:
            CallbackFailureError: If a callback raises. Later callbacks don't run.
        """
        hook_name = str(hook_name)
        registrations = self._snapshot(hook_name)
        if not registrations:
            return value

        stack = self._stack()
        stack.append(hook_name)
        try:
            for registration in registrations:
                value = self._invoke(registration, (value, *args), value=value)
        finally:
            stack.pop()
        return value

    ###########################################################################
    # Internals
    ###########################################################################

    def _invoke(self, registration: HookRegistration, args: tuple[Any, ...], value: Any = None) -> Any:
        try:
            return registration.callback(*args[: registration.accepted_args])
        except CallbackFailureError:
            # Raised by a nested dispatch; already carries the failing callback.
            raise
        except Exception as e:
            logger.debug(f"Callback '{registration.callback_name}' failed on hook '{registration.hook_name}'")
            raise CallbackFailureError(
                hook_name=registration.hook_name,
                callback_name=registration.callback_name,
                priority=registration.priority,
                original_exception=e,
                value=value,
            ) from e

    def _snapshot(self, hook_name: str) -> tuple[HookRegistration, ...]:
        if self._frozen:
            return self._snapshots.get(hook_name, ())
        with self._lock:
            snapshot = self._snapshots.get(hook_name)
            if snapshot is None:
                snapshot = self._build_snapshot(hook_name)
                if snapshot:
                    self._snapshots[hook_name] = snapshot
            return snapshot

    def _build_snapshot(self, hook_name: str) -> tuple[HookRegistration, ...]:
        table = self._hooks.get(hook_name, {})
        return tuple(registration for priority in sorted(table) for registration in table[priority])

    def _prune(self, hook_name: str, priority: int) -> None:
        table = self._hooks.get(hook_name)
        if table is not None and not table.get(priority):
            table.pop(priority, None)
            if not table:
                del self._hooks[hook_name]
        self._snapshots.pop(hook_name, None)

    def _ensure_mutable(self, hook_name: str) -> None:
        if self._frozen:
            raise RegistryFrozenError("registry is frozen, callbacks can no longer change", hook_name=hook_name)

    def _stack(self) -> list[str]:
        stack = getattr(self._local, "stack", None)
        if stack is None:
            stack = self._local.stack = []
        return stack

    @staticmethod
    def _validate_registration(hook_name: Any, callback: Any, priority: Any, accepted_args: Any) -> str:
        if not isinstance(hook_name, str) or not hook_name.strip():
            raise InvalidRegistrationError(f"hook name must be a non-empty string, got {hook_name!r}")
        hook_name = str(hook_name)
        if not callable(callback):
            raise InvalidRegistrationError(f"callback {callback!r} is not callable", hook_name=hook_name)
        if isinstance(priority, bool) or not isinstance(priority, int):
            raise InvalidRegistrationError(f"priority must be an int, got {priority!r}", hook_name=hook_name)
        if isinstance(accepted_args, bool) or not isinstance(accepted_args, int) or accepted_args < 0:
            raise InvalidRegistrationError(
                f"accepted_args must be a non-negative int, got {accepted_args!r}", hook_name=hook_name
            )
        return hook_name
