"""Existence checks used by the template resolver.

The resolver never touches storage itself. It asks an ExistenceCheck whether
a template name exists below a root, which keeps resolution testable without
real files and lets embedders plug in other media.
"""

from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class ExistenceCheck(Protocol):
    """Answers whether a template exists in a root."""

    def exists(self, root: str, name: str) -> bool: ...


class FileSystemExistenceCheck:
    """Roots are directories and names are paths relative to them.

    Names resolving outside their root, or names the file system rejects,
    are reported as missing.
    """

    def exists(self, root: str, name: str) -> bool:
        try:
            root_path = Path(root).resolve()
            candidate = (root_path / name).resolve()
            if not candidate.is_relative_to(root_path):
                return False
            return candidate.is_file()
        except (OSError, ValueError):
            # e.g. names with an embedded NUL byte
            return False


class InMemoryExistenceCheck:
    """Existence backed by a mapping of root to template names."""

    def __init__(self, templates: Mapping[str, Iterable[str]] | None = None):
        self._templates: dict[str, set[str]] = {
            str(root): set(names) for root, names in (templates or {}).items()
        }

    def exists(self, root: str, name: str) -> bool:
        return name in self._templates.get(str(root), ())

    def add(self, root: str, name: str) -> None:
        self._templates.setdefault(str(root), set()).add(name)

    def discard(self, root: str, name: str) -> None:
        self._templates.get(str(root), set()).discard(name)


class CallableExistenceCheck:
    """Adapts a plain ``exists(root, name)`` function."""

    def __init__(self, func: Callable[[str, str], bool]):
        self._func = func

    def exists(self, root: str, name: str) -> bool:
        return bool(self._func(root, name))


def as_existence_check(check: ExistenceCheck | Callable[[str, str], bool]) -> ExistenceCheck:
    """Return check itself, or wrap it if it's a plain callable."""
    if isinstance(check, ExistenceCheck):
        return check
    if callable(check):
        return CallableExistenceCheck(check)
    raise TypeError(f"Expected an ExistenceCheck or a callable, got {type(check).__name__}")
