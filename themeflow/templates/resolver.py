import logging
import threading
from collections.abc import Callable, Iterable, Sequence

from pydantic import BaseModel, ConfigDict

from themeflow.constants import DEFAULT_FALLBACK_TEMPLATE
from themeflow.templates.descriptor import ContentDescriptor
from themeflow.templates.exceptions import TemplateNotFoundError
from themeflow.templates.existence import ExistenceCheck, as_existence_check
from themeflow.templates.rules import TemplateRuleTable

logger = logging.getLogger(__name__)


class ResolvedTemplate(BaseModel):
    """The template picked for a render request."""

    model_config = ConfigDict(frozen=True)

    root: str
    name: str
    is_fallback: bool = False

    @property
    def identifier(self) -> str:
        return f"{self.root.rstrip('/')}/{self.name}"

    def __str__(self) -> str:
        return self.identifier


class TemplateResolver:
    """Maps a ContentDescriptor to the most specific existing template.

    Candidates are tried most specific first. For each candidate every root is
    checked in priority order before moving to the next, less specific,
    candidate. Specificity therefore dominates root priority: ``single.html``
    in a parent root wins over ``index.html`` in a child root.

    When no candidate exists anywhere, the fallback template is looked up in
    the roots. If it is missing too, TemplateNotFoundError is raised.

    Existence results are cached per (root, name) unless ``cache=False``.
    Replacing ``roots`` drops the cache.
    """

    def __init__(
        self,
        rules: TemplateRuleTable,
        roots: Iterable[str],
        exists: ExistenceCheck | Callable[[str, str], bool],
        fallback: str | None = DEFAULT_FALLBACK_TEMPLATE,
        cache: bool = True,
    ):
        """Create a resolver.

        Args:
            rules: Rule table used to build candidate lists.
            roots: Override roots, highest priority (child) first.
            exists: Existence check or a plain ``exists(root, name)`` callable.
            fallback: Ultimate fallback template name, or None for no fallback.
            cache: Whether to cache existence results.
        """
        self.rules = rules
        self.fallback = fallback
        self._exists = as_existence_check(exists)
        self._roots = tuple(str(root) for root in roots)
        self._cache_enabled = cache
        self._cache: dict[tuple[str, str], bool] = {}
        self._cache_lock = threading.Lock()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(roots={list(self._roots)}, fallback={self.fallback!r})"

    @property
    def roots(self) -> tuple[str, ...]:
        return self._roots

    @roots.setter
    def roots(self, roots: Iterable[str]) -> None:
        self._roots = tuple(str(root) for root in roots)
        self.invalidate_cache()

    @property
    def existence_check(self) -> ExistenceCheck:
        return self._exists

    def invalidate_cache(self) -> None:
        with self._cache_lock:
            self._cache.clear()

    def exists(self, root: str, name: str) -> bool:
        """Cached existence check for one (root, name) pair."""
        if not self._cache_enabled:
            return self._exists.exists(root, name)

        key = (root, name)
        with self._cache_lock:
            if key in self._cache:
                return self._cache[key]
        found = self._exists.exists(root, name)
        with self._cache_lock:
            self._cache[key] = found
        return found

    def candidates(self, descriptor: ContentDescriptor) -> list[str]:
        return self.rules.candidates(descriptor)

    def locate(self, name: str) -> ResolvedTemplate | None:
        """First root containing a template name, or None."""
        for root in self._roots:
            if self.exists(root, name):
                return ResolvedTemplate(root=root, name=name)
        return None

    def resolve(self, descriptor: ContentDescriptor) -> ResolvedTemplate:
        """Resolve a descriptor to a template.

        Raises:
            TemplateNotFoundError: If no candidate and no fallback exist.
        """
        resolved = self.resolve_candidates(self.candidates(descriptor))
        logger.debug(f"Resolved '{descriptor}' to '{resolved}'")
        return resolved

    def resolve_candidates(self, candidates: Sequence[str]) -> ResolvedTemplate:
        """Resolve an explicit candidate list, most specific first.

        Raises:
            TemplateNotFoundError: If no candidate and no fallback exist.
        """
        for name in candidates:
            found = self.locate(name)
            if found is not None:
                return found

        if self.fallback:
            found = self.locate(self.fallback)
            if found is not None:
                logger.warning(
                    f"No candidate of [{', '.join(candidates)}] exists, falling back to '{found}'"
                )
                return found.model_copy(update={"is_fallback": True})

        raise TemplateNotFoundError(candidates, self._roots, self.fallback)
