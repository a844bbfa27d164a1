import logging
from collections.abc import Iterable, Mapping, Sequence
from string import Formatter

from themeflow.constants import DEFAULT_PATTERNS, DEFAULT_TEMPLATE_RULES, TEMPLATE_PATTERN_TOKENS
from themeflow.templates.descriptor import ContentDescriptor
from themeflow.templates.exceptions import TemplateRuleError

logger = logging.getLogger(__name__)

_formatter = Formatter()


def pattern_tokens(pattern: str, category: str = "") -> tuple[str, ...]:
    """Return the tokens referenced by a pattern, validating them.

    Raises:
        TemplateRuleError: If the pattern is malformed or uses anything but
            plain ``{type}``, ``{type_slug}`` or ``{path_slug}`` fields.
    """
    if not isinstance(pattern, str) or not pattern.strip():
        raise TemplateRuleError("pattern must be a non-empty string", category=category, pattern=str(pattern))

    try:
        parsed = list(_formatter.parse(pattern))
    except ValueError as e:
        raise TemplateRuleError(f"malformed pattern: {e}", category=category, pattern=pattern) from e

    tokens = []
    for _literal, field_name, format_spec, conversion in parsed:
        if field_name is None:
            continue
        if field_name not in TEMPLATE_PATTERN_TOKENS:
            raise TemplateRuleError(
                f"unknown token '{{{field_name}}}', expected one of "
                f"{', '.join('{' + t + '}' for t in TEMPLATE_PATTERN_TOKENS)}",
                category=category,
                pattern=pattern,
            )
        if format_spec or conversion:
            raise TemplateRuleError(
                f"token '{{{field_name}}}' can't carry a format spec or conversion",
                category=category,
                pattern=pattern,
            )
        tokens.append(field_name)
    return tuple(tokens)


class TemplateRuleTable:
    """Ordered template name patterns per content type category.

    ``candidates()`` turns a ContentDescriptor into the TemplateCandidateList:
    the category's patterns formatted with the descriptor fields, most
    specific first, followed by the default patterns. A pattern that needs a
    field the descriptor doesn't carry is skipped.

    Example:
        rules = TemplateRuleTable({"single": ["single-{type_slug}.html", "single.html"]})
        rules.candidates(ContentDescriptor(content_type="single", type_slug="post"))
        # ["single-post.html", "single.html", "index.html"]
    """

    def __init__(
        self,
        rules: Mapping[str, Sequence[str]] | None = None,
        default_patterns: Iterable[str] = DEFAULT_PATTERNS,
    ):
        """Build and validate a rule table.

        Args:
            rules: Category to patterns mapping. Defaults to DEFAULT_TEMPLATE_RULES.
            default_patterns: Patterns appended after every category, usually the
                generic ``index`` template.

        Raises:
            TemplateRuleError: If any pattern is invalid.
        """
        if rules is None:
            rules = DEFAULT_TEMPLATE_RULES
        if not isinstance(rules, Mapping):
            raise TemplateRuleError(f"rules must be a mapping, got {type(rules).__name__}")

        self._rules: dict[str, tuple[tuple[str, tuple[str, ...]], ...]] = {}
        for category, patterns in rules.items():
            category = str(category).lower()
            if isinstance(patterns, str) or not isinstance(patterns, Sequence):
                raise TemplateRuleError(f"patterns for '{category}' must be a list of strings")
            self._rules[category] = tuple((p, pattern_tokens(p, category)) for p in patterns)

        self._default_patterns = tuple((p, pattern_tokens(p, "default")) for p in default_patterns)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(categories={self.categories})"

    @property
    def categories(self) -> list[str]:
        return list(self._rules)

    @property
    def default_patterns(self) -> list[str]:
        return [pattern for pattern, _ in self._default_patterns]

    def patterns_for(self, category: str) -> list[str]:
        """Patterns of a category, without the default tail. Unknown categories give []."""
        return [pattern for pattern, _ in self._rules.get(str(category).lower(), ())]

    def as_dict(self) -> dict[str, list[str]]:
        return {category: self.patterns_for(category) for category in self._rules}

    def candidates(self, descriptor: ContentDescriptor) -> list[str]:
        """Build the ordered, de-duplicated candidate list for a descriptor."""
        category = descriptor.category
        rules = self._rules.get(category)
        if rules is None:
            logger.debug(f"No template rules for category '{category}', using default patterns only")
            rules = ()

        values = descriptor.fields()
        candidates: list[str] = []
        for pattern, tokens in (*rules, *self._default_patterns):
            if any(not values.get(token) for token in tokens):
                continue
            name = pattern.format(**{token: values[token] for token in tokens})
            if name not in candidates:
                candidates.append(name)
        return candidates
