from enum import StrEnum


class LifecycleHook(StrEnum):
    """
    Canonical hook names emitted by ThemeFlow.

    Actions are dispatched for their side effects, filters transform a value.
    The arguments listed are passed in order, so a callback registered with
    ``accepted_args=N`` receives the first N of them.

    Attributes:
        AFTER_SETUP: action(themeflow). First moment hook modules can act.
        INIT: action(themeflow). General initialization.
        REGISTER_WIDGETS: action(themeflow). Register widget areas.
        ENQUEUE_ASSETS: action(themeflow). Declare stylesheets and scripts.
        TEMPLATE_CANDIDATES: filter(candidates, descriptor).
        TEMPLATE_INCLUDE: filter(resolved, descriptor).
        TEMPLATE_CONTEXT: filter(context, descriptor, resolved).
        BEFORE_TEMPLATE_RENDER: action(resolved, descriptor).
        RENDERED_OUTPUT: filter(output, descriptor, resolved).
        AFTER_TEMPLATE_RENDER: action(resolved, descriptor).
    """

    AFTER_SETUP = "after_setup"
    INIT = "init"
    REGISTER_WIDGETS = "register_widgets"
    ENQUEUE_ASSETS = "enqueue_assets"
    TEMPLATE_CANDIDATES = "template_candidates"
    TEMPLATE_INCLUDE = "template_include"
    TEMPLATE_CONTEXT = "template_context"
    BEFORE_TEMPLATE_RENDER = "before_template_render"
    RENDERED_OUTPUT = "rendered_output"
    AFTER_TEMPLATE_RENDER = "after_template_render"


# Fired in this order by ThemeFlow.setup()
SETUP_HOOKS = (
    LifecycleHook.AFTER_SETUP,
    LifecycleHook.INIT,
    LifecycleHook.REGISTER_WIDGETS,
    LifecycleHook.ENQUEUE_ASSETS,
)


class ContentType(StrEnum):
    """Content type categories understood by the default rule table."""

    SINGLE = "single"
    PAGE = "page"
    ATTACHMENT = "attachment"
    ARCHIVE = "archive"
    CATEGORY = "category"
    TAG = "tag"
    TAXONOMY = "taxonomy"
    AUTHOR = "author"
    DATE = "date"
    SEARCH = "search"
    HOME = "home"
    FRONT_PAGE = "front_page"
    NOT_FOUND = "404"

    @classmethod
    def _missing_(cls, value: object) -> "ContentType | None":
        """Accept hyphen variations such as 'front-page'."""
        if isinstance(value, str):
            normalized = value.lower().replace("-", "_")
            for member in cls:
                if member.value == normalized:
                    return member
        return None


DEFAULT_PRIORITY = 10
DEFAULT_ACCEPTED_ARGS = 1

# Tokens allowed inside template rule patterns
TEMPLATE_PATTERN_TOKENS = ("type", "type_slug", "path_slug")

DEFAULT_TEMPLATE_EXTENSION = ".html"
DEFAULT_FALLBACK_TEMPLATE = f"index{DEFAULT_TEMPLATE_EXTENSION}"
DEFAULT_PATTERNS = [DEFAULT_FALLBACK_TEMPLATE]

# Most specific first. The default patterns are appended after each list.
DEFAULT_TEMPLATE_RULES: dict[str, list[str]] = {
    ContentType.SINGLE: [
        "{type}-{type_slug}-{path_slug}.html",
        "{type}-{type_slug}.html",
        "{type}.html",
        "singular.html",
    ],
    ContentType.PAGE: [
        "{type}-{path_slug}.html",
        "{type}.html",
        "singular.html",
    ],
    ContentType.ATTACHMENT: [
        "{type_slug}-{path_slug}.html",
        "{type_slug}.html",
        "{type}.html",
        "single.html",
        "singular.html",
    ],
    ContentType.ARCHIVE: [
        "{type}-{type_slug}.html",
        "{type}.html",
    ],
    ContentType.CATEGORY: [
        "{type}-{path_slug}.html",
        "{type}.html",
        "archive.html",
    ],
    ContentType.TAG: [
        "{type}-{path_slug}.html",
        "{type}.html",
        "archive.html",
    ],
    ContentType.TAXONOMY: [
        "{type}-{type_slug}-{path_slug}.html",
        "{type}-{type_slug}.html",
        "{type}.html",
        "archive.html",
    ],
    ContentType.AUTHOR: [
        "{type}-{path_slug}.html",
        "{type}.html",
        "archive.html",
    ],
    ContentType.DATE: [
        "{type}.html",
        "archive.html",
    ],
    ContentType.SEARCH: ["{type}.html"],
    ContentType.HOME: ["{type}.html"],
    ContentType.FRONT_PAGE: ["front-page.html", "home.html"],
    ContentType.NOT_FOUND: ["{type}.html"],
}

# Settings
THEMEFLOW_DEFAULT_SETTINGS_FILE = "themeflow.yaml"
THEMEFLOW_SETTINGS_ENV_VAR = "THEMEFLOW_SETTINGS"
THEMEFLOW_DEFAULT_TEMPLATES_DIR = "templates"
THEMEFLOW_DEFAULT_HOOKS_DIR = "hooks"
THEMEFLOW_DEFAULT_LOG_DIR = ".themeflow/logs"
THEMEFLOW_DEFAULT_LOG_LEVEL = "INFO"

# Settings whose values are paths resolved relative to the settings file
THEMEFLOW_PATH_SETTINGS = ("template_roots", "local_hooks")

# Module-level function a hook module must define to be loaded
HOOK_MODULE_ENTRYPOINT = "register"

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
