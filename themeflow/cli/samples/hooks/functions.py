"""
Sample hook module.

ThemeFlow imports every module in the configured hooks directories and calls
its register(registry) function once during setup.
"""

from themeflow.constants import LifecycleHook


def add_site_name(context):
    """Add the site name to every render context."""
    context.setdefault("site_name", "My ThemeFlow Site")
    return context


def prefer_post_template(candidates, descriptor):
    """Try a type specific post template before anything else."""
    if descriptor.type_slug == "post":
        return ["post.html", *candidates]
    return candidates


def announce_init(themeflow):
    """Print the configured template roots once setup runs."""
    print(f"ThemeFlow initialized with roots: {', '.join(themeflow.resolver.roots)}")


def register(registry):
    registry.register(LifecycleHook.TEMPLATE_CONTEXT, add_site_name)
    registry.register(LifecycleHook.TEMPLATE_CANDIDATES, prefer_post_template, priority=20, accepted_args=2)
    registry.register(LifecycleHook.INIT, announce_init)
