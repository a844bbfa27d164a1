"""
ThemeFlow exception hierarchy.

This module defines the core exceptions used throughout ThemeFlow, organized
hierarchically with clear inheritance paths. Hook, template and rendering
errors live next to their packages and inherit from ThemeFlowError.
"""

###############################################################################
# ROOT EXCEPTIONS
###############################################################################


class ThemeFlowError(Exception):
    """
    Root exception class for all ThemeFlow library errors.

    It should never be raised directly but rather inherited from.
    """


class ThemeFlowAppError(ThemeFlowError):
    """Root exception class for application level (CLI) errors."""


###############################################################################
# CORE EXCEPTIONS
###############################################################################


class CoreError(ThemeFlowError):
    """
    Base exception class for core functionality errors.

    These relate to fundamental operations of ThemeFlow itself, such as
    module loading and object construction.
    """

    def __init__(self, message: str = "", component: str = ""):
        prefix = f"{component}: " if component else ""
        super().__init__(f"{prefix}{message}")
        self.component = component


class InitializationError(CoreError):
    """Raised when a ThemeFlow object cannot be built or set up."""


class ImmutableAttributeError(CoreError):
    """
    Raised when attempting to set a read-only attribute.

    Used for properties assembled internally, such as the resolver of a
    ThemeFlow instance.
    """


###############################################################################
# SETTINGS EXCEPTIONS
###############################################################################


class SettingsError(ThemeFlowError):
    """Raised for configuration and settings loading problems."""

    def __init__(self, message: str = "", setting: str = ""):
        prefix = f"Setting '{setting}': " if setting else ""
        super().__init__(f"{prefix}{message}")
        self.setting = setting


###############################################################################
# RESOURCE EXCEPTIONS
###############################################################################


class ResourceError(ThemeFlowError):
    """
    Base exception class for resource access errors.

    These relate to file, directory and module access issues.
    """

    def __init__(self, message: str = "", resource_type: str = "", resource_name: str = ""):
        prefix = f"{resource_type} '{resource_name}': " if resource_type and resource_name else ""
        super().__init__(f"{prefix}{message}")
        self.resource_type = resource_type
        self.resource_name = resource_name
