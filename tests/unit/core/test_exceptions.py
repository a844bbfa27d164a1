import pytest

from themeflow.cli.exceptions import CLIResolveError, ThemeFlowCLIError
from themeflow.exceptions import CoreError, ResourceError, SettingsError, ThemeFlowAppError, ThemeFlowError
from themeflow.hooks import CallbackFailureError, HookError, HookLoadError
from themeflow.j2 import TemplateRenderError
from themeflow.templates import InvalidDescriptorError, TemplateNotFoundError, TemplateRuleError


class TestExceptionHierarchy:
    @pytest.mark.parametrize(
        "exception_class",
        [
            CoreError,
            SettingsError,
            ResourceError,
            HookError,
            HookLoadError,
            TemplateRuleError,
            InvalidDescriptorError,
            TemplateRenderError,
            ThemeFlowAppError,
        ],
    )
    def test_everything_is_a_themeflow_error(self, exception_class):
        assert issubclass(exception_class, ThemeFlowError)

    def test_cli_errors_are_app_errors(self):
        assert issubclass(CLIResolveError, ThemeFlowAppError)


class TestExceptionMessages:
    def test_core_error_component_prefix(self):
        assert str(CoreError("boom", component="Loader")) == "Loader: boom"

    def test_settings_error_prefix(self):
        assert str(SettingsError("bad", setting="log_level")) == "Setting 'log_level': bad"

    def test_resource_error_prefix(self):
        error = ResourceError("missing", resource_type="file", resource_name="a.yaml")

        assert str(error) == "file 'a.yaml': missing"

    def test_hook_error_prefix(self):
        assert str(HookLoadError("cannot import", hook_name="init")) == "Hook 'init': cannot import"

    def test_callback_failure_message(self):
        original = ValueError("nope")

        error = CallbackFailureError("the_title", "theme.shout", 20, original, value="hi")

        assert str(error) == "Hook 'the_title': callback 'theme.shout' (priority 20) failed: ValueError: nope"
        assert error.value == "hi"

    def test_template_not_found_message(self):
        error = TemplateNotFoundError(["single.html"], ["child", "parent"])

        assert str(error) == "No template found. Tried candidates [single.html] in roots [child, parent]"

    def test_template_render_error_short_template(self):
        error = TemplateRenderError("failed", template="{{ x }}")

        assert str(error) == "failed Template: '{{ x }}'"


class TestCLIError:
    def test_format_rich_with_hint_and_original(self):
        try:
            raise KeyError("key")
        except KeyError as e:
            error = ThemeFlowCLIError("Something failed", hint="Try again", original_exception=e)

        formatted = error.format_rich()

        assert "Something failed" in formatted
        assert "Hint:[/] Try again" in formatted
        assert "KeyError" in formatted
        assert "Traceback" in formatted

    def test_format_rich_minimal(self):
        formatted = ThemeFlowCLIError("Only a message").format_rich()

        assert "Hint" not in formatted
        assert "Original error" not in formatted
        assert ThemeFlowCLIError("x").code == 1
