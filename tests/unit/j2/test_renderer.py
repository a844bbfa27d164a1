import pytest
from jinja2 import DictLoader, Environment

from themeflow.j2 import TemplateRenderError, TemplateRenderer
from themeflow.templates import ResolvedTemplate


@pytest.fixture
def renderer(theme_dirs):
    return TemplateRenderer([theme_dirs["child"], theme_dirs["parent"]])


class TestTemplateRenderer:
    """Tests for rendering resolved templates with Jinja2."""

    def test_render_from_resolved_root(self, renderer, theme_dirs):
        resolved = ResolvedTemplate(root=str(theme_dirs["parent"]), name="single.html")

        assert renderer.render(resolved, {"title": "Hello"}) == "<main>parent single: Hello</main>"

    def test_resolved_root_wins_over_loader_order(self, renderer, theme_dirs):
        """The template is loaded from the root it was resolved in, not the first root holding the name."""
        (theme_dirs["child"] / "single.html").write_text("child single")
        resolved = ResolvedTemplate(root=str(theme_dirs["parent"]), name="single.html")

        assert renderer.render(resolved, {"title": "x"}) == "<main>parent single: x</main>"

    def test_extends_prefers_child_root(self, renderer, theme_dirs):
        """Inherited templates are looked up across roots in priority order."""
        (theme_dirs["child"] / "base.html").write_text("<div>{% block content %}{% endblock %}</div>")
        resolved = ResolvedTemplate(root=str(theme_dirs["parent"]), name="index.html")

        assert renderer.render(resolved) == "<div>index</div>"

    def test_autoescape_html(self, renderer, theme_dirs):
        resolved = ResolvedTemplate(root=str(theme_dirs["parent"]), name="single.html")

        output = renderer.render(resolved, {"title": "<b>bold</b>"})

        assert "&lt;b&gt;bold&lt;/b&gt;" in output

    def test_undefined_variable_raises(self, renderer, theme_dirs):
        resolved = ResolvedTemplate(root=str(theme_dirs["parent"]), name="single.html")

        with pytest.raises(TemplateRenderError, match="UndefinedError"):
            renderer.render(resolved, {})

    def test_missing_template_raises(self, renderer, theme_dirs):
        resolved = ResolvedTemplate(root=str(theme_dirs["child"]), name="single.html")

        with pytest.raises(TemplateRenderError, match="TemplateNotFound"):
            renderer.render(resolved)

    def test_syntax_error_raises(self, renderer, theme_dirs):
        (theme_dirs["child"] / "broken.html").write_text("{% if %}")
        resolved = ResolvedTemplate(root=str(theme_dirs["child"]), name="broken.html")

        with pytest.raises(TemplateRenderError, match="child/templates/broken.html"):
            renderer.render(resolved)

    def test_render_string(self, renderer):
        assert renderer.render_string("{{ a }}-{{ b }}", {"a": 1, "b": 2}) == "1-2"

    def test_render_string_error_includes_preview(self, renderer):
        source = "{{ missing }}" + "x" * 200

        with pytest.raises(TemplateRenderError) as exc_info:
            renderer.render_string(source)

        assert exc_info.value.template == source
        assert "..." in str(exc_info.value)

    def test_custom_environment(self, theme_dirs):
        environment = Environment(loader=DictLoader({"base.html": "[{% block content %}{% endblock %}]"}))
        renderer = TemplateRenderer([theme_dirs["parent"]], environment=environment)
        resolved = ResolvedTemplate(root=str(theme_dirs["parent"]), name="index.html")

        assert renderer.environment is environment
        assert renderer.roots == [str(theme_dirs["parent"])]
        assert renderer.render(resolved) == "[index]"
