"""Unit tests for the template registry."""

import pytest
from jinja2 import TemplateSyntaxError
from starlette.requests import Request

from plainwiki.config import Settings
from plainwiki.core.errors import ErrorKind, TemplateNotRegisteredError
from plainwiki.core.models import Page
from plainwiki.core.templates import TemplateRegistry


def make_request() -> Request:
    return Request(
        {
            "type": "http",
            "method": "GET",
            "path": "/",
            "headers": [],
            "query_string": b"",
        }
    )


@pytest.fixture
def template_dirs(tmp_path):
    """A minimal layout: one include providing the base, two templates."""
    templates_dir = tmp_path / "templates"
    includes_dir = tmp_path / "includes"
    templates_dir.mkdir()
    includes_dir.mkdir()
    (includes_dir / "base.html").write_text(
        "<html>{% include 'nav.html' %}{% block content %}{% endblock %}</html>"
    )
    (includes_dir / "nav.html").write_text("<nav>{{ app_title }}</nav>")
    (templates_dir / "show.html").write_text(
        "{% extends 'base.html' %}{% block content %}<p>{{ page.title }}</p>{% endblock %}"
    )
    (templates_dir / "broken.html").write_text(
        "{% extends 'base.html' %}{% block content %}{{ page.nothing() }}{% endblock %}"
    )
    (templates_dir / "notes.txt").write_text("not a template")
    return templates_dir, includes_dir


@pytest.fixture
def registry(template_dirs):
    templates_dir, includes_dir = template_dirs
    return TemplateRegistry(
        templates_dir, includes_dir, ".html", template_globals={"app_title": "TestWiki"}
    )


class TestRegistration:
    def test_registers_top_level_templates_by_file_name(self, registry):
        assert registry.names == {"show.html", "broken.html"}

    def test_includes_are_not_registered(self, registry):
        assert "base.html" not in registry
        assert "nav.html" not in registry

    def test_ignores_other_extensions(self, registry):
        assert "notes.txt" not in registry

    def test_syntax_error_fails_at_construction(self, template_dirs):
        templates_dir, includes_dir = template_dirs
        (templates_dir / "bad.html").write_text("{% block content %}")
        with pytest.raises(TemplateSyntaxError):
            TemplateRegistry(templates_dir, includes_dir)

    def test_packaged_templates(self):
        s = Settings()
        registry = TemplateRegistry(s.templates_dir, s.includes_dir, s.template_format)
        assert {"view.html", "edit.html"} <= registry.names


class TestRender:
    def test_renders_through_base_layout(self, registry):
        response = registry.render_template(make_request(), "show.html", Page(title="Hello"))
        assert response.status_code == 200
        assert response.body == b"<html><nav>TestWiki</nav><p>Hello</p></html>"

    def test_sets_html_content_type(self, registry):
        response = registry.render_template(make_request(), "show.html", Page(title="Hello"))
        assert response.headers["content-type"] == "text/html; charset=utf-8"

    def test_unregistered_name_is_configuration_error(self, registry):
        with pytest.raises(TemplateNotRegisteredError) as exc_info:
            registry.render_template(make_request(), "missing.html", Page(title="Hello"))
        assert exc_info.value.kind is ErrorKind.CONFIGURATION
        assert exc_info.value.name == "missing.html"

    def test_include_cannot_be_rendered_directly(self, registry):
        with pytest.raises(TemplateNotRegisteredError):
            registry.render_template(make_request(), "base.html", Page(title="Hello"))

    def test_execution_error_is_500_with_error_text(self, registry):
        response = registry.render_template(make_request(), "broken.html", Page(title="Hello"))
        assert response.status_code == 500
        assert b"nothing" in response.body

    def test_autoescapes_context(self, template_dirs):
        templates_dir, includes_dir = template_dirs
        (templates_dir / "raw.html").write_text("{{ page.text }}")
        registry = TemplateRegistry(templates_dir, includes_dir)
        response = registry.render_template(
            make_request(), "raw.html", Page(title="Hello", body=b"<b>x</b>")
        )
        assert response.body == b"&lt;b&gt;x&lt;/b&gt;"


class TestReadOnly:
    def test_edits_after_startup_are_not_seen(self, registry, template_dirs):
        templates_dir, includes_dir = template_dirs
        before = registry.render_template(make_request(), "show.html", Page(title="Hello"))

        (templates_dir / "show.html").write_text("changed")
        (includes_dir / "base.html").write_text("changed")
        (includes_dir / "nav.html").write_text("changed")

        after = registry.render_template(make_request(), "show.html", Page(title="Hello"))
        assert after.body == before.body

    def test_includes_are_loaded_before_first_render(self, registry, template_dirs):
        _, includes_dir = template_dirs
        (includes_dir / "base.html").write_text("changed")
        response = registry.render_template(make_request(), "show.html", Page(title="Hello"))
        assert response.body == b"<html><nav>TestWiki</nav><p>Hello</p></html>"

    def test_new_template_files_are_not_registered(self, registry, template_dirs):
        templates_dir, _ = template_dirs
        (templates_dir / "late.html").write_text("late")
        assert "late.html" not in registry
        with pytest.raises(TemplateNotRegisteredError):
            registry.render_template(make_request(), "late.html", Page(title="Hello"))
