"""
tests/test_templates.py
Template engine: filters, strict rendering and fail-fast loading.
"""

import pytest

from dalgen.codegen.core.config import GeneratorConfig
from dalgen.codegen.core.templates import TemplateEngine, TemplateError
from dalgen.codegen.languages.go import GoGenerator


def _engine(directory, **templates):
    for name, content in templates.items():
        (directory / f"{name}.j2").write_text(content, encoding="utf-8")
    return TemplateEngine(directory)


def test_naming_and_clause_filters(tmp_path):
    engine = _engine(
        tmp_path,
        probe=(
            '{{ "contest_id" | field }} {{ "contest_id" | param }} {{ "users" | struct }} '
            '{{ "user_id" | fkey }} {{ cols | condition(" AND ") }} {{ cols | marks }} '
            "{{ cols | args(RAW) }} {{ cols | args('r') }}"
        ),
    )
    rendered = engine.render_template("probe.j2", {"cols": {"b": "int", "a": "int"}})

    assert rendered == "ContestID contestID User User a = ? AND b = ? ?, ? a, b r.A, r.B"


def test_output_is_not_escaped(tmp_path):
    engine = _engine(tmp_path, quotes='{{ text }}')

    assert engine.render_template("quotes.j2", {"text": '"<a & b>"'}) == '"<a & b>"'


def test_added_filter(tmp_path):
    engine = _engine(tmp_path, shout="{{ 'x' | shout }}")
    engine.add_filter("shout", str.upper)

    assert engine.render_template("shout.j2", {}) == "X"


def test_missing_variable_is_an_error(tmp_path):
    engine = _engine(tmp_path, strict="{{ missing }}")

    with pytest.raises(TemplateError):
        engine.render_template("strict.j2", {})


def test_preload_reports_missing_template(tmp_path):
    with pytest.raises(TemplateError, match="not found"):
        _engine(tmp_path).preload(["absent.j2"])


def test_preload_reports_malformed_template(tmp_path):
    engine = _engine(tmp_path, broken="{% for x in %}")

    with pytest.raises(TemplateError, match="Malformed"):
        engine.preload(["broken.j2"])


def test_engine_without_directory_has_no_templates():
    with pytest.raises(TemplateError, match="not found"):
        TemplateEngine().preload(["file.go.j2"])


class TestGeneratorStartup:
    def test_templates_load_at_construction(self):
        template_dir = GoGenerator(GeneratorConfig()).get_template_directory()

        for name in GoGenerator.required_templates:
            assert (template_dir / name).is_file()

    def test_missing_template_directory_fails_fast(self, tmp_path):
        class BrokenGenerator(GoGenerator):
            def get_template_directory(self):
                return tmp_path

        with pytest.raises(TemplateError):
            BrokenGenerator(GeneratorConfig())

    def test_malformed_template_fails_fast(self, tmp_path):
        for name in GoGenerator.required_templates:
            (tmp_path / name).write_text("ok\n", encoding="utf-8")
        (tmp_path / "upsert.go.j2").write_text("{% if %}\n", encoding="utf-8")

        class BrokenGenerator(GoGenerator):
            def get_template_directory(self):
                return tmp_path

        with pytest.raises(TemplateError, match="upsert.go.j2"):
            BrokenGenerator(GeneratorConfig())
