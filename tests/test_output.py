"""
tests/test_output.py
End-to-end generation into an output directory.
"""

import pathlib

import pytest

from dalgen.codegen.core.config import GeneratorConfig
from dalgen.codegen.core.schema import SchemaError
from dalgen.codegen.languages.go import GoGenerator
from dalgen.codegen.output import OutputError, generate_from_file, generate_from_schema
from dalgen.utils import SchemaLoadError


def test_one_file_per_table(blog_schema, config, output_dir):
    report = generate_from_schema(blog_schema, config)

    assert report.success
    assert sorted(path.name for path in output_dir.iterdir()) == [
        "comments_generated.go",
        "likes_generated.go",
        "posts_generated.go",
        "users_generated.go",
    ]
    code = (output_dir / "posts_generated.go").read_text(encoding="utf-8")
    assert "func GetPost(db db.DBContext, id int) (*Post, error) {" in code


def test_stale_generated_files_are_removed(blog_schema, config, output_dir):
    output_dir.mkdir(parents=True)
    stale = output_dir / "dropped_generated.go"
    stale.write_text("package models\n", encoding="utf-8")
    handwritten = output_dir / "verify.go"
    handwritten.write_text("package models\n", encoding="utf-8")

    report = generate_from_schema(blog_schema, config)

    assert report.removed == [stale]
    assert not stale.exists()
    assert handwritten.exists()


def test_rerun_is_byte_identical(blog_schema, config, output_dir):
    generate_from_schema(blog_schema, config)
    first = {p.name: p.read_bytes() for p in output_dir.iterdir()}

    generate_from_schema(blog_schema, config)
    second = {p.name: p.read_bytes() for p in output_dir.iterdir()}

    assert first == second


def test_keyless_table_aborts_before_writing(config, output_dir):
    output_dir.mkdir(parents=True)
    stale = output_dir / "users_generated.go"
    stale.write_text("package models\n", encoding="utf-8")
    schema = {"users": {"id": "int"}, "settings": {"name": "text"}}

    with pytest.raises(SchemaError, match="settings"):
        generate_from_schema(schema, config)

    assert stale.exists()
    assert [p.name for p in output_dir.iterdir()] == ["users_generated.go"]


def test_render_failure_keeps_other_tables(blog_schema, config, output_dir):
    blog_schema["users"]["delete"] = "bool"

    report = generate_from_schema(blog_schema, config)

    assert not report.success
    assert [r.table_name for r in report.failures] == ["users"]
    assert not (output_dir / "users_generated.go").exists()
    assert (output_dir / "posts_generated.go").exists()
    assert len(report.written) == 3


def test_empty_suffix_never_purges_handwritten_files(config, output_dir):
    output_dir.mkdir(parents=True)
    handwritten = output_dir / "verify.go"
    handwritten.write_text("package models\n", encoding="utf-8")
    # Built directly, so load_config validation does not apply
    unsuffixed = GeneratorConfig(
        output_dir=str(output_dir), file_suffix="", run_formatters=False, custom=config.custom
    )

    with pytest.raises(OutputError, match="file_suffix"):
        generate_from_schema({"users": {"id": "text"}}, unsuffixed)

    assert handwritten.exists()


def test_output_path_is_a_file(blog_schema, config, output_dir):
    output_dir.write_text("not a directory\n", encoding="utf-8")

    with pytest.raises(OutputError, match="output directory"):
        generate_from_schema(blog_schema, config)

    assert output_dir.read_text(encoding="utf-8") == "not a directory\n"


def test_write_failure_marks_result(blog_schema, config, output_dir, monkeypatch):
    write_text = pathlib.Path.write_text

    def failing_write_text(self, *args, **kwargs):
        if self.name == "likes_generated.go":
            raise PermissionError(13, "Permission denied", str(self))
        return write_text(self, *args, **kwargs)

    monkeypatch.setattr(pathlib.Path, "write_text", failing_write_text)

    report = generate_from_schema(blog_schema, config)

    assert [r.table_name for r in report.failures] == ["likes"]
    assert "Permission denied" in report.failures[0].error_message
    assert len(report.written) == 3
    assert (output_dir / "users_generated.go").exists()


def test_dry_run_writes_nothing(blog_schema, config, output_dir):
    report = generate_from_schema(blog_schema, config, dry_run=True)

    assert report.success
    assert all(result.code for result in report.results)
    assert not output_dir.exists()


def test_format_failures_mark_results(blog_schema, config, output_dir, monkeypatch):
    generator = GoGenerator(config)
    monkeypatch.setattr(
        generator,
        "format_files",
        lambda paths: {p: "gofmt failed" for p in paths if p.name.startswith("likes")},
    )

    report = generate_from_schema(blog_schema, config, generator=generator)

    assert [r.table_name for r in report.failures] == ["likes"]
    assert report.failures[0].error_message == "gofmt failed"
    # The file is still on disk for inspection
    assert (output_dir / "likes_generated.go").exists()


def test_summary(blog_schema, config):
    report = generate_from_schema(blog_schema, config)

    assert report.summary() == "4/4 table(s) generated, 4 file(s) written, 0 failure(s)"


class TestGenerateFromFile:
    def test_from_file(self, schema_file, config, output_dir):
        report = generate_from_file(schema_file, config)

        assert report.success
        assert len(list(output_dir.glob("*_generated.go"))) == 4

    def test_schema_file_from_config(self, schema_file, config, output_dir):
        config.schema_file = str(schema_file)

        assert generate_from_file(config=config).success

    def test_missing_schema(self, tmp_path, config):
        with pytest.raises(SchemaLoadError):
            generate_from_file(tmp_path / "missing.toml", config)
