"""
tests/conftest.py
Shared fixtures for the dalgen test suite.

Real file I/O is performed inside temporary directories managed by pytest's
tmp_path fixture; formatters are disabled so no Go toolchain is needed.
"""

from __future__ import annotations

import copy
import pathlib
import textwrap
from typing import Dict

import pytest

from dalgen.codegen.core.config import GeneratorConfig, load_config
from dalgen.codegen.languages.go import GoGenerator

DB_IMPORT = "git.example.com/judge/db"


# ---------------------------------------------------------------------------
# Raw schema fixtures
# ---------------------------------------------------------------------------

BLOG_SCHEMA: Dict[str, Dict[str, str]] = {
    "users": {"id": "text", "name": "text"},
    "posts": {"id": "int", "user_id": "text", "body": "text"},
    "comments": {"id": "int", "post_id": "int", "author_id": "text", "body": "text"},
    "likes": {"user_id": "text", "post_id": "int", "created_at": "timestamp"},
}


@pytest.fixture()
def blog_schema() -> Dict[str, Dict[str, str]]:
    """Return a deep copy so each test can mutate freely."""
    return copy.deepcopy(BLOG_SCHEMA)


@pytest.fixture()
def posts_schema() -> Dict[str, Dict[str, str]]:
    return {
        "posts": {"id": "int", "user_id": "int", "body": "text"},
        "users": {"id": "int"},
    }


@pytest.fixture()
def enrollments_schema() -> Dict[str, Dict[str, str]]:
    return {
        "enrollments": {"user_id": "int", "course_id": "int"},
        "users": {"id": "int"},
        "courses": {"id": "int"},
    }


# ---------------------------------------------------------------------------
# Configuration / generator fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def output_dir(tmp_path: pathlib.Path) -> pathlib.Path:
    return tmp_path / "models"


@pytest.fixture()
def config(output_dir: pathlib.Path) -> GeneratorConfig:
    return load_config(
        custom_config={
            "output_dir": str(output_dir),
            "run_formatters": False,
            "db_import": DB_IMPORT,
        }
    )


@pytest.fixture()
def generator(config: GeneratorConfig) -> GoGenerator:
    return GoGenerator(config)


@pytest.fixture()
def schema_file(tmp_path: pathlib.Path) -> pathlib.Path:
    """Write the blog schema as TOML and return its path."""
    path = tmp_path / "models.toml"
    path.write_text(
        textwrap.dedent(
            """
            [users]
            id = "text"
            name = "text"

            [posts]
            id = "int"
            user_id = "text"
            body = "text"

            [comments]
            id = "int"
            post_id = "int"
            author_id = "text"
            body = "text"

            [likes]
            user_id = "text"
            post_id = "int"
            created_at = "timestamp"
            """
        ),
        encoding="utf-8",
    )
    return path
