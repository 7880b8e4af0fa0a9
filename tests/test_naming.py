"""Tests for dalgen.codegen.core.naming."""

import pytest

from dalgen.codegen.core.naming import (
    field_name,
    foreign_key_entity,
    param_name,
    snake_to_gocase,
    struct_name,
)


@pytest.mark.parametrize(
    "identifier, exported, expected",
    [
        ("contest_id", True, "ContestID"),
        ("contest_id", False, "contestID"),
        ("name", True, "Name"),
        ("name", False, "name"),
        ("user_name", True, "UserName"),
        ("user_name", False, "userName"),
        ("id", True, "ID"),
        ("test_group_id", True, "TestGroupID"),
        ("id_card", True, "IDCard"),
        ("address2line", True, "Address2line"),
        ("line_2nd", True, "Line2nd"),
        ("api_URL", True, "ApiURL"),
    ],
)
def test_snake_to_gocase(identifier, exported, expected):
    assert snake_to_gocase(identifier, exported) == expected


def test_first_segment_kept_as_is_for_parameters():
    # The first segment is never touched, even when it is "id".
    assert snake_to_gocase("id", False) == "id"
    assert snake_to_gocase("id_card", False) == "idCard"


def test_param_and_field_names():
    assert param_name("problem_id") == "problemID"
    assert field_name("problem_id") == "ProblemID"


class TestStructName:
    def test_strips_plural_s(self):
        assert struct_name("users") == "User"
        assert struct_name("test_groups") == "TestGroup"

    def test_irregular_plural_is_not_special_cased(self):
        assert struct_name("people") == "Peopl"


def test_foreign_key_entity():
    assert foreign_key_entity("user_id") == "User"
    assert foreign_key_entity("test_group_id") == "TestGroup"
