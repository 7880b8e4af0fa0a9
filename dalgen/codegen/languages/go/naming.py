"""
Go-specific naming checks.

Handles Go reserved words and the identifiers the templates declare, which
must stay unique within a struct and across the files of one package.
"""

from collections import defaultdict
from typing import Dict, List, Mapping

from ...core.naming import field_name, foreign_key_entity, struct_name
from ...core.schema import Table

# Go reserved words
GO_RESERVED_WORDS = {
    "break",
    "case",
    "chan",
    "const",
    "continue",
    "default",
    "defer",
    "else",
    "fallthrough",
    "for",
    "func",
    "go",
    "goto",
    "if",
    "import",
    "interface",
    "map",
    "package",
    "range",
    "return",
    "select",
    "struct",
    "switch",
    "type",
    "var",
}

# Methods generated on every record
GENERATED_METHODS = {"Write", "Delete"}


def validate_go_package_name(name: str) -> List[str]:
    """
    Validate Go package name according to Go naming rules.

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not name:
        errors.append("Package name cannot be empty")
        return errors

    if not name.isidentifier():
        errors.append(f"'{name}' is not a valid Go identifier")

    if name[0].isupper():
        errors.append("Package names should be lowercase")

    if name in GO_RESERVED_WORDS:
        errors.append(f"'{name}' is a Go reserved word")

    return errors


def identifier_conflicts(table: Table, verify_method: str) -> List[str]:
    """
    Find generated identifiers of a table that would not compile.

    Every column becomes a struct field next to the generated methods, so
    field names must be unique and must not shadow a method.

    Returns:
        List of problems (empty if the table is safe to render)
    """
    problems = []

    columns_by_field: Dict[str, List[str]] = defaultdict(list)
    for column in sorted(table.fields):
        columns_by_field[field_name(column)].append(column)

    methods = GENERATED_METHODS | {verify_method}
    for name, columns in sorted(columns_by_field.items()):
        if not name:
            problems.append(f"column {columns[0]!r} has no usable Go field name")
        elif len(columns) > 1:
            problems.append(f"columns {', '.join(map(repr, columns))} all map to field {name!r}")
        elif name in methods:
            problems.append(f"field {name!r} for column {columns[0]!r} clashes with method {name}")

    return problems


def declared_names(table: Table) -> List[str]:
    """Package-level Go identifiers declared by the file of a table."""
    name = struct_name(table.name)
    names = [name, f"Get{name}"]
    for column in sorted(table.foreign_keys):
        names.append(f"GetBy{foreign_key_entity(column)}{name}s")
    return names


def package_conflicts(tables: Mapping[str, Table]) -> Dict[str, List[str]]:
    """
    Find tables whose generated files would redeclare the same identifier.

    All files share one Go package, so ``users`` and ``usera`` (both ``User``)
    cannot be generated together.

    Returns:
        Mapping of table name to its problems (only tables with problems)
    """
    owners: Dict[str, List[str]] = defaultdict(list)
    for table_name in sorted(tables):
        for name in set(declared_names(tables[table_name])):
            owners[name].append(table_name)

    problems: Dict[str, List[str]] = defaultdict(list)
    for name, table_names in sorted(owners.items()):
        if len(table_names) < 2:
            continue
        for table_name in table_names:
            others = ", ".join(t for t in table_names if t != table_name)
            problems[table_name].append(f"{name} is also declared by table(s) {others}")

    return dict(problems)
