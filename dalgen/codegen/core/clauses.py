"""
SQL fragment helpers used by the templates.

Columns are always consumed in lexicographic order of their names, never in
mapping iteration order, so an unchanged schema renders byte-identical code.
"""

from typing import Iterable, List, Mapping, Union

from .naming import field_name, param_name

# Receiver sentinel: emit raw column names (SQL text) instead of Go references.
RAW = "-"

Columns = Union[Mapping[str, str], Iterable[str]]


def sorted_columns(columns: Columns) -> List[str]:
    """Return the column names in sorted order."""
    return sorted(columns)


def equality_clause(columns: Columns, separator: str) -> str:
    """Join columns into ``a = ?<sep>b = ?``."""
    return separator.join(f"{column} = ?" for column in sorted_columns(columns))


def format_clause(columns: Columns, separator: str) -> str:
    """Like :func:`equality_clause` but with ``%v`` verbs for Go format strings."""
    return separator.join(f"{column} = %v" for column in sorted_columns(columns))


def placeholders(columns: Columns) -> str:
    """Generate as many question marks as there are columns."""
    return ", ".join("?" for _ in sorted_columns(columns))


def argument_list(columns: Columns, receiver: str = "") -> List[str]:
    """
    Build the ordered argument references for a column set.

    Args:
        columns: Column names (or a column -> type mapping)
        receiver: ``""`` for bare parameter names, :data:`RAW` for the
            untouched column names, or a variable name to read struct fields
            from (``r`` gives ``r.UserID``)

    Returns:
        One reference per column, in sorted column order
    """
    references = []
    for column in sorted_columns(columns):
        if receiver == "":
            references.append(param_name(column))
        elif receiver == RAW:
            references.append(column)
        else:
            references.append(f"{receiver}.{field_name(column)}")
    return references


def join_arguments(columns: Columns, receiver: str = "") -> str:
    """Join :func:`argument_list` into a comma separated string."""
    return ", ".join(argument_list(columns, receiver))
