"""
Naming utilities for generated Go code.

Converts snake_case storage identifiers into the two Go casings the
templates need: exported names (types, struct fields) and parameter names.
"""

ID_SEGMENT = "id"
FOREIGN_KEY_SUFFIX = "_id"


def snake_to_gocase(identifier: str, exported: bool) -> str:
    """
    Translate a snake_case identifier into Go case.

    The identifier is split on underscores. Unless ``exported`` is set, the
    first segment is kept as-is. Every other segment gets its first letter
    uppercased, except a segment equal to ``id`` which always becomes ``ID``.
    The rest of a segment is left untouched (``address2line`` ->
    ``Address2line``).

    Args:
        identifier: snake_case name (a table or column name)
        exported: Whether the first character should be uppercase

    Returns:
        The Go identifier
    """
    result = []
    for index, part in enumerate(identifier.split("_")):
        if index == 0 and not exported:
            pass
        elif part == ID_SEGMENT:
            part = "ID"
        else:
            part = part[:1].upper() + part[1:]
        result.append(part)
    return "".join(result)


def param_name(column: str) -> str:
    """Go parameter name for a column: ``user_id`` -> ``userID``."""
    return snake_to_gocase(column, False)


def field_name(column: str) -> str:
    """Go struct field name for a column: ``user_id`` -> ``UserID``."""
    return snake_to_gocase(column, True)


def struct_name(table_name: str) -> str:
    """
    Get the struct name from a table name.

    Table names are assumed to be the naive plural of the entity, so exactly
    one trailing character is removed: ``users`` -> ``User``. Irregular
    plurals come out wrong (``people`` -> ``Peopl``); existing schemas rely on
    this, so it is left alone.
    """
    return snake_to_gocase(table_name[:-1], True)


def foreign_key_entity(column: str) -> str:
    """Translate a foreign key column into an entity name: ``user_id`` -> ``User``."""
    if column.endswith(FOREIGN_KEY_SUFFIX):
        column = column[: -len(FOREIGN_KEY_SUFFIX)]
    return snake_to_gocase(column, True)
