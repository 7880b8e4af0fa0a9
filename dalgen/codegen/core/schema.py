"""
Core table representation for code generation.

Derives, per table, the primary keys, the foreign keys and the write strategy
purely from column names and the set of declared tables.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Union

from ...logging_config import get_logger
from .naming import FOREIGN_KEY_SUFFIX

logger = get_logger(__name__)

ID_COLUMN = "id"

# Type tokens that denote an auto-incrementing integer key.
INTEGER_TYPES = frozenset({"int", "integer"})

RawTable = Mapping[str, str]
RawSchema = Mapping[str, RawTable]


class SchemaError(Exception):
    """Exception raised when the schema cannot be turned into tables."""

    pass


def _frozen(mapping: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class UpsertWrite:
    """Write through a single INSERT ... ON CONFLICT DO UPDATE statement."""

    columns: Mapping[str, str]
    conflict_keys: Mapping[str, str]

    template_name = "upsert.go.j2"


@dataclass(frozen=True)
class InsertOrUpdateWrite:
    """
    Write through INSERT when the auto-increment key is zero, UPDATE otherwise.

    The storage-assigned identifier is stored back into ``key_column`` after
    an insert.
    """

    key_column: str
    key_type: str
    insert_columns: Mapping[str, str]
    columns: Mapping[str, str]
    primary_keys: Mapping[str, str]

    template_name = "insert_or_update.go.j2"


WriteStrategy = Union[UpsertWrite, InsertOrUpdateWrite]


@dataclass(frozen=True)
class Table:
    """A table with its inferred keys."""

    name: str
    fields: Mapping[str, str]
    primary_keys: Mapping[str, str] = field(default_factory=dict)
    foreign_keys: Mapping[str, str] = field(default_factory=dict)
    upsert: bool = True

    def __post_init__(self):
        object.__setattr__(self, "fields", _frozen(self.fields))
        object.__setattr__(self, "primary_keys", _frozen(self.primary_keys))
        object.__setattr__(self, "foreign_keys", _frozen(self.foreign_keys))

    @property
    def fields_without_id(self) -> Dict[str, str]:
        """Fields excluding the ``id`` column."""
        return {name: typ for name, typ in self.fields.items() if name != ID_COLUMN}

    @property
    def write_strategy(self) -> WriteStrategy:
        """The write template variant selected by the ``upsert`` flag."""
        if self.upsert:
            return UpsertWrite(columns=self.fields, conflict_keys=self.primary_keys)
        return InsertOrUpdateWrite(
            key_column=ID_COLUMN,
            key_type=self.fields[ID_COLUMN],
            insert_columns=_frozen(self.fields_without_id),
            columns=self.fields,
            primary_keys=self.primary_keys,
        )


def referenced_table(column: str) -> str:
    """Name of the table a ``<entity>_id`` column would point to."""
    return column[: -len(FOREIGN_KEY_SUFFIX)] + "s"


def is_integer_type(type_token: str) -> bool:
    """Check whether a type token denotes the (auto-increment) integer type."""
    return type_token.strip().lower() in INTEGER_TYPES


def derive_table(schema: RawSchema, name: str, raw_table: RawTable) -> Table:
    """
    Derive a Table from its raw columns.

    Rules, in order:

    1. A column ``<entity>_id`` is a foreign key when the table
       ``<entity>s`` exists; foreign keys form a provisional composite
       primary key.
    2. A column named exactly ``id`` overrides that: it alone is the primary
       key, and the table is upserted unless ``id`` is an integer.
    3. Without ``id`` the composite foreign key set stays the primary key and
       the table is always upserted.

    A foreign-key-shaped column whose table is missing is a plain column. A
    table matching neither rule gets an empty primary key; see
    :func:`derive_tables`.
    """
    primary_keys: Dict[str, str] = {}
    foreign_keys: Dict[str, str] = {}
    upsert = True

    for column, typ in raw_table.items():
        if column.endswith(FOREIGN_KEY_SUFFIX) and referenced_table(column) in schema:
            primary_keys[column] = typ
            foreign_keys[column] = typ

    if ID_COLUMN in raw_table:
        id_type = raw_table[ID_COLUMN]
        primary_keys = {ID_COLUMN: id_type}
        upsert = not is_integer_type(id_type)

    table = Table(
        name=name,
        fields=raw_table,
        primary_keys=primary_keys,
        foreign_keys=foreign_keys,
        upsert=upsert,
    )
    logger.debug(
        "Derived table %s: primary keys %s, foreign keys %s, upsert=%s",
        name,
        sorted(table.primary_keys),
        sorted(table.foreign_keys),
        upsert,
    )
    return table


def derive_tables(schema: RawSchema) -> Dict[str, Table]:
    """
    Derive every table of the schema.

    Raises:
        SchemaError: If any table has no inferable primary key. All such
            tables are named in the message.
    """
    tables = {name: derive_table(schema, name, raw) for name, raw in schema.items()}

    keyless: List[str] = sorted(name for name, table in tables.items() if not table.primary_keys)
    if keyless:
        raise SchemaError(
            "No primary key could be inferred for table(s) "
            f"{', '.join(keyless)}: add an 'id' column or '<entity>_id' "
            "columns referencing declared tables"
        )

    return tables
