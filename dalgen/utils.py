"""Utility functions for loading table schemas.

This module reads the TOML schema file (a table of tables mapping column
names to type tokens) with proper error handling and validation.
"""

import re
import tomllib
from pathlib import Path
from typing import Any, Dict

from .logging_config import get_logger

logger = get_logger(__name__)

IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# At least one letter or digit, so the Go name derived from it is not empty.
NAMED_PATTERN = re.compile(r"[A-Za-z0-9]")


class SchemaLoadError(Exception):
    """Custom exception for schema loading errors."""

    pass


def _validate_schema(data: Dict[str, Any], source: str) -> Dict[str, Dict[str, str]]:
    """Check the parsed TOML document has the table -> column -> type shape."""
    schema: Dict[str, Dict[str, str]] = {}

    for table_name, columns in data.items():
        # The struct name is built from the table name minus its last character
        if not IDENTIFIER_PATTERN.match(table_name) or not NAMED_PATTERN.search(table_name[:-1]):
            raise SchemaLoadError(f"Invalid table name {table_name!r} in {source}")

        if not isinstance(columns, dict):
            raise SchemaLoadError(
                f"Table {table_name!r} in {source} must be a TOML table, "
                f"got {type(columns).__name__}"
            )

        table: Dict[str, str] = {}
        for column, type_token in columns.items():
            if not IDENTIFIER_PATTERN.match(column) or not NAMED_PATTERN.search(column):
                raise SchemaLoadError(
                    f"Invalid column name {column!r} in table {table_name!r} of {source}"
                )
            if not isinstance(type_token, str) or not type_token.strip():
                raise SchemaLoadError(
                    f"Column {table_name}.{column} in {source} must have a "
                    f"non-empty string type, got {type_token!r}"
                )
            table[column] = type_token.strip()

        schema[table_name] = table

    return schema


def parse_schema(text: str, source: str = "<string>") -> Dict[str, Dict[str, str]]:
    """Parse a TOML schema document.

    Args:
        text: TOML content.
        source: Description of where the text came from, for error messages.

    Returns:
        Mapping from table name to a mapping of column name to type token.

    Raises:
        SchemaLoadError: If the TOML is invalid or does not describe tables.
    """
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        logger.error("Invalid TOML in %s: %s", source, e)
        raise SchemaLoadError(f"Invalid TOML in {source}: {e}") from e

    schema = _validate_schema(data, source)
    logger.debug("Parsed %d table(s) from %s", len(schema), source)
    return schema


def load_schema(file_path: str | Path) -> Dict[str, Dict[str, str]]:
    """Load a schema from a TOML file.

    Args:
        file_path: Path to the schema file.

    Returns:
        Mapping from table name to a mapping of column name to type token.

    Raises:
        SchemaLoadError: If the file is missing, unreadable or malformed.
    """
    file_path = Path(file_path)
    logger.debug("Attempting to load schema from file: %s", file_path)

    if not file_path.exists():
        logger.error("Schema file not found: %s", file_path)
        raise SchemaLoadError(f"Schema file not found: {file_path}")

    if file_path.suffix.lower() != ".toml":
        logger.warning("Schema file does not have .toml extension: %s", file_path)

    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Error reading schema file %s: %s", file_path, e)
        raise SchemaLoadError(f"Error reading schema file {file_path}: {e}") from e

    schema = parse_schema(text, str(file_path))
    logger.info("Loaded %d table(s) from %s", len(schema), file_path)
    return schema
