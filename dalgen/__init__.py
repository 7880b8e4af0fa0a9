"""
dalgen: generate Go data access code from a TOML table schema.

Primary keys, foreign keys and the write strategy of each table are inferred
from column names; see :mod:`dalgen.codegen.core.schema`.
"""

from .codegen import (
    GenerationReport,
    GeneratorConfig,
    GoGenerator,
    derive_tables,
    generate_from_file,
    generate_from_schema,
    load_config,
)
from .utils import SchemaLoadError, load_schema, parse_schema

__version__ = "0.1.0"

__all__ = [
    "GenerationReport",
    "GeneratorConfig",
    "GoGenerator",
    "SchemaLoadError",
    "derive_tables",
    "generate_from_file",
    "generate_from_schema",
    "load_config",
    "load_schema",
    "parse_schema",
]
