"""
dalgen code generation module.

Turns a table schema into Go data access code, one file per table.
"""

from .core.config import ConfigError, GeneratorConfig, load_config
from .core.generator import GenerationResult, GeneratorError, RenderError, generate_code
from .core.schema import SchemaError, Table, derive_table, derive_tables
from .core.templates import TemplateError
from .languages.go import GoGenerator, create_go_generator
from .output import GenerationReport, OutputError, generate_from_file, generate_from_schema


def quick_generate(schema, table_name, **options) -> str:
    """
    Quick code generation for one table of a schema.

    Args:
        schema: Table name -> column name -> type token
        table_name: Table to render
        **options: Generator options

    Returns:
        Generated code string
    """
    tables = derive_tables(schema)
    generator = create_go_generator(options)
    return generator.format_code(generator.generate_single_table(tables[table_name]))


__all__ = [
    "ConfigError",
    "GeneratorConfig",
    "load_config",
    "GenerationResult",
    "GeneratorError",
    "RenderError",
    "generate_code",
    "SchemaError",
    "Table",
    "derive_table",
    "derive_tables",
    "TemplateError",
    "GoGenerator",
    "create_go_generator",
    "GenerationReport",
    "OutputError",
    "generate_from_file",
    "generate_from_schema",
    "quick_generate",
]
