"""
Core code generation components.

Provides the table model, key inference, naming, clause helpers, templates
and the base generator used by the Go generator.
"""

from .clauses import (
    RAW,
    argument_list,
    equality_clause,
    format_clause,
    join_arguments,
    placeholders,
    sorted_columns,
)
from .config import ConfigError, ConfigManager, GeneratorConfig, load_config
from .generator import (
    CodeGenerator,
    GenerationResult,
    GeneratorError,
    RenderError,
    generate_code,
)
from .naming import (
    field_name,
    foreign_key_entity,
    param_name,
    snake_to_gocase,
    struct_name,
)
from .schema import (
    InsertOrUpdateWrite,
    SchemaError,
    Table,
    UpsertWrite,
    derive_table,
    derive_tables,
)
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    "RenderError",
    "GenerationResult",
    "generate_code",
    # Tables and key inference
    "Table",
    "UpsertWrite",
    "InsertOrUpdateWrite",
    "SchemaError",
    "derive_table",
    "derive_tables",
    # Naming
    "snake_to_gocase",
    "param_name",
    "field_name",
    "struct_name",
    "foreign_key_entity",
    # Clause helpers
    "RAW",
    "sorted_columns",
    "equality_clause",
    "format_clause",
    "placeholders",
    "argument_list",
    "join_arguments",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
