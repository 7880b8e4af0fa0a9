"""
Go code generator implementation.

Generates one Go source file per table: the record struct, getters by
primary key and by relation, Write and Delete.
"""

import shutil
import subprocess
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from ....logging_config import get_logger
from ...core.config import GeneratorConfig, load_config
from ...core.generator import CodeGenerator, RenderError
from ...core.schema import InsertOrUpdateWrite, Table
from ...core.templates import TemplateEngine
from .config import GoConfig
from .naming import identifier_conflicts, package_conflicts
from .types import GoTypeMapper

logger = get_logger(__name__)

FILE_TEMPLATE = "file.go.j2"
TABLE_TEMPLATE = "table.go.j2"
UPSERT_TEMPLATE = "upsert.go.j2"
INSERT_OR_UPDATE_TEMPLATE = "insert_or_update.go.j2"

# External formatters run, in order, on every written file.
FORMATTERS = (("gofmt", "-w"), ("goimports", "-w"))


class FormatError(Exception):
    """Raised when an external formatter rejects a generated file."""

    pass


class GoGenerator(CodeGenerator):
    """Code generator for Go data access code."""

    required_templates = [
        FILE_TEMPLATE,
        TABLE_TEMPLATE,
        UPSERT_TEMPLATE,
        INSERT_OR_UPDATE_TEMPLATE,
    ]

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize Go generator with configuration."""
        config = config or GeneratorConfig()
        self.go_config = GoConfig.from_generator_config(config)
        self.type_mapper = GoTypeMapper(self.go_config.type_overrides)
        super().__init__(config)

    def get_template_directory(self) -> Optional[Path]:
        """Return the Go templates directory."""
        return Path(__file__).parent / "templates"

    def register_filters(self, engine: TemplateEngine):
        """Register the type mapping filter."""
        engine.add_filter("gotype", self.type_mapper.go_type_name)

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "go"

    @property
    def file_extension(self) -> str:
        """Return Go file extension."""
        return ".go"

    def get_import_statements(self, table: Table) -> List[str]:
        """Get the import paths the generated file needs."""
        imports = {self.go_config.errors_import, self.go_config.db_import}
        imports.update(self.type_mapper.get_all_imports(table.fields.values()))
        return sorted(imports)

    def validate_table(self, table: Table) -> List[str]:
        """
        Check a table can be rendered into compilable Go.

        Returns:
            List of problems (empty if the table is fine)
        """
        problems = identifier_conflicts(table, self.go_config.verify_method)

        write = table.write_strategy
        if isinstance(write, InsertOrUpdateWrite):
            key_type = self.type_mapper.map_type(write.key_type)
            if not key_type.is_integer:
                problems.append(
                    f"auto-increment key {write.key_column!r} maps to "
                    f"non-integer Go type {key_type.name!r}"
                )

        return problems

    def check_tables(self, tables: Mapping[str, Table]) -> Dict[str, List[str]]:
        """Find tables whose files would redeclare identifiers in the package."""
        return package_conflicts(tables)

    def build_context(self, table: Table) -> Dict[str, Any]:
        """Build the template context for a table."""
        return {
            "generator_name": self.config.generator_name,
            "package_name": self.go_config.package_name,
            "imports": self.get_import_statements(table),
            "db_context": self.go_config.db_context_type,
            "verify_method": self.go_config.verify_method,
            "add_comments": self.config.add_comments,
            "table": table,
            "write": table.write_strategy,
        }

    def generate_single_table(self, table: Table) -> str:
        """Generate the Go source file for a single table."""
        if not table.primary_keys:
            raise RenderError(table.name, "table has no primary key")

        problems = self.validate_table(table)
        if problems:
            raise RenderError(table.name, "; ".join(problems))

        write = table.write_strategy
        logger.debug("Rendering %s with %s", table.name, write.template_name)
        return self.render_template(FILE_TEMPLATE, self.build_context(table))

    def format_files(self, paths: List[Path]) -> Dict[Path, str]:
        """
        Run gofmt and goimports over written files.

        A formatter that is not installed is skipped with a warning.

        Returns:
            Mapping of path to error message for files a formatter rejected
        """
        failures: Dict[Path, str] = {}
        if not self.config.run_formatters or not paths:
            return failures

        for tool, *args in FORMATTERS:
            executable = shutil.which(tool)
            if executable is None:
                logger.warning("%s not found on PATH, skipping", tool)
                continue

            for path in paths:
                if path in failures:
                    continue
                try:
                    self._run_formatter(executable, args, path)
                except FormatError as e:
                    logger.error("%s", e)
                    failures[path] = str(e)

        return failures

    @staticmethod
    def _run_formatter(executable: str, args: List[str], path: Path):
        completed = subprocess.run(
            [executable, *args, str(path)],
            capture_output=True,
            text=True,
            check=False,
        )
        if completed.returncode != 0:
            message = completed.stderr.strip() or f"exit status {completed.returncode}"
            raise FormatError(f"{Path(executable).name} failed on {path}: {message}")
        logger.debug("Formatted %s with %s", path, Path(executable).name)


def create_go_generator(config: Optional[Dict[str, Any]] = None) -> GoGenerator:
    """Create a Go generator from a configuration dict (merged over defaults)."""
    return GoGenerator(load_config(custom_config=config))
