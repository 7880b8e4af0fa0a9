"""
Base generator interface for all code generation targets.

Defines the contract that language generators implement and the per-table
error collection used by the driver.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from ...logging_config import get_logger
from .config import GeneratorConfig
from .schema import Table
from .templates import TemplateEngine, TemplateError, create_template_engine

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class RenderError(GeneratorError):
    """Raised when a single table cannot be rendered."""

    def __init__(self, table_name: str, message: str):
        super().__init__(f"{table_name}: {message}")
        self.table_name = table_name


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    #: Templates loaded and compiled when the generator is created.
    required_templates: List[str] = []

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """
        Initialize generator with optional configuration.

        Raises:
            TemplateError: If a required template is missing or malformed
        """
        self.config = config or GeneratorConfig()
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine and load every required template."""
        template_dir = self.get_template_directory()
        self._template_engine = create_template_engine(template_dir)
        self.register_filters(self._template_engine)
        self._template_engine.preload(self.required_templates)

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'go')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.go')."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Return None to use in-memory templates only.
        """
        return None

    def register_filters(self, engine: TemplateEngine):
        """Hook for language-specific template filters."""
        pass

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        return self._template_engine

    @abstractmethod
    def generate_single_table(self, table: Table) -> str:
        """
        Generate the source file for one table.

        Args:
            table: Derived table

        Returns:
            Generated code for this table

        Raises:
            RenderError: If the table cannot be rendered
        """
        pass

    def check_tables(self, tables: Mapping[str, Table]) -> Dict[str, List[str]]:
        """
        Hook for checks that need every table at once.

        Returns:
            Mapping of table name to problems; those tables are not rendered
        """
        return {}

    def output_filename(self, table: Table) -> str:
        """File name of the generated source for a table."""
        return f"{table.name}{self.config.file_suffix}{self.file_extension}"

    def format_code(self, code: str) -> str:
        """
        Apply basic formatting to generated code.

        Args:
            code: Raw generated code

        Returns:
            Formatted code
        """
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 1:  # Collapse runs of blank lines
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines).strip("\n") + "\n"

    def format_files(self, paths: List[Path]) -> Dict[Path, str]:
        """
        Run external formatters over written files.

        Returns:
            Mapping of path to error message for files that failed
        """
        return {}

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with context.

        Args:
            template_name: Template file name
            context: Template variables

        Returns:
            Rendered content
        """
        return self.template_engine.render_template(template_name, context)


class GenerationResult:
    """Container for the generation result of one table."""

    def __init__(self, table_name: str, filename: str, code: str = ""):
        """
        Initialize generation result.

        Args:
            table_name: Table the code was generated from
            filename: Output file name
            code: Generated code
        """
        self.table_name = table_name
        self.filename = filename
        self.code = code
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @classmethod
    def error(
        cls, table_name: str, filename: str, message: str, exception: Exception = None
    ) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(table_name, filename)
        result.success = False
        result.error_message = message
        result.exception = exception
        return result

    def fail(self, message: str):
        """Mark a result as failed after the fact (e.g. formatting)."""
        self.success = False
        self.error_message = message

    def __repr__(self) -> str:
        status = "ok" if self.success else f"failed: {self.error_message}"
        return f"GenerationResult({self.table_name!r}, {status})"


def generate_code(
    generator: CodeGenerator, tables: Mapping[str, Table]
) -> List[GenerationResult]:
    """
    Generate code for every table, collecting failures per table.

    A table that fails to render does not stop the others.

    Args:
        generator: Code generator instance
        tables: Derived tables keyed by name

    Returns:
        One GenerationResult per table, in table name order
    """
    results = []
    conflicts = generator.check_tables(tables)

    for name in sorted(tables):
        table = tables[name]
        filename = generator.output_filename(table)
        logger.info("Rendering %s to %s", name, filename)
        try:
            if name in conflicts:
                raise RenderError(name, "; ".join(conflicts[name]))
            code = generator.format_code(generator.generate_single_table(table))
        except (RenderError, TemplateError) as e:
            logger.error("Failed to render table %s: %s", name, e)
            results.append(GenerationResult.error(name, filename, str(e), exception=e))
            continue
        results.append(GenerationResult(name, filename, code))

    return results
