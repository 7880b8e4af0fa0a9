"""
Generation driver: schema file in, one generated file per table out.

Configuration errors (malformed schema, keyless tables, bad templates, an
unusable output directory) abort before anything is removed or written.
Render, write and format errors are collected per table; the remaining
tables are still written.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from ..logging_config import get_logger
from ..utils import load_schema
from .core.config import GeneratorConfig
from .core.generator import CodeGenerator, GenerationResult, GeneratorError, generate_code
from .core.schema import RawSchema, Table, derive_tables
from .languages.go import GoGenerator

logger = get_logger(__name__)


class OutputError(GeneratorError):
    """Raised when the output directory cannot be prepared."""

    pass


@dataclass
class GenerationReport:
    """Outcome of a generator run."""

    tables: Dict[str, Table] = field(default_factory=dict)
    results: List[GenerationResult] = field(default_factory=list)
    written: List[Path] = field(default_factory=list)
    removed: List[Path] = field(default_factory=list)

    @property
    def failures(self) -> List[GenerationResult]:
        return [result for result in self.results if not result.success]

    @property
    def success(self) -> bool:
        return not self.failures

    def summary(self) -> str:
        ok = len(self.results) - len(self.failures)
        return (
            f"{ok}/{len(self.results)} table(s) generated, "
            f"{len(self.written)} file(s) written, {len(self.failures)} failure(s)"
        )


def prepare_output_dir(output_dir: Path):
    """Create the output directory, failing before anything is removed."""
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputError(f"Cannot create output directory {output_dir}: {e}") from e
    if not output_dir.is_dir():
        raise OutputError(f"Output path {output_dir} is not a directory")


def purge_generated_files(output_dir: Path, generator: CodeGenerator) -> List[Path]:
    """
    Remove files left by a previous run (``*<suffix><ext>``).

    Raises:
        OutputError: If the suffix is empty or a file cannot be removed
    """
    suffix = generator.config.file_suffix
    if not suffix:
        raise OutputError("Refusing to purge output without a file_suffix")

    removed = []
    for path in sorted(output_dir.glob(f"*{suffix}{generator.file_extension}")):
        try:
            path.unlink()
        except OSError as e:
            raise OutputError(f"Cannot remove stale file {path}: {e}") from e
        removed.append(path)
        logger.debug("Removed %s", path)
    return removed


def write_results(results: List[GenerationResult], output_dir: Path) -> List[Path]:
    """
    Write every successful result into the output directory.

    A file that cannot be written marks its result as failed.
    """
    written = []
    for result in results:
        if not result.success:
            continue
        path = output_dir / result.filename
        try:
            path.write_text(result.code, encoding="utf-8")
        except OSError as e:
            logger.error("Failed to write %s: %s", path, e)
            result.fail(f"Failed to write {path}: {e}")
            continue
        written.append(path)
        logger.info("Generated code for table %s to %s", result.table_name, path)
    return written


def generate_from_schema(
    schema: RawSchema,
    config: Optional[GeneratorConfig] = None,
    dry_run: bool = False,
    generator: Optional[CodeGenerator] = None,
) -> GenerationReport:
    """
    Generate the data access code for an already loaded schema.

    Args:
        schema: Table name -> column name -> type token
        config: Generator configuration
        dry_run: Render only, do not touch the output directory
        generator: Generator to use (a GoGenerator built from config by default)

    Returns:
        GenerationReport with one result per table

    Raises:
        SchemaError: If a table has no inferable primary key
        TemplateError: If the templates cannot be loaded
        OutputError: If the output directory cannot be prepared
    """
    config = config or GeneratorConfig()
    generator = generator or GoGenerator(config)

    tables = derive_tables(schema)
    report = GenerationReport(tables=tables)
    report.results = generate_code(generator, tables)

    if dry_run:
        return report

    output_dir = Path(config.output_dir)
    prepare_output_dir(output_dir)
    report.removed = purge_generated_files(output_dir, generator)
    report.written = write_results(report.results, output_dir)

    failures = generator.format_files(report.written)
    if failures:
        by_filename = {result.filename: result for result in report.results}
        for path, message in failures.items():
            by_filename[path.name].fail(message)

    logger.info(report.summary())
    return report


def generate_from_file(
    schema_file: Optional[Path] = None,
    config: Optional[GeneratorConfig] = None,
    dry_run: bool = False,
) -> GenerationReport:
    """
    Load a schema file and generate its data access code.

    Raises:
        SchemaLoadError: If the schema file is missing or malformed
        SchemaError: If a table has no inferable primary key
        TemplateError: If the templates cannot be loaded
        OutputError: If the output directory cannot be prepared
    """
    config = config or GeneratorConfig()
    # Templates are loaded before the schema so a broken install fails first.
    generator = GoGenerator(config)
    schema = load_schema(schema_file or config.schema_file)
    return generate_from_schema(schema, config, dry_run=dry_run, generator=generator)
