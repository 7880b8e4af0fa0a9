"""
Template engine wrapper for code generation.

Provides a simple interface for Jinja2 template rendering with the naming
and clause helpers registered as filters.
"""

from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Optional

from jinja2 import (
    DictLoader,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError as JinjaTemplateError,
    TemplateNotFound,
)

from ...logging_config import get_logger
from . import clauses, naming

logger = get_logger(__name__)


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(self, template_dir: Optional[Path] = None):
        """
        Initialize template engine.

        Args:
            template_dir: Directory containing template files
        """
        self.template_dir = template_dir
        self._env = None
        self._setup_environment()

    def _setup_environment(self):
        """Setup Jinja2 environment with code generation utilities."""
        if self.template_dir and self.template_dir.exists():
            loader = FileSystemLoader(str(self.template_dir))
        else:
            # Nothing to load; preload reports every template as missing
            loader = DictLoader({})

        self._env = Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

        # Naming filters
        self._env.filters["param"] = naming.param_name
        self._env.filters["field"] = naming.field_name
        self._env.filters["struct"] = naming.struct_name
        self._env.filters["fkey"] = naming.foreign_key_entity

        # Clause filters
        self._env.filters["sorted_columns"] = clauses.sorted_columns
        self._env.filters["condition"] = clauses.equality_clause
        self._env.filters["format_condition"] = clauses.format_clause
        self._env.filters["marks"] = clauses.placeholders
        self._env.filters["args"] = clauses.join_arguments

        self._env.globals["RAW"] = clauses.RAW

    def add_filter(self, name: str, func: Callable[..., Any]):
        """Register an additional filter."""
        self._env.filters[name] = func

    def preload(self, template_names: Iterable[str]):
        """
        Load and compile templates up front.

        Args:
            template_names: Templates that must be available

        Raises:
            TemplateError: If a template is missing or does not compile
        """
        for template_name in template_names:
            try:
                self._env.get_template(template_name)
            except TemplateNotFound as e:
                raise TemplateError(f"Template {template_name} not found") from e
            except JinjaTemplateError as e:
                raise TemplateError(f"Malformed template {template_name}: {e}") from e
            logger.debug("Loaded template %s", template_name)

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Name of template file
            context: Variables to pass to template

        Returns:
            Rendered template content
        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except JinjaTemplateError as e:
            raise TemplateError(f"Failed to render template {template_name}: {e}") from e


def create_template_engine(template_dir: Optional[Path] = None) -> TemplateEngine:
    """Create a template engine, optionally backed by a template directory."""
    return TemplateEngine(template_dir)
