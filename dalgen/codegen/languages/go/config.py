"""
Go-specific configuration and validation.

Reads the Go settings out of the ``custom`` section of the base
configuration.
"""

from dataclasses import dataclass, field
from typing import Dict, List

from ...core.config import ConfigError, GeneratorConfig
from .naming import validate_go_package_name


@dataclass
class GoConfig:
    """Go-specific configuration."""

    package_name: str = "models"
    db_import: str = "github.com/example/app/db"
    db_context_type: str = "db.DBContext"
    errors_import: str = "github.com/pkg/errors"
    verify_method: str = "Verify"
    type_overrides: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        problems = self.validate()
        if problems:
            raise ConfigError("; ".join(problems))

    @classmethod
    def from_generator_config(cls, config: GeneratorConfig) -> "GoConfig":
        """Build the Go settings from a base configuration."""
        custom = config.custom
        return cls(
            package_name=config.package_name,
            db_import=custom.get("db_import", cls.db_import),
            db_context_type=custom.get("db_context_type", cls.db_context_type),
            errors_import=custom.get("errors_import", cls.errors_import),
            verify_method=custom.get("verify_method", cls.verify_method),
            type_overrides=dict(custom.get("type_overrides") or {}),
        )

    def validate(self) -> List[str]:
        """Validate Go-specific configuration."""
        problems = validate_go_package_name(self.package_name)

        if not self.db_import:
            problems.append("db_import cannot be empty")

        if "." not in self.db_context_type:
            problems.append(
                f"db_context_type must be qualified by its package: {self.db_context_type!r}"
            )

        if not self.verify_method.isidentifier() or not self.verify_method[0].isupper():
            problems.append(f"verify_method must be an exported name: {self.verify_method!r}")

        for token, go_type in self.type_overrides.items():
            if not isinstance(go_type, str) or not go_type:
                problems.append(f"Invalid type override for {token!r}: {go_type!r}")

        return problems
