"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import json
import re
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


# Generated files are matched by this suffix when stale output is purged.
FILE_SUFFIX_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


@dataclass
class GeneratorConfig:
    """Base configuration for code generators."""

    # Input / output settings
    schema_file: str = "models/models.toml"
    output_dir: str = "models"
    file_suffix: str = "_generated"
    package_name: str = "models"

    # Header written at the top of every generated file
    generator_name: str = "dalgen"

    # Code style settings
    add_comments: bool = True
    run_formatters: bool = True

    # Custom settings (language-specific)
    custom: Dict[str, Any] = field(default_factory=dict)


DEFAULTS: Dict[str, Any] = {
    "schema_file": "models/models.toml",
    "output_dir": "models",
    "file_suffix": "_generated",
    "package_name": "models",
    "generator_name": "dalgen",
    "add_comments": True,
    "run_formatters": True,
    "custom": {
        "db_import": "github.com/example/app/db",
        "db_context_type": "db.DBContext",
        "errors_import": "github.com/pkg/errors",
        "verify_method": "Verify",
    },
}


class ConfigManager:
    """Manages configuration loading and merging."""

    def get_config(
        self,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration.

        Defaults come first, then the JSON configuration file, then the
        custom overrides.

        Args:
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration
        """
        base_config = dict(DEFAULTS)
        base_config["custom"] = dict(DEFAULTS["custom"])

        if config_file:
            self._merge(base_config, self._load_config_file(config_file))

        if custom_config:
            self._merge(base_config, custom_config)

        config = self._dict_to_config(base_config)
        problems = self.validate_config(config)
        if problems:
            raise ConfigError("; ".join(problems))
        return config

    @staticmethod
    def _merge(target: Dict[str, Any], overrides: Dict[str, Any]):
        for key, value in overrides.items():
            if key == "custom" and isinstance(value, dict):
                target["custom"].update(value)
            else:
                target[key] = value

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in fields(GeneratorConfig)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        # Unknown keys are language-specific settings
        if custom_args:
            existing_custom = dict(config_args.get("custom", {}))
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        return GeneratorConfig(**config_args)

    def validate_config(self, config: GeneratorConfig) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation errors
        """
        errors = []

        if not config.package_name or not config.package_name.isidentifier():
            errors.append(f"Invalid package name: {config.package_name!r}")

        if not config.output_dir:
            errors.append("output_dir cannot be empty")

        if not isinstance(config.file_suffix, str) or not FILE_SUFFIX_PATTERN.match(
            config.file_suffix
        ):
            errors.append(
                f"Invalid file_suffix: {config.file_suffix!r} "
                "(non-empty, letters, digits, '_', '-' or '.' only)"
            )

        if not isinstance(config.custom, dict):
            errors.append("custom settings must be an object")

        return errors


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    manager = get_config_manager()
    return manager.get_config(custom_config, config_file)

