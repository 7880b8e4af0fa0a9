"""
Go code generator module.

Generates Go data access code (structs, getters, Write and Delete) from
table schemas.
"""

from .config import GoConfig
from .generator import FormatError, GoGenerator, create_go_generator
from .naming import (
    GO_RESERVED_WORDS,
    identifier_conflicts,
    package_conflicts,
    validate_go_package_name,
)
from .types import GoType, GoTypeMapper

__all__ = [
    "GoGenerator",
    "GoConfig",
    "GoType",
    "GoTypeMapper",
    "FormatError",
    "GO_RESERVED_WORDS",
    "create_go_generator",
    "identifier_conflicts",
    "package_conflicts",
    "validate_go_package_name",
]
