"""
Go-specific type system for code generation.

Maps schema type tokens to Go types and the imports they need.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Set


@dataclass(frozen=True)
class GoType:
    """Immutable representation of a Go type with the imports it needs."""

    name: str  # The Go type name (e.g., "string", "time.Time")
    imports_needed: frozenset = field(default_factory=frozenset)

    @property
    def is_integer(self) -> bool:
        return self.name in GO_INTEGER_TYPES


GO_INTEGER_TYPES = {
    "int",
    "int8",
    "int16",
    "int32",
    "int64",
    "uint",
    "uint8",
    "uint16",
    "uint32",
    "uint64",
}

_TIME = GoType("time.Time", frozenset({"time"}))

# Schema type token -> Go type
DEFAULT_TYPE_MAP: Dict[str, GoType] = {
    "int": GoType("int"),
    "integer": GoType("int"),
    "int64": GoType("int64"),
    "bigint": GoType("int64"),
    "text": GoType("string"),
    "string": GoType("string"),
    "varchar": GoType("string"),
    "bool": GoType("bool"),
    "boolean": GoType("bool"),
    "float": GoType("float64"),
    "real": GoType("float64"),
    "double": GoType("float64"),
    "timestamp": _TIME,
    "datetime": _TIME,
    "time": _TIME,
    "blob": GoType("[]byte"),
    "bytes": GoType("[]byte"),
}


class GoTypeMapper:
    """Maps schema type tokens to Go types."""

    def __init__(self, type_overrides: Optional[Dict[str, str]] = None):
        """
        Initialize the mapper.

        Args:
            type_overrides: Token -> Go type name replacements
        """
        self._types = dict(DEFAULT_TYPE_MAP)
        for token, go_name in (type_overrides or {}).items():
            self._types[token.lower()] = self._from_name(go_name)

    @staticmethod
    def _from_name(go_name: str) -> GoType:
        """Build a GoType for a verbatim Go type name."""
        imports = set()
        if go_name.lstrip("*[]").startswith("time."):
            imports.add("time")
        return GoType(go_name, frozenset(imports))

    def map_type(self, type_token: str) -> GoType:
        """
        Map a schema type token to a Go type.

        Unknown tokens are used verbatim as the Go type name, so a schema can
        name Go types directly (``sql.NullString``, ``int32``).
        """
        mapped = self._types.get(type_token.lower())
        if mapped is not None:
            return mapped
        return self._from_name(type_token)

    def go_type_name(self, type_token: str) -> str:
        """Go type name for a token (used as a template filter)."""
        return self.map_type(type_token).name

    def get_all_imports(self, type_tokens: Iterable[str]) -> Set[str]:
        """Collect the imports needed by a set of type tokens."""
        imports: Set[str] = set()
        for token in type_tokens:
            imports.update(self.map_type(token).imports_needed)
        return imports
