"""
Language-specific code generators.

Go is the only target: the generated code is Go data access code.
"""

from .go import GoGenerator, create_go_generator

__all__ = ["GoGenerator", "create_go_generator"]
