"""Tokenizing, validation and graph building for the Martial DSL."""

__version__ = "0.1.0"
__all__ = ["ast", "lexer", "semantic", "graph"]