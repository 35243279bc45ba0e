"""Building blocks of a small shell: tokenizing, expansion, wildcards, environment, builtins and command lookup."""

__version__ = "0.1.0"

__all__ = [
    "builtins",
    "environment",
    "expansion",
    "lexer",
    "pattern",
    "resolve",
    "state",
]