"""ANSI SQL compiler (the default render target)."""
from __future__ import annotations

from planlint.compile.base import SQLCompiler


class AnsiCompiler(SQLCompiler):
    """Standard SQL: double-quoted identifiers, ``:name`` placeholders."""

    @property
    def dialect_name(self) -> str:
        return "ansi"

    def param_placeholder(self, name: str) -> str:
        return f":{name}"

    def quote_identifier(self, name: str) -> str:
        escaped = name.replace('"', '""')
        return f'"{escaped}"'
