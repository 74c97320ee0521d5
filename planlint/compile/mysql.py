"""MySQL dialect compiler."""

from __future__ import annotations

from planlint.compile.base import SQLCompiler


class MySQLCompiler(SQLCompiler):
    """Compiles QueryPlan to MySQL-flavoured SQL.

    Parameter style: ``%(name)s`` – compatible with ``PyMySQL`` and
    ``mysql-connector-python`` named-parameter execution.

    Identifiers are quoted with backticks (`` ` ``) rather than double-quotes,
    and backslashes in string literals are escaped.
    """

    @property
    def dialect_name(self) -> str:
        return "mysql"

    def param_placeholder(self, name: str) -> str:
        return f"%({name})s"

    def quote_identifier(self, name: str) -> str:
        escaped = name.replace("`", "``")
        return f"`{escaped}`"

    def quote_literal(self, value: object) -> str:
        if isinstance(value, str):
            value = value.replace("\\", "\\\\")
        return super().quote_literal(value)
