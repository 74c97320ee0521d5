"""Typed column-reference class.

Owns the ``alias.column`` parsing that the builder, validator, and renderer
all need, so none of them split strings on their own.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

#: A bare SQL identifier: no quoting characters, no whitespace.
IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_$]*$")

#: Column name standing for "all columns".
STAR = "*"


def is_identifier(name: str) -> bool:
    """True when ``name`` is a bare identifier that needs no quoting fix-up."""
    return bool(IDENTIFIER_RE.match(name))


@dataclass(frozen=True)
class ColumnReference:
    """A parsed ``alias.column`` or bare ``column`` reference.

    Attributes:
        table: Table alias qualifier, or ``None`` for unqualified references.
        column: Column name (may be ``*``).
    """

    table: str | None
    column: str

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def parse(cls, ref: str) -> ColumnReference:
        """Parse an ``"alias.column"`` or bare ``"column"`` string.

        Args:
            ref: The raw column reference string from a plan.

        Returns:
            A :class:`ColumnReference` instance.
        """
        if "." in ref:
            table, column = ref.split(".", 1)
            return cls(table=table, column=column)
        return cls(table=None, column=ref)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @property
    def qualified(self) -> bool:
        """True when the reference includes a table qualifier."""
        return self.table is not None

    @property
    def is_star(self) -> bool:
        return self.column == STAR

    def malformed_parts(self) -> list[str]:
        """Return the parts of this reference that are not bare identifiers."""
        bad: list[str] = []
        if self.table is not None and not is_identifier(self.table):
            bad.append(self.table)
        if not self.is_star and not is_identifier(self.column):
            bad.append(self.column)
        return bad

    def __str__(self) -> str:
        if self.table:
            return f"{self.table}.{self.column}"
        return self.column
