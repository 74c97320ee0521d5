"""Utilities for seeding a builder from external table definitions.

SQLAlchemy converter
--------------------
:func:`builder_from_sqlalchemy` registers SQLAlchemy ``Table`` objects as
FROM sources / join candidates without touching a database.  Only table
*names* are used; column nullability and keys stay out of the plan so the
validator remains schema-agnostic.

Install the optional dependency before using this module::

    pip install "planlint[sqlalchemy]"

Example::

    from sqlalchemy import Column, Integer, MetaData, Table
    from planlint.build.converters import builder_from_sqlalchemy

    metadata = MetaData()
    vendor = Table("vendor", metadata, Column("VendorID", Integer, primary_key=True))
    builder = builder_from_sqlalchemy([vendor], aliases={"vendor": "v"})
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from planlint.build.builder import QueryPlanBuilder

if TYPE_CHECKING:
    from sqlalchemy import MetaData, Table


def builder_from_sqlalchemy(
    tables: Iterable[Table],
    *,
    aliases: dict[str, str] | None = None,
) -> QueryPlanBuilder:
    """Return a :class:`QueryPlanBuilder` with ``tables`` registered in order.

    Args:
        tables: SQLAlchemy ``Table`` objects (e.g. from ``MetaData.tables``).
        aliases: Optional ``{table_name: alias}`` mapping.

    Returns:
        An open builder ready for joins, select items and filters.

    Raises:
        DuplicateAliasError: If two tables end up with the same alias.
    """
    aliases = aliases or {}
    builder = QueryPlanBuilder()
    for table in tables:
        builder.add_table(table.name, aliases.get(table.name))
    return builder


def builder_from_metadata(
    metadata: MetaData,
    table_names: list[str],
    *,
    aliases: dict[str, str] | None = None,
) -> QueryPlanBuilder:
    """Register the named tables of ``metadata`` (in the given order).

    Raises:
        KeyError: If a name is not present in ``metadata.tables``.
    """
    try:
        import sqlalchemy  # noqa: F401
    except ImportError as exc:
        raise ImportError(
            "SQLAlchemy is required for builder_from_metadata(). "
            'Install it with: pip install "planlint[sqlalchemy]"'
        ) from exc

    return builder_from_sqlalchemy(
        [metadata.tables[name] for name in table_names],
        aliases=aliases,
    )
