"""planlint compilation layer: QueryPlan → SQL text."""
from planlint.compile.ansi import AnsiCompiler
from planlint.compile.base import CompiledSQL, SQLCompiler
from planlint.compile.mysql import MySQLCompiler
from planlint.compile.postgres import PostgresCompiler
from planlint.compile.registry import CompilerFactory
from planlint.compile.renderer import QueryRenderer
from planlint.compile.sqlite import SQLiteCompiler

CompilerFactory.register_class("ansi", AnsiCompiler)
CompilerFactory.register_class("postgres", PostgresCompiler)
CompilerFactory.register_class("sqlite", SQLiteCompiler)
CompilerFactory.register_class("mysql", MySQLCompiler)

__all__ = [
    "AnsiCompiler",
    "CompiledSQL",
    "CompilerFactory",
    "MySQLCompiler",
    "PostgresCompiler",
    "QueryRenderer",
    "SQLCompiler",
    "SQLiteCompiler",
]
