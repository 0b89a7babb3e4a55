"""Query Layer - 쿼리 언어 (AST, Parser, Evaluator)"""

from .ast import And, ItemKind, Leaf, LeafKind, Or, Query, SortOrder
from .evaluator import EvalContext, QueryEngine, ResultSet
from .parser import QueryParser, parse_query, tokenize

__all__ = [
    "Query",
    "Leaf",
    "And",
    "Or",
    "ItemKind",
    "LeafKind",
    "SortOrder",
    "QueryParser",
    "parse_query",
    "tokenize",
    "QueryEngine",
    "EvalContext",
    "ResultSet",
]
