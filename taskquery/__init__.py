# taskquery/__init__.py
"""
taskquery: free-form task queries -> structured task records -> task API payloads.

    >>> from taskquery import parse_query
    >>> record = parse_query("buy milk @errand !!1 tomorrow")
    >>> record.to_request_payload()
"""
from .config import QueryConfig
from .grammar import UnsupportedLocaleError, supported_locales
from .parser.engine import QueryParser
from .parser.reducer import reduce_tokens, reduce_candidates
from .parser.adapter import QueryAdapter, parse_query, to_payload
from .relations import Label, Project, resolve_relationships
from .schemas.task import TaskRecord, TaskPayload, serialize_task
from .schemas.token import QueryToken, TokenKind

__all__ = [
    "QueryConfig",
    "UnsupportedLocaleError",
    "supported_locales",
    "QueryParser",
    "reduce_tokens",
    "reduce_candidates",
    "QueryAdapter",
    "parse_query",
    "to_payload",
    "Project",
    "Label",
    "resolve_relationships",
    "TaskRecord",
    "TaskPayload",
    "serialize_task",
    "QueryToken",
    "TokenKind",
]
