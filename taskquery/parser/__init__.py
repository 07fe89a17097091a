# taskquery/parser/__init__.py
from .engine import QueryParser, ForestReader
from .reducer import reduce_tokens, reduce_candidates
from .adapter import QueryAdapter

__all__ = ["QueryParser", "ForestReader", "reduce_tokens", "reduce_candidates", "QueryAdapter"]
