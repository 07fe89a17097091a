# taskquery/parser/adapter.py
"""
Query Adapter

Bridge between raw query text and the task API:
 - QueryParser (Earley, locale grammar) -> candidate token sequences
 - reducer -> TaskRecord (first candidate only)
 - serializer -> request payload

Parsing never fails on free text; the only error raised here is
UnsupportedLocaleError, and it is raised when the adapter is built.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
import logging
import uuid

from taskquery.config import QueryConfig
from taskquery.parser.engine import QueryParser
from taskquery.parser.reducer import reduce_candidates
from taskquery.schemas.task import TaskRecord, serialize_task
from taskquery.schemas.token import TokenSequence

logger = logging.getLogger(__name__)


class QueryAdapter:
    """
    High-level interface used by hosts (API, scripts).

    Usage:
        record = QueryAdapter().parse_query("buy milk @errand !!1 tomorrow")
        payload = record.to_request_payload()
    """

    def __init__(self, config: Optional[QueryConfig] = None):
        self.config = config or QueryConfig()
        self.parser = QueryParser(
            locale=self.config.locale,
            max_candidates=self.config.max_candidates,
            max_query_length=self.config.max_query_length,
        )

    @property
    def locale(self) -> str:
        return self.parser.locale

    # --------------------------------------------------------------
    # MAIN ENTRYPOINTS
    # --------------------------------------------------------------
    def candidates(self, text: str) -> List[TokenSequence]:
        return self.parser.parse(text)

    def parse_query(self, text: str) -> TaskRecord:
        """Query text -> TaskRecord built from the best candidate."""
        query_id = uuid.uuid4().hex[:12]
        first = next(self.parser.iter_parses(text))
        record = reduce_candidates([first])
        logger.info(
            "Parsed query: %d token(s), %d label(s), due=%r",
            len(first), len(record.labels), record.due_string,
            extra={"locale": self.locale, "query_id": query_id},
        )
        if not record.has_content:
            logger.debug("Query has no task name; placeholder kept", extra={"query_id": query_id})
        return record

    def to_payload(self, text: str) -> Dict[str, Any]:
        return serialize_task(self.parse_query(text))


# --------------------------------------------------------------
# Module helpers (one adapter per locale, built on first use)
# --------------------------------------------------------------
_ADAPTERS: Dict[str, QueryAdapter] = {}


def get_adapter(locale: str = "en") -> QueryAdapter:
    adapter = _ADAPTERS.get(locale)
    if adapter is None:
        adapter = QueryAdapter(QueryConfig(locale=locale))
        _ADAPTERS[locale] = adapter
    return adapter


def parse_query(text: str, locale: str = "en") -> TaskRecord:
    return get_adapter(locale).parse_query(text)


def to_payload(text: str, locale: str = "en") -> Dict[str, Any]:
    return get_adapter(locale).to_payload(text)
