# taskquery/parser/reducer.py
"""
Folds one token sequence into a TaskRecord.

Rules, applied left to right:
 - content: trimmed and appended; the placeholder goes away on the first
   non-blank piece. Blank pieces are skipped.
 - label: appended, duplicates and order kept.
 - priority: marker level N becomes API priority 5 - N. Last one wins.
 - date: replaces the due string. Last one wins.
 - anything else (project included): stored under its kind. Last one wins.
The final token of the sequence is remembered as `last`.
"""

from __future__ import annotations
import logging
from typing import Dict, List, Optional, Sequence

from taskquery.schemas.task import CONTENT_PLACEHOLDER, HIGHEST_PRIORITY, LOWEST_PRIORITY, TaskRecord
from taskquery.schemas.token import QueryToken, TokenKind

logger = logging.getLogger(__name__)


def _marker_priority(token: QueryToken) -> Optional[str]:
    value = str(token).strip()
    if not value.isdigit():
        return None
    level = int(value)
    if not LOWEST_PRIORITY <= level <= HIGHEST_PRIORITY:
        return None
    return str(HIGHEST_PRIORITY + 1 - level)


def reduce_tokens(tokens: Sequence[QueryToken]) -> TaskRecord:
    content = CONTENT_PLACEHOLDER
    labels: List[QueryToken] = []
    priority = str(LOWEST_PRIORITY)
    due_string = ""
    extensions: Dict[str, QueryToken] = {}

    for token in tokens:
        kind = token.kind
        if kind == TokenKind.CONTENT:
            piece = str(token).strip()
            if piece:
                content = piece if content == CONTENT_PLACEHOLDER else content + piece
        elif kind == TokenKind.LABEL:
            labels.append(token)
        elif kind == TokenKind.PRIORITY:
            mapped = _marker_priority(token)
            if mapped is None:
                logger.debug("Ignoring out-of-range priority token %r", token)
            else:
                priority = mapped
        elif kind == TokenKind.DATE:
            due_string = str(token)
        else:
            extensions[kind] = token

    return TaskRecord(
        content=content,
        labels=labels,
        priority=priority,
        due_string=due_string,
        extensions=extensions,
        last_token=tokens[-1] if tokens else None,
    )


def reduce_candidates(candidates: Sequence[Sequence[QueryToken]]) -> TaskRecord:
    """Reduce the authoritative (first) candidate; an empty list gives the default record."""
    if not candidates:
        return reduce_tokens([])
    return reduce_tokens(candidates[0])
