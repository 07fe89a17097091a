# taskquery/schemas/token.py
from __future__ import annotations
from typing import List, Optional
from lark import Token


class TokenKind:
    CONTENT = "content"
    LABEL = "label"
    PRIORITY = "priority"
    DATE = "date"
    PROJECT = "project"

    ALL = (CONTENT, LABEL, PRIORITY, DATE, PROJECT)


class QueryToken(Token):
    """
    One classified sub-phrase of a query.

    A lark Token whose `type` is the token kind. Being a str, it compares
    equal to its value, so `record.labels == ["home", "errand"]` holds.
    """
    __slots__ = ()

    @classmethod
    def of(cls, kind: str, value: str, start: Optional[int] = None, end: Optional[int] = None) -> "QueryToken":
        if end is None and start is not None:
            end = start + len(value)
        return cls(kind, value, start_pos=start, end_pos=end)

    @property
    def kind(self) -> str:
        return self.type

    def signature(self):
        return (self.type, str(self), self.start_pos)

    # lark's Token only overrides __eq__, so str.__ne__ would ignore the kind
    def __ne__(self, other):
        return not self == other

    __hash__ = Token.__hash__

    def __deepcopy__(self, memo):
        return self

    def __repr__(self):
        return "QueryToken(%r, %r)" % (self.type, self.value)


TokenSequence = List[QueryToken]
