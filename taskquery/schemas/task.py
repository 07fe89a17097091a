# taskquery/schemas/task.py
from __future__ import annotations
from typing import Dict, Any, Optional, List
from pydantic import BaseModel, Field, field_validator

from .token import QueryToken, TokenKind

CONTENT_PLACEHOLDER = "<Give a name to this task>"

# API scale: 1 is normal, 4 is urgent. Query markers run the other way (!!1 is urgent).
LOWEST_PRIORITY = 1
HIGHEST_PRIORITY = 4


class TaskRecord(BaseModel):
    """
    Reduced form of one parsed query. Built once by the reducer and only ever
    copied afterwards (see relations.resolve_relationships).
    """
    content: str = CONTENT_PLACEHOLDER
    labels: List[QueryToken] = Field(default_factory=list)
    priority: str = str(LOWEST_PRIORITY)
    due_string: str = ""
    extensions: Dict[str, QueryToken] = Field(default_factory=dict)
    last_token: Optional[QueryToken] = None

    # filled by the downstream relationship lookup, never by the parser
    project_id: Optional[int] = None
    label_ids: List[int] = Field(default_factory=list)

    model_config = {"extra": "forbid", "frozen": True, "arbitrary_types_allowed": True}

    @field_validator("content")
    @classmethod
    def _content_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("content must be real text or the placeholder")
        return v

    @field_validator("priority")
    @classmethod
    def _priority_in_range(cls, v: str) -> str:
        if not v.isdigit() or not LOWEST_PRIORITY <= int(v) <= HIGHEST_PRIORITY:
            raise ValueError(f"priority must be between {LOWEST_PRIORITY} and {HIGHEST_PRIORITY}, got {v!r}")
        return v

    @property
    def project(self) -> Optional[str]:
        token = self.extensions.get(TokenKind.PROJECT)
        return str(token) if token is not None else None

    @property
    def last(self) -> Optional[QueryToken]:
        """Final token of the reduced sequence (e.g. for trailing-cursor feedback)."""
        return self.last_token

    @property
    def has_content(self) -> bool:
        return self.content != CONTENT_PLACEHOLDER

    def to_request_payload(self) -> Dict[str, Any]:
        return serialize_task(self)

    def to_summary(self) -> Dict[str, Any]:
        last = self.last_token
        return {
            "content": self.content,
            "labels": [str(label) for label in self.labels],
            "priority": self.priority,
            "due_string": self.due_string,
            "project": self.project,
            "extensions": {kind: str(tok) for kind, tok in self.extensions.items()},
            "last": {"kind": last.kind, "value": str(last)} if last is not None else None,
        }


class TaskPayload(BaseModel):
    """Body of a create-task request. Unset fields are dropped, never sent as null."""
    content: str
    priority: int = LOWEST_PRIORITY
    due_string: Optional[str] = None
    project: Optional[str] = None
    project_id: Optional[int] = None
    labels: Optional[List[str]] = None
    label_ids: Optional[bool] = None

    model_config = {"extra": "forbid"}


def serialize_task(record: TaskRecord) -> Dict[str, Any]:
    payload = TaskPayload(
        content=record.content,
        priority=int(record.priority or LOWEST_PRIORITY),
        due_string=record.due_string or None,
        project=record.project,
        project_id=record.project_id,
        labels=[str(label) for label in record.labels] or None,
        label_ids=True if record.label_ids else None,
    )
    return payload.model_dump(exclude_none=True)
