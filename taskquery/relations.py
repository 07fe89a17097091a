# taskquery/relations.py
"""
Resolve parsed project/label names against projects and labels the caller
has already fetched from the task API. Matching is case-insensitive; unknown
names are logged and left unresolved.
"""

from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel

from taskquery.schemas.task import TaskRecord

logger = logging.getLogger(__name__)


class Project(BaseModel):
    id: int
    name: str

    model_config = {"extra": "ignore"}


class Label(BaseModel):
    id: int
    name: str

    model_config = {"extra": "ignore"}


def _index_by_name(items: Iterable[BaseModel]) -> Dict[str, int]:
    index: Dict[str, int] = {}
    for item in items:
        # first one wins on case-insensitive duplicates
        index.setdefault(item.name.casefold(), item.id)
    return index


def resolve_relationships(
    record: TaskRecord,
    projects: Optional[Iterable[Project]] = None,
    labels: Optional[Iterable[Label]] = None,
) -> TaskRecord:
    """Return a copy of `record` with project_id/label_ids filled where names match."""
    update = {}

    if record.project is not None and projects is not None:
        project_id = _index_by_name(projects).get(record.project.casefold())
        if project_id is None:
            logger.info("Project %r not found; leaving it unresolved", record.project)
        else:
            update["project_id"] = project_id

    if record.labels and labels is not None:
        by_name = _index_by_name(labels)
        label_ids: List[int] = []
        for label in record.labels:
            label_id = by_name.get(str(label).casefold())
            if label_id is None:
                logger.info("Label %r not found; leaving it unresolved", str(label))
            elif label_id not in label_ids:
                label_ids.append(label_id)
        if label_ids:
            update["label_ids"] = label_ids

    if not update:
        return record
    return record.model_copy(update=update)
