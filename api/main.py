# api/main.py
from __future__ import annotations
import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from taskquery.config import QueryConfig
from taskquery.grammar import UnsupportedLocaleError, supported_locales
from taskquery.observability.logging import configure_logging
from taskquery.parser.adapter import QueryAdapter
from taskquery.parser.reducer import reduce_candidates
from taskquery.relations import Label, Project, resolve_relationships
from taskquery.schemas.task import serialize_task

logger = logging.getLogger("taskquery.api")

_config = QueryConfig.from_env()
_adapters = {}


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(_config.log_level, log_to_file=_config.log_file)
    logger.info("taskquery API starting (default locale %s)", _config.locale)
    yield


app = FastAPI(title="taskquery API", version="0.1", lifespan=lifespan)


class ParseRequest(BaseModel):
    query: str
    locale: Optional[str] = None
    # previously fetched from the task API; names are resolved to ids when given
    projects: Optional[List[Project]] = None
    labels: Optional[List[Label]] = None

    model_config = {"extra": "forbid"}


def get_adapter(locale: Optional[str] = None) -> QueryAdapter:
    locale = locale or _config.locale
    adapter = _adapters.get(locale)
    if adapter is None:
        config = QueryConfig(
            locale=locale,
            max_candidates=_config.max_candidates,
            max_query_length=_config.max_query_length,
            log_level=_config.log_level,
            log_file=_config.log_file,
        )
        adapter = QueryAdapter(config)  # raises UnsupportedLocaleError
        _adapters[locale] = adapter
    return adapter


@app.get("/health")
async def health():
    return JSONResponse({"status": "ok", "default_locale": _config.locale})


@app.get("/locales")
async def locales():
    return JSONResponse({"locales": supported_locales(), "default": _config.locale})


# sync handler: FastAPI runs it in its threadpool, off the event loop
@app.post("/parse")
def parse(request: ParseRequest):
    try:
        adapter = get_adapter(request.locale)
    except UnsupportedLocaleError as e:
        raise HTTPException(status_code=400, detail=str(e))

    candidates = adapter.candidates(request.query)
    record = resolve_relationships(reduce_candidates(candidates), request.projects, request.labels)
    return JSONResponse({
        "locale": adapter.locale,
        "candidates": len(candidates),
        "task": record.to_summary(),
        "payload": serialize_task(record),
    })
