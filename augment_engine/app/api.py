from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Query as QueryParam
from pydantic import BaseModel

from augment_engine.app.settings import AppSettings
from augment_engine.app.wiring import build_bundle, describe_plan
from augment_engine.domain.errors import EntityNotFoundError, InvalidArgumentError
from augment_engine.domain.query import Query

settings = AppSettings.from_env()

logging.basicConfig(level=settings.log_level, format="%(message)s")
log = logging.getLogger("augment_engine")

app = FastAPI(title="augment_engine")


class SaveRequest(BaseModel):
    document: Dict[str, Any]


class SaveResponse(BaseModel):
    saved: bool
    document: Optional[Dict[str, Any]] = None


class DeleteResponse(BaseModel):
    deleted: bool


class DocumentsResponse(BaseModel):
    count: int
    documents: List[Dict[str, Any]]


def _event(name: str, **fields: Any) -> None:
    log.info(json.dumps({"event": name, **fields}, ensure_ascii=False))


@app.get("/health")
def health():
    return {"ok": True}


@app.get("/plan")
def plan(method: str = QueryParam(default="find_all")):
    bundle = build_bundle(settings)
    try:
        return describe_plan(bundle, method)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/documents", response_model=DocumentsResponse)
def list_documents(
    field: Optional[str] = QueryParam(default=None),
    value: Optional[str] = QueryParam(default=None),
    limit: Optional[int] = QueryParam(default=None, ge=0),
):
    q = Query(limit=limit)
    if field is not None:
        q = q.and_where(field, "eq", value)

    docs = build_bundle(settings).repository.find_all(q)
    return DocumentsResponse(count=len(docs), documents=docs)


@app.get("/documents/{doc_id}")
def get_document(doc_id: str):
    try:
        return build_bundle(settings).repository.find_by_id(doc_id, required=True)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@app.post("/documents", response_model=SaveResponse)
def save_document(req: SaveRequest):
    try:
        saved = build_bundle(settings).repository.save(req.document)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))

    _event("save", saved=saved is not None, id=(saved or req.document).get("id"))
    return SaveResponse(saved=saved is not None, document=saved)


@app.delete("/documents/{doc_id}", response_model=DeleteResponse)
def delete_document(doc_id: str):
    ok = build_bundle(settings).repository.delete(doc_id)
    _event("delete", id=doc_id, deleted=ok)
    return DeleteResponse(deleted=ok)
