# ingres/api/local_routes.py

"""
Local bookkeeping routes: profile, chat and budget history, local documents.

Everything lives in one JSON key-value file, laid out with the same keys
the site uses in the browser, so a profile saved here and one saved in
the browser are interchangeable.
"""

import base64
import binascii
import logging
from dataclasses import asdict
from typing import Any, Dict

from fastapi import APIRouter, Body, HTTPException, Query

from ingres.config import LOCAL_STORE_PATH
from ingres.models import LocalDocumentUpload
from ingres.storage.identity import context_from_path
from ingres.storage.local_documents import LocalDocumentRecord, LocalDocuments
from ingres.storage.local_store import (
    BudgetStorage,
    ChatStorage,
    JSONFileStore,
    ProfileStorage,
    get_storage_key,
)


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/local")


# ============================================================
# GLOBAL SINGLETON
# ============================================================

local_store = JSONFileStore(LOCAL_STORE_PATH)


# ============================================================
# HELPERS
# ============================================================

def _check_context(context: str):

    try:
        get_storage_key(context, "profile")

    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _document_view(record: LocalDocumentRecord) -> Dict[str, Any]:

    data = asdict(record)
    data.pop("content")

    return data


def _profile_body(profiles: ProfileStorage, context: str) -> Dict[str, Any]:

    return {
        "profile": profiles.get(context),
        "userId": profiles.current_user_id(context),
        "context": context,
    }


@router.get("/context")
def resolve_context(path: str = Query("/")):

    return {"path": path, "context": context_from_path(path)}


# ============================================================
# LOCAL DOCUMENTS
# ============================================================

@router.get("/documents")
def list_local_documents():

    return {
        "documents": [
            _document_view(record)
            for record in LocalDocuments(local_store).list()
        ]
    }


@router.post("/documents")
def save_local_document(payload: LocalDocumentUpload):

    try:
        content = base64.b64decode(payload.content, validate=True)

    except (binascii.Error, ValueError):
        raise HTTPException(status_code=400, detail="content must be base64")

    record = LocalDocuments(local_store).save(
        payload.filename,
        content,
        mime_type=payload.mime_type,
        metadata=payload.metadata,
    )

    return _document_view(record)


@router.get("/documents/{doc_id}")
def get_local_document(doc_id: str):

    record = LocalDocuments(local_store).get(doc_id)

    if record is None:
        raise HTTPException(status_code=404, detail="Document not found")

    return _document_view(record)


@router.patch("/documents/{doc_id}")
def update_local_document(doc_id: str, updates: Dict[str, Any] = Body(...)):

    record = LocalDocuments(local_store).update_metadata(doc_id, updates)

    if record is None:
        raise HTTPException(status_code=404, detail="Document not found")

    return _document_view(record)


@router.delete("/documents/{doc_id}")
def delete_local_document(doc_id: str):

    LocalDocuments(local_store).remove(doc_id)

    logger.info("Local document removed", extra={"doc_id": doc_id})

    return {"success": True}


# ============================================================
# PROFILE
# ============================================================

@router.get("/{context}/profile")
def get_profile(context: str):

    _check_context(context)

    return _profile_body(ProfileStorage(local_store), context)


@router.put("/{context}/profile")
def save_profile(context: str, profile: Dict[str, Any] = Body(...)):

    _check_context(context)

    profiles = ProfileStorage(local_store)
    profiles.set(profile, context)

    return _profile_body(profiles, context)


@router.delete("/{context}/profile")
def clear_profile(context: str):

    _check_context(context)

    ProfileStorage(local_store).clear(context)

    return {"success": True}


# ============================================================
# CHAT AND BUDGET HISTORY
# ============================================================

@router.get("/{context}/chats")
def get_chats(context: str):

    _check_context(context)

    return {"chats": ChatStorage(local_store).get(context)}


@router.post("/{context}/chats")
def add_chat(context: str, chat: Dict[str, Any] = Body(...)):

    _check_context(context)

    chats = ChatStorage(local_store)
    chats.add(chat, context)

    return {"chats": chats.get(context)}


@router.delete("/{context}/chats/{chat_id}")
def delete_chat(context: str, chat_id: str):

    _check_context(context)

    chats = ChatStorage(local_store)
    chats.delete(chat_id, context)

    return {"chats": chats.get(context)}


@router.get("/{context}/budget-history")
def get_budget_history(context: str):

    _check_context(context)

    return {"history": BudgetStorage(local_store).get(context)}


@router.post("/{context}/budget-history")
def add_budget_session(context: str, session: Dict[str, Any] = Body(...)):

    _check_context(context)

    budgets = BudgetStorage(local_store)
    budgets.add(session, context)

    return {"history": budgets.get(context)}
