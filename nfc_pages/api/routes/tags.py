"""
NFC tags — CRUD, enregistrement de la carte physique, assignation de page.

GET    /api/nfc-tags              → liste (+ nom/slug de la page assignée)
POST   /api/nfc-tags              → création {name} (UID et page nuls)
POST   /api/nfc-tags/register     → enregistre un UID physique (find-or-create)
POST   /api/nfc-tags/assign       → assigne {tag_id, page_id}
DELETE /api/nfc-tags/assign       → désassigne {tag_id, page_id}
GET    /api/nfc-tags/{id}         → tag + page assignée
PUT    /api/nfc-tags/{id}         → {name?, tag_uid?, page_id?}
DELETE /api/nfc-tags/{id}
"""
import logging
import os
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ...database import (
    db_create_tag, db_delete_tag, db_get_page, db_get_tag, db_get_tag_by_uid,
    db_list_tags, db_update_tag, get_db,
)
from ...models import NfcTagDB, TagAssignInput, TagCreate, TagRegisterInput, TagUpdate
from .login import require_editor

log = logging.getLogger(__name__)
router = APIRouter(prefix="/api/nfc-tags", tags=["NFC Tags"], dependencies=[Depends(require_editor)])


def _public_url(tag: NfcTagDB) -> str:
    base = os.getenv("PUBLIC_BASE_URL", "http://localhost:8000").rstrip("/")
    return f"{base}/t/{tag.id}"


def _tag_json(t: NfcTagDB, with_content: bool = False) -> dict:
    page = t.assigned_page
    assigned = None
    if page is not None:
        assigned = {"id": page.id, "name": page.name, "slug": page.slug}
        if with_content:
            assigned["content"] = page.content
    return {
        "id":            t.id,
        "name":          t.name,
        "tag_uid":       t.tag_uid,
        "page_id":       t.page_id,
        "assigned_page": assigned,
        "public_url":    _public_url(t),
        "created_at":    t.created_at.isoformat() if t.created_at else None,
        "updated_at":    t.updated_at.isoformat() if t.updated_at else None,
    }


def _get_tag_or_404(db: Session, tag_id: int) -> NfcTagDB:
    tag = db_get_tag(db, tag_id)
    if not tag:
        raise HTTPException(404, "NFC Tag not found.")
    return tag


# ── Liste / création ───────────────────────────────────────────────────────────

@router.get("")
def list_tags(db: Session = Depends(get_db)):
    return [_tag_json(t) for t in db_list_tags(db)]


@router.post("", status_code=201)
def create_tag(req: TagCreate, db: Session = Depends(get_db)):
    if not req.name.strip():
        raise HTTPException(400, "Tag name is required.")
    tag = db_create_tag(db, NfcTagDB(name=req.name.strip(), tag_uid=None, page_id=None))
    log.info("Tag créé : %s (%s)", tag.name, tag.id)
    return _tag_json(tag)


@router.post("/register")
def register_tag(req: TagRegisterInput, db: Session = Depends(get_db)):
    """Carte lue (WebNFC ou saisie) : retrouve le tag par UID ou le crée."""
    uid = req.tag_uid.strip()
    if not uid:
        raise HTTPException(400, "tag_uid is required.")
    tag = db_get_tag_by_uid(db, uid)
    created = tag is None
    if created:
        tag = db_create_tag(db, NfcTagDB(name=req.name or f"Tag-{uid[:8]}", tag_uid=uid))
        log.info("Carte %s enregistrée → tag %s", uid, tag.id)
    return JSONResponse(
        {
            "message":    f"Tag {'created' if created else 'found'} successfully.",
            "tag":        _tag_json(tag),
            "public_url": _public_url(tag),
        },
        status_code=201 if created else 200,
    )


# ── Assignation ────────────────────────────────────────────────────────────────

@router.post("/assign")
def assign_page(req: TagAssignInput, db: Session = Depends(get_db)):
    tag  = db_get_tag(db, req.tag_id)
    page = db_get_page(db, req.page_id)
    if not tag or not page:
        raise HTTPException(404, "The specified Tag or Page could not be found.")
    tag = db_update_tag(db, tag, page_id=page.id)
    log.info("Tag %s → page %s", tag.id, page.id)
    return {"message": "Page assigned successfully.", "tag": _tag_json(tag)}


@router.delete("/assign")
def unassign_page(req: TagAssignInput, db: Session = Depends(get_db)):
    tag  = db_get_tag(db, req.tag_id)
    page = db_get_page(db, req.page_id)
    if not tag or not page:
        raise HTTPException(404, "The specified Tag or Page could not be found.")
    if tag.page_id != page.id:
        raise HTTPException(409, "This page is not assigned to the tag.")
    tag = db_update_tag(db, tag, page_id=None)
    log.info("Tag %s désassigné de la page %s", tag.id, page.id)
    return {"message": "Page unassigned successfully.", "tag": _tag_json(tag)}


# ── Tag unitaire ───────────────────────────────────────────────────────────────

@router.get("/{tag_id}")
def get_tag(tag_id: int, db: Session = Depends(get_db)):
    return _tag_json(_get_tag_or_404(db, tag_id), with_content=True)


@router.put("/{tag_id}")
def update_tag(tag_id: int, req: TagUpdate, db: Session = Depends(get_db)):
    tag = _get_tag_or_404(db, tag_id)
    sent = req.model_fields_set
    updates: Dict[str, Any] = {}

    if "name" in sent and req.name is not None:
        if not req.name.strip():
            raise HTTPException(400, "Tag name cannot be empty.")
        updates["name"] = req.name.strip()

    if "tag_uid" in sent:
        new_uid = (req.tag_uid or "").strip() or None
        if new_uid and new_uid != tag.tag_uid:
            existing = db_get_tag_by_uid(db, new_uid)
            if existing and existing.id != tag.id:
                raise HTTPException(409, "This physical card is already registered to another tag record.")
        updates["tag_uid"] = new_uid

    if "page_id" in sent:
        if req.page_id is not None and not db_get_page(db, req.page_id):
            raise HTTPException(404, "Page not found.")
        updates["page_id"] = req.page_id

    db_update_tag(db, tag, **updates)
    log.info("Tag %s mis à jour (%s)", tag.id, ", ".join(updates) or "aucun champ")
    return {"message": "NFC Tag updated successfully."}


@router.delete("/{tag_id}")
def delete_tag(tag_id: int, db: Session = Depends(get_db)):
    tag = _get_tag_or_404(db, tag_id)
    db_delete_tag(db, tag)
    log.info("Tag %s supprimé", tag_id)
    return {"message": "NFC Tag deleted successfully."}
