"""
Pages — CRUD + édition par blocs.

GET    /api/pages                          → liste
POST   /api/pages                          → création {name, slug, content?, published?} (auteur = éditeur connecté)
GET    /api/pages/{id}                     → page + document décodé
PUT    /api/pages/{id}                     → mise à jour {name?, content?, published?}
DELETE /api/pages/{id}                     → suppression (tags liés désassignés)
POST   /api/pages/{id}/blocks              → ajoute un bloc {type}
PATCH  /api/pages/{id}/blocks/{position}   → met à jour les champs d'un bloc
DELETE /api/pages/{id}/blocks/{position}   → retire un bloc
POST   /api/pages/{id}/blocks/move         → déplace un bloc {from_position, to_position}
"""
import logging
from contextlib import contextmanager
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.orm import Session

from ...database import (
    db_create_page, db_delete_page, db_get_page, db_get_page_by_slug,
    db_list_pages, db_update_page, get_db,
)
from ...models import BlockAppendInput, BlockMoveInput, PageCreate, PageDB, PageUpdate, UserDB
from ...page_builder import (
    BlockEditor, DecodeError, DocumentDecodeError, FieldMismatch, IndexOutOfRange,
    UnknownComponentType, decode, decode_or_raise, encode, sanitize_document,
)
from ...store import SqlPageStore
from .login import require_editor

log = logging.getLogger(__name__)
router = APIRouter(prefix="/api/pages", tags=["Pages"], dependencies=[Depends(require_editor)])


# ── Helpers ────────────────────────────────────────────────────────────────────

def _page_json(p: PageDB, with_document: bool = False) -> dict:
    data = {
        "id":         p.id,
        "name":       p.name,
        "slug":       p.slug,
        "content":    p.content,
        "author_id":  p.author_id,
        "author":     {"id": p.author.id, "name": p.author.name} if p.author else None,
        "published":  p.published,
        "created_at": p.created_at.isoformat() if p.created_at else None,
        "updated_at": p.updated_at.isoformat() if p.updated_at else None,
    }
    if with_document:
        doc = decode(p.content)
        if isinstance(doc, DecodeError):
            data["components"] = None
            data["content_error"] = {"kind": doc.kind.value, "message": doc.message}
        else:
            data["components"] = [c.to_wire() for c in doc.components]
    return data


def _clean_content(content: Optional[str]) -> str:
    """Valide le texte soumis et nettoie les TextBlock avant stockage."""
    try:
        document = decode_or_raise(content)
    except DocumentDecodeError as e:
        raise HTTPException(422, f"Contenu invalide — {e}")
    return encode(sanitize_document(document))


def _get_page_or_404(db: Session, page_id: int) -> PageDB:
    page = db_get_page(db, page_id)
    if not page:
        raise HTTPException(404, "Page not found.")
    return page


@contextmanager
def _editor_errors():
    """Erreurs de l'éditeur → codes HTTP."""
    try:
        yield
    except IndexOutOfRange as e:
        raise HTTPException(404, str(e))
    except UnknownComponentType as e:
        raise HTTPException(400, str(e))
    except FieldMismatch as e:
        raise HTTPException(422, {"message": str(e), "fields": e.fields})
    except DocumentDecodeError as e:
        raise HTTPException(422, f"Contenu stocké illisible — {e}")


def _editor_response(page: PageDB, editor: BlockEditor, position: Optional[int] = None) -> dict:
    return {
        "page_id":    page.id,
        "position":   position,
        "components": [c.to_wire() for c in editor],
    }


def _save(db: Session, page: PageDB, editor: BlockEditor):
    if not SqlPageStore(db).save_page_content(page.id, editor.encode()):
        raise HTTPException(404, "Page not found.")


# ── CRUD ───────────────────────────────────────────────────────────────────────

@router.get("")
def list_pages(db: Session = Depends(get_db)):
    return [_page_json(p) for p in db_list_pages(db)]


@router.post("", status_code=201)
def create_page(req: PageCreate, editor: Optional[UserDB] = Depends(require_editor),
                db: Session = Depends(get_db)):
    if not req.name.strip() or not req.slug.strip():
        raise HTTPException(400, "Missing required fields.")
    if db_get_page_by_slug(db, req.slug):
        raise HTTPException(409, "A page with this slug already exists.")

    page = db_create_page(db, PageDB(
        name=req.name.strip(),
        slug=req.slug.strip(),
        content=_clean_content(req.content),
        author_id=editor.id if editor else None,
        published=req.published,
    ))
    log.info("Page créée : %s (%s)", page.slug, page.id)
    return _page_json(page, with_document=True)


@router.get("/{page_id}")
def get_page(page_id: int, db: Session = Depends(get_db)):
    return _page_json(_get_page_or_404(db, page_id), with_document=True)


@router.put("/{page_id}")
def update_page(page_id: int, req: PageUpdate, db: Session = Depends(get_db)):
    page = _get_page_or_404(db, page_id)
    updates: Dict[str, Any] = {}
    if req.name is not None:
        if not req.name.strip():
            raise HTTPException(400, "Page name cannot be empty.")
        updates["name"] = req.name.strip()
    if req.content is not None:
        updates["content"] = _clean_content(req.content)
    if req.published is not None:
        updates["published"] = req.published

    page = db_update_page(db, page, **updates)
    log.info("Page %s mise à jour (%s)", page.id, ", ".join(updates) or "aucun champ")
    return {"message": "Page updated successfully.", "page": _page_json(page, with_document=True)}


@router.delete("/{page_id}")
def delete_page(page_id: int, db: Session = Depends(get_db)):
    page = _get_page_or_404(db, page_id)
    db_delete_page(db, page)
    log.info("Page %s supprimée", page_id)
    return {"message": "Page deleted successfully."}


# ── Édition par blocs ──────────────────────────────────────────────────────────

@router.post("/{page_id}/blocks", status_code=201)
def append_block(page_id: int, req: BlockAppendInput, db: Session = Depends(get_db)):
    page = _get_page_or_404(db, page_id)
    with _editor_errors():
        editor = BlockEditor.from_text(page.content)
        editor.append(req.type)
    _save(db, page, editor)
    return _editor_response(page, editor, len(editor) - 1)


@router.post("/{page_id}/blocks/move")
def move_block(page_id: int, req: BlockMoveInput, db: Session = Depends(get_db)):
    page = _get_page_or_404(db, page_id)
    with _editor_errors():
        editor = BlockEditor.from_text(page.content)
        editor.move_to(req.from_position, req.to_position)
    _save(db, page, editor)
    return _editor_response(page, editor, req.to_position)


@router.patch("/{page_id}/blocks/{position}")
def update_block(page_id: int, position: int, fields: Dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    page = _get_page_or_404(db, page_id)
    with _editor_errors():
        editor = BlockEditor.from_text(page.content)
        editor.update_at(position, fields)
    _save(db, page, editor)
    return _editor_response(page, editor, position)


@router.delete("/{page_id}/blocks/{position}")
def remove_block(page_id: int, position: int, db: Session = Depends(get_db)):
    page = _get_page_or_404(db, page_id)
    with _editor_errors():
        editor = BlockEditor.from_text(page.content)
        editor.remove_at(position)
    _save(db, page, editor)
    return _editor_response(page, editor)
