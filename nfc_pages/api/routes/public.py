"""
Page visiteur — GET /t/{tag_id}

Le tag est résolu vers sa page ; le document est rendu côté serveur.
Jamais d'exception brute : tag inconnu → page 404 lisible, tag non
assigné (ou contenu illisible) → page « Content Not Assigned ».
"""
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from ...database import db_record_tap, get_db
from ...page_builder import render_not_assigned, render_not_found, render_page
from ...resolver import AssignmentResolver, NotFound, Unassigned
from ...store import SqlPageStore

log = logging.getLogger(__name__)
router = APIRouter(tags=["Public"])


@router.get("/t/{tag_id}", response_class=HTMLResponse)
def tag_page(tag_id: str, request: Request, db: Session = Depends(get_db)):
    result = AssignmentResolver(SqlPageStore(db)).resolve(tag_id)

    if isinstance(result, NotFound):
        return HTMLResponse(render_not_found(tag_id), status_code=404)
    if isinstance(result, Unassigned):
        log.info("Tag %s tapé sans contenu (%s)", result.tag.id, result.reason)
        return HTMLResponse(render_not_assigned(result.tag.name or tag_id))

    ip = request.client.host if request.client else None
    db_record_tap(db, result.tag.id, result.page_id, ip)
    return HTMLResponse(render_page(result.page_name, result.document))
