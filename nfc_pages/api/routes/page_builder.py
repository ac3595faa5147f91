"""
Router page_builder — outils de l'éditeur.

GET  /api/page-builder/catalog   → blocs disponibles + JSON schemas
POST /api/page-builder/validate  → {"valid": bool, "error"?}
POST /api/page-builder/preview   → HTML de la page (sans enregistrement)
"""
from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from ...models import PreviewInput
from ...page_builder import DEFAULT_REGISTRY, DecodeError, decode, render_page, sanitize_document
from .login import require_editor

router = APIRouter(prefix="/api/page-builder", tags=["page_builder"], dependencies=[Depends(require_editor)])


@router.get("/catalog", summary="Liste les blocs disponibles et leurs schemas")
def catalog() -> dict:
    return {"blocks": DEFAULT_REGISTRY.catalog()}


@router.post("/validate", summary="Valide un contenu sans l'enregistrer")
def validate(req: PreviewInput) -> dict:
    result = decode(req.content)
    if isinstance(result, DecodeError):
        return {"valid": False, "error": {"kind": result.kind.value, "message": result.message}}
    unknown = [c.type for c in result.components if not DEFAULT_REGISTRY.is_registered(c.type)]
    if unknown:
        return {"valid": False, "error": {"kind": "UNKNOWN_TYPE", "message": f"Types inconnus : {unknown}"}}
    return {"valid": True, "count": len(result.components)}


@router.post("/preview", response_class=HTMLResponse, summary="Rend un contenu en HTML")
def preview(req: PreviewInput) -> HTMLResponse:
    result = decode(req.content)
    if isinstance(result, DecodeError):
        return HTMLResponse(f"<p>Invalid content ({result.kind.value})</p>", status_code=422)
    # Même nettoyage qu'à l'enregistrement
    return HTMLResponse(render_page(req.title, sanitize_document(result)))
