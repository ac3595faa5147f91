"""
NFC Pages — FastAPI app
Démarrer : uvicorn nfc_pages.api.main:app --reload --port 8000
"""
import logging, os
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from .routes import analytics, auth, login, page_builder, pages, public, tags

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s — %(message)s",
)
log = logging.getLogger(__name__)

app = FastAPI(title="NFC Pages — CMS", version="1.0.0", docs_url="/docs")

app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])


@app.middleware("http")
async def redirect_403_to_login(request: Request, call_next):
    """Redirige les 403 vers /admin/login pour les navigateurs."""
    response = await call_next(request)
    accept = request.headers.get("accept", "")
    if response.status_code == 403 and "text/html" in accept:
        return RedirectResponse("/admin/login", status_code=303)
    return response


@app.on_event("startup")
def startup():
    from ..database import init_db
    init_db()
    log.info("DB initialisée (SQLite)")


@app.get("/health")
def health():
    return {"status": "ok", "service": "nfc_pages", "version": "1.0.0"}


app.include_router(login.router)
app.include_router(auth.router)
app.include_router(pages.router)
app.include_router(tags.router)
app.include_router(analytics.router)
app.include_router(page_builder.router)
app.include_router(public.router)
