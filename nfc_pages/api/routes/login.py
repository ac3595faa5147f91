"""
Session éditeur — formulaire de connexion + dépendance d'accès aux routes /api/*.

Un jeton est accepté (header X-Admin-Token, ?token= ou cookie session_token)
s'il vaut ADMIN_TOKEN (compte d'amorçage, sans utilisateur) ou le jeton de
session d'un éditeur connecté.

GET  /admin/login   → formulaire e-mail + mot de passe
POST /admin/login   → pose le cookie, redirige vers /api/dashboard
GET  /admin/logout  → invalide la session, redirige vers /admin/login
"""
import logging
import os
import secrets
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from sqlalchemy.orm import Session

from ...auth import new_session_token, verify_password
from ...database import db_get_user_by_email, db_get_user_by_token, db_set_session_token, get_db
from ...models import UserDB
from ...page_builder.renderer.css import generate_css_variables

log = logging.getLogger(__name__)
router = APIRouter(tags=["Auth"])

SESSION_COOKIE = "session_token"
SESSION_MAX_AGE = 60 * 60 * 24 * 7


def _admin_token() -> str:
    return os.getenv("ADMIN_TOKEN", "changeme")


def _admin_password() -> str:
    return os.getenv("ADMIN_PASSWORD", "changeme")


def _same(a: str, b: str) -> bool:
    return secrets.compare_digest(a.encode("utf-8"), b.encode("utf-8"))


def presented_token(request: Request) -> str:
    return (request.headers.get("x-admin-token")
            or request.query_params.get("token")
            or request.cookies.get(SESSION_COOKIE, ""))


def require_editor(request: Request, db: Session = Depends(get_db)) -> Optional[UserDB]:
    """Éditeur connecté, ou None pour le jeton d'amorçage ADMIN_TOKEN. 403 sinon."""
    token = presented_token(request)
    if token and _same(token, _admin_token()):
        return None
    user = db_get_user_by_token(db, token)
    if user is None:
        raise HTTPException(403, "Accès refusé")
    return user


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=SESSION_COOKIE,
        value=token,
        httponly=True,
        samesite="lax",
        max_age=SESSION_MAX_AGE,
        secure=os.getenv("PUBLIC_BASE_URL", "").startswith("https://"),
    )


# ── Formulaire ────────────────────────────────────────────────────────────────

_FORM_CSS = """
body{margin:0;font-family:var(--font-family-body);background:var(--color-bg-gray);color:var(--color-text);
  min-height:100vh;display:grid;place-items:center}
.signin{background:var(--color-bg);width:min(92vw,24rem);padding:2rem;border-radius:.75rem;
  box-shadow:0 1px 3px rgba(0,0,0,.12)}
.signin h1{font-size:var(--font-size-xl);margin:0 0 1.5rem}
.signin label{display:block;font-size:var(--font-size-sm);color:var(--color-text-light);margin:1rem 0 .25rem}
.signin input{width:100%;box-sizing:border-box;padding:.6rem .75rem;border:1px solid #d1d5db;border-radius:.4rem}
.signin button{margin-top:1.5rem;width:100%;padding:.7rem;border:0;border-radius:.4rem;
  background:var(--color-primary);color:#fff;font-weight:600;cursor:pointer}
.signin .hint{font-size:var(--font-size-sm);color:var(--color-text-light);margin-top:1rem}
.signin .error{color:#b91c1c;font-size:var(--font-size-sm);margin-top:1rem}
"""


def render_login(error: bool = False) -> str:
    message = '<p class="error">Invalid credentials.</p>' if error else ""
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Sign in - NFC Content</title>
  <style>{generate_css_variables()}{_FORM_CSS}</style>
</head>
<body>
<form class="signin" method="post" action="/admin/login">
  <h1>NFC Content editor</h1>
  <label for="email">Email</label>
  <input id="email" name="email" type="email" autocomplete="username">
  <label for="password">Password</label>
  <input id="password" name="password" type="password" autocomplete="current-password" required>
  <button type="submit">Sign in</button>
  <p class="hint">Leave the email empty to use the administrator password.</p>
  {message}
</form>
</body>
</html>"""


@router.get("/admin/login", response_class=HTMLResponse)
def login_page(error: str = ""):
    return HTMLResponse(render_login(error=bool(error)))


@router.post("/admin/login")
async def login_submit(request: Request, db: Session = Depends(get_db)):
    form = await request.form()
    email = str(form.get("email", "")).strip()
    password = str(form.get("password", ""))

    if email:
        user = db_get_user_by_email(db, email)
        if user is None or not verify_password(password, user.password_hash):
            log.info("Échec de connexion éditeur (%s)", email)
            return RedirectResponse("/admin/login?error=1", status_code=303)
        token = db_set_session_token(db, user, new_session_token()).session_token
        log.info("Éditeur %s connecté", user.id)
    else:
        if not password or not _same(password, _admin_password()):
            log.info("Échec de connexion administrateur")
            return RedirectResponse("/admin/login?error=1", status_code=303)
        token = _admin_token()

    resp = RedirectResponse("/api/dashboard", status_code=303)
    set_session_cookie(resp, token)
    return resp


@router.get("/admin/logout")
def logout(request: Request, db: Session = Depends(get_db)):
    user = db_get_user_by_token(db, request.cookies.get(SESSION_COOKIE, ""))
    if user is not None:
        db_set_session_token(db, user, None)
    resp = RedirectResponse("/admin/login", status_code=303)
    resp.delete_cookie(SESSION_COOKIE)
    return resp
