"""
Comptes éditeurs — API JSON.

POST /api/auth/register  → crée un éditeur {name, email, password} (éditeur connecté requis)
POST /api/auth/login     → {email, password} → jeton de session (+ cookie)
POST /api/auth/logout    → invalide le jeton courant
GET  /api/auth/me        → identité du porteur du jeton
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ...auth import DEFAULT_ROLE, hash_password, new_session_token, password_problem, verify_password
from ...database import db_create_user, db_get_user_by_email, db_set_session_token, get_db
from ...models import UserDB, UserLoginInput, UserRegisterInput
from .login import SESSION_COOKIE, require_editor, set_session_cookie

log = logging.getLogger(__name__)
router = APIRouter(prefix="/api/auth", tags=["Auth"])


def user_json(u: UserDB) -> dict:
    return {
        "id":          u.id,
        "name":        u.name,
        "email":       u.email,
        "access_role": u.access_role,
        "created_at":  u.created_at.isoformat() if u.created_at else None,
    }


@router.post("/register", status_code=201)
def register(req: UserRegisterInput, editor: Optional[UserDB] = Depends(require_editor),
             db: Session = Depends(get_db)):
    name  = req.name.strip()
    email = req.email.strip().lower()
    if not name or not email or not req.password:
        raise HTTPException(400, "All fields are required.")
    if "@" not in email:
        raise HTTPException(400, "Invalid email address.")
    problem = password_problem(req.password)
    if problem:
        raise HTTPException(400, problem)
    if db_get_user_by_email(db, email):
        raise HTTPException(409, "A user with this email already exists.")

    user = db_create_user(db, UserDB(
        name=name,
        email=email,
        password_hash=hash_password(req.password),
        access_role=DEFAULT_ROLE,
    ))
    log.info("Éditeur %s créé par %s", user.id, editor.id if editor else "admin")
    return {"message": "User registered successfully.", "user": user_json(user)}


@router.post("/login")
def login(req: UserLoginInput, db: Session = Depends(get_db)):
    email = req.email.strip()
    if not email or not req.password:
        raise HTTPException(400, "Email and password are required.")
    user = db_get_user_by_email(db, email)
    if user is None or not verify_password(req.password, user.password_hash):
        raise HTTPException(401, "Invalid credentials.")

    user = db_set_session_token(db, user, new_session_token())
    resp = JSONResponse({
        "message": "Logged in successfully.",
        "token":   user.session_token,
        "user":    user_json(user),
    })
    set_session_cookie(resp, user.session_token)
    return resp


@router.post("/logout")
def logout(editor: Optional[UserDB] = Depends(require_editor), db: Session = Depends(get_db)):
    if editor is not None:
        db_set_session_token(db, editor, None)
    resp = JSONResponse({"message": "Logged out successfully."})
    resp.delete_cookie(SESSION_COOKIE)
    return resp


@router.get("/me")
def me(editor: Optional[UserDB] = Depends(require_editor)):
    return {"admin": editor is None, "user": user_json(editor) if editor else None}
