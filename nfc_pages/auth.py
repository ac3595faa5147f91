"""
Comptes éditeurs — hachage bcrypt des mots de passe + jetons de session.

bcrypt ne lit que les 72 premiers octets : un mot de passe plus long est
refusé à l'inscription plutôt que tronqué en silence.
"""
import secrets

import bcrypt

BCRYPT_ROUNDS      = 10
MAX_PASSWORD_BYTES = 72
MIN_PASSWORD_LEN   = 8

DEFAULT_ROLE = "Editor"


def password_problem(password: str) -> str:
    """Message d'erreur si le mot de passe est inutilisable, sinon chaîne vide."""
    if len(password) < MIN_PASSWORD_LEN:
        return f"Password must be at least {MIN_PASSWORD_LEN} characters."
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        return f"Password must be at most {MAX_PASSWORD_BYTES} bytes."
    return ""


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    raw = password.encode("utf-8")
    if not raw or len(raw) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(raw, password_hash.encode("ascii"))
    except ValueError:
        # hash corrompu en base
        return False


def new_session_token() -> str:
    return secrets.token_urlsafe(32)
