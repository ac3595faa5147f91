"""SQLite — init + session + CRUD helpers"""
import os
from pathlib import Path
from typing import List, Optional

from sqlalchemy import create_engine, func
from sqlalchemy.orm import Session, sessionmaker

from .models import Base, NfcTagDB, PageDB, PageTapDB, UserDB

DATA_DIR = Path(__file__).parent.parent / "data"


def _db_url() -> str:
    return f"sqlite:///{os.getenv('DB_PATH', str(DATA_DIR / 'nfc_pages.db'))}"


def _make_engine(url: str):
    return create_engine(url, connect_args={"check_same_thread": False})


ENGINE       = _make_engine(_db_url())
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=ENGINE)


def init_db():
    """Crée les tables. Relit DB_PATH à chaque appel (base temporaire des tests)."""
    global ENGINE
    url = _db_url()
    if str(ENGINE.url) != url:
        ENGINE.dispose()
        ENGINE = _make_engine(url)
        SessionLocal.configure(bind=ENGINE)
    if not os.getenv("DB_PATH"):
        DATA_DIR.mkdir(exist_ok=True)
    Base.metadata.create_all(bind=ENGINE)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# ── User ──
def db_create_user(db: Session, obj: UserDB) -> UserDB:
    db.add(obj); db.commit(); db.refresh(obj); return obj

def db_get_user_by_email(db: Session, email: str) -> Optional[UserDB]:
    return db.query(UserDB).filter(func.lower(UserDB.email) == email.lower()).first()

def db_get_user_by_token(db: Session, token: str) -> Optional[UserDB]:
    if not token:
        return None
    return db.query(UserDB).filter_by(session_token=token).first()

def db_set_session_token(db: Session, user: UserDB, token: Optional[str]) -> UserDB:
    user.session_token = token
    db.commit(); db.refresh(user); return user


# ── Page ──
def db_create_page(db: Session, obj: PageDB) -> PageDB:
    db.add(obj); db.commit(); db.refresh(obj); return obj

def db_get_page(db: Session, page_id: int) -> Optional[PageDB]:
    return db.get(PageDB, page_id)

def db_get_page_by_slug(db: Session, slug: str) -> Optional[PageDB]:
    return db.query(PageDB).filter_by(slug=slug).first()

def db_list_pages(db: Session) -> List[PageDB]:
    return db.query(PageDB).order_by(PageDB.created_at.desc(), PageDB.id.desc()).all()

def db_update_page(db: Session, page: PageDB, **kwargs) -> PageDB:
    for k, v in kwargs.items():
        setattr(page, k, v)
    db.commit(); db.refresh(page); return page

def db_delete_page(db: Session, page: PageDB):
    """Supprime la page ; les tags qui la pointaient redeviennent non assignés."""
    db.query(NfcTagDB).filter_by(page_id=page.id).update({"page_id": None})
    db.query(PageTapDB).filter_by(page_id=page.id).update({"page_id": None})
    db.delete(page); db.commit()


# ── NfcTag ──
def db_create_tag(db: Session, obj: NfcTagDB) -> NfcTagDB:
    db.add(obj); db.commit(); db.refresh(obj); return obj

def db_get_tag(db: Session, tag_id: int) -> Optional[NfcTagDB]:
    return db.get(NfcTagDB, tag_id)

def db_get_tag_by_uid(db: Session, tag_uid: str) -> Optional[NfcTagDB]:
    return db.query(NfcTagDB).filter_by(tag_uid=tag_uid).first()

def db_list_tags(db: Session) -> List[NfcTagDB]:
    return db.query(NfcTagDB).order_by(NfcTagDB.created_at.desc(), NfcTagDB.id.desc()).all()

def db_update_tag(db: Session, tag: NfcTagDB, **kwargs) -> NfcTagDB:
    for k, v in kwargs.items():
        setattr(tag, k, v)
    db.commit(); db.refresh(tag); return tag

def db_delete_tag(db: Session, tag: NfcTagDB):
    db.delete(tag); db.commit()


# ── PageTap ──
def db_record_tap(db: Session, tag_id: int, page_id: Optional[int], ip_address: Optional[str]) -> PageTapDB:
    tap = PageTapDB(tag_id=tag_id, page_id=page_id, ip_address=ip_address)
    db.add(tap); db.commit(); db.refresh(tap); return tap


# ── Stats ──
def db_dashboard_counts(db: Session) -> dict:
    total_pages = db.query(PageDB).count()
    total_tags  = db.query(NfcTagDB).count()
    registered  = db.query(NfcTagDB).filter(NfcTagDB.tag_uid.isnot(None)).count()
    assigned    = db.query(NfcTagDB).filter(NfcTagDB.page_id.isnot(None)).count()
    # Page « live » = liée à au moins un tag
    live_pages  = db.query(func.count(func.distinct(NfcTagDB.page_id))).filter(NfcTagDB.page_id.isnot(None)).scalar() or 0
    published   = db.query(PageDB).filter_by(published=True).count()
    return {
        "page": {
            "total":     total_pages,
            "live":      live_pages,
            "draft":     total_pages - live_pages,
            "published": published,
        },
        "tag": {
            "total":        total_tags,
            "registered":   registered,
            "unregistered": total_tags - registered,
            "assigned":     assigned,
            "unassigned":   total_tags - assigned,
        },
    }


def db_tap_counts(db: Session) -> list:
    """[(NfcTagDB, nb_taps)] — tags les plus tapés d'abord."""
    taps = func.count(PageTapDB.id).label("tap_count")
    return (
        db.query(NfcTagDB, taps)
        .outerjoin(PageTapDB, PageTapDB.tag_id == NfcTagDB.id)
        .group_by(NfcTagDB.id)
        .order_by(taps.desc(), NfcTagDB.id)
        .all()
    )
