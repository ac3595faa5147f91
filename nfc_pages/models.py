"""
Data models — User, Page, NfcTag, PageTap
SQLAlchemy (SQLite) + Pydantic v2
"""
from datetime import datetime
from typing import List, Optional

import sqlalchemy as sa
from pydantic import BaseModel, Field
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


# ── ORM ────────────────────────────────────────────────────────────────

class Base(DeclarativeBase):
    pass


class UserDB(Base):
    __tablename__ = "users"
    id:            Mapped[int]           = mapped_column(sa.Integer, primary_key=True, autoincrement=True)
    name:          Mapped[str]           = mapped_column(sa.String, nullable=False)
    email:         Mapped[str]           = mapped_column(sa.String, nullable=False, unique=True)
    password_hash: Mapped[str]           = mapped_column(sa.String, nullable=False)
    access_role:   Mapped[str]           = mapped_column(sa.String, nullable=False, default="Editor")
    # Jeton de session courant (cookie ou header) — null = déconnecté
    session_token: Mapped[Optional[str]] = mapped_column(sa.String, nullable=True, unique=True)
    created_at:    Mapped[datetime]      = mapped_column(sa.DateTime, default=datetime.utcnow)
    updated_at:    Mapped[datetime]      = mapped_column(sa.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    pages: Mapped[List["PageDB"]] = relationship("PageDB", back_populates="author")


class PageDB(Base):
    __tablename__ = "pages"
    id:         Mapped[int]           = mapped_column(sa.Integer, primary_key=True, autoincrement=True)
    name:       Mapped[str]           = mapped_column(sa.String, nullable=False)
    slug:       Mapped[str]           = mapped_column(sa.String, nullable=False, unique=True)
    content:    Mapped[str]           = mapped_column(sa.Text, nullable=False, default='{"components": []}')
    author_id:  Mapped[Optional[int]] = mapped_column(sa.Integer, sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    published:  Mapped[bool]          = mapped_column(sa.Boolean, default=False)
    created_at: Mapped[datetime]      = mapped_column(sa.DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime]      = mapped_column(sa.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    author: Mapped[Optional["UserDB"]] = relationship("UserDB", back_populates="pages")
    tags:   Mapped[List["NfcTagDB"]]   = relationship("NfcTagDB", back_populates="assigned_page")


class NfcTagDB(Base):
    __tablename__ = "nfc_tags"
    id:         Mapped[int]           = mapped_column(sa.Integer, primary_key=True, autoincrement=True)
    name:       Mapped[str]           = mapped_column(sa.String, nullable=False)
    # UID physique — posé une fois à l'enregistrement de la carte
    tag_uid:    Mapped[Optional[str]] = mapped_column(sa.String, nullable=True, unique=True)
    page_id:    Mapped[Optional[int]] = mapped_column(sa.Integer, sa.ForeignKey("pages.id", ondelete="SET NULL"), nullable=True)
    created_at: Mapped[datetime]      = mapped_column(sa.DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime]      = mapped_column(sa.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    assigned_page: Mapped[Optional["PageDB"]] = relationship("PageDB", back_populates="tags")
    taps:          Mapped[List["PageTapDB"]]  = relationship("PageTapDB", back_populates="tag", cascade="all, delete-orphan")


class PageTapDB(Base):
    __tablename__ = "page_taps"
    id:         Mapped[int]           = mapped_column(sa.Integer, primary_key=True, autoincrement=True)
    tag_id:     Mapped[int]           = mapped_column(sa.Integer, sa.ForeignKey("nfc_tags.id"), nullable=False)
    page_id:    Mapped[Optional[int]] = mapped_column(sa.Integer, sa.ForeignKey("pages.id", ondelete="SET NULL"), nullable=True)
    ip_address: Mapped[Optional[str]] = mapped_column(sa.String, nullable=True)
    timestamp:  Mapped[datetime]      = mapped_column(sa.DateTime, default=datetime.utcnow)

    tag: Mapped["NfcTagDB"] = relationship("NfcTagDB", back_populates="taps")


# ── PYDANTIC SCHEMAS ────────────────────────────────────────────────────

class UserRegisterInput(BaseModel):
    name:     str = ""
    email:    str = ""
    password: str = ""


class UserLoginInput(BaseModel):
    email:    str = ""
    password: str = ""


class PageCreate(BaseModel):
    name:      str           = ""
    slug:      str           = ""
    content:   Optional[str] = None
    published: bool          = False


class PageUpdate(BaseModel):
    name:      Optional[str]  = None
    content:   Optional[str]  = None
    published: Optional[bool] = None


class BlockAppendInput(BaseModel):
    type: str


class BlockMoveInput(BaseModel):
    from_position: int
    to_position:   int


class TagCreate(BaseModel):
    name: str = ""


class TagUpdate(BaseModel):
    name:    Optional[str] = None
    tag_uid: Optional[str] = None
    page_id: Optional[int] = None


class TagRegisterInput(BaseModel):
    """Enregistrement d'une carte physique (saisie manuelle ou lecture WebNFC)."""
    tag_uid: str           = Field(min_length=1)
    name:    Optional[str] = None


class TagAssignInput(BaseModel):
    tag_id:  int
    page_id: int


class PreviewInput(BaseModel):
    title:   str = "Preview"
    content: str = ""
