"""
Accès persistance utilisé par le resolver et l'éditeur.

PageStore décrit ce que le cœur consomme ; SqlPageStore l'implémente
sur la session SQLAlchemy de la requête.
"""
from dataclasses import dataclass
from typing import Optional, Protocol, Union

from sqlalchemy.orm import Session

from .database import db_get_page, db_get_tag, db_get_tag_by_uid, db_update_page


@dataclass(frozen=True)
class TagRecord:
    id:      int
    name:    str
    tag_uid: Optional[str]
    page_id: Optional[int]


@dataclass(frozen=True)
class PageRecord:
    id:      int
    name:    str
    slug:    str
    content: Optional[str]


class PageStore(Protocol):
    def load_tag(self, identifier: Union[int, str]) -> Optional[TagRecord]: ...
    def load_page_content(self, page_id: int) -> Optional[PageRecord]: ...
    def save_page_content(self, page_id: int, content: str) -> bool: ...


class SqlPageStore:
    def __init__(self, db: Session):
        self.db = db

    def load_tag(self, identifier: Union[int, str]) -> Optional[TagRecord]:
        """Par id numérique d'abord, puis par UID physique."""
        tag = None
        text = str(identifier).strip()
        if text.isascii() and text.isdigit():
            tag = db_get_tag(self.db, int(text))
        if tag is None and text:
            tag = db_get_tag_by_uid(self.db, text)
        if tag is None:
            return None
        return TagRecord(id=tag.id, name=tag.name, tag_uid=tag.tag_uid, page_id=tag.page_id)

    def load_page_content(self, page_id: int) -> Optional[PageRecord]:
        page = db_get_page(self.db, page_id)
        if page is None:
            return None
        return PageRecord(id=page.id, name=page.name, slug=page.slug, content=page.content)

    def save_page_content(self, page_id: int, content: str) -> bool:
        page = db_get_page(self.db, page_id)
        if page is None:
            return False
        db_update_page(self.db, page, content=content)
        return True
