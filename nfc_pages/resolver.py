"""
Resolver — identifiant de tag → contenu de la page assignée.

Trois issues, toutes normales : ResolvedContent, NotFound, Unassigned.
Un contenu stocké illisible se comporte comme une absence de contenu.
"""
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Union

from .page_builder import DecodeError, Document, decode
from .store import PageStore, TagRecord

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedContent:
    page_name: str
    document:  Document
    tag:       TagRecord
    page_id:   int


@dataclass(frozen=True)
class NotFound:
    identifier: str


@dataclass(frozen=True)
class Unassigned:
    tag:    TagRecord
    reason: str = "no_page"


Resolution = Union[ResolvedContent, NotFound, Unassigned]


class AssignmentResolver:
    def __init__(self, store: PageStore, codec: Callable[[Optional[str]], Union[Document, DecodeError]] = decode):
        self.store = store
        self.codec = codec

    def resolve(self, tag_identifier: Union[int, str]) -> Resolution:
        tag = self.store.load_tag(tag_identifier)
        if tag is None:
            return NotFound(str(tag_identifier))
        if tag.page_id is None:
            return Unassigned(tag)

        page = self.store.load_page_content(tag.page_id)
        if page is None:
            log.warning("Tag %s → page %s introuvable", tag.id, tag.page_id)
            return Unassigned(tag, "page_missing")
        if not page.content or not page.content.strip():
            return Unassigned(tag, "empty_content")

        document = self.codec(page.content)
        if isinstance(document, DecodeError):
            log.warning("Page %s : contenu illisible (%s) — %s", page.id, document.kind.value, document.message)
            return Unassigned(tag, "invalid_content")

        return ResolvedContent(page_name=page.name, document=document, tag=tag, page_id=page.id)
