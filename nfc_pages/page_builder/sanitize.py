"""
Nettoyage du HTML des TextBlock — liste blanche de balises/attributs.

Appliqué à l'enregistrement (éditeur + API pages) : le renderer injecte
ensuite le contenu stocké tel quel.
"""
from html import escape
from html.parser import HTMLParser
from typing import List, Optional, Tuple
from urllib.parse import urlparse

from .blocks import Document, TextBlock

ALLOWED_TAGS = frozenset({
    "p", "br", "hr", "strong", "b", "em", "i", "u", "s",
    "a", "ul", "ol", "li", "blockquote", "code", "pre", "span",
    "h1", "h2", "h3", "h4", "h5", "h6",
})
VOID_TAGS = frozenset({"br", "hr"})
# Contenu supprimé avec la balise
DROP_CONTENT_TAGS = frozenset({"script", "style", "iframe", "object", "embed", "template"})

ALLOWED_ATTRS = {
    "a": {"href", "title"},
}
GLOBAL_ATTRS = {"class"}
SAFE_SCHEMES = {"", "http", "https", "mailto"}


def _safe_url(value: str) -> bool:
    cleaned = "".join(ch for ch in value if not ch.isspace() and ch.isprintable())
    return urlparse(cleaned).scheme.lower() in SAFE_SCHEMES


class _Sanitizer(HTMLParser):
    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.out: List[str] = []
        self.open: List[str] = []
        self._skip = 0

    def _attrs(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> str:
        allowed = ALLOWED_ATTRS.get(tag, set()) | GLOBAL_ATTRS
        parts = []
        for name, value in attrs:
            name = name.lower()
            if name not in allowed or value is None:
                continue
            if name == "href" and not _safe_url(value):
                continue
            parts.append(f' {name}="{escape(value, quote=True)}"')
        return "".join(parts)

    def handle_starttag(self, tag, attrs):
        if tag in DROP_CONTENT_TAGS:
            self._skip += 1
            return
        if self._skip or tag not in ALLOWED_TAGS:
            return
        self.out.append(f"<{tag}{self._attrs(tag, attrs)}>")
        if tag not in VOID_TAGS:
            self.open.append(tag)

    def handle_startendtag(self, tag, attrs):
        if self._skip or tag not in ALLOWED_TAGS:
            return
        self.out.append(f"<{tag}{self._attrs(tag, attrs)}>")
        if tag not in VOID_TAGS:
            self.out.append(f"</{tag}>")

    def handle_endtag(self, tag):
        if tag in DROP_CONTENT_TAGS:
            self._skip = max(0, self._skip - 1)
            return
        if self._skip or tag not in self.open:
            return
        # ferme les balises laissées ouvertes à l'intérieur
        while self.open:
            last = self.open.pop()
            self.out.append(f"</{last}>")
            if last == tag:
                break

    def handle_data(self, data):
        if not self._skip:
            self.out.append(escape(data, quote=False))

    def result(self) -> str:
        self.close()
        tail = "".join(f"</{t}>" for t in reversed(self.open))
        return "".join(self.out) + tail


def sanitize_html(markup: str) -> str:
    """HTML auteur → HTML restreint à la liste blanche (texte échappé)."""
    if not markup:
        return ""
    parser = _Sanitizer()
    parser.feed(markup)
    return parser.result()


def sanitize_document(document: Document) -> Document:
    """Nettoie le contenu de chaque TextBlock d'un Document (les autres blocs sont inchangés)."""
    return Document(components=[
        c.model_copy(update={"content": sanitize_html(c.content)}) if isinstance(c, TextBlock) else c
        for c in document.components
    ])
