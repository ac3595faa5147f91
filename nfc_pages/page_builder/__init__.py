"""
Page builder NFC — blocs typés, codec, éditeur, renderer.

Usage:
    >>> from nfc_pages.page_builder import BlockEditor, decode, render_page
    >>> editor = BlockEditor()
    >>> editor.append("HeroSection")
    >>> html = render_page("Accueil", editor.document)
"""
from .blocks import (
    BaseComponent, UnknownComponent,
    HeroSection, TextBlock, Spacer,
    ComponentUnion, AnyComponent, Document,
)
from .errors import (
    PageBuilderError, UnknownComponentType, IndexOutOfRange, FieldMismatch,
    DecodeError, DecodeErrorKind, DocumentDecodeError,
)
from .registry import ComponentRegistry, DEFAULT_REGISTRY, default_registry
from .codec import encode, decode, decode_or_raise, EMPTY_DOCUMENT
from .editor import BlockEditor
from .sanitize import sanitize_html, sanitize_document
from .renderer import render, render_component, render_page, render_not_assigned, render_not_found

__all__ = [
    # blocs
    "BaseComponent", "UnknownComponent",
    "HeroSection", "TextBlock", "Spacer",
    "ComponentUnion", "AnyComponent", "Document",
    # erreurs
    "PageBuilderError", "UnknownComponentType", "IndexOutOfRange", "FieldMismatch",
    "DecodeError", "DecodeErrorKind", "DocumentDecodeError",
    # registry + codec
    "ComponentRegistry", "DEFAULT_REGISTRY", "default_registry",
    "encode", "decode", "decode_or_raise", "EMPTY_DOCUMENT",
    # éditeur
    "BlockEditor", "sanitize_html", "sanitize_document",
    # rendu
    "render", "render_component", "render_page", "render_not_assigned", "render_not_found",
]
