"""Bloc TextBlock — contenu riche (HTML), nettoyé à l'enregistrement."""
from typing import Any, ClassVar, Dict, Literal

from .base import BaseComponent


class TextBlock(BaseComponent):
    label:    ClassVar[str]            = "Text Block"
    defaults: ClassVar[Dict[str, Any]] = {"content": "Start typing your body content here."}

    type:    Literal["TextBlock"] = "TextBlock"
    content: str
