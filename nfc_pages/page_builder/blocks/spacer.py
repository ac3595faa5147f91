"""Bloc Spacer — espace vertical, hauteur en unités de l'échelle d'espacement (1 = 0.25rem)."""
from typing import Any, ClassVar, Dict, Literal

from pydantic import Field

from .base import BaseComponent


class Spacer(BaseComponent):
    label:    ClassVar[str]            = "Spacer"
    defaults: ClassVar[Dict[str, Any]] = {"height": 16}

    type:   Literal["Spacer"] = "Spacer"
    height: int = Field(gt=0, strict=True)
