"""Bloc HeroSection — titre + description sur fond coloré."""
from typing import Any, ClassVar, Dict, Literal

from pydantic import Field

from .base import BaseComponent


class HeroSection(BaseComponent):
    label:    ClassVar[str]            = "Hero Section"
    defaults: ClassVar[Dict[str, Any]] = {
        "title":       "New Hero Title",
        "description": "Enter a compelling description.",
        "bgColor":     "#FFFFFF",
    }

    type:        Literal["HeroSection"] = "HeroSection"
    title:       str
    description: str
    # hex (#F0F4F8) → style inline, sinon classe CSS (bg-gray-100)
    bg_color:    str = Field(alias="bgColor")
