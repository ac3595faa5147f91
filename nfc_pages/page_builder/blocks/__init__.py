"""
Blocs — exports publics + ComponentUnion discriminé.
"""
from typing import Annotated, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from .base import BaseComponent, UnknownComponent
from .hero import HeroSection
from .text import TextBlock
from .spacer import Spacer

# Union discriminée par `type` — utilisable dans Pydantic avec discriminator
ComponentUnion = Annotated[
    Union[
        HeroSection,
        TextBlock,
        Spacer,
    ],
    Field(discriminator="type"),
]

AnyComponent = Union[HeroSection, TextBlock, Spacer, UnknownComponent]


class Document(BaseModel):
    """Liste ordonnée de blocs (ordre de rendu = ordre de la liste). Peut être vide."""
    model_config = ConfigDict(frozen=True)

    components: Tuple[AnyComponent, ...] = ()

    def __len__(self) -> int:
        return len(self.components)


__all__ = [
    "BaseComponent", "UnknownComponent",
    "HeroSection", "TextBlock", "Spacer",
    "ComponentUnion", "AnyComponent", "Document",
]
