"""
Bloc de base — tous les composants sont des modèles Pydantic figés,
discriminés par leur champ `type`.
"""
from typing import Any, ClassVar, Dict

from pydantic import BaseModel, ConfigDict


class BaseComponent(BaseModel):
    """Composant de base (classe parente des blocs HeroSection / TextBlock / Spacer)."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    # Libellé UI + valeurs initiales utilisées à l'ajout d'un bloc
    label:    ClassVar[str]            = ""
    defaults: ClassVar[Dict[str, Any]] = {}

    type: str

    def to_wire(self) -> Dict[str, Any]:
        """Forme stockée (alias camelCase du contrat JSON)."""
        return self.model_dump(by_alias=True)


class UnknownComponent(BaseModel):
    """
    Bloc dont le `type` n'est pas enregistré.
    Conservé tel quel (champs bruts) pour être réécrit sans perte et
    isolé au rendu.
    """
    model_config = ConfigDict(frozen=True, extra="allow")

    type: str

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump()
