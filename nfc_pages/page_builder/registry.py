"""
Registry des blocs — ensemble fermé des types de composants.

Valeur immuable construite une fois au démarrage (DEFAULT_REGISTRY) puis
passée à l'éditeur, au codec et au renderer.
"""
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Type

from pydantic import ValidationError

from .blocks import BaseComponent, HeroSection, TextBlock, Spacer
from .errors import FieldMismatch, UnknownComponentType


def wire_fields(model: Type[BaseComponent]) -> Dict[str, str]:
    """Nom stocké (alias) → nom d'attribut Python, hors `type`."""
    return {
        (info.alias or name): name
        for name, info in model.model_fields.items()
        if name != "type"
    }


class ComponentRegistry:
    def __init__(self, components: Iterable[Type[BaseComponent]]):
        table = {}
        for cls in components:
            table[cls.model_fields["type"].default] = cls
        self._table: Mapping[str, Type[BaseComponent]] = MappingProxyType(table)

    def __contains__(self, component_type: object) -> bool:
        return component_type in self._table

    def __repr__(self) -> str:
        return f"ComponentRegistry({self.types()})"

    def types(self) -> List[str]:
        """Types connus, dans l'ordre d'enregistrement (menu « ajouter un bloc »)."""
        return list(self._table)

    def is_registered(self, component_type: Optional[str]) -> bool:
        return component_type in self._table

    def model_for(self, component_type: str) -> Type[BaseComponent]:
        try:
            return self._table[component_type]
        except (KeyError, TypeError):
            raise UnknownComponentType(str(component_type), self._table) from None

    def default(self, component_type: str) -> BaseComponent:
        """Valeur initiale d'un nouveau bloc."""
        model = self.model_for(component_type)
        return model.model_validate({"type": component_type, **model.defaults})

    def fields(self, component_type: str) -> List[str]:
        return list(wire_fields(self.model_for(component_type)))

    def validate(self, candidate: Mapping[str, Any]) -> BaseComponent:
        """
        Vérifie qu'un dict candidat a exactement la forme de sa variante.

        Champ manquant, champ en trop ou valeur invalide → FieldMismatch.
        `type` absent ou non enregistré → UnknownComponentType.
        """
        component_type = candidate.get("type")
        model = self.model_for(component_type)

        expected = set(wire_fields(model))
        given    = set(candidate) - {"type"}
        if given != expected:
            missing = expected - given
            extra   = given - expected
            reason  = []
            if missing: reason.append(f"manquant(s) : {sorted(missing)}")
            if extra:   reason.append(f"en trop : {sorted(extra)}")
            raise FieldMismatch(component_type, missing | extra, ", ".join(reason))

        try:
            return model.model_validate(dict(candidate))
        except ValidationError as e:
            bad = {str(err["loc"][0]) for err in e.errors() if err.get("loc")}
            raise FieldMismatch(component_type, bad, str(e.errors()[0]["msg"])) from e

    def catalog(self) -> List[Dict[str, Any]]:
        """Catalogue des blocs pour l'UI : type, libellé, valeurs initiales, JSON schema."""
        return [
            {
                "type":     component_type,
                "label":    model.label,
                "defaults": dict(model.defaults),
                "schema":   model.model_json_schema(by_alias=True),
            }
            for component_type, model in self._table.items()
        ]


def default_registry() -> ComponentRegistry:
    return ComponentRegistry([HeroSection, TextBlock, Spacer])


DEFAULT_REGISTRY = default_registry()
