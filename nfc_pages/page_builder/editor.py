"""
Éditeur de blocs — copie de travail mutable d'un Document.

Positions toujours denses (0..n-1). Chaque opération valide ses indices et
ses champs *avant* de modifier la liste : un échec laisse le document intact.
"""
import logging
from typing import Any, Iterator, List, Mapping, Optional, Tuple

from .blocks import BaseComponent, Document, TextBlock, UnknownComponent
from .codec import decode_or_raise, encode
from .errors import FieldMismatch, IndexOutOfRange, UnknownComponentType
from .registry import ComponentRegistry, DEFAULT_REGISTRY, wire_fields
from .sanitize import sanitize_html

log = logging.getLogger(__name__)


class BlockEditor:
    """
    Éditeur de page par blocs.

    Usage:
        >>> editor = BlockEditor()
        >>> editor.append("HeroSection")
        >>> editor.update_at(0, {"title": "Welcome"})
        >>> content = editor.encode()
    """

    def __init__(self, document: Optional[Document] = None, registry: ComponentRegistry = DEFAULT_REGISTRY):
        self.registry = registry
        self._components: List[BaseComponent] = []
        for component in (document.components if document else ()):
            if isinstance(component, UnknownComponent) or not registry.is_registered(component.type):
                raise UnknownComponentType(component.type, registry.types())
            self._components.append(component)

    @classmethod
    def from_text(cls, text: Optional[str], registry: ComponentRegistry = DEFAULT_REGISTRY) -> "BlockEditor":
        """Construit un éditeur depuis le contenu stocké (DocumentDecodeError si illisible)."""
        return cls(decode_or_raise(text, registry), registry)

    # ── Lecture ───────────────────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self._components)

    def __iter__(self) -> Iterator[BaseComponent]:
        return iter(tuple(self._components))

    @property
    def components(self) -> Tuple[BaseComponent, ...]:
        return tuple(self._components)

    @property
    def document(self) -> Document:
        return Document(components=self._components)

    def encode(self) -> str:
        return encode(self.document)

    def _check(self, position: int) -> None:
        if isinstance(position, bool) or not isinstance(position, int) or not 0 <= position < len(self._components):
            raise IndexOutOfRange(position, len(self._components))

    # ── Mutations ─────────────────────────────────────────────────────────

    def append(self, component_type: str) -> BaseComponent:
        component = self.registry.default(component_type)
        self._components.append(component)
        return component

    def update_at(self, position: int, fields: Mapping[str, Any]) -> BaseComponent:
        """Fusionne des champs partiels dans le bloc à `position` (type conservé)."""
        self._check(position)
        current = self._components[position]
        aliases = wire_fields(type(current))
        by_attr = {attr: alias for alias, attr in aliases.items()}

        updates = {}
        unknown = []
        for name, value in fields.items():
            if name in aliases:
                updates[name] = value
            elif name in by_attr:
                updates[by_attr[name]] = value
            else:
                # `type` inclus : changer de variante n'est pas une mise à jour
                unknown.append(name)
        if unknown:
            raise FieldMismatch(current.type, unknown, "champ(s) absent(s) de la variante")

        if isinstance(current, TextBlock) and isinstance(updates.get("content"), str):
            updates["content"] = sanitize_html(updates["content"])

        merged = {**current.to_wire(), **updates}
        component = self.registry.validate(merged)
        self._components[position] = component
        return component

    def remove_at(self, position: int) -> BaseComponent:
        self._check(position)
        return self._components.pop(position)

    def move_to(self, from_position: int, to_position: int) -> None:
        """Déplace un bloc ; les blocs intermédiaires glissent d'un cran."""
        self._check(from_position)
        self._check(to_position)
        if from_position == to_position:
            return
        component = self._components.pop(from_position)
        self._components.insert(to_position, component)
        log.debug("Bloc %s déplacé %d → %d", component.type, from_position, to_position)
