"""
Codec du document — Document ⇄ texte JSON stocké dans pages.content.

Format durable :
    {"components": [{"type": "HeroSection", "title": "...", ...}, ...]}

decode() ne lève jamais sur une entrée invalide : il retourne une
DecodeError (MALFORMED / INVALID_SHAPE) que l'appelant peut rendre.
"""
import json
from typing import Any, Optional, Union

from pydantic import ValidationError

from .blocks import Document, UnknownComponent
from .errors import DecodeError, DocumentDecodeError
from .registry import ComponentRegistry, DEFAULT_REGISTRY

COMPONENTS_KEY = "components"

EMPTY_DOCUMENT = Document()


def encode(document: Document) -> str:
    payload = {COMPONENTS_KEY: [c.to_wire() for c in document.components]}
    return json.dumps(payload, ensure_ascii=False)


def _decode_component(raw: Any, position: int, registry: ComponentRegistry):
    if not isinstance(raw, dict):
        return DecodeError.invalid_shape(f"components[{position}] n'est pas un objet")
    component_type = raw.get("type")
    if not isinstance(component_type, str) or not component_type:
        return DecodeError.invalid_shape(f"components[{position}] sans type")

    if not registry.is_registered(component_type):
        # Conservé pour le rendu (nœud d'erreur) et la réécriture sans perte
        return UnknownComponent.model_validate(raw)

    try:
        return registry.model_for(component_type).model_validate(raw)
    except ValidationError as e:
        first = e.errors()[0]
        loc = ".".join(str(p) for p in first.get("loc", ()))
        return DecodeError.invalid_shape(f"components[{position}] ({component_type}) : {loc} {first['msg']}")


def decode(text: Optional[str], registry: ComponentRegistry = DEFAULT_REGISTRY) -> Union[Document, DecodeError]:
    """
    Texte stocké → Document, ou DecodeError.

    - None / "" / blancs       → Document vide
    - JSON invalide            → MALFORMED
    - forme incorrecte         → INVALID_SHAPE
    - champs inconnus d'un bloc → ignorés (compat ascendante)
    """
    if text is None or not text.strip():
        return EMPTY_DOCUMENT

    try:
        data = json.loads(text)
    except (ValueError, TypeError) as e:
        return DecodeError.malformed(str(e))
    except RecursionError:
        return DecodeError.malformed("imbrication JSON trop profonde")

    if data is None:
        return EMPTY_DOCUMENT
    if not isinstance(data, dict):
        return DecodeError.invalid_shape("le document n'est pas un objet")

    raw_components = data.get(COMPONENTS_KEY)
    if raw_components is None:
        return EMPTY_DOCUMENT
    if not isinstance(raw_components, list):
        return DecodeError.invalid_shape(f"'{COMPONENTS_KEY}' n'est pas une liste")

    components = []
    for i, raw in enumerate(raw_components):
        component = _decode_component(raw, i, registry)
        if isinstance(component, DecodeError):
            return component
        components.append(component)

    return Document(components=components)


def decode_or_raise(text: Optional[str], registry: ComponentRegistry = DEFAULT_REGISTRY) -> Document:
    """Comme decode(), mais lève DocumentDecodeError (usage routes API)."""
    result = decode(text, registry)
    if isinstance(result, DecodeError):
        raise DocumentDecodeError(result)
    return result
