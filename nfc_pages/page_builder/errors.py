"""
Erreurs du page_builder.

Les erreurs de forme (type inconnu, position invalide, champ hors variante)
sont levées ; l'erreur de décodage est une *valeur* (DecodeError) retournée
par codec.decode, avec DocumentDecodeError pour les appelants qui veulent
une exception.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Iterable


class PageBuilderError(Exception):
    """Erreur de base du page_builder."""


class UnknownComponentType(PageBuilderError):
    def __init__(self, component_type: str, known: Iterable[str] = ()):
        self.component_type = component_type
        self.known = list(known)
        super().__init__(f"Type de bloc inconnu : {component_type!r}. Registry : {self.known}")


class IndexOutOfRange(PageBuilderError):
    def __init__(self, position: int, size: int):
        self.position = position
        self.size = size
        super().__init__(f"Position {position} hors limites (taille {size})")


class FieldMismatch(PageBuilderError):
    """Champ(s) qui n'appartiennent pas à la variante, ou valeur invalide."""

    def __init__(self, component_type: str, fields: Iterable[str], reason: str = ""):
        self.component_type = component_type
        self.fields = sorted(fields)
        self.reason = reason
        msg = f"Champ(s) invalide(s) pour {component_type} : {self.fields}"
        if reason:
            msg += f" — {reason}"
        super().__init__(msg)


class DecodeErrorKind(str, Enum):
    MALFORMED     = "MALFORMED"
    INVALID_SHAPE = "INVALID_SHAPE"


@dataclass(frozen=True)
class DecodeError:
    kind: DecodeErrorKind
    message: str = ""

    @classmethod
    def malformed(cls, message: str = "") -> "DecodeError":
        return cls(DecodeErrorKind.MALFORMED, message)

    @classmethod
    def invalid_shape(cls, message: str = "") -> "DecodeError":
        return cls(DecodeErrorKind.INVALID_SHAPE, message)


class DocumentDecodeError(PageBuilderError):
    def __init__(self, error: DecodeError):
        self.error = error
        super().__init__(f"{error.kind.value}: {error.message}")
