"""
Tipos do formato de ID customizado.

FormatSpec e seus elementos são dataclasses imutáveis. O formato JSON
(`{"elements": [...]}`) é o mesmo salvo em Inventory.custom_id_format e
enviado pelo editor, então `from_dict`/`to_dict` precisam concordar byte a byte.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from inventoria.exceptions import ValidationError


MIN_ELEMENTS = 1
MAX_ELEMENTS = 10
MAX_FIXED_TEXT_LENGTH = 255
MIN_DIGITS_RANGE = (1, 10)


class ElementType(str, Enum):
    FIXED_TEXT = "FIXED_TEXT"
    RANDOM_20BIT = "RANDOM_20BIT"
    RANDOM_32BIT = "RANDOM_32BIT"
    RANDOM_6DIGIT = "RANDOM_6DIGIT"
    RANDOM_9DIGIT = "RANDOM_9DIGIT"
    GUID = "GUID"
    DATETIME = "DATETIME"
    SEQUENCE = "SEQUENCE"

    @property
    def is_numeric(self) -> bool:
        return self in NUMERIC_ELEMENT_TYPES

    @property
    def supports_case(self) -> bool:
        return self in (ElementType.FIXED_TEXT, ElementType.GUID)


NUMERIC_ELEMENT_TYPES = frozenset({
    ElementType.RANDOM_20BIT,
    ElementType.RANDOM_32BIT,
    ElementType.RANDOM_6DIGIT,
    ElementType.RANDOM_9DIGIT,
    ElementType.SEQUENCE,
})


class CaseTransform(str, Enum):
    NONE = "none"
    UPPER = "upper"
    LOWER = "lower"


class DateTimePattern(str, Enum):
    """Padrões de data/hora reconhecidos (sempre dígitos, largura fixa)."""

    YYYY = "YYYY"
    MM = "MM"
    DD = "DD"
    HH = "HH"
    mm = "mm"
    ss = "ss"
    YYYYMMDD = "YYYYMMDD"
    HHMMSS = "HHMMSS"
    YYYYMMDDHHMMSS = "YYYYMMDDHHMMSS"

    @property
    def strftime(self) -> str:
        return _STRFTIME[self]

    @property
    def width(self) -> int:
        return len(self.value)


_STRFTIME = {
    DateTimePattern.YYYY: "%Y",
    DateTimePattern.MM: "%m",
    DateTimePattern.DD: "%d",
    DateTimePattern.HH: "%H",
    DateTimePattern.mm: "%M",
    DateTimePattern.ss: "%S",
    DateTimePattern.YYYYMMDD: "%Y%m%d",
    DateTimePattern.HHMMSS: "%H%M%S",
    DateTimePattern.YYYYMMDDHHMMSS: "%Y%m%d%H%M%S",
}


@dataclass(frozen=True)
class OptionSet:
    """
    Opções de formatação de um elemento.

    Attributes:
        leading_zeros: Se True, completa com '0' à esquerda até min_digits
        min_digits: Largura mínima (1..10). Obrigatório se leading_zeros=True
        case: Transformação de caixa (só FIXED_TEXT e GUID)
        format: Padrão de data/hora (só DATETIME)
    """

    leading_zeros: bool = False
    min_digits: int | None = None
    case: CaseTransform = CaseTransform.NONE
    format: DateTimePattern | None = None

    @classmethod
    def from_dict(cls, data: dict | None, index: int | None = None) -> OptionSet:
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValidationError(
                code="invalid_options",
                message=f"Options of element at index {index} must be an object",
                context={"index": index},
            )

        leading_zeros = data.get("leadingZeros", False)
        if not isinstance(leading_zeros, bool):
            raise ValidationError(
                code="invalid_options",
                message=f"leadingZeros of element at index {index} must be a boolean",
                context={"index": index, "leadingZeros": leading_zeros},
            )

        min_digits = data.get("minDigits")
        if min_digits is not None and (isinstance(min_digits, bool) or not isinstance(min_digits, int)):
            raise ValidationError(
                code="invalid_min_digits",
                message=f"minDigits of element at index {index} must be an integer",
                context={"index": index, "minDigits": min_digits},
            )

        try:
            case = CaseTransform(data.get("case") or CaseTransform.NONE.value)
        except ValueError:
            raise ValidationError(
                code="invalid_case",
                message=f"Invalid case '{data.get('case')}' at index {index}",
                context={"index": index, "case": data.get("case")},
            )

        raw_format = data.get("format")
        pattern = None
        if raw_format is not None:
            try:
                pattern = DateTimePattern(raw_format)
            except ValueError:
                raise ValidationError(
                    code="invalid_datetime_format",
                    message=f"Invalid datetime format '{raw_format}' at index {index}",
                    context={"index": index, "format": raw_format},
                )

        return cls(
            leading_zeros=leading_zeros,
            min_digits=min_digits,
            case=case,
            format=pattern,
        )

    def to_dict(self) -> dict:
        """Serializa apenas as opções definidas."""
        data: dict[str, Any] = {}
        if self.leading_zeros:
            data["leadingZeros"] = True
        if self.min_digits is not None:
            data["minDigits"] = self.min_digits
        if self.case is not CaseTransform.NONE:
            data["case"] = self.case.value
        if self.format is not None:
            data["format"] = self.format.value
        return data


@dataclass(frozen=True)
class ElementDescriptor:
    """
    Um elemento do formato. A identidade é posicional.

    Attributes:
        type: Tipo do elemento
        value: Texto fixo (só FIXED_TEXT)
        options: Opções de formatação
    """

    type: ElementType
    value: str | None = None
    options: OptionSet = field(default_factory=OptionSet)

    @classmethod
    def from_dict(cls, data: Any, index: int | None = None) -> ElementDescriptor:
        if not isinstance(data, dict):
            raise ValidationError(
                code="invalid_element",
                message=f"Element at index {index} must be an object",
                context={"index": index},
            )
        raw_type = data.get("type")
        if not raw_type:
            raise ValidationError(
                code="missing_type",
                message=f"Element at index {index} must have a type",
                context={"index": index},
            )
        try:
            element_type = ElementType(raw_type)
        except ValueError:
            raise ValidationError(
                code="invalid_type",
                message=f"Invalid element type '{raw_type}' at index {index}",
                context={"index": index, "type": raw_type},
            )

        # `value` só tem significado para FIXED_TEXT; o editor pode enviar lixo nos demais.
        value = data.get("value") if element_type is ElementType.FIXED_TEXT else None
        return cls(
            type=element_type,
            value=value,
            options=OptionSet.from_dict(data.get("options"), index),
        )

    def to_dict(self) -> dict:
        data: dict[str, Any] = {"type": self.type.value}
        if self.type is ElementType.FIXED_TEXT:
            data["value"] = self.value
        options = self.options.to_dict()
        if options:
            data["options"] = options
        return data


@dataclass(frozen=True)
class FormatSpec:
    """Sequência ordenada de elementos que descreve um ID customizado."""

    elements: tuple[ElementDescriptor, ...]

    def __post_init__(self):
        if not isinstance(self.elements, tuple):
            object.__setattr__(self, "elements", tuple(self.elements))

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self):
        return iter(self.elements)

    @classmethod
    def from_dict(cls, data: Any) -> FormatSpec:
        """
        Constrói FormatSpec a partir do payload JSON decodificado.

        Raises:
            ValidationError: Se a estrutura for inválida. Regras semânticas
                (tamanho de texto, minDigits, etc.) ficam em validation.py.
        """
        if not isinstance(data, dict) or not isinstance(data.get("elements"), list):
            raise ValidationError(
                code="missing_elements",
                message="Format must contain an elements array",
            )
        return cls(
            elements=tuple(
                ElementDescriptor.from_dict(element, index)
                for index, element in enumerate(data["elements"])
            )
        )

    @classmethod
    def from_json(cls, raw: str | bytes) -> FormatSpec:
        try:
            data = json.loads(raw)
        except (TypeError, ValueError):
            raise ValidationError(code="invalid_json", message="Invalid JSON format")
        return cls.from_dict(data)

    def to_dict(self) -> dict:
        return {"elements": [element.to_dict() for element in self.elements]}

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    def canonical_json(self) -> str:
        # Ordenar keys para garantir determinismo do hash
        return json.dumps(self.to_dict(), sort_keys=True, separators=(",", ":"))

    @property
    def fingerprint(self) -> str:
        """Hash de conteúdo (SHA-256) usado como chave do cache de geradores."""
        return hashlib.sha256(self.canonical_json().encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class GenerationContext:
    """
    Snapshot por tentativa de geração.

    Attributes:
        inventory_id: Inventário dono do namespace
        current_sequence_count: Quantidade de itens no inventário no momento da tentativa
        now: Timestamp usado por elementos DATETIME
    """

    inventory_id: Any
    current_sequence_count: int
    now: datetime


def default_options(element_type: ElementType) -> OptionSet:
    """Opções iniciais sugeridas pelo editor para um novo elemento."""
    if element_type is ElementType.DATETIME:
        return OptionSet(format=DateTimePattern.YYYYMMDD)
    if element_type is ElementType.SEQUENCE:
        return OptionSet(leading_zeros=True, min_digits=3)
    if element_type is ElementType.RANDOM_6DIGIT:
        return OptionSet(leading_zeros=True, min_digits=6)
    if element_type is ElementType.RANDOM_9DIGIT:
        return OptionSet(leading_zeros=True, min_digits=9)
    return OptionSet()
