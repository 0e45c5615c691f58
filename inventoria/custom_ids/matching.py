"""
Verifica se um ID existente poderia ter sido gerado por um FormatSpec.

Usado para IDs informados manualmente e pelo comando `check_custom_ids`.
"""

from __future__ import annotations

import re

from inventoria.custom_ids.formatting import format_value
from inventoria.custom_ids.types import CaseTransform, ElementDescriptor, ElementType, FormatSpec
from inventoria.custom_ids.validation import validate_format


# Largura máxima (em dígitos) do valor bruto de cada tipo numérico
_MAX_DIGITS = {
    ElementType.RANDOM_20BIT: len(str(2**20 - 1)),
    ElementType.RANDOM_32BIT: len(str(2**32 - 1)),
    ElementType.RANDOM_6DIGIT: 6,
    ElementType.RANDOM_9DIGIT: 9,
    ElementType.SEQUENCE: None,
}

_GUID_LOWER = "[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}"


def _digits(low: int, high: int | None) -> str:
    if high is None:
        return rf"[0-9]{{{low},}}"
    if low == high:
        return rf"[0-9]{{{low}}}"
    return rf"[0-9]{{{low},{high}}}"


def _element_pattern(descriptor: ElementDescriptor) -> str:
    options = descriptor.options
    padded_width = options.min_digits if options.leading_zeros and options.min_digits else 1

    if descriptor.type is ElementType.FIXED_TEXT:
        return re.escape(format_value(descriptor.value, options, descriptor.type))

    if descriptor.type is ElementType.GUID:
        if options.case is CaseTransform.UPPER:
            return _GUID_LOWER.replace("a-f", "A-F").replace("[89ab]", "[89AB]")
        return _GUID_LOWER

    if descriptor.type is ElementType.DATETIME:
        width = max(options.format.width, padded_width)
        return _digits(width, width)

    high = _MAX_DIGITS[descriptor.type]
    if high is not None:
        high = max(high, padded_width)
    return _digits(padded_width, high)


def build_pattern(spec: FormatSpec) -> re.Pattern:
    """
    Monta a regex (ancorada) equivalente ao spec.

    Raises:
        ValidationError: Se o spec for inválido.
    """
    validate_format(spec)
    return re.compile("".join(_element_pattern(descriptor) for descriptor in spec.elements))


def matches_format(custom_id: str, spec: FormatSpec) -> bool:
    """True se `custom_id` tem o formato descrito pelo spec (case-sensitive)."""
    if not custom_id:
        return False
    return build_pattern(spec).fullmatch(custom_id) is not None
